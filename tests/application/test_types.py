"""Tests for wire-format handling in the Pydantic payload models."""

from datetime import datetime, timezone

import pydantic
import pytest

from pterodactyl_api.application import types


def test_user_parses_panel_wire_keys():
    """The panel's root_admin and 2fa keys map onto descriptive names."""
    user = types.User.model_validate(
        {
            "object": "user",
            "attributes": {
                "id": 1,
                "uuid": "c4022c6c-9bf1-4a23-bff9-519cceb38335",
                "username": "codeco",
                "email": "codeco@file.properties",
                "first_name": "Rihan",
                "last_name": "Arfan",
                "language": "en",
                "root_admin": True,
                "2fa": False,
                "created_at": "2020-06-12T20:18:43+00:00",
                "updated_at": "2020-06-13T17:00:02+00:00",
            },
        }
    )

    assert user.object_type == "user"
    assert user.attributes.is_root_admin is True
    assert user.attributes.two_factor_enabled is False
    assert user.attributes.external_id is None
    assert user.attributes.created_at == datetime(2020, 6, 12, 20, 18, 43, tzinfo=timezone.utc)


def test_user_requires_numeric_id():
    """A record without an id is rejected."""
    with pytest.raises(pydantic.ValidationError):
        types.User.model_validate({"object": "user", "attributes": {"username": "x"}})


def test_user_create_rejects_empty_required_field():
    """Required identity fields must be non-empty strings."""
    with pytest.raises(pydantic.ValidationError):
        types.UserCreate(email="", username="u", first_name="f", last_name="l")


def test_user_create_defaults_root_admin_to_false():
    """New users are not administrators unless asked for."""
    draft = types.UserCreate(email="e@example.com", username="u", first_name="f", last_name="l")
    assert draft.root_admin is False
    assert draft.password is None


def test_user_update_allows_empty_draft():
    """Update drafts have no required fields."""
    assert types.UserUpdate().model_dump(exclude_none=True) == {}


def test_nest_shape_parses():
    """The nest record shape is declared for future use."""
    nest = types.Nest.model_validate(
        {
            "object": "nest",
            "attributes": {
                "id": 1,
                "uuid": "58d5a7a4-24ba-4d2b-8a4c-cc2be9c5d6b0",
                "author": "support@pterodactyl.io",
                "name": "Minecraft",
                "description": None,
            },
        }
    )
    assert nest.attributes.name == "Minecraft"
