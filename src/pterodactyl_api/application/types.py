"""Pydantic models for Pterodactyl application API payloads.

Response models mirror the panel's ``{"object": ..., "attributes": {...}}``
envelope. Request models describe what the client sends when creating or
updating users.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserAttributes(BaseModel):
    """Attributes of a panel user as returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    # Identification
    id: int
    external_id: str | None = None
    uuid: str = ""

    # Profile
    username: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    language: str = ""

    # Flags, renamed from the panel's wire keys
    is_root_admin: bool = Field(False, alias="root_admin")
    two_factor_enabled: bool = Field(False, alias="2fa")

    created_at: datetime | None = None
    updated_at: datetime | None = None


class User(BaseModel):
    """A user record. Server-owned; the client only parses it."""

    model_config = ConfigDict(populate_by_name=True)

    object_type: str = Field("user", alias="object")
    attributes: UserAttributes


class UserCreate(BaseModel):
    """Payload for creating a user.

    The four identity fields are required and must be non-empty. When no
    password is given the panel generates one.
    """

    email: str = Field(min_length=1)
    username: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    password: str | None = None
    root_admin: bool = False
    language: str | None = None
    external_id: str | None = None


class UserUpdate(BaseModel):
    """Payload for updating a user.

    Nothing is required here; the panel decides which combinations of
    fields it accepts.
    """

    email: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    password: str | None = None
    root_admin: bool | None = None
    language: str | None = None
    external_id: str | None = None


class NestAttributes(BaseModel):
    """Attributes of a nest (a group of server eggs)."""

    id: int
    uuid: str = ""
    author: str = ""
    name: str = ""
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Nest(BaseModel):
    """A nest record. Declared for completeness; no client call returns it yet."""

    model_config = ConfigDict(populate_by_name=True)

    object_type: str = Field("nest", alias="object")
    attributes: NestAttributes
