"""Tests for configuration loading and client creation."""

import json
from unittest.mock import patch

import pytest
import structlog

from pterodactyl_api import application, config


def _write_config(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return str(path)


def test_load_config_applies_defaults(tmp_path):
    """Only URL and token are required; the rest has defaults."""
    path = _write_config(
        tmp_path,
        {"base_url": "https://panel.example.com", "api_token": "ptla_secret"},
    )

    cfg = config.load_config(path)

    assert cfg.base_url == "https://panel.example.com"
    assert cfg.api_token == "ptla_secret"
    assert cfg.timeout == application.DEFAULT_TIMEOUT
    assert cfg.log_level == "INFO"


def test_load_config_missing_file_raises(tmp_path):
    """A missing file is reported as such."""
    with pytest.raises(FileNotFoundError):
        config.load_config(str(tmp_path / "absent.json"))


@pytest.mark.parametrize(
    "data",
    [
        {"base_url": "https://panel.example.com"},
        {"base_url": "", "api_token": "ptla_secret"},
        {"base_url": "https://panel.example.com", "api_token": "t", "timeout": 0},
        ["not", "an", "object"],
    ],
)
def test_load_config_invalid_content_raises_configuration_error(tmp_path, data):
    """Missing or empty settings fail as ConfigurationError."""
    with pytest.raises(application.ConfigurationError):
        config.load_config(_write_config(tmp_path, data))


def test_load_config_invalid_json_raises_configuration_error(tmp_path):
    """Unparseable files fail as ConfigurationError."""
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(application.ConfigurationError):
        config.load_config(str(path))


@patch("pterodactyl_api.config.configure_logging")
def test_create_client_uses_env_config_path(mock_logging, tmp_path, monkeypatch):
    """The config path falls back to the environment variable."""
    path = _write_config(
        tmp_path,
        {
            "base_url": "https://panel.example.com",
            "api_token": "ptla_secret",
            "log_level": "DEBUG",
        },
    )
    monkeypatch.setenv(config.CONFIG_ENV_VAR, path)

    api = config.create_client()

    assert isinstance(api, application.PterodactylClient)
    assert api.base_url == "https://panel.example.com"
    assert api.token == "ptla_secret"
    mock_logging.assert_called_once_with("DEBUG")


@pytest.fixture
def restore_structlog():
    """Undo global structlog configuration after the test."""
    yield
    structlog.reset_defaults()


def test_configure_logging_filters_below_level(capsys, restore_structlog):
    """Events under the configured level are dropped; the rest render as logfmt."""
    config.configure_logging("warning")
    log = structlog.get_logger("pterodactyl_api.test")

    log.info("hidden event")
    log.warning("shown event", user_id=3)

    out = capsys.readouterr().out
    assert "hidden event" not in out
    assert 'msg="shown event"' in out
    assert "level=warning" in out
    assert "user_id=3" in out


def test_configure_logging_unknown_level_defaults_to_info(capsys, restore_structlog):
    """An unrecognised level name falls back to INFO."""
    config.configure_logging("chatty")
    log = structlog.get_logger("pterodactyl_api.test")

    log.debug("debug event")
    log.info("info event")

    out = capsys.readouterr().out
    assert "debug event" not in out
    assert 'msg="info event"' in out
