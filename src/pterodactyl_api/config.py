"""Configuration and logging setup for the Pterodactyl API client."""

import json
import logging
import os
import pathlib

import pydantic
import structlog

from . import application

CONFIG_ENV_VAR = "PTERODACTYL_CONFIG_PATH"
logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for a Pterodactyl API client."""

    model_config = pydantic.ConfigDict(frozen=True)

    base_url: str = pydantic.Field(description="Panel URL", min_length=1)
    api_token: str = pydantic.Field(
        description="Application API key",
        min_length=1,
    )
    timeout: float = pydantic.Field(
        application.DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output."""
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str) -> ClientConfig:
    """Load configuration from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If the file is not valid JSON or misses fields.
    """
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    try:
        with path.open("r") as f:
            data = json.load(f)
        return ClientConfig(**data)
    except (json.JSONDecodeError, TypeError, pydantic.ValidationError) as e:
        msg = f"Invalid configuration in {config_path}: {e}"
        raise application.ConfigurationError(msg) from e


def create_client(config_path: str | None = None) -> application.PterodactylClient:
    """Create a client using a config path or the environment default."""
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR, "config.json")
    config = load_config(resolved_path)
    configure_logging(config.log_level)

    client = application.PterodactylClient(
        base_url=config.base_url,
        token=config.api_token,
        timeout=config.timeout,
    )
    logger.info("Created API client", base_url=config.base_url)
    return client
