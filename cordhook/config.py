"""Environment-based configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from cordhook.client import WebhookClient
from cordhook.errors import ConfigurationError, InvalidWebhookError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class WebhookSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    username: str | None = None
    avatar_url: str | None = None
    log_level: LogLevel = "WARNING"


def load_settings(
    environ: Mapping[str, str] | None = None, **overrides: str | None,
) -> WebhookSettings:
    """Read settings from ``WEBHOOK_URL``, ``WEBHOOK_USERNAME``,
    ``WEBHOOK_AVATAR_URL`` and ``CORDHOOK_LOG_LEVEL``.

    Keyword overrides (``url``, ``username``, ``avatar_url``, ``log_level``)
    win over the environment when they are not None.
    """
    env = os.environ if environ is None else environ
    values: dict[str, str | None] = {
        "url": env.get("WEBHOOK_URL") or None,
        "username": env.get("WEBHOOK_USERNAME") or None,
        "avatar_url": env.get("WEBHOOK_AVATAR_URL") or None,
        "log_level": env.get("CORDHOOK_LOG_LEVEL") or "WARNING",
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    if not values["url"]:
        raise InvalidWebhookError("WEBHOOK_URL is not set")
    values["log_level"] = (values["log_level"] or "WARNING").upper()
    try:
        return WebhookSettings(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid configuration: {exc}") from exc


def client_from_env(environ: Mapping[str, str] | None = None) -> WebhookClient:
    """Factory for a client configured from environment variables."""
    settings = load_settings(environ)
    return WebhookClient(
        settings.url,
        username=settings.username,
        avatar_url=settings.avatar_url,
    )
