"""Webhook URL parsing and canonical URL construction."""

from __future__ import annotations

import re

from cordhook.models import WebhookIdentity

DISCORD_HOST = "discord.com"
API_BASE = f"https://{DISCORD_HOST}/api"

# Dots in the host part are unescaped on purpose: the accepted URL shape must
# stay identical to the one existing webhook URLs were validated against.
WEBHOOK_URL_RE = re.compile(
    r"^(?:https?://)?(?:canary.|ptb.)?discord(?:app)?.com/api/webhooks/"
    r"(?P<id>\d{16,19})/(?P<token>[-_A-Za-z0-9.]+)(\?.*)?$",
    re.ASCII,
)

_REDACT_RE = re.compile(r"(/api/webhooks/\d+/)[^/?]+")


def parse(url: str) -> WebhookIdentity | None:
    """Extract the id and token from a webhook URL.

    Returns None when the string is not a Discord webhook URL.
    """
    match = WEBHOOK_URL_RE.fullmatch(url)
    if match is None:
        return None
    return WebhookIdentity(id=match.group("id"), token=match.group("token"))


def webhook_url(webhook_id: str, token: str) -> str:
    return f"{API_BASE}/webhooks/{webhook_id}/{token}"


def redact(url: str) -> str:
    """Replace the token segment of a webhook URL with ``***``."""
    return _REDACT_RE.sub(r"\1***", url)
