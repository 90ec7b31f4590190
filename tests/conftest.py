"""Shared test fixtures for cordhook."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from cordhook.client import WebhookClient

HOOK_ID = "123456789012345678"
HOOK_TOKEN = "aBcD-ef_GH.ij0123"
HOOK_URL = f"https://discord.com/api/webhooks/{HOOK_ID}/{HOOK_TOKEN}"


# --- Factory functions for test data ---


def make_posted_message(**kwargs: Any) -> dict[str, Any]:
    """Factory for a raw posted-message payload as Discord returns it."""
    defaults: dict[str, Any] = {
        "id": "987654321098765432",
        "type": 0,
        "content": "hello",
        "channel_id": "111111111111111111",
        "author": {
            "bot": True,
            "id": HOOK_ID,
            "username": "Captain Hook",
            "discriminator": "0000",
            "avatar": None,
        },
        "attachments": [],
        "embeds": [],
        "mentions": [],
        "mention_roles": [],
        "pinned": False,
        "mention_everyone": False,
        "tts": False,
        "timestamp": "2026-01-01T12:30:00.123000+00:00",
        "edited_timestamp": None,
        "flags": 0,
        "webhook_id": HOOK_ID,
    }
    defaults.update(kwargs)
    return defaults


def make_webhook_payload(**kwargs: Any) -> dict[str, Any]:
    """Factory for the webhook object returned by GET on the webhook URL."""
    defaults: dict[str, Any] = {
        "id": HOOK_ID,
        "type": 1,
        "guild_id": "222222222222222222",
        "channel_id": "111111111111111111",
        "name": "Captain Hook",
        "avatar": None,
        "token": HOOK_TOKEN,
        "application_id": None,
    }
    defaults.update(kwargs)
    return defaults


def make_client(
    *responses: httpx.Response | Exception,
    source: Any = HOOK_URL,
    **kwargs: Any,
) -> tuple[WebhookClient, list[httpx.Request]]:
    """Client whose transport replays ``responses`` in order.

    The last response is repeated once the others are used up. Exceptions
    are raised from the transport instead of returning a response.
    """
    sent: list[httpx.Request] = []
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return result

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WebhookClient(source, http=http, **kwargs), sent


@pytest.fixture
def posted_message() -> dict[str, Any]:
    return make_posted_message()
