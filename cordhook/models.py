"""Pydantic data models for webhook identities, request bodies and results."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from cordhook.embed import Embed

# --- Identity ---


class WebhookIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    token: str = Field(min_length=1)


class WebhookDescriptor(BaseModel):
    """Reconstructible snapshot of a webhook client."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    token: str = Field(min_length=1)
    username: str | None = None
    avatar_url: str | None = None


class WebhookInfo(BaseModel):
    """Webhook object returned by GET on the webhook URL.

    Every platform field is optional because error payloads (404, 401) are
    loaded into the same model; ``status`` tells the caller which one it got.
    A body that is not a JSON object is kept as-is in ``raw``.
    """

    model_config = ConfigDict(extra="allow")

    status: int
    id: str | None = None
    type: int | None = None
    guild_id: str | None = None
    channel_id: str | None = None
    user: dict[str, Any] | None = None
    name: str | None = None
    avatar: str | None = None
    token: str | None = None
    application_id: str | None = None
    raw: Any = None


# --- Request bodies ---


class AllowedMentions(BaseModel):
    parse: list[Literal["roles", "users", "everyone"]] | None = None
    roles: list[str] | None = None
    users: list[str] | None = None
    replied_user: bool | None = None

    @classmethod
    def none(cls) -> AllowedMentions:
        """Suppress every mention notification."""
        return cls(parse=[])


class MessageFile(BaseModel):
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class EditBody(BaseModel):
    content: str | None = None
    embeds: list[Embed | dict[str, Any]] | None = None
    allowed_mentions: AllowedMentions | None = None


class MessageBody(EditBody):
    username: str | None = None
    avatar_url: str | None = None
    tts: bool | None = None
    file: MessageFile | None = None


def merge_body(
    defaults: dict[str, Any], body: EditBody | dict[str, Any],
) -> dict[str, Any]:
    """Apply instance defaults, then every field the caller actually set.

    Fields absent from ``body`` (or explicitly None) never erase a default.
    Embeds given as :class:`Embed` objects are converted to JSON.
    """
    merged = {k: v for k, v in defaults.items() if v is not None}
    if isinstance(body, BaseModel):
        items = {name: getattr(body, name) for name in body.model_fields_set}
    else:
        items = dict(body)

    for key, value in items.items():
        if value is None:
            continue
        if key == "embeds":
            value = [e.to_json() if isinstance(e, Embed) else e for e in value]
        elif key == "allowed_mentions" and isinstance(value, AllowedMentions):
            value = value.model_dump(exclude_none=True)
        merged[key] = value
    return merged


# --- Results ---


class MessageAuthor(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    username: str
    bot: bool = False
    discriminator: str | None = None
    avatar: str | None = None


class MessageAttachment(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    filename: str
    size: int
    url: str
    proxy_url: str
    height: int | None = None
    width: int | None = None


class _MessageFields(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    type: int = 0
    content: str = ""
    author: MessageAuthor | None = None
    attachments: list[MessageAttachment] = Field(default_factory=list)
    mentions: list[Any] = Field(default_factory=list)
    mention_roles: list[str] = Field(default_factory=list)
    pinned: bool = False
    mention_everyone: bool = False
    tts: bool = False
    flags: int = 0
    webhook_id: str | None = None
    channel_id: str | None = None


class PostedMessage(_MessageFields):
    """Message exactly as Discord returns it."""

    embeds: list[dict[str, Any]] = Field(default_factory=list)
    timestamp: str
    edited_timestamp: str | None = None


class RichPostedMessage(_MessageFields):
    """Message with materialized embeds and real timestamps.

    Built by :func:`cordhook.normalize.make_rich`.
    """

    embeds: list[Embed] = Field(default_factory=list)
    timestamp: datetime
    edited_timestamp: datetime | None = None
