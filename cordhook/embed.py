"""Embed value object, the rich attachment of webhook messages.

Used both to build outbound embeds and to materialize embeds returned by
Discord. Builder methods mutate in place and return the embed so calls
can be chained.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Discord embed limits
TITLE_LIMIT = 256
DESCRIPTION_LIMIT = 4096
FIELD_COUNT_LIMIT = 25
FIELD_NAME_LIMIT = 256
FIELD_VALUE_LIMIT = 1024
FOOTER_TEXT_LIMIT = 2048
AUTHOR_NAME_LIMIT = 256
TOTAL_LIMIT = 6000

_HEX_COLOR_RE = re.compile(r"#?[0-9A-Fa-f]{6}")


class EmbedLimitError(ValueError):
    """Raised when an embed exceeds one of Discord's size limits."""


class EmbedFooter(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: str
    icon_url: str | None = None
    proxy_icon_url: str | None = None


class EmbedMedia(BaseModel):
    """Image, thumbnail or video attachment of an embed."""

    model_config = ConfigDict(extra="allow")

    url: str | None = None
    proxy_url: str | None = None
    height: int | None = None
    width: int | None = None


class EmbedProvider(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    url: str | None = None


class EmbedAuthor(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    url: str | None = None
    icon_url: str | None = None
    proxy_icon_url: str | None = None


class EmbedField(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    value: str
    inline: bool = False


class Embed(BaseModel):
    model_config = ConfigDict(extra="allow", validate_assignment=True)

    title: str | None = None
    type: str | None = None
    description: str | None = None
    url: str | None = None
    timestamp: datetime | None = None
    color: int | None = Field(default=None, ge=0, le=0xFFFFFF)
    footer: EmbedFooter | None = None
    image: EmbedMedia | None = None
    thumbnail: EmbedMedia | None = None
    video: EmbedMedia | None = None
    provider: EmbedProvider | None = None
    author: EmbedAuthor | None = None
    fields: list[EmbedField] = Field(default_factory=list)

    # --- Builder ---

    def set_title(self, title: str) -> Embed:
        self.title = title
        return self

    def set_description(self, description: str) -> Embed:
        self.description = description
        return self

    def set_url(self, url: str) -> Embed:
        self.url = url
        return self

    def set_color(self, color: int | str) -> Embed:
        """Set the side color from an int or a ``#rrggbb`` hex string."""
        if isinstance(color, str):
            if not _HEX_COLOR_RE.fullmatch(color):
                raise ValueError(f"invalid color {color!r}: expected #rrggbb")
            color = int(color.removeprefix("#"), 16)
        self.color = color
        return self

    def set_timestamp(self, when: datetime | None = None) -> Embed:
        self.timestamp = when or datetime.now(UTC)
        return self

    def set_footer(self, text: str, icon_url: str | None = None) -> Embed:
        self.footer = EmbedFooter(text=text, icon_url=icon_url)
        return self

    def set_image(self, url: str) -> Embed:
        self.image = EmbedMedia(url=url)
        return self

    def set_thumbnail(self, url: str) -> Embed:
        self.thumbnail = EmbedMedia(url=url)
        return self

    def set_author(
        self, name: str, url: str | None = None, icon_url: str | None = None,
    ) -> Embed:
        self.author = EmbedAuthor(name=name, url=url, icon_url=icon_url)
        return self

    def add_field(self, name: str, value: str, inline: bool = False) -> Embed:
        if len(self.fields) >= FIELD_COUNT_LIMIT:
            raise EmbedLimitError(f"embeds hold at most {FIELD_COUNT_LIMIT} fields")
        self.fields = [*self.fields, EmbedField(name=name, value=value, inline=inline)]
        return self

    # --- Serialization ---

    def total_length(self) -> int:
        """Character count Discord applies the 6000 total limit to."""
        parts = [self.title, self.description]
        if self.footer:
            parts.append(self.footer.text)
        if self.author:
            parts.append(self.author.name)
        for f in self.fields:
            parts.extend((f.name, f.value))
        return sum(len(p) for p in parts if p)

    def check_limits(self) -> None:
        checks = [
            ("title", self.title, TITLE_LIMIT),
            ("description", self.description, DESCRIPTION_LIMIT),
            ("footer.text", self.footer.text if self.footer else None, FOOTER_TEXT_LIMIT),
            ("author.name", self.author.name if self.author else None, AUTHOR_NAME_LIMIT),
        ]
        for i, f in enumerate(self.fields):
            checks.append((f"fields[{i}].name", f.name, FIELD_NAME_LIMIT))
            checks.append((f"fields[{i}].value", f.value, FIELD_VALUE_LIMIT))
        for name, value, limit in checks:
            if value is not None and len(value) > limit:
                raise EmbedLimitError(f"{name} exceeds {limit} characters")
        if len(self.fields) > FIELD_COUNT_LIMIT:
            raise EmbedLimitError(f"embeds hold at most {FIELD_COUNT_LIMIT} fields")
        if self.total_length() > TOTAL_LIMIT:
            raise EmbedLimitError(f"embed exceeds {TOTAL_LIMIT} characters in total")

    def to_json(self) -> dict[str, Any]:
        """Serialize for an outbound request body."""
        self.check_limits()
        data = self.model_dump(mode="json", exclude_none=True)
        if not data.get("fields"):
            data.pop("fields", None)
        return data

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Embed:
        """Materialize an embed from Discord's JSON representation."""
        return cls.model_validate(data)
