"""Convert raw posted-message payloads into rich result objects."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from cordhook.embed import Embed
from cordhook.errors import NormalizationError
from cordhook.models import PostedMessage, RichPostedMessage


def parse_timestamp(value: Any, field: str) -> datetime:
    """Parse an ISO-8601 timestamp as sent by Discord.

    Accepts both ``+00:00`` offsets and a trailing ``Z``. The result is
    always timezone-aware.
    """
    if not isinstance(value, str) or not value:
        raise NormalizationError(field, f"expected ISO-8601 string, got {value!r}")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise NormalizationError(field, f"unparsable timestamp {value!r}") from exc
    if parsed.tzinfo is None:
        raise NormalizationError(field, f"timestamp {value!r} has no UTC offset")
    return parsed


def _load(data: PostedMessage | Mapping[str, Any]) -> PostedMessage:
    if isinstance(data, PostedMessage):
        return data
    if not isinstance(data, Mapping):
        raise NormalizationError("<body>", f"expected a JSON object, got {type(data).__name__}")
    try:
        return PostedMessage.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first["loc"]) or "<body>"
        raise NormalizationError(field, first["msg"]) from exc


def make_rich(data: PostedMessage | Mapping[str, Any]) -> RichPostedMessage:
    """Materialize embeds and parse timestamps of a posted message.

    All three conversions happen unconditionally; any failure raises
    :class:`NormalizationError` and no partial result is returned.
    """
    raw = _load(data)

    embeds: list[Embed] = []
    for i, entry in enumerate(raw.embeds):
        try:
            embeds.append(Embed.from_json(entry))
        except ValidationError as exc:
            raise NormalizationError(f"embeds[{i}]", str(exc)) from exc

    timestamp = parse_timestamp(raw.timestamp, "timestamp")
    edited_timestamp = None
    if raw.edited_timestamp is not None:
        edited_timestamp = parse_timestamp(raw.edited_timestamp, "edited_timestamp")

    fields = raw.model_dump(exclude={"embeds", "timestamp", "edited_timestamp"})
    return RichPostedMessage(
        **fields,
        embeds=embeds,
        timestamp=timestamp,
        edited_timestamp=edited_timestamp,
    )
