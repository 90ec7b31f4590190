"""Tests for identity models and request body merging."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cordhook.embed import Embed
from cordhook.models import (
    AllowedMentions,
    EditBody,
    MessageBody,
    WebhookDescriptor,
    WebhookIdentity,
    WebhookInfo,
    merge_body,
)


class TestWebhookIdentity:
    def test_frozen(self) -> None:
        identity = WebhookIdentity(id="1", token="t")
        with pytest.raises(ValidationError):
            identity.id = "2"  # type: ignore[misc]

    @pytest.mark.parametrize("fields", [
        {"id": "", "token": "t"},
        {"id": "1", "token": ""},
        {"token": "t"},
        {"id": "1"},
    ])
    def test_requires_id_and_token(self, fields: dict[str, str]) -> None:
        with pytest.raises(ValidationError):
            WebhookIdentity(**fields)


class TestWebhookDescriptor:
    def test_optional_presentation_fields(self) -> None:
        desc = WebhookDescriptor(id="1", token="t")
        assert desc.username is None
        assert desc.avatar_url is None

    def test_model_dump_round_trip(self) -> None:
        desc = WebhookDescriptor(id="1", token="t", username="Bot")
        assert WebhookDescriptor.model_validate(desc.model_dump()) == desc


class TestWebhookInfo:
    def test_error_payload_loads(self) -> None:
        info = WebhookInfo.model_validate({"status": 404, "message": "Unknown Webhook", "code": 10015})
        assert info.id is None
        assert info.model_extra == {"message": "Unknown Webhook", "code": 10015}


class TestMergeBody:
    def test_defaults_applied(self) -> None:
        merged = merge_body({"username": "Bot", "avatar_url": None}, MessageBody(content="hi"))
        assert merged == {"username": "Bot", "content": "hi"}

    def test_call_fields_override_defaults(self) -> None:
        merged = merge_body(
            {"username": "Bot", "avatar_url": "https://a/1.png"},
            {"content": "hi", "username": "Other"},
        )
        assert merged == {"username": "Other", "avatar_url": "https://a/1.png", "content": "hi"}

    def test_explicit_none_does_not_erase_default(self) -> None:
        merged = merge_body({"username": "Bot"}, MessageBody(content="hi", username=None))
        assert merged["username"] == "Bot"

    def test_embed_objects_converted(self) -> None:
        body = EditBody(embeds=[Embed(title="a"), {"title": "b"}])
        merged = merge_body({}, body)
        assert merged["embeds"] == [{"title": "a"}, {"title": "b"}]

    def test_allowed_mentions_serialized(self) -> None:
        merged = merge_body({}, MessageBody(content="@everyone", allowed_mentions=AllowedMentions.none()))
        assert merged["allowed_mentions"] == {"parse": []}

    def test_allowed_mentions_rejects_unknown_type(self) -> None:
        with pytest.raises(ValidationError):
            AllowedMentions(parse=["channels"])  # type: ignore[list-item]

    def test_defaults_not_mutated(self) -> None:
        defaults = {"username": "Bot"}
        merge_body(defaults, {"username": "Other"})
        assert defaults == {"username": "Bot"}
