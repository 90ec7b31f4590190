"""Discord webhook client.

Wraps a single webhook endpoint: post, edit, delete and inspect messages
through it and turn the platform's JSON into rich result objects.

The HTTP client never raises on status codes (httpx default); each
operation decides what a status means. No timeouts are imposed and no
request is ever retried.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from cordhook.errors import (
    InvalidWebhookError,
    NormalizationError,
    PlatformError,
    TransportError,
)
from cordhook.identity import parse, redact, webhook_url
from cordhook.models import (
    EditBody,
    MessageBody,
    MessageFile,
    RichPostedMessage,
    WebhookDescriptor,
    WebhookIdentity,
    WebhookInfo,
    merge_body,
)
from cordhook.normalize import make_rich

logger = logging.getLogger(__name__)

WebhookSource = str | WebhookIdentity | WebhookDescriptor | Mapping[str, Any]

_EDITABLE_FIELDS = ("content", "embeds", "allowed_mentions")


def _resolve_source(source: WebhookSource) -> WebhookDescriptor:
    if isinstance(source, str):
        parsed = parse(source)
        if parsed is None:
            raise InvalidWebhookError()
        return WebhookDescriptor(id=parsed.id, token=parsed.token)
    if isinstance(source, WebhookDescriptor):
        return source
    if isinstance(source, WebhookIdentity):
        return WebhookDescriptor(id=source.id, token=source.token)
    if isinstance(source, Mapping):
        hook_id = source.get("id")
        token = source.get("token")
        if not hook_id or not token:
            raise InvalidWebhookError()
        try:
            return WebhookDescriptor(
                id=str(hook_id),
                token=str(token),
                username=source.get("username"),
                avatar_url=source.get("avatar_url"),
            )
        except ValidationError as exc:
            raise InvalidWebhookError() from exc
    raise InvalidWebhookError()


def _decode(response: httpx.Response) -> Any:
    """Return the JSON body, or the raw text when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


class WebhookClient:
    """Client for one Discord webhook endpoint.

    ``username`` and ``avatar_url`` are per-instance defaults applied to
    every :meth:`send` unless the call body sets them. Callers may reassign
    them between calls.
    """

    def __init__(
        self,
        source: WebhookSource,
        *,
        username: str | None = None,
        avatar_url: str | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        descriptor = _resolve_source(source)
        self._identity = WebhookIdentity(id=descriptor.id, token=descriptor.token)
        self.username = username if username is not None else descriptor.username
        self.avatar_url = avatar_url if avatar_url is not None else descriptor.avatar_url
        self._http = http
        self._owns_http = http is None

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> WebhookClient:
        return cls(url, **kwargs)

    @classmethod
    def from_descriptor(
        cls, descriptor: WebhookDescriptor | Mapping[str, Any], **kwargs: Any,
    ) -> WebhookClient:
        return cls(descriptor, **kwargs)

    @property
    def id(self) -> str:
        return self._identity.id

    @property
    def token(self) -> str:
        return self._identity.token

    @property
    def url(self) -> str:
        return webhook_url(self.id, self.token)

    @property
    def http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=None)
        return self._http

    def __repr__(self) -> str:
        return f"WebhookClient(id={self.id!r}, username={self.username!r})"

    # --- Lifecycle ---

    async def aclose(self) -> None:
        """Close the HTTP client if this webhook created it."""
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> WebhookClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    # --- Operations ---

    async def fetch_info(self) -> WebhookInfo:
        """GET the webhook object. Returned for any status; check ``status``."""
        response = await self._request("GET", self.url)
        body = _decode(response)
        if not isinstance(body, dict):
            body = {"raw": body}
        try:
            return WebhookInfo.model_validate({**body, "status": response.status_code})
        except ValidationError as exc:
            raise NormalizationError("<body>", str(exc)) from exc

    async def send(self, body: MessageBody | Mapping[str, Any]) -> RichPostedMessage:
        """Execute the webhook and return the created message.

        Raises :class:`PlatformError` for a non-2xx status.
        """
        payload = merge_body(self._defaults(), body)
        attachment = payload.pop("file", None)
        url = f"{self.url}?wait=1"

        if attachment is None:
            response = await self._request("POST", url, json=payload)
        else:
            attachment = MessageFile.model_validate(attachment)
            response = await self._request(
                "POST",
                url,
                data={"payload_json": json.dumps(payload)},
                files={
                    "files[0]": (
                        attachment.filename,
                        attachment.content,
                        attachment.content_type,
                    ),
                },
            )
        return self._rich_result(response)

    async def edit_msg(
        self, message_id: str, body: EditBody | Mapping[str, Any],
    ) -> RichPostedMessage:
        """PATCH a message previously sent by this webhook.

        Only ``content``, ``embeds`` and ``allowed_mentions`` are sent.
        """
        merged = merge_body(self._defaults(), body)
        payload = {k: merged[k] for k in _EDITABLE_FIELDS if k in merged}
        response = await self._request(
            "PATCH", f"{self.url}/messages/{message_id}", json=payload,
        )
        return self._rich_result(response)

    async def delete_msg(self, message_id: str) -> bool:
        """Delete a message. True only for HTTP 204."""
        response = await self._request("DELETE", f"{self.url}/messages/{message_id}")
        return response.status_code == 204

    async def delete_self(self) -> bool:
        """Delete the webhook itself. True only for HTTP 204."""
        response = await self._request("DELETE", self.url)
        return response.status_code == 204

    async def is_valid(self) -> bool:
        """True when the webhook exists and the platform reports our own id."""
        response = await self._request("GET", self.url)
        if response.status_code != 200:
            return False
        body = _decode(response)
        return isinstance(body, dict) and body.get("id") == self.id

    def to_descriptor(self) -> WebhookDescriptor:
        return WebhookDescriptor(
            id=self.id,
            token=self.token,
            username=self.username,
            avatar_url=self.avatar_url,
        )

    # --- Internals ---

    def _defaults(self) -> dict[str, Any]:
        return {"username": self.username, "avatar_url": self.avatar_url}

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        safe_url = redact(url)
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %r", method, safe_url, exc)
            raise TransportError(method, safe_url, str(exc) or type(exc).__name__) from exc
        logger.debug("%s %s -> %d", method, safe_url, response.status_code)
        return response

    @staticmethod
    def _rich_result(response: httpx.Response) -> RichPostedMessage:
        body = _decode(response)
        if not response.is_success:
            raise PlatformError(response.status_code, body)
        if not isinstance(body, dict):
            raise NormalizationError("<body>", "response is not a JSON object")
        return make_rich(body)
