"""Exception hierarchy for cordhook."""

from __future__ import annotations

from typing import Any


class CordhookError(Exception):
    """Base class for all cordhook errors."""


class InvalidWebhookError(CordhookError, ValueError):
    """Raised when a webhook URL or descriptor does not identify a webhook."""

    def __init__(self, message: str = "invalid webhook") -> None:
        super().__init__(message)


class TransportError(CordhookError):
    """Raised when the HTTP request itself fails (connect, read, protocol)."""

    def __init__(self, method: str, url: str, reason: str) -> None:
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method} {url} failed: {reason}")


class PlatformError(CordhookError):
    """Raised when Discord answers a send or edit with a non-2xx status."""

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Discord returned HTTP {status_code}: {body!r}")

    @property
    def code(self) -> int | None:
        """Discord's JSON error code, when the body carries one."""
        if isinstance(self.body, dict):
            code = self.body.get("code")
            if isinstance(code, int):
                return code
        return None


class NormalizationError(CordhookError):
    """Raised when a platform response cannot be converted to rich types."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"cannot normalize '{field}': {message}")


class ConfigurationError(CordhookError, ValueError):
    """Raised when environment configuration is missing or malformed."""
