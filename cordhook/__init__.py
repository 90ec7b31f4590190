"""Typed async client for Discord webhooks."""

from cordhook.client import WebhookClient
from cordhook.embed import Embed, EmbedLimitError
from cordhook.errors import (
    CordhookError,
    ConfigurationError,
    InvalidWebhookError,
    NormalizationError,
    PlatformError,
    TransportError,
)
from cordhook.gateway import CommandVerifier
from cordhook.identity import parse
from cordhook.models import (
    AllowedMentions,
    EditBody,
    MessageBody,
    MessageFile,
    PostedMessage,
    RichPostedMessage,
    WebhookDescriptor,
    WebhookIdentity,
    WebhookInfo,
)
from cordhook.normalize import make_rich

__all__ = [
    # Exceptions
    "ConfigurationError",
    "CordhookError",
    "EmbedLimitError",
    "InvalidWebhookError",
    "NormalizationError",
    "PlatformError",
    "TransportError",
    # Components
    "CommandVerifier",
    "WebhookClient",
    "make_rich",
    "parse",
    # Models
    "AllowedMentions",
    "EditBody",
    "Embed",
    "MessageBody",
    "MessageFile",
    "PostedMessage",
    "RichPostedMessage",
    "WebhookDescriptor",
    "WebhookIdentity",
    "WebhookInfo",
]
