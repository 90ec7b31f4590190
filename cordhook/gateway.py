"""Boundary for the inbound command-verification gateway.

Signed interaction requests are verified outside this package; anything
that does so only needs to satisfy :class:`CommandVerifier`. The webhook
client does not depend on it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class CommandVerifier(Protocol):
    """Pass/fail decision on a signed inbound command request."""

    def verify(self, headers: Mapping[str, str], body: bytes) -> bool:
        """Return True if the request signature checks out for ``body``."""
        ...
