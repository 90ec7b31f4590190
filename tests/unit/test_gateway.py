"""Tests for the command verifier boundary."""

from __future__ import annotations

from collections.abc import Mapping

from cordhook.gateway import CommandVerifier


class _AcceptAll:
    def verify(self, headers: Mapping[str, str], body: bytes) -> bool:
        return True


class _NoVerify:
    def check(self, body: bytes) -> bool:
        return True


def test_structural_implementation_satisfies_protocol() -> None:
    assert isinstance(_AcceptAll(), CommandVerifier)


def test_object_without_verify_does_not() -> None:
    assert not isinstance(_NoVerify(), CommandVerifier)
