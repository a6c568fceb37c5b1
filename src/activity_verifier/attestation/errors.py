"""Attestation failures.

These never reach callers: the service degrades to an ``unavailable`` or
``not_configured`` attestation instead of failing the verification.
"""

from __future__ import annotations


class AttestationError(Exception):
    """Base class for attestation failures."""


class EndpointNotConfiguredError(AttestationError):
    def __init__(self) -> None:
        super().__init__("Attestation endpoint not configured")


class SidecarUnavailableError(AttestationError):
    """Sidecar unreachable, or it answered with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class InvalidTokenError(AttestationError):
    """Sidecar response or token does not have the expected shape."""


class TokenDecodeError(AttestationError):
    """Token payload segment is not valid base64."""
