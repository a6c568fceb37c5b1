"""Attestation domain: sidecar client and token decoding."""

from activity_verifier.attestation.client import AttestationClient
from activity_verifier.attestation.errors import AttestationError
from activity_verifier.attestation.errors import EndpointNotConfiguredError
from activity_verifier.attestation.errors import InvalidTokenError
from activity_verifier.attestation.errors import SidecarUnavailableError
from activity_verifier.attestation.errors import TokenDecodeError

__all__ = [
    "AttestationClient",
    "AttestationError",
    "EndpointNotConfiguredError",
    "InvalidTokenError",
    "SidecarUnavailableError",
    "TokenDecodeError",
]
