"""Client for the local attestation sidecar.

The sidecar performs the hardware attestation handshake and returns a
signed JWT.  This client only forwards the proof hash as runtime data and
reads the token back; it does not verify the token's signature.
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from typing import Any
from urllib.error import HTTPError
from urllib.error import URLError
from urllib.request import Request
from urllib.request import urlopen

from activity_verifier.attestation.errors import EndpointNotConfiguredError
from activity_verifier.attestation.errors import InvalidTokenError
from activity_verifier.attestation.errors import SidecarUnavailableError
from activity_verifier.attestation.errors import TokenDecodeError
from activity_verifier.config import AttestationConfig
from activity_verifier.observability import track_latency

logger = logging.getLogger(__name__)

_TOKEN_FIELDS = ("token", "attestation_token")


class AttestationClient:
    """Obtains attestation tokens for proof hashes and decodes their claims."""

    def __init__(self, config: AttestationConfig | None = None) -> None:
        self._config = config or AttestationConfig()

    @property
    def configured(self) -> bool:
        return bool(self._config.endpoint)

    @property
    def sidecar_url(self) -> str:
        return self._config.sidecar_url

    def build_request(self, proof_hash: str) -> dict[str, str]:
        """Return the sidecar request body for *proof_hash*."""
        runtime_data = json.dumps({"proof_data_hash": proof_hash})
        return {
            "maa_endpoint": self._config.endpoint or "",
            "runtime_data": base64.b64encode(runtime_data.encode("utf-8")).decode(
                "ascii"
            ),
        }

    async def get_token(self, proof_hash: str) -> str:
        """Ask the sidecar for a token binding *proof_hash*."""
        if not self.configured:
            raise EndpointNotConfiguredError()

        logger.info("Requesting attestation token")
        with track_latency("attestation.get_token"):
            body = await asyncio.to_thread(
                self._post_sync, self.build_request(proof_hash)
            )
            token = self.parse_attestation_response(body)
        logger.info("Successfully obtained attestation token")
        return token

    def _post_sync(self, payload: dict[str, str]) -> str:
        url = self._config.sidecar_url
        logger.debug("Calling attestation sidecar at: %s", url)
        request = Request(
            url=url,
            data=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urlopen(request, timeout=self._config.timeout_seconds) as response:
                return response.read().decode("utf-8", errors="replace")
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace")
            raise SidecarUnavailableError(
                f"Attestation sidecar returned error {exc.code}: {detail}",
                status=exc.code,
                body=detail,
            ) from exc
        except URLError as exc:
            raise SidecarUnavailableError(
                f"Failed to connect to attestation sidecar at {url}: {exc.reason}"
            ) from exc
        except OSError as exc:
            raise SidecarUnavailableError(
                f"Failed to connect to attestation sidecar at {url}: {exc}"
            ) from exc

    @staticmethod
    def parse_attestation_response(text: str) -> str:
        """Extract the token from a sidecar response body.

        A JSON object must carry a string ``token`` or ``attestation_token``
        field.  Anything that is not JSON is taken as the raw token, provided
        it looks like a JWT (three dot-separated segments).
        """
        try:
            parsed = json.loads(text)
        except ValueError:
            parsed = None
        else:
            if isinstance(parsed, dict):
                for name in _TOKEN_FIELDS:
                    value = parsed.get(name)
                    if isinstance(value, str):
                        return value
            raise InvalidTokenError(
                "Sidecar response contains JSON but no recognizable token field"
            )

        token = text.strip()
        if not token:
            raise InvalidTokenError("Empty token received from attestation sidecar")
        _check_segments(token)
        return token

    @staticmethod
    def decode_claims(token: str) -> dict[str, Any]:
        """Decode the payload segment of a JWT without verifying it."""
        _, payload, _ = _check_segments(token)
        raw = _b64decode(_pad(payload))
        try:
            claims = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise InvalidTokenError(f"Invalid UTF-8 in JWT payload: {exc}") from exc
        except ValueError as exc:
            raise InvalidTokenError(f"JWT payload is not JSON: {exc}") from exc
        if not isinstance(claims, dict):
            raise InvalidTokenError("JWT payload must be a JSON object")
        return claims


def _check_segments(token: str) -> list[str]:
    parts = token.split(".")
    if len(parts) != 3:
        raise InvalidTokenError(
            f"Invalid JWT format: expected 3 parts, got {len(parts)}"
        )
    return parts


def _pad(segment: str) -> str:
    return segment + "=" * (-len(segment) % 4)


def _b64decode(segment: str) -> bytes:
    # URL-safe alphabet first, then standard.
    error: ValueError | None = None
    for altchars in (b"-_", None):
        try:
            return base64.b64decode(segment, altchars=altchars, validate=True)
        except ValueError as exc:
            error = exc
    raise TokenDecodeError(f"Base64 decoding error: {error}") from error
