"""Pydantic models for the verification interface.

Input models validate caller arguments before any I/O happens; output
models shape what the MCP tools and HTTP routes return.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import StrictInt
from pydantic import field_validator
from pydantic import model_validator

from activity_verifier.models.claims import ClaimType
from activity_verifier.models.claims import MAX_THRESHOLD
from activity_verifier.models.claims import MIN_THRESHOLD

# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------

_USERNAME_MAX_LENGTH = 39
_USERNAME_RE = re.compile(r"[a-zA-Z0-9]([a-zA-Z0-9-]{0,37}[a-zA-Z0-9])?")


class VerifyActivityInput(BaseModel):
    """Input for a verification request."""

    github_username: str = Field(
        description="GitHub login to verify.",
    )
    verification_type: ClaimType = Field(
        description="Which activity claim to check.",
    )
    threshold: StrictInt | None = Field(
        default=None,
        description="Minimum metric value; defaults per claim type.",
    )

    @field_validator("github_username")
    @classmethod
    def _check_username(cls, value: str) -> str:
        if not value or len(value) > _USERNAME_MAX_LENGTH:
            raise ValueError("GitHub username must be between 1 and 39 characters")
        if not _USERNAME_RE.fullmatch(value):
            raise ValueError(
                "Invalid GitHub username format. Must contain only alphanumeric "
                "characters and hyphens, cannot start or end with hyphen"
            )
        if "--" in value:
            raise ValueError("GitHub username cannot contain consecutive hyphens")
        return value

    @field_validator("threshold")
    @classmethod
    def _check_threshold(cls, value: int | None) -> int | None:
        if value is not None and not MIN_THRESHOLD <= value <= MAX_THRESHOLD:
            raise ValueError(
                f"Threshold must be between {MIN_THRESHOLD} and {MAX_THRESHOLD}"
            )
        return value

    @property
    def resolved_threshold(self) -> int:
        if self.threshold is None:
            return self.verification_type.default_threshold
        return self.threshold


# ---------------------------------------------------------------------------
# Attestation outcome
# ---------------------------------------------------------------------------


class AttestationStatus(str, Enum):
    """How the attestation step ended for a successful verification."""

    issued = "issued"
    not_configured = "not_configured"
    unavailable = "unavailable"


class Attestation(BaseModel):
    """Tagged attestation outcome; ``token`` is present only when issued."""

    model_config = ConfigDict(frozen=True)

    status: AttestationStatus
    token: str | None = None

    @model_validator(mode="after")
    def _token_matches_status(self) -> Attestation:
        if (self.status == AttestationStatus.issued) != (self.token is not None):
            raise ValueError("token must be set if and only if status is 'issued'")
        return self

    @classmethod
    def issued(cls, token: str) -> Attestation:
        return cls(status=AttestationStatus.issued, token=token)

    @classmethod
    def not_configured(cls) -> Attestation:
        return cls(status=AttestationStatus.not_configured)

    @classmethod
    def unavailable(cls) -> Attestation:
        return cls(status=AttestationStatus.unavailable)


# ---------------------------------------------------------------------------
# Output models
# ---------------------------------------------------------------------------


class VerificationResult(BaseModel):
    """Outcome of one verification.

    Proof data (hash, attestation, claims) exists only when
    ``meets_criteria`` is true.
    """

    model_config = ConfigDict(frozen=True)

    username: str = Field(description="GitHub login that was verified.")
    verification_type: ClaimType
    threshold: int = Field(description="Threshold the metric was compared to.")
    meets_criteria: bool
    attestation: Attestation | None = None
    attestation_claims: dict[str, Any] | None = Field(
        default=None,
        description="Decoded payload of the attestation token.",
    )
    verified_at: datetime = Field(description="UTC time of the verification.")
    proof_hash: str | None = Field(
        default=None,
        description="SHA-256 hex digest identifying the proof.",
    )

    @model_validator(mode="after")
    def _proof_only_on_success(self) -> VerificationResult:
        has_proof_data = any(
            value is not None
            for value in (self.proof_hash, self.attestation, self.attestation_claims)
        )
        if not self.meets_criteria and has_proof_data:
            raise ValueError("a failed verification cannot carry proof data")
        if self.meets_criteria and self.proof_hash is None:
            raise ValueError("a successful verification requires a proof_hash")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-ready dict with absent optional fields omitted."""
        data = self.model_dump(mode="json")
        if self.attestation is not None:
            data["attestation"] = self.attestation.model_dump(
                mode="json", exclude_none=True
            )
        return {key: value for key, value in data.items() if value is not None}


class ApiError(BaseModel):
    """Error body returned to callers."""

    error: str = Field(description="Human-readable message.")
    error_code: str = Field(description="Stable machine-readable code.")
    details: str | dict[str, Any] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
