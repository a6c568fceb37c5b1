"""Proof hash derivation and shape checks."""

from __future__ import annotations

import hashlib
import re
from datetime import datetime

from activity_verifier.models.claims import ClaimType

_PROOF_HASH_RE = re.compile(r"[0-9a-f]{64}")


def canonical_proof_string(
    username: str,
    claim_type: ClaimType,
    meets_criteria: bool,
    verified_at: datetime,
) -> str:
    """Return ``username:"claim_type":true|false:unix_seconds``."""
    outcome = "true" if meets_criteria else "false"
    return (
        f"{username}:{claim_type.serialized()}:{outcome}:{int(verified_at.timestamp())}"
    )


def compute_proof_hash(
    username: str,
    claim_type: ClaimType,
    meets_criteria: bool,
    verified_at: datetime,
) -> str:
    """SHA-256 hex digest of the canonical proof string."""
    data = canonical_proof_string(username, claim_type, meets_criteria, verified_at)
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def is_valid_proof_hash(value: str) -> bool:
    return bool(_PROOF_HASH_RE.fullmatch(value))
