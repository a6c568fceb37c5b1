"""Proof store data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from activity_verifier.models.schemas import VerificationResult


class StoredProof(BaseModel):
    """A successful verification held until ``expires_at``."""

    model_config = ConfigDict(frozen=True)

    verification_result: VerificationResult
    created_at: datetime
    expires_at: datetime

    def is_live(self, now: datetime) -> bool:
        return now < self.expires_at


class ProofStoreStats(BaseModel):
    """Counts of entries currently held by a proof store."""

    total_proofs: int = Field(default=0, description="Entries in the map.")
    valid_proofs: int = Field(default=0, description="Entries not yet expired.")
    expired_proofs: int = Field(
        default=0,
        description="Expired entries awaiting lazy eviction.",
    )
