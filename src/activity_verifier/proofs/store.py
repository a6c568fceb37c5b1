"""In-memory proof store with lazy TTL eviction.

Entries expire ``ttl_seconds`` after insertion.  There is no background
sweeper: ``put`` drops every expired entry while it holds the lock, and
``get`` drops an expired entry it runs into.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from threading import Lock
from typing import Protocol
from typing import runtime_checkable

from activity_verifier.config import ProofStoreConfig
from activity_verifier.models.schemas import VerificationResult
from activity_verifier.proofs.schemas import ProofStoreStats
from activity_verifier.proofs.schemas import StoredProof

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@runtime_checkable
class ProofStore(Protocol):
    """Storage seam used by the service."""

    def put(self, proof_hash: str, result: VerificationResult) -> None: ...

    def get(self, proof_hash: str) -> VerificationResult | None: ...

    def stats(self) -> ProofStoreStats: ...


class InMemoryProofStore:
    """Process-local proof map guarded by a single lock."""

    def __init__(
        self,
        config: ProofStoreConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._ttl = timedelta(seconds=(config or ProofStoreConfig()).ttl_seconds)
        self._clock = clock or _utcnow
        self._lock = Lock()
        self._proofs: dict[str, StoredProof] = {}

    # -- write --

    def put(self, proof_hash: str, result: VerificationResult) -> None:
        """Store *result* under *proof_hash* and evict expired entries."""
        now = self._clock()
        stored = StoredProof(
            verification_result=result,
            created_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._proofs[proof_hash] = stored
            self._evict_expired(now, keep=proof_hash)

        logger.info(
            "Stored proof with hash: %s (expires at: %s)",
            proof_hash,
            stored.expires_at.isoformat(),
        )

    # -- read --

    def get(self, proof_hash: str) -> VerificationResult | None:
        """Return a copy of the live result for *proof_hash*, or ``None``."""
        with self._lock:
            stored = self._proofs.get(proof_hash)
            if stored is None:
                logger.debug("Proof not found for hash: %s", proof_hash)
                return None
            if not stored.is_live(self._clock()):
                logger.debug("Proof expired for hash: %s, removing", proof_hash)
                del self._proofs[proof_hash]
                return None
            return stored.verification_result.model_copy(deep=True)

    def stats(self) -> ProofStoreStats:
        """Count live and expired entries without evicting anything."""
        now = self._clock()
        with self._lock:
            valid = sum(1 for stored in self._proofs.values() if stored.is_live(now))
            total = len(self._proofs)
        return ProofStoreStats(
            total_proofs=total,
            valid_proofs=valid,
            expired_proofs=total - valid,
        )

    def clear(self) -> None:
        """Remove every entry (test helper)."""
        with self._lock:
            self._proofs.clear()

    # -- internal --

    def _evict_expired(self, now: datetime, *, keep: str) -> None:
        expired = [
            key
            for key, stored in self._proofs.items()
            if key != keep and not stored.is_live(now)
        ]
        for key in expired:
            del self._proofs[key]
        if expired:
            logger.debug("Cleaned up %d expired proofs", len(expired))
