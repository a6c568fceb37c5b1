"""Verification orchestrator.

Validates a request, fetches activity, evaluates the claim, and on success
derives a proof hash, attempts attestation, and stores the result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from datetime import timezone
from typing import Any

from pydantic import ValidationError

from activity_verifier.attestation import AttestationClient
from activity_verifier.attestation import AttestationError
from activity_verifier.engine import VerificationEngine
from activity_verifier.errors import InputValidationError
from activity_verifier.errors import InvalidProofHashError
from activity_verifier.errors import ProofNotFoundError
from activity_verifier.github import ActivitySource
from activity_verifier.models.claims import ClaimType
from activity_verifier.models.schemas import Attestation
from activity_verifier.models.schemas import VerificationResult
from activity_verifier.models.schemas import VerifyActivityInput
from activity_verifier.observability import metrics_snapshot
from activity_verifier.observability import record_outcome
from activity_verifier.observability import track_latency
from activity_verifier.proofs import compute_proof_hash
from activity_verifier.proofs import is_valid_proof_hash
from activity_verifier.proofs import ProofStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _validation_message(exc: ValidationError) -> str:
    err = exc.errors()[0] if exc.errors() else {}
    message = str(err.get("msg", "Invalid input"))
    return message.removeprefix("Value error, ")


class VerificationService:
    """Composes the activity source, engine, attestation, and proof store."""

    def __init__(
        self,
        source: ActivitySource,
        attestation: AttestationClient,
        store: ProofStore,
        *,
        engine: VerificationEngine | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._source = source
        self._attestation = attestation
        self._store = store
        self._clock = clock or _utcnow
        self._engine = engine or VerificationEngine(source, clock=self._clock)

    async def verify(
        self,
        github_username: str,
        verification_type: ClaimType | str,
        threshold: int | None = None,
    ) -> VerificationResult:
        """Verify one claim and return the result.

        Raises ``InputValidationError`` before any I/O for bad input, and
        lets ``GitHubError`` subclasses propagate untouched.
        """
        with track_latency("verify"):
            try:
                request = VerifyActivityInput.model_validate(
                    {
                        "github_username": github_username,
                        "verification_type": verification_type,
                        "threshold": threshold,
                    }
                )
            except ValidationError as exc:
                raise InputValidationError(_validation_message(exc)) from exc

            username = request.github_username
            claim_type = request.verification_type
            resolved = request.resolved_threshold
            logger.info("Verification request for user: %s", username)

            events = await self._source.fetch_events(username)
            meets_criteria = await self._engine.evaluate(
                events, claim_type, resolved, subject=username
            )
            verified_at = self._clock().replace(microsecond=0)

            if not meets_criteria:
                logger.info(
                    "Verification failed - no proof generated for user: %s", username
                )
                result = VerificationResult(
                    username=username,
                    verification_type=claim_type,
                    threshold=resolved,
                    meets_criteria=False,
                    verified_at=verified_at,
                )
            else:
                proof_hash = compute_proof_hash(
                    username, claim_type, True, verified_at
                )
                attestation, claims = await self._attest(proof_hash)
                result = VerificationResult(
                    username=username,
                    verification_type=claim_type,
                    threshold=resolved,
                    meets_criteria=True,
                    attestation=attestation,
                    attestation_claims=claims,
                    verified_at=verified_at,
                    proof_hash=proof_hash,
                )
                self._store.put(proof_hash, result)

        record_outcome(claim_type, meets_criteria)
        logger.info("Verification completed for user: %s", username)
        return result

    async def get_proof(self, proof_hash: str) -> VerificationResult:
        """Return the stored result for *proof_hash*."""
        with track_latency("get_proof"):
            if not is_valid_proof_hash(proof_hash):
                raise InvalidProofHashError()
            result = self._store.get(proof_hash)
            if result is None:
                logger.info("Proof not found for hash: %s", proof_hash)
                raise ProofNotFoundError()
        logger.info("Proof retrieved for hash: %s", proof_hash)
        return result

    def health(self) -> dict[str, Any]:
        """Summarize store contents, configuration, and metrics."""
        return {
            "status": "ok",
            "proofs": self._store.stats().model_dump(),
            "github_token_configured": bool(
                getattr(self._source, "token_configured", False)
            ),
            "attestation_configured": self._attestation.configured,
            "metrics": metrics_snapshot(),
        }

    # -- internal --

    async def _attest(
        self, proof_hash: str
    ) -> tuple[Attestation, dict[str, Any] | None]:
        """Apply the attestation policy; failures never abort the verification."""
        if not self._attestation.configured:
            return Attestation.not_configured(), None

        try:
            token = await self._attestation.get_token(proof_hash)
        except AttestationError as exc:
            logger.error("Attestation failed: %s", exc)
            return Attestation.unavailable(), None

        try:
            claims = self._attestation.decode_claims(token)
        except AttestationError as exc:
            logger.error("Failed to parse attestation token claims: %s", exc)
            claims = None
        return Attestation.issued(token), claims
