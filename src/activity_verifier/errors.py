"""Error taxonomy shared by the service and its outer surfaces.

Every error a caller can see is a ``VerifierError`` carrying a stable
``error_code`` and the HTTP status it maps to.  Anything else is reported
as ``INTERNAL_ERROR`` without leaking its message.
"""

from __future__ import annotations

import logging
from typing import Any

from activity_verifier.models.schemas import ApiError

logger = logging.getLogger(__name__)

_INTERNAL_MESSAGE = "An unexpected error occurred"


class VerifierError(Exception):
    """Base class for errors with a machine-readable code."""

    error_code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(self, message: str, *, details: str | dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_api_error(self) -> ApiError:
        return ApiError(
            error=self.message,
            error_code=self.error_code,
            details=self.details,
        )


class InputValidationError(VerifierError):
    """Caller input was rejected before any external call."""

    error_code = "VALIDATION_ERROR"
    http_status = 400


class NotFoundError(VerifierError):
    error_code = "NOT_FOUND"
    http_status = 404


class InvalidProofHashError(VerifierError):
    """Proof hash is not 64 lowercase hex characters."""

    error_code = "INVALID_PROOF_HASH"
    http_status = 400

    def __init__(self) -> None:
        super().__init__("Invalid proof hash format")


class ProofNotFoundError(VerifierError):
    """Proof hash is well-formed but unknown or expired."""

    error_code = "PROOF_NOT_FOUND"
    http_status = 404

    def __init__(self) -> None:
        super().__init__(
            "Proof not found",
            details="The proof may have expired or never existed",
        )


class InternalError(VerifierError):
    error_code = "INTERNAL_ERROR"
    http_status = 500


def error_response(exc: BaseException) -> tuple[int, ApiError]:
    """Map *exc* to an HTTP status and error body."""
    if isinstance(exc, VerifierError):
        return exc.http_status, exc.to_api_error()
    logger.error("Unhandled error during request", exc_info=exc)
    return 500, ApiError(error=_INTERNAL_MESSAGE, error_code="INTERNAL_ERROR")
