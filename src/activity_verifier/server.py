"""FastMCP server exposing verification as MCP tools and HTTP routes.

Both surfaces delegate to one ``VerificationService``.  Call
``configure(...)`` before serving requests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from fastmcp import FastMCP
from pydantic import StrictInt
from starlette.requests import Request
from starlette.responses import JSONResponse

from activity_verifier.attestation import AttestationClient
from activity_verifier.config import AttestationConfig
from activity_verifier.config import GitHubConfig
from activity_verifier.config import ProofStoreConfig
from activity_verifier.errors import error_response
from activity_verifier.errors import InputValidationError
from activity_verifier.errors import VerifierError
from activity_verifier.github import ActivitySource
from activity_verifier.github import GitHubClient
from activity_verifier.proofs import InMemoryProofStore
from activity_verifier.proofs import ProofStore
from activity_verifier.service import VerificationService

logger = logging.getLogger(__name__)

mcp = FastMCP("GitHub Activity Verifier")

# ---------------------------------------------------------------------------
# Service instance (set via configure())
# ---------------------------------------------------------------------------

_service: VerificationService | None = None


def configure(
    *,
    github_config: GitHubConfig | None = None,
    attestation_config: AttestationConfig | None = None,
    proof_store_config: ProofStoreConfig | None = None,
    source: ActivitySource | None = None,
    attestation: AttestationClient | None = None,
    store: ProofStore | None = None,
    clock: Callable[[], datetime] | None = None,
) -> VerificationService:
    """Build the verification service backing the tools and routes.

    Explicit collaborators win over configs, which lets tests inject fakes.
    """
    global _service
    _service = VerificationService(
        source or GitHubClient(github_config),
        attestation or AttestationClient(attestation_config),
        store or InMemoryProofStore(proof_store_config, clock=clock),
        clock=clock,
    )
    return _service


def shutdown() -> None:
    """Drop the configured service (and with it every stored proof)."""
    global _service
    _service = None


def _get_service() -> VerificationService:
    """Return the service instance or raise."""
    if _service is None:
        raise RuntimeError("Verifier not configured. Call configure() first.")
    return _service


async def _verify(
    github_username: Any,
    verification_type: Any,
    threshold: Any,
) -> tuple[int, dict[str, Any]]:
    try:
        result = await _get_service().verify(
            github_username, verification_type, threshold
        )
    except Exception as exc:
        status, error = error_response(exc)
        if isinstance(exc, VerifierError):
            logger.warning("Verification failed: %s", exc)
        return status, error.to_payload()
    logger.info("Verification completed successfully for user: %s", result.username)
    return 200, result.to_payload()


async def _get_proof(proof_hash: str) -> tuple[int, dict[str, Any]]:
    try:
        result = await _get_service().get_proof(proof_hash)
    except Exception as exc:
        status, error = error_response(exc)
        return status, error.to_payload()
    return 200, result.to_payload()


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool
async def verify_activity(
    github_username: str,
    verification_type: str,
    threshold: StrictInt | None = None,
) -> dict[str, Any]:
    """Verify a claim about a GitHub account's public activity.

    Args:
        github_username: GitHub login to check.
        verification_type: One of yearly_commits, consecutive_days,
            total_stars, public_repos.
        threshold: Minimum value (1-10000); defaults per claim type.
    """
    _, payload = await _verify(github_username, verification_type, threshold)
    return payload


@mcp.tool
async def get_proof(proof_hash: str) -> dict[str, Any]:
    """Fetch a previously issued proof by its 64-character hash."""
    _, payload = await _get_proof(proof_hash)
    return payload


# ---------------------------------------------------------------------------
# HTTP routes
# ---------------------------------------------------------------------------


@mcp.custom_route("/api/verify", methods=["POST"])
async def verify_route(request: Request) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        error = InputValidationError("Request body must be a JSON object")
        return JSONResponse(error.to_api_error().to_payload(), status_code=400)

    status, payload = await _verify(
        body.get("github_username"),
        body.get("verification_type"),
        body.get("threshold"),
    )
    return JSONResponse(payload, status_code=status)


@mcp.custom_route("/proof/{proof_hash}", methods=["GET"])
async def proof_route(request: Request) -> JSONResponse:
    status, payload = await _get_proof(request.path_params["proof_hash"])
    return JSONResponse(payload, status_code=status)


@mcp.custom_route("/health", methods=["GET"])
async def health_route(request: Request) -> JSONResponse:
    del request
    try:
        payload = _get_service().health()
    except RuntimeError as exc:
        status, error = error_response(exc)
        return JSONResponse(error.to_payload(), status_code=status)
    return JSONResponse(payload)
