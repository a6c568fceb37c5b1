"""Integration fixtures: the server wired to fakes, plus MCP and HTTP clients."""

from __future__ import annotations

import httpx
import pytest
from fastmcp import Client

from activity_verifier.attestation import AttestationClient
from activity_verifier.config import AttestationConfig
from activity_verifier.config import ProofStoreConfig
from activity_verifier.proofs import InMemoryProofStore
from activity_verifier.server import configure
from activity_verifier.server import mcp
from activity_verifier.server import shutdown


@pytest.fixture()
def proof_store(clock) -> InMemoryProofStore:
    return InMemoryProofStore(ProofStoreConfig(ttl_seconds=3600), clock=clock)


@pytest.fixture(autouse=True)
def configured_server(fake_source, proof_store, clock):
    """Configure the module-level service for each test, then drop it."""
    service = configure(
        source=fake_source,
        attestation=AttestationClient(AttestationConfig()),
        store=proof_store,
        clock=clock,
    )
    yield service
    shutdown()


@pytest.fixture()
async def mcp_client():
    """Yield a FastMCP Client wired to the verifier server."""
    async with Client(mcp) as client:
        yield client


@pytest.fixture()
async def http_client():
    """Yield an HTTP client bound to the server's ASGI app."""
    transport = httpx.ASGITransport(app=mcp.http_app())
    async with httpx.AsyncClient(
        transport=transport, base_url="http://localhost"
    ) as client:
        yield client
