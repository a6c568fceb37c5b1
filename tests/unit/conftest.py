"""Unit test fixtures: a verification service wired to fakes."""

from __future__ import annotations

import pytest

from activity_verifier.attestation import AttestationClient
from activity_verifier.config import AttestationConfig
from activity_verifier.config import ProofStoreConfig
from activity_verifier.proofs import InMemoryProofStore
from activity_verifier.service import VerificationService


@pytest.fixture()
def proof_store(clock) -> InMemoryProofStore:
    return InMemoryProofStore(ProofStoreConfig(ttl_seconds=3600), clock=clock)


@pytest.fixture()
def attestation_client() -> AttestationClient:
    """Attestation client with no endpoint configured."""
    return AttestationClient(AttestationConfig())


@pytest.fixture()
def configured_attestation(monkeypatch, make_jwt) -> AttestationClient:
    """Attestation client whose sidecar answers with a JSON token body."""
    client = AttestationClient(AttestationConfig(endpoint="https://maa.example.net"))
    sent: list[dict[str, str]] = []

    def _fake_post(payload: dict[str, str]) -> str:
        sent.append(payload)
        return '{"token": "%s"}' % make_jwt({"x-ms-ver": "1.0", "nonce": "n-1"})

    monkeypatch.setattr(client, "_post_sync", _fake_post)
    client.sent = sent
    return client


@pytest.fixture()
def service(fake_source, attestation_client, proof_store, clock) -> VerificationService:
    return VerificationService(
        fake_source,
        attestation_client,
        proof_store,
        clock=clock,
    )
