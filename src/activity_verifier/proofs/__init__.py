"""Proof domain: hash derivation and time-bounded storage."""

from activity_verifier.proofs.hashing import canonical_proof_string
from activity_verifier.proofs.hashing import compute_proof_hash
from activity_verifier.proofs.hashing import is_valid_proof_hash
from activity_verifier.proofs.schemas import ProofStoreStats
from activity_verifier.proofs.schemas import StoredProof
from activity_verifier.proofs.store import InMemoryProofStore
from activity_verifier.proofs.store import ProofStore

__all__ = [
    "InMemoryProofStore",
    "ProofStore",
    "ProofStoreStats",
    "StoredProof",
    "canonical_proof_string",
    "compute_proof_hash",
    "is_valid_proof_hash",
]
