"""Concurrency checks: parallel verifications share one proof store safely."""

from __future__ import annotations

import asyncio
import threading

from activity_verifier.models import ClaimType
from activity_verifier.models import VerificationResult
from activity_verifier.proofs import compute_proof_hash


class TestConcurrentVerifications:
    async def test_parallel_requests_all_stored(self, http_client, fake_source):
        fake_source.public_repos = 25
        usernames = [f"user-{i}" for i in range(25)]

        responses = await asyncio.gather(
            *(
                http_client.post(
                    "/api/verify",
                    json={"github_username": name, "verification_type": "public_repos"},
                )
                for name in usernames
            )
        )

        hashes = {r.json()["proof_hash"] for r in responses}
        assert all(r.status_code == 200 for r in responses)
        assert len(hashes) == len(usernames)

        health = (await http_client.get("/health")).json()
        assert health["proofs"]["total_proofs"] == len(usernames)
        assert health["metrics"]["latency"]["verify"]["count"] == len(usernames)

        lookups = await asyncio.gather(
            *(http_client.get(f"/proof/{h}") for h in hashes)
        )
        assert {r.json()["username"] for r in lookups} == set(usernames)

    async def test_same_claim_same_second_is_idempotent(self, http_client, fake_source):
        fake_source.stars = 4000
        body = {"github_username": "octocat", "verification_type": "total_stars"}

        first, second = await asyncio.gather(
            http_client.post("/api/verify", json=body),
            http_client.post("/api/verify", json=body),
        )

        assert first.json()["proof_hash"] == second.json()["proof_hash"]
        health = (await http_client.get("/health")).json()
        assert health["proofs"]["total_proofs"] == 1

    def test_store_writes_from_threads(self, proof_store, clock):
        results = []
        for i in range(40):
            username = f"user-{i}"
            results.append(
                VerificationResult(
                    username=username,
                    verification_type=ClaimType.total_stars,
                    threshold=1,
                    meets_criteria=True,
                    verified_at=clock.now,
                    proof_hash=compute_proof_hash(
                        username, ClaimType.total_stars, True, clock.now
                    ),
                )
            )

        mismatches = []

        def _write(chunk):
            for result in chunk:
                proof_store.put(result.proof_hash, result)
                if proof_store.get(result.proof_hash) != result:
                    mismatches.append(result.username)

        threads = [
            threading.Thread(target=_write, args=(results[i::4],)) for i in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert mismatches == []
        assert proof_store.stats().total_proofs == 40
