"""Root conftest: suite markers and shared fakes.

The GitHub API and the attestation sidecar are never contacted: tests use
``FakeActivitySource`` for activity data and patch the attestation client's
transport.
"""

from __future__ import annotations

import base64
import json
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from pathlib import Path
from typing import Any

import pytest

from activity_verifier.models.events import ActivityEvent
from activity_verifier.observability import reset_metrics

FIXED_NOW = datetime(2026, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Attach suite markers from test path.

    - `tests/unit/*` -> `unit`
    - `tests/integration/*` -> `integration`
    """
    root = Path(__file__).resolve().parents[1]
    for item in items:
        item_path = Path(str(item.fspath)).resolve()
        try:
            rel = item_path.relative_to(root)
        except ValueError:
            continue

        parts = rel.parts
        if len(parts) < 2 or parts[0] != "tests":
            continue
        if parts[1] == "unit":
            item.add_marker(pytest.mark.unit)
        elif parts[1] == "integration":
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def _clean_metrics():
    reset_metrics()
    yield
    reset_metrics()


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_event():
    """Factory building ``ActivityEvent`` records from upstream-shaped JSON."""
    counter = {"next": 0}

    def _make(
        *,
        created_at: datetime = FIXED_NOW,
        kind: str = "PushEvent",
        commits: int = 1,
        login: str = "octocat",
    ) -> ActivityEvent:
        counter["next"] += 1
        payload: dict[str, Any] = {}
        if kind == "PushEvent":
            payload["commits"] = [
                {"sha": f"{counter['next']:04d}{i:036d}", "message": "update"}
                for i in range(commits)
            ]
        return ActivityEvent.model_validate(
            {
                "id": str(counter["next"]),
                "type": kind,
                "actor": {"id": 583231, "login": login},
                "repo": {"id": 1296269, "name": f"{login}/Hello-World"},
                "created_at": created_at.isoformat(),
                "payload": payload,
            }
        )

    return _make


# ---------------------------------------------------------------------------
# Activity source
# ---------------------------------------------------------------------------


class FakeActivitySource:
    """In-memory ``ActivitySource`` recording every call it receives."""

    def __init__(self) -> None:
        self.events: list[ActivityEvent] = []
        self.stars = 0
        self.public_repos = 0
        self.error: Exception | None = None
        self.token_configured = False
        self.calls: list[tuple[str, str]] = []

    def _record(self, operation: str, username: str) -> None:
        self.calls.append((operation, username))
        if self.error is not None:
            raise self.error

    async def fetch_events(self, username: str) -> list[ActivityEvent]:
        self._record("fetch_events", username)
        return list(self.events)

    async def count_stars(self, username: str) -> int:
        self._record("count_stars", username)
        return self.stars

    async def count_public_repos(self, username: str) -> int:
        self._record("count_public_repos", username)
        return self.public_repos


@pytest.fixture()
def fake_source() -> FakeActivitySource:
    return FakeActivitySource()


# ---------------------------------------------------------------------------
# Attestation tokens
# ---------------------------------------------------------------------------


def _segment(data: dict[str, Any]) -> str:
    raw = json.dumps(data).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


@pytest.fixture()
def make_jwt():
    """Factory building unsigned JWT-shaped tokens carrying *claims*."""

    def _make(claims: dict[str, Any]) -> str:
        header = _segment({"alg": "RS256", "typ": "JWT"})
        return f"{header}.{_segment(claims)}.c2lnbmF0dXJl"

    return _make
