"""In-process metrics: request latencies and verification outcomes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from threading import Lock
from time import perf_counter

from activity_verifier.models.claims import ClaimType

logger = logging.getLogger(__name__)


@dataclass
class LatencySummary:
    """Aggregated latency metrics for one operation."""

    count: int = 0
    error_count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    def add(self, duration_ms: float, ok: bool) -> None:
        self.count += 1
        if not ok:
            self.error_count += 1
        self.total_ms += duration_ms
        self.max_ms = max(self.max_ms, duration_ms)


@dataclass
class OutcomeCounts:
    """Verification outcomes for one claim type."""

    met: int = 0
    not_met: int = 0


class _MetricsRecorder:
    def __init__(self) -> None:
        self._lock = Lock()
        self._latency: dict[str, LatencySummary] = {}
        self._outcomes: dict[str, OutcomeCounts] = {}

    def record_latency(self, operation: str, duration_ms: float, ok: bool) -> None:
        normalized = max(float(duration_ms), 0.0)
        with self._lock:
            self._latency.setdefault(operation, LatencySummary()).add(normalized, ok)
        logger.debug(
            "latency operation=%s duration_ms=%.3f ok=%s",
            operation,
            normalized,
            ok,
        )

    def record_outcome(self, claim_type: ClaimType, meets_criteria: bool) -> None:
        with self._lock:
            counts = self._outcomes.setdefault(claim_type.value, OutcomeCounts())
            if meets_criteria:
                counts.met += 1
            else:
                counts.not_met += 1

    def snapshot(self) -> dict[str, dict]:
        with self._lock:
            latency = {
                operation: {
                    "count": summary.count,
                    "error_count": summary.error_count,
                    "avg_ms": round(
                        summary.total_ms / summary.count if summary.count else 0.0,
                        3,
                    ),
                    "max_ms": round(summary.max_ms, 3),
                }
                for operation, summary in sorted(self._latency.items())
            }
            outcomes = {
                claim: {"met": counts.met, "not_met": counts.not_met}
                for claim, counts in sorted(self._outcomes.items())
            }
        return {"latency": latency, "outcomes": outcomes}

    def reset(self) -> None:
        with self._lock:
            self._latency.clear()
            self._outcomes.clear()


_RECORDER = _MetricsRecorder()


def record_latency(*, operation: str, duration_ms: float, ok: bool = True) -> None:
    """Record one latency sample."""
    _RECORDER.record_latency(operation, duration_ms, ok)


@contextmanager
def track_latency(operation: str) -> Iterator[None]:
    """Time the enclosed block; an exception counts as an error sample."""
    start = perf_counter()
    ok = False
    try:
        yield
        ok = True
    finally:
        record_latency(
            operation=operation,
            duration_ms=(perf_counter() - start) * 1000,
            ok=ok,
        )


def record_outcome(claim_type: ClaimType, meets_criteria: bool) -> None:
    """Count one finished verification."""
    _RECORDER.record_outcome(claim_type, meets_criteria)


def metrics_snapshot() -> dict[str, dict]:
    """Return current latency and outcome aggregates."""
    return _RECORDER.snapshot()


def reset_metrics() -> None:
    """Clear all aggregates (test helper)."""
    _RECORDER.reset()
