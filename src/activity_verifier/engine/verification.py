"""Verification engine: dispatches a claim type to its metric strategy."""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from datetime import datetime
from datetime import timezone

from activity_verifier.engine.metrics import ClaimMetric
from activity_verifier.engine.metrics import ConsecutiveDaysMetric
from activity_verifier.engine.metrics import PublicReposMetric
from activity_verifier.engine.metrics import TotalStarsMetric
from activity_verifier.engine.metrics import YearlyCommitsMetric
from activity_verifier.github.client import ActivitySource
from activity_verifier.models.claims import ClaimType
from activity_verifier.models.events import ActivityEvent

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def default_metrics() -> dict[ClaimType, ClaimMetric]:
    return {
        ClaimType.yearly_commits: YearlyCommitsMetric(),
        ClaimType.consecutive_days: ConsecutiveDaysMetric(),
        ClaimType.total_stars: TotalStarsMetric(),
        ClaimType.public_repos: PublicReposMetric(),
    }


class VerificationEngine:
    """Computes a claim's metric and compares it to a threshold."""

    def __init__(
        self,
        source: ActivitySource,
        *,
        metrics: Mapping[ClaimType, ClaimMetric] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._source = source
        self._metrics = dict(metrics) if metrics is not None else default_metrics()
        self._clock = clock or _utcnow

    def register(self, claim_type: ClaimType, metric: ClaimMetric) -> None:
        """Add or replace the strategy for *claim_type*."""
        self._metrics[claim_type] = metric

    async def measure(
        self,
        events: Sequence[ActivityEvent],
        claim_type: ClaimType,
        *,
        subject: str | None = None,
    ) -> int:
        """Return the metric value for *claim_type* over *events*.

        The login used for account-level queries is the first event's
        actor, falling back to *subject*.  With neither available the
        account-level metrics are 0 and no request is made.
        """
        metric = self._metrics.get(claim_type)
        if metric is None:
            raise ValueError(f"No metric registered for claim type '{claim_type.value}'")

        login = events[0].actor.login if events else subject
        return await metric.compute(
            events,
            source=self._source,
            login=login,
            now=self._clock(),
        )

    async def evaluate(
        self,
        events: Sequence[ActivityEvent],
        claim_type: ClaimType,
        threshold: int,
        *,
        subject: str | None = None,
    ) -> bool:
        """Return whether the metric for *claim_type* is at least *threshold*."""
        actual = await self.measure(events, claim_type, subject=subject)
        meets_criteria = actual >= threshold
        logger.info(
            "Verification result - type: %s, threshold: %d, actual: %d, "
            "meets criteria: %s",
            claim_type.value,
            threshold,
            actual,
            meets_criteria,
        )
        return meets_criteria
