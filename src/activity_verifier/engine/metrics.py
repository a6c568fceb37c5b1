"""Per-claim metric strategies.

Each strategy turns an event window (and, where the window is not enough,
the activity source) into one integer that is compared to a threshold.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Sequence
from datetime import date
from datetime import datetime
from datetime import timedelta
from typing import Protocol
from typing import runtime_checkable

from activity_verifier.github.client import ActivitySource
from activity_verifier.models.events import ActivityEvent

logger = logging.getLogger(__name__)

YEARLY_WINDOW = timedelta(days=365)
_ONE_DAY = timedelta(days=1)


@runtime_checkable
class ClaimMetric(Protocol):
    """Uniform metric interface, one implementation per claim type."""

    async def compute(
        self,
        events: Sequence[ActivityEvent],
        *,
        source: ActivitySource,
        login: str | None,
        now: datetime,
    ) -> int: ...


def longest_daily_streak(dates: Iterable[date]) -> int:
    """Length of the longest run of consecutive calendar dates."""
    ordered = sorted(set(dates))
    if not ordered:
        return 0

    longest = current = 1
    for previous, day in zip(ordered, ordered[1:]):
        if day == previous + _ONE_DAY:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


class YearlyCommitsMetric:
    """Commits carried by push events of the last 365 days (boundary included)."""

    async def compute(
        self,
        events: Sequence[ActivityEvent],
        *,
        source: ActivitySource,
        login: str | None,
        now: datetime,
    ) -> int:
        del source, login
        cutoff = now - YEARLY_WINDOW
        push_events = [event for event in events if event.is_push]
        recent = [event for event in push_events if event.created_at >= cutoff]
        total = sum(event.commit_count for event in recent)
        logger.info(
            "Commit count breakdown - events: %d, push events: %d, "
            "recent push events: %d, commits: %d",
            len(events),
            len(push_events),
            len(recent),
            total,
        )
        return total


class ConsecutiveDaysMetric:
    """Longest streak of distinct UTC days with any public activity."""

    async def compute(
        self,
        events: Sequence[ActivityEvent],
        *,
        source: ActivitySource,
        login: str | None,
        now: datetime,
    ) -> int:
        del source, login, now
        streak = longest_daily_streak(event.activity_date for event in events)
        logger.debug("Found %d consecutive days of activity", streak)
        return streak


class TotalStarsMetric:
    """Stargazers summed across the account's repositories."""

    async def compute(
        self,
        events: Sequence[ActivityEvent],
        *,
        source: ActivitySource,
        login: str | None,
        now: datetime,
    ) -> int:
        del events, now
        if login is None:
            return 0
        return await source.count_stars(login)


class PublicReposMetric:
    """Public repository count from the account profile."""

    async def compute(
        self,
        events: Sequence[ActivityEvent],
        *,
        source: ActivitySource,
        login: str | None,
        now: datetime,
    ) -> int:
        del events, now
        if login is None:
            return 0
        return await source.count_public_repos(login)
