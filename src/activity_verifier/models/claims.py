"""Claim types and their default thresholds."""

from __future__ import annotations

import json
from enum import Enum

MIN_THRESHOLD = 1
MAX_THRESHOLD = 10000


class ClaimType(str, Enum):
    """The fixed set of activity claims that can be verified."""

    yearly_commits = "yearly_commits"
    consecutive_days = "consecutive_days"
    total_stars = "total_stars"
    public_repos = "public_repos"

    @property
    def default_threshold(self) -> int:
        return _DEFAULT_THRESHOLDS[self]

    def serialized(self) -> str:
        """Return the JSON encoding of the value, quotes included."""
        return json.dumps(self.value)


_DEFAULT_THRESHOLDS = {
    ClaimType.yearly_commits: 365,
    ClaimType.consecutive_days: 100,
    ClaimType.total_stars: 1000,
    ClaimType.public_repos: 10,
}
