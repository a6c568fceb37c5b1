"""Engine domain: claim metrics and the verification engine."""

from activity_verifier.engine.metrics import ClaimMetric
from activity_verifier.engine.metrics import ConsecutiveDaysMetric
from activity_verifier.engine.metrics import longest_daily_streak
from activity_verifier.engine.metrics import PublicReposMetric
from activity_verifier.engine.metrics import TotalStarsMetric
from activity_verifier.engine.metrics import YEARLY_WINDOW
from activity_verifier.engine.metrics import YearlyCommitsMetric
from activity_verifier.engine.verification import default_metrics
from activity_verifier.engine.verification import VerificationEngine

__all__ = [
    "ClaimMetric",
    "ConsecutiveDaysMetric",
    "PublicReposMetric",
    "TotalStarsMetric",
    "VerificationEngine",
    "YEARLY_WINDOW",
    "YearlyCommitsMetric",
    "default_metrics",
    "longest_daily_streak",
]
