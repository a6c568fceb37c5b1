"""Models domain: claim types, GitHub records, and result schemas."""

from activity_verifier.models.claims import ClaimType
from activity_verifier.models.claims import MAX_THRESHOLD
from activity_verifier.models.claims import MIN_THRESHOLD
from activity_verifier.models.events import ActivityEvent
from activity_verifier.models.events import EventActor
from activity_verifier.models.events import EventRepo
from activity_verifier.models.events import PUSH_EVENT
from activity_verifier.models.events import UserProfile
from activity_verifier.models.events import UserRepository
from activity_verifier.models.schemas import ApiError
from activity_verifier.models.schemas import Attestation
from activity_verifier.models.schemas import AttestationStatus
from activity_verifier.models.schemas import VerificationResult
from activity_verifier.models.schemas import VerifyActivityInput

__all__ = [
    "ActivityEvent",
    "ApiError",
    "Attestation",
    "AttestationStatus",
    "ClaimType",
    "EventActor",
    "EventRepo",
    "MAX_THRESHOLD",
    "MIN_THRESHOLD",
    "PUSH_EVENT",
    "UserProfile",
    "UserRepository",
    "VerificationResult",
    "VerifyActivityInput",
]
