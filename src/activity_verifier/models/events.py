"""Records parsed from the GitHub REST API.

Only the fields the verifier reads are declared; anything else in the
upstream JSON is ignored.
"""

from __future__ import annotations

from datetime import date
from datetime import datetime
from datetime import timezone
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

PUSH_EVENT = "PushEvent"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EventActor(BaseModel):
    """The account that performed an event."""

    model_config = ConfigDict(frozen=True)

    id: int
    login: str


class EventRepo(BaseModel):
    """The repository an event happened in."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class ActivityEvent(BaseModel):
    """One entry of a user's public event stream."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    kind: str = Field(
        alias="type",
        description="Upstream event type, e.g. PushEvent.",
    )
    actor: EventActor
    repo: EventRepo
    created_at: datetime
    payload: dict[str, Any] = Field(default_factory=dict)

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def is_push(self) -> bool:
        return self.kind == PUSH_EVENT

    @property
    def commit_count(self) -> int:
        commits = self.payload.get("commits")
        if isinstance(commits, list):
            return len(commits)
        return 0

    @property
    def activity_date(self) -> date:
        return self.created_at.date()


class UserProfile(BaseModel):
    """Subset of ``GET /users/{username}``."""

    model_config = ConfigDict(frozen=True)

    login: str
    id: int
    public_repos: int
    created_at: datetime


class UserRepository(BaseModel):
    """Subset of one entry of ``GET /users/{username}/repos``."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    stargazers_count: int = 0
    created_at: datetime | None = None
