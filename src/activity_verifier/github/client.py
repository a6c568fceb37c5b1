"""GitHub REST client for public activity, repositories, and profiles.

Requests run through ``urllib`` in a worker thread so the event loop is
never blocked.  Every failure is classified into a ``GitHubError``
subclass and raised without retrying.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from typing import Protocol
from typing import TypeVar
from typing import runtime_checkable
from urllib.error import HTTPError
from urllib.error import URLError
from urllib.parse import quote
from urllib.parse import urlencode
from urllib.request import Request
from urllib.request import urlopen

from pydantic import TypeAdapter
from pydantic import ValidationError

from activity_verifier.config import GitHubConfig
from activity_verifier.github.errors import GitHubAPIError
from activity_verifier.github.errors import GitHubDecodeError
from activity_verifier.github.errors import GitHubNetworkError
from activity_verifier.github.errors import RateLimitError
from activity_verifier.github.errors import UserNotFoundError
from activity_verifier.models.events import ActivityEvent
from activity_verifier.models.events import UserProfile
from activity_verifier.models.events import UserRepository
from activity_verifier.observability import track_latency

logger = logging.getLogger(__name__)

T = TypeVar("T")

_EVENTS = TypeAdapter(list[ActivityEvent])
_REPOSITORIES = TypeAdapter(list[UserRepository])
_PROFILE = TypeAdapter(UserProfile)


@runtime_checkable
class ActivitySource(Protocol):
    """What the engine and service need from an activity platform."""

    async def fetch_events(self, username: str) -> list[ActivityEvent]: ...

    async def count_stars(self, username: str) -> int: ...

    async def count_public_repos(self, username: str) -> int: ...


@dataclass(frozen=True)
class HTTPResponse:
    """Status, lower-cased headers, and decoded body of one response."""

    status: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)


class GitHubClient:
    """Bounded, non-retrying client for the GitHub REST API."""

    def __init__(self, config: GitHubConfig | None = None) -> None:
        self._config = config or GitHubConfig()
        self._base_url = self._config.api_base.rstrip("/")
        self._headers = {
            "User-Agent": self._config.user_agent,
            "Accept": "application/vnd.github.v3+json",
        }
        if self._config.token:
            self._headers["Authorization"] = f"token {self._config.token}"
            logger.info("GitHub token configured for enhanced rate limits")
        else:
            logger.warning(
                "No GitHub token configured - using anonymous access with lower rate limits"
            )

    @property
    def token_configured(self) -> bool:
        return bool(self._config.token)

    # -- events --

    async def fetch_events(self, username: str) -> list[ActivityEvent]:
        """Return up to ``max_event_pages`` pages of public events, newest first."""
        events: list[ActivityEvent] = []
        with track_latency("github.fetch_events"):
            for page in range(1, self._config.max_event_pages + 1):
                url = self._url(
                    f"/users/{quote(username)}/events",
                    per_page=self._config.events_per_page,
                    page=page,
                )
                batch = await self._get(url, username, _EVENTS)
                if not batch:
                    logger.debug("No more events found, stopping pagination")
                    break

                logger.debug("Fetched %d events from page %d", len(batch), page)
                if page == 1:
                    breakdown = Counter(event.kind for event in batch)
                    logger.debug("Event types breakdown: %s", dict(breakdown))
                events.extend(batch)

        logger.info("Fetched total %d events for user: %s", len(events), username)
        return events

    # -- profile / repositories --

    async def fetch_profile(self, username: str) -> UserProfile:
        url = self._url(f"/users/{quote(username)}")
        profile = await self._get(url, username, _PROFILE)
        logger.debug("Fetched user info for: %s", username)
        return profile

    async def fetch_repositories(self, username: str, page: int) -> list[UserRepository]:
        url = self._url(
            f"/users/{quote(username)}/repos",
            per_page=self._config.repos_per_page,
            page=page,
        )
        repos = await self._get(url, username, _REPOSITORIES)
        logger.debug("Fetched %d repos from page %d", len(repos), page)
        return repos

    async def count_stars(self, username: str) -> int:
        """Sum stargazers across the user's repositories.

        Stops after ``max_repo_pages`` full pages and logs a warning instead
        of failing, so very large accounts are undercounted.
        """
        total = 0
        pages = 0
        for page in range(1, self._config.max_repo_pages + 1):
            repos = await self.fetch_repositories(username, page)
            if not repos:
                break
            total += sum(repo.stargazers_count for repo in repos)
            pages += 1
        else:
            logger.warning(
                "User %s has more than %d repos, limiting star count calculation",
                username,
                self._config.max_repo_pages * self._config.repos_per_page,
            )

        logger.info(
            "User %s has %d total stars across %d pages of repos",
            username,
            total,
            pages,
        )
        return total

    async def count_public_repos(self, username: str) -> int:
        profile = await self.fetch_profile(username)
        logger.info("User %s has %d public repos", username, profile.public_repos)
        return profile.public_repos

    # -- internal --

    def _url(self, path: str, **query: int) -> str:
        url = f"{self._base_url}{path}"
        if query:
            url = f"{url}?{urlencode(query)}"
        return url

    async def _get(self, url: str, username: str, adapter: TypeAdapter[T]) -> T:
        logger.debug("GET %s", url)
        response = await asyncio.to_thread(self._request_sync, url)
        self._raise_for_status(response, username)
        try:
            return adapter.validate_json(response.body)
        except ValidationError as exc:
            raise GitHubDecodeError(str(exc)) from exc

    def _request_sync(self, url: str) -> HTTPResponse:
        request = Request(url, headers=self._headers, method="GET")
        try:
            with urlopen(request, timeout=self._config.timeout_seconds) as response:
                return HTTPResponse(
                    status=response.status,
                    body=response.read().decode("utf-8", errors="replace"),
                    headers=_lower_keys(response.headers),
                )
        except HTTPError as exc:
            return HTTPResponse(
                status=exc.code,
                body=exc.read().decode("utf-8", errors="replace"),
                headers=_lower_keys(exc.headers or {}),
            )
        except URLError as exc:
            raise GitHubNetworkError(str(exc.reason)) from exc
        except OSError as exc:
            raise GitHubNetworkError(str(exc)) from exc

    @staticmethod
    def _raise_for_status(response: HTTPResponse, username: str) -> None:
        status = response.status
        if 200 <= status < 300:
            return
        if status == 404:
            raise UserNotFoundError(username)
        if status == 429:
            raise RateLimitError()
        if status == 403:
            if response.headers.get("x-ratelimit-remaining") == "0":
                raise RateLimitError()
            raise GitHubAPIError(status, "Forbidden - check API token permissions")
        raise GitHubAPIError(status, response.body)


def _lower_keys(headers: Mapping[str, str]) -> dict[str, str]:
    return {key.lower(): value for key, value in headers.items()}
