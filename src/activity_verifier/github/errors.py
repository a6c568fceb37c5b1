"""Failures reported by the GitHub client.

None of these are retried; the service surfaces them as-is.
"""

from __future__ import annotations

from activity_verifier.errors import VerifierError


class GitHubError(VerifierError):
    """Base class for GitHub API failures."""

    error_code = "GITHUB_API_ERROR"
    http_status = 502


class UserNotFoundError(GitHubError):
    error_code = "USER_NOT_FOUND"
    http_status = 404

    def __init__(self, username: str) -> None:
        super().__init__(f"GitHub user '{username}' not found")
        self.username = username


class RateLimitError(GitHubError):
    error_code = "RATE_LIMIT_EXCEEDED"
    http_status = 429

    def __init__(self) -> None:
        super().__init__("GitHub API rate limit exceeded. Please try again later.")


class GitHubAPIError(GitHubError):
    """Any other non-success status; upstream status and body are passed through."""

    error_code = "GITHUB_API_ERROR"
    http_status = 502

    def __init__(self, status: int, body: str) -> None:
        super().__init__(
            f"GitHub API error {status}: {body}",
            details={"upstream_status": status, "upstream_body": body},
        )
        self.status = status
        self.body = body


class GitHubNetworkError(GitHubError):
    error_code = "NETWORK_ERROR"
    http_status = 502

    def __init__(self, reason: str) -> None:
        super().__init__("Failed to connect to GitHub API")
        self.reason = reason


class GitHubDecodeError(GitHubError):
    error_code = "JSON_PARSE_ERROR"
    http_status = 502

    def __init__(self, reason: str) -> None:
        super().__init__("Failed to parse GitHub API response")
        self.reason = reason
