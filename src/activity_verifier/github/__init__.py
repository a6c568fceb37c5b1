"""GitHub domain: activity source client and its failure taxonomy."""

from activity_verifier.github.client import ActivitySource
from activity_verifier.github.client import GitHubClient
from activity_verifier.github.client import HTTPResponse
from activity_verifier.github.errors import GitHubAPIError
from activity_verifier.github.errors import GitHubDecodeError
from activity_verifier.github.errors import GitHubError
from activity_verifier.github.errors import GitHubNetworkError
from activity_verifier.github.errors import RateLimitError
from activity_verifier.github.errors import UserNotFoundError

__all__ = [
    "ActivitySource",
    "GitHubAPIError",
    "GitHubClient",
    "GitHubDecodeError",
    "GitHubError",
    "GitHubNetworkError",
    "HTTPResponse",
    "RateLimitError",
    "UserNotFoundError",
]
