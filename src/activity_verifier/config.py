"""Application configuration dataclasses.

Frozen dataclasses with defaults for each subsystem, plus small readers
that build them from environment variables at process start.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class GitHubConfig:
    """Settings for the GitHub REST client."""

    api_base: str = "https://api.github.com"
    token: str | None = None
    user_agent: str = "GitHub-Activity-Verifier/1.0"
    # Pagination bounds
    events_per_page: int = 100
    max_event_pages: int = 3
    repos_per_page: int = 100
    max_repo_pages: int = 10
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class AttestationConfig:
    """Settings for the attestation sidecar."""

    endpoint: str | None = None
    sidecar_host: str = "localhost"
    sidecar_port: int = 8080
    timeout_seconds: float = 30.0

    @property
    def sidecar_url(self) -> str:
        return f"http://{self.sidecar_host}:{self.sidecar_port}/attest/maa"


@dataclass(frozen=True)
class ProofStoreConfig:
    """Lifetime of stored proofs."""

    ttl_seconds: int = 24 * 60 * 60


@dataclass(frozen=True)
class ServerConfig:
    """Bind address for the HTTP transport."""

    host: str = "0.0.0.0"
    port: int = 9000


# ---------------------------------------------------------------------------
# Environment readers
# ---------------------------------------------------------------------------


def _env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _env_port(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer port, got {raw!r}") from exc


def github_config_from_env() -> GitHubConfig:
    """Build ``GitHubConfig`` from ``GITHUB_TOKEN``."""
    return GitHubConfig(token=_env("GITHUB_TOKEN"))


def attestation_config_from_env() -> AttestationConfig:
    """Build ``AttestationConfig`` from ``MAA_ENDPOINT`` and ``SKR_PORT``."""
    return AttestationConfig(
        endpoint=_env("MAA_ENDPOINT"),
        sidecar_port=_env_port("SKR_PORT", AttestationConfig.sidecar_port),
    )


def server_config_from_env() -> ServerConfig:
    """Build ``ServerConfig`` from ``HOST`` and ``PORT``."""
    return ServerConfig(
        host=_env("HOST") or ServerConfig.host,
        port=_env_port("PORT", ServerConfig.port),
    )


def log_level_from_env(default: str = "INFO") -> str:
    """Return the ``LOG_LEVEL`` name, upper-cased."""
    return (_env("LOG_LEVEL") or default).upper()
