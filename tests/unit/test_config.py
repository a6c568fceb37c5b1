"""Unit tests for configuration dataclasses and environment readers."""

from __future__ import annotations

import dataclasses

import pytest

from activity_verifier.config import attestation_config_from_env
from activity_verifier.config import AttestationConfig
from activity_verifier.config import github_config_from_env
from activity_verifier.config import GitHubConfig
from activity_verifier.config import log_level_from_env
from activity_verifier.config import ProofStoreConfig
from activity_verifier.config import server_config_from_env
from activity_verifier.config import ServerConfig

_ENV_VARS = ("GITHUB_TOKEN", "MAA_ENDPOINT", "SKR_PORT", "HOST", "PORT", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_github_defaults(self):
        config = GitHubConfig()
        assert config.api_base == "https://api.github.com"
        assert config.token is None
        assert config.events_per_page == 100
        assert config.max_event_pages == 3
        assert config.repos_per_page == 100
        assert config.max_repo_pages == 10

    def test_proof_ttl_is_one_day(self):
        assert ProofStoreConfig().ttl_seconds == 86400

    def test_server_defaults(self):
        assert ServerConfig() == ServerConfig(host="0.0.0.0", port=9000)

    def test_sidecar_url_uses_host_and_port(self):
        config = AttestationConfig(sidecar_port=9999)
        assert config.sidecar_url == "http://localhost:9999/attest/maa"

    def test_configs_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            GitHubConfig().token = "x"  # type: ignore[misc]


class TestEnvironmentReaders:
    def test_github_token_from_env(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_abc")
        assert github_config_from_env().token == "ghp_abc"

    def test_blank_token_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "   ")
        assert github_config_from_env().token is None

    def test_attestation_from_env(self, monkeypatch):
        monkeypatch.setenv("MAA_ENDPOINT", "https://maa.example.net")
        monkeypatch.setenv("SKR_PORT", "8181")
        config = attestation_config_from_env()
        assert config.endpoint == "https://maa.example.net"
        assert config.sidecar_url == "http://localhost:8181/attest/maa"

    def test_attestation_defaults_without_env(self):
        config = attestation_config_from_env()
        assert config.endpoint is None
        assert config.sidecar_port == 8080

    def test_invalid_port_names_variable(self, monkeypatch):
        monkeypatch.setenv("SKR_PORT", "eighty")
        with pytest.raises(ValueError, match="SKR_PORT"):
            attestation_config_from_env()

    def test_server_from_env(self, monkeypatch):
        monkeypatch.setenv("HOST", "127.0.0.1")
        monkeypatch.setenv("PORT", "8000")
        assert server_config_from_env() == ServerConfig(host="127.0.0.1", port=8000)

    def test_log_level_upper_cased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert log_level_from_env() == "DEBUG"

    def test_log_level_default(self):
        assert log_level_from_env() == "INFO"
        assert log_level_from_env("WARNING") == "WARNING"
