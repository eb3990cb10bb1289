"""Shared fixtures: isolated forwarding environment and credential file."""

from pathlib import Path

import pytest

FORWARDING_ENV_VARS = ("WEBMENTION_FORWARDER_REPO", "GITHUB_API_URL", "GITHUB_CREDENTIALS_PATH")


@pytest.fixture
def credentials_file(tmp_path: Path) -> Path:
    path = tmp_path / "github_credentials"
    path.write_text("test_github_token")
    return path


@pytest.fixture
def forwarding_env(monkeypatch: pytest.MonkeyPatch, credentials_file: Path) -> Path:
    """Environment as a deployed forwarder sees it; returns the credential path."""
    for name in FORWARDING_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WEBMENTION_FORWARDER_REPO", "test-owner/test-repo")
    monkeypatch.setenv("GITHUB_CREDENTIALS_PATH", str(credentials_file))
    return credentials_file
