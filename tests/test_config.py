"""Tests for config loading (YAML + env)."""

from pathlib import Path

import pytest

from ghfeedback.config import AppConfig, load_config


def test_missing_file_gives_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """No config file yields the built-in defaults."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN_FILE", raising=False)
    config = load_config(tmp_path / "nope.yaml")
    assert isinstance(config, AppConfig)
    assert config.github.api_url == "https://api.github.com"
    assert config.github.timeout == 30
    assert config.store.state_dir == Path(".ghfeedback")
    assert config.logging.level == "INFO"


def test_yaml_values_and_env_substitution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """YAML values load and ${VAR} placeholders are expanded."""
    monkeypatch.setenv("FEEDBACK_TOKEN", "tok-123")
    path = tmp_path / "config.yaml"
    path.write_text(
        "github:\n"
        "  owner: acme\n"
        "  repo: app-feedback\n"
        "  token: ${FEEDBACK_TOKEN}\n"
        "store:\n"
        "  state_dir: /var/lib/feedback\n"
        "logging:\n"
        "  level: DEBUG\n"
    )
    config = load_config(path)
    assert config.github.owner == "acme"
    assert config.github.token == "tok-123"
    assert config.store.state_dir == Path("/var/lib/feedback")
    assert config.logging.level == "DEBUG"

    creds = config.credentials()
    assert creds.full_name == "acme/app-feedback"
    assert creds.token == "tok-123"


def test_token_from_secret_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """GITHUB_TOKEN_FILE supplies the token."""
    secret = tmp_path / "token"
    secret.write_text("file-token\n")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(secret))
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  owner: o\n  repo: r\n")
    config = load_config(path)
    assert config.github_token_resolved == "file-token"


def test_unresolved_placeholder_falls_back_to_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A placeholder left as-is falls back to GITHUB_TOKEN."""
    monkeypatch.delenv("MISSING_VAR", raising=False)
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  owner: o\n  repo: r\n  token: ${MISSING_VAR}\n")
    config = load_config(path)
    assert config.github_token_resolved == "env-token"


def test_credentials_missing_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """credentials() names every missing setting."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN_FILE", raising=False)
    monkeypatch.delenv("GITHUB_OWNER", raising=False)
    monkeypatch.delenv("GITHUB_REPO", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  owner: o\n")
    with pytest.raises(ValueError, match="repo, token"):
        load_config(path).credentials()
