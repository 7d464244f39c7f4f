"""Configuration loading from YAML and environment.

The access token is taken from the config file, from GITHUB_TOKEN, or from
the file named by GITHUB_TOKEN_FILE (Docker secrets). Never commit a real
token in config.yaml.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghfeedback.models import GitHubCredentials


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so properties can read env/file
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """Repository that stores the feedback issues."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    owner: str = Field(default="", description="Repository owner (user or organisation)")
    repo: str = Field(default="", description="Repository name")
    token: str | None = Field(default=None, description="Access token; prefer env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout: float = Field(default=30, gt=0, description="Request timeout in seconds")


class StoreConfig(BaseSettings):
    """Where this device keeps its vote and ownership records."""

    model_config = SettingsConfigDict(env_prefix="STORE_", extra="ignore")

    state_dir: Path = Field(default=Path(".ghfeedback"), description="Directory for voted/owned YAML files")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("$"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")

    def credentials(self) -> GitHubCredentials:
        """Credentials for the configured repository.

        Raises:
            ValueError: If owner, repo or token is missing.
        """
        token = self.github_token_resolved
        missing = [
            name
            for name, value in (("owner", self.github.owner), ("repo", self.github.repo), ("token", token))
            if not value
        ]
        if missing:
            raise ValueError(f"Missing GitHub setting(s): {', '.join(missing)}")
        return GitHubCredentials(owner=self.github.owner, repo=self.github.repo, token=token)


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Missing file gives defaults (env vars still apply). Secrets:
    GITHUB_TOKEN or GITHUB_TOKEN_FILE.
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    github = GitHubConfig(**(raw.get("github") or {}))
    store = StoreConfig(**(raw.get("store") or {}))
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(github=github, store=store, logging=logging)
