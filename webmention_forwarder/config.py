"""Configuration loading from YAML and environment.

Forwarding settings (target repository, API URL, credential file path) come
from environment variables only and are re-read on every webmention, so a
changed variable takes effect without restart. Server and logging settings
can also be set in a YAML file.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_CREDENTIALS_PATH = Path("~/.github_credentials")


class ForwardingConfig(BaseSettings):
    """Target repository and GitHub access for forwarded webmentions."""

    model_config = SettingsConfigDict(extra="ignore", env_ignore_empty=True, populate_by_name=True)

    repo: str = Field(
        default="",
        validation_alias="WEBMENTION_FORWARDER_REPO",
        description="Target repository in OWNER/REPO format",
    )
    api_base_url: str = Field(
        default=DEFAULT_API_URL,
        validation_alias="GITHUB_API_URL",
        description="GitHub REST API base URL",
    )
    credentials_path: Path = Field(
        default=DEFAULT_CREDENTIALS_PATH,
        validation_alias="GITHUB_CREDENTIALS_PATH",
        description="File holding the GitHub token as plain text",
    )

    @property
    def credentials_path_resolved(self) -> Path:
        """Credential file path with ``~`` expanded."""
        return self.credentials_path.expanduser()


class ServerConfig(BaseSettings):
    """HTTP listener settings."""

    model_config = SettingsConfigDict(env_prefix="SERVER_", extra="ignore")

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, ge=0, le=65535, description="Bind port")


class LoggingConfig(BaseSettings):
    """Logging settings (level and format)."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _substitute_env(value: Any, env: dict[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load server and logging config from YAML file and environment.

    A missing file is not an error: defaults plus environment are used.
    """
    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw, dict(os.environ))

    server = ServerConfig(**(raw.get("server") or {}))
    logging = LoggingConfig(**(raw.get("logging") or {}))
    return AppConfig(server=server, logging=logging)
