"""Process configuration assembled once from environment variables."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field
from sqlalchemy.engine import URL

from .errors import ConfigError

DEFAULT_DATABASE_URL = "sqlite:///data/framework_tracker.db"
DEFAULT_STACKEXCHANGE_URL = "https://api.stackexchange.com"
DEFAULT_GITHUB_API_URL = "https://api.github.com"


class CollectorConfig(BaseModel):
    """Settings shared by the fetchers, storage and the server."""

    stackexchange_key: str | None = Field(
        None, description="Stack Exchange API key (optional, raises the quota)"
    )
    stackexchange_url: str = Field(DEFAULT_STACKEXCHANGE_URL)
    github_token: str | None = Field(None, description="GitHub access token")
    github_api_url: str = Field(DEFAULT_GITHUB_API_URL)
    database_url: str = Field(DEFAULT_DATABASE_URL)
    http_timeout: float = Field(30.0, gt=0, description="Per-call timeout in seconds")
    server_host: str = Field("0.0.0.0")
    server_port: int = Field(3000)
    metrics_port: int = Field(9091)
    log_level: str = Field("INFO")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CollectorConfig":
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Raises:
            ConfigError: If a numeric setting cannot be parsed
        """
        env = os.environ if environ is None else environ

        try:
            return cls(
                stackexchange_key=env.get("STACKEXCHANGE_KEY") or None,
                stackexchange_url=env.get(
                    "STACKEXCHANGE_URL", DEFAULT_STACKEXCHANGE_URL
                ),
                github_token=env.get("GITHUB_TOKEN") or None,
                github_api_url=env.get("GITHUB_API_URL", DEFAULT_GITHUB_API_URL),
                database_url=_resolve_database_url(env),
                http_timeout=float(env.get("HTTP_TIMEOUT", "30")),
                server_host=env.get("SERVER_HOST", "0.0.0.0"),
                server_port=int(env.get("SERVER_PORT", "3000")),
                metrics_port=int(env.get("METRICS_PORT", "9091")),
                log_level=env.get("LOG_LEVEL", "INFO").upper(),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def validate_credentials(self) -> None:
        """Raise if credentials needed for a fetch cycle are missing."""
        missing = []
        if not self.github_token:
            missing.append("GITHUB_TOKEN")

        if missing:
            raise ConfigError(
                f"Environment variables required for fetching: {', '.join(missing)}"
            )


def _resolve_database_url(env: Mapping[str, str]) -> str:
    """Pick DATABASE_URL, else compose a PostgreSQL URL from DB_* variables."""
    if env.get("DATABASE_URL"):
        return env["DATABASE_URL"]

    host = env.get("DB_HOST")
    if not host:
        return DEFAULT_DATABASE_URL

    url = URL.create(
        "postgresql+psycopg",
        username=env.get("DB_USER"),
        password=env.get("DB_PASSWORD"),
        host=host,
        port=int(env.get("DB_PORT", "5432")),
        database=env.get("DB_NAME"),
        query={"sslmode": env.get("DB_SSLMODE", "prefer")},
    )
    return url.render_as_string(hide_password=False)
