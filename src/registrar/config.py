"""Configuration loading for Registrar.

Settings come from the process environment. The database location is resolved
in order of precedence:

1. ``REGISTRAR_DATABASE_URL`` - any SQLAlchemy URL.
2. ``PGHOST`` and friends - a PostgreSQL URL is assembled from the standard
   libpq variables (``PGPORT``, ``PGUSER``, ``PGPASSWORD``, ``PGDATABASE``,
   ``PGSSLMODE``).
3. ``REGISTRAR_DB_PATH`` - a SQLite file, ``registrar.db`` by default.

Logging goes to ``REGISTRAR_LOG_DIR`` (``logs``) at ``REGISTRAR_LOG_LEVEL``
(``INFO``). Settings built directly rather than from the environment leave
logging alone.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from sqlalchemy.engine import URL, make_url

DEFAULT_DB_PATH = "registrar.db"
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_PORT = 5000
DEFAULT_PG_PORT = 5432
DEFAULT_PG_SSLMODE = "require"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(Exception):
    """Raised when configuration is invalid."""


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def _log_level_from_env(env: Mapping[str, str]) -> str:
    level = (env.get("REGISTRAR_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    if level not in logging.getLevelNamesMapping():
        raise ConfigError(f"REGISTRAR_LOG_LEVEL must be a logging level name, got {level!r}")
    return level


def _postgres_url(env: Mapping[str, str]) -> str:
    url = URL.create(
        "postgresql+psycopg2",
        username=env.get("PGUSER") or None,
        password=env.get("PGPASSWORD") or None,
        host=env["PGHOST"],
        port=_int_from_env(env, "PGPORT", DEFAULT_PG_PORT),
        database=env.get("PGDATABASE") or None,
        query={"sslmode": env.get("PGSSLMODE") or DEFAULT_PG_SSLMODE},
    )
    return url.render_as_string(hide_password=False)


@dataclass
class Settings:
    """Runtime settings for the service."""

    database_url: str = f"sqlite:///{DEFAULT_DB_PATH}"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_dir: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If a numeric variable or the log level cannot be
                parsed.
        """
        if env is None:
            env = os.environ

        if env.get("REGISTRAR_DATABASE_URL"):
            database_url = env["REGISTRAR_DATABASE_URL"]
        elif env.get("PGHOST"):
            database_url = _postgres_url(env)
        else:
            database_url = f"sqlite:///{env.get('REGISTRAR_DB_PATH') or DEFAULT_DB_PATH}"

        origins = env.get("REGISTRAR_CORS_ORIGINS", "*")
        cors_origins = [o.strip() for o in origins.split(",") if o.strip()] or ["*"]

        return cls(
            database_url=database_url,
            host=env.get("HOST") or DEFAULT_HOST,
            port=_int_from_env(env, "PORT", DEFAULT_PORT),
            cors_origins=cors_origins,
            log_dir=env.get("REGISTRAR_LOG_DIR") or DEFAULT_LOG_DIR,
            log_level=_log_level_from_env(env),
        )

    @property
    def safe_database_url(self) -> str:
        """Database URL with the password masked, for display and logs."""
        return make_url(self.database_url).render_as_string(hide_password=True)
