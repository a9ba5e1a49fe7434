"""Unit tests for settings loading."""

import pytest
from sqlalchemy.engine import make_url

from registrar.config import ConfigError, Settings


@pytest.mark.unit
class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults_to_sqlite_file(self) -> None:
        settings = Settings.from_env({})

        assert settings.database_url == "sqlite:///registrar.db"
        assert settings.host == "0.0.0.0"
        assert settings.port == 5000
        assert settings.cors_origins == ["*"]

    def test_sqlite_path_override(self) -> None:
        settings = Settings.from_env({"REGISTRAR_DB_PATH": "data/students.db"})

        assert settings.database_url == "sqlite:///data/students.db"

    def test_explicit_url_wins(self) -> None:
        """REGISTRAR_DATABASE_URL takes precedence over PG* variables."""
        settings = Settings.from_env(
            {
                "REGISTRAR_DATABASE_URL": "sqlite:///other.db",
                "PGHOST": "db.example.com",
            }
        )

        assert settings.database_url == "sqlite:///other.db"

    def test_postgres_from_libpq_variables(self) -> None:
        settings = Settings.from_env(
            {
                "PGHOST": "db.example.com",
                "PGPORT": "6543",
                "PGUSER": "app",
                "PGPASSWORD": "p@ss:word",
                "PGDATABASE": "school",
            }
        )

        url = make_url(settings.database_url)
        assert url.drivername == "postgresql+psycopg2"
        assert url.host == "db.example.com"
        assert url.port == 6543
        assert url.username == "app"
        assert url.password == "p@ss:word"
        assert url.database == "school"
        assert url.query["sslmode"] == "require"

    def test_postgres_sslmode_and_default_port(self) -> None:
        settings = Settings.from_env({"PGHOST": "localhost", "PGSSLMODE": "disable"})

        url = make_url(settings.database_url)
        assert url.port == 5432
        assert url.query["sslmode"] == "disable"

    def test_server_binding(self) -> None:
        settings = Settings.from_env({"HOST": "127.0.0.1", "PORT": "8080"})

        assert settings.host == "127.0.0.1"
        assert settings.port == 8080

    def test_invalid_port_raises(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            Settings.from_env({"PORT": "eighty"})

        assert "PORT" in str(exc_info.value)

    def test_cors_origins_split(self) -> None:
        settings = Settings.from_env(
            {"REGISTRAR_CORS_ORIGINS": "https://a.example, https://b.example"}
        )

        assert settings.cors_origins == ["https://a.example", "https://b.example"]


@pytest.mark.unit
def test_safe_database_url_hides_password() -> None:
    settings = Settings(database_url="postgresql+psycopg2://app:secret@db/school")

    assert "secret" not in settings.safe_database_url
    assert "***" in settings.safe_database_url


@pytest.mark.unit
class TestLogSettings:
    """Tests for the logging fields of Settings."""

    def test_from_env_defaults(self) -> None:
        settings = Settings.from_env({})

        assert settings.log_dir == "logs"
        assert settings.log_level == "INFO"

    def test_from_env_overrides(self) -> None:
        settings = Settings.from_env(
            {"REGISTRAR_LOG_DIR": "/var/log/registrar", "REGISTRAR_LOG_LEVEL": "debug"}
        )

        assert settings.log_dir == "/var/log/registrar"
        assert settings.log_level == "DEBUG"

    def test_unknown_level_raises(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            Settings.from_env({"REGISTRAR_LOG_LEVEL": "chatty"})

        assert "REGISTRAR_LOG_LEVEL" in str(exc_info.value)

    def test_direct_settings_do_not_log_to_file(self) -> None:
        assert Settings().log_dir is None
