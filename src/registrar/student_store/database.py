"""Database connection manager for Student Store."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from registrar.student_store.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine


def _normalize_url(url_or_path: str) -> str:
    """Accept either a SQLAlchemy URL or a bare SQLite path."""
    if url_or_path == ":memory:":
        return "sqlite:///:memory:"
    if "://" not in url_or_path:
        return f"sqlite:///{url_or_path}"
    return url_or_path


class Database:
    """Database connection manager.

    SQLite files run in WAL mode. In-memory SQLite shares one connection across
    threads. Any other backend (PostgreSQL in production) gets a pooled engine
    that pings connections before use.
    """

    def __init__(self, url: str = "sqlite:///registrar.db") -> None:
        """Initialize database connection.

        Args:
            url: SQLAlchemy database URL, or a SQLite file path. Use ":memory:"
                 for an in-memory DB.
        """
        self.url = make_url(_normalize_url(url))
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.get_backend_name() == "sqlite"

    @property
    def is_memory(self) -> bool:
        return self.is_sqlite and self.url.database in (None, "", ":memory:")

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            if self.is_memory:
                # Shared connection so TestClient threads see the same database
                self._engine = create_engine(
                    self.url,
                    echo=False,
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                )
            elif self.is_sqlite:
                Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)
                self._engine = create_engine(
                    self.url,
                    echo=False,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_engine(self.url, echo=False, pool_pre_ping=True)

            if self.is_sqlite:

                @event.listens_for(self._engine, "connect")
                def set_sqlite_pragma(dbapi_connection: object, _connection_record: object) -> None:
                    cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
                    cursor.execute("PRAGMA journal_mode=WAL")
                    cursor.close()

        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
            )
        return self._session_factory

    def create_tables(self) -> None:
        """Create all tables if they don't exist."""
        Base.metadata.create_all(self.engine)

    def drop_tables(self) -> None:
        """Drop all tables. Use with caution!"""
        Base.metadata.drop_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session.

        Returns:
            A new SQLAlchemy session.
        """
        return self.session_factory()

    def is_wal_mode(self) -> bool:
        """Check if WAL mode is enabled (SQLite only).

        Returns:
            True if WAL mode is enabled.
        """
        if not self.is_sqlite:
            return False
        with self.engine.connect() as conn:
            result = conn.execute(text("PRAGMA journal_mode"))
            mode = result.scalar()
            return mode == "wal"

    def close(self) -> None:
        """Close the database connection."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
