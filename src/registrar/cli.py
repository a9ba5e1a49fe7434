"""Registrar command line interface."""

from __future__ import annotations

import os

import click
import uvicorn

from registrar import __version__
from registrar.config import ConfigError, Settings
from registrar.student_store import StudentStore


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(__version__, prog_name="registrar")
def main() -> None:
    """Registrar - student record service."""
    pass


@main.command()
@click.option("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Bind port (default: $PORT or 5000)")
@click.option("--reload/--no-reload", default=False, help="Restart on code changes")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def serve(host: str | None, port: int | None, reload: bool, verbose: bool) -> None:
    """Run the HTTP API."""
    settings = _load_settings()
    if verbose:
        # Read again by create_app in the server (and reload worker) process
        os.environ["REGISTRAR_LOG_LEVEL"] = "DEBUG"

    click.echo(f"Database: {settings.safe_database_url}")
    uvicorn.run(
        "registrar.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command("init-db")
def init_db() -> None:
    """Create the students table if it does not exist."""
    settings = _load_settings()
    store = StudentStore(settings.database_url)
    try:
        click.echo(f"Students table ready at {settings.safe_database_url}")
    finally:
        store.close()


if __name__ == "__main__":
    main()
