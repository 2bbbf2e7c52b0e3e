#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for the Notes API. All functionality is accessible
through command-line options.

Usage:
    python run.py --help
    python run.py --action migrate
    python run.py --action server --verbose
    python run.py --action config
"""

import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from modules.backend.core.logging import get_logger, setup_logging  # noqa: E402


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "migrate", "config", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
) -> None:
    """
    Notes API Entry Point.

    Run the application server, apply database migrations,
    or view configuration.

    Examples:

        # Create or upgrade the notes table
        python run.py --action migrate

        # Start development server
        python run.py --action server --reload --verbose

        # View loaded configuration
        python run.py --action config
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "migrate":
        run_migrations(logger)
    elif action == "config":
        show_config(logger)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server under uvicorn."""
    from modules.backend.core.config import get_server_address

    configured_host, configured_port = get_server_address()
    server_host = host or configured_host
    server_port = port or configured_port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "modules.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def run_migrations(logger) -> None:
    """Upgrade the database to the latest Alembic revision."""
    cmd = [sys.executable, "-m", "alembic", "upgrade", "head"]
    logger.info("Running migrations")
    click.echo(f"Running: {' '.join(cmd)}\n")

    result = subprocess.run(cmd, cwd=PROJECT_ROOT)
    if result.returncode != 0:
        logger.error("Migrations failed", extra={"exit_code": result.returncode})
        sys.exit(result.returncode)

    click.echo(click.style("Database is up to date.", fg="green"))


def show_config(logger) -> None:
    """Display loaded configuration."""
    click.echo("Application Configuration:\n")

    try:
        from modules.backend.core.config import get_app_config, get_database_url
        from sqlalchemy.engine import make_url

        app_config = get_app_config()

        sections = {
            "Application Settings (from YAML)": app_config.application,
            "Database Settings (from YAML)": app_config.database,
            "Logging Settings (from YAML)": app_config.logging,
        }
        for title, section in sections.items():
            click.echo(title + ":")
            click.echo("-" * 40)
            for key, value in section.model_dump().items():
                click.echo(f"  {key}: {value}")
            click.echo()

        url = make_url(get_database_url()).render_as_string(hide_password=True)
        click.echo(f"Effective database URL: {url}")

        logger.info("Configuration displayed successfully")

    except Exception as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    from modules.backend.core.config import get_app_config

    app_settings = get_app_config().application

    click.echo(app_settings.name)
    click.echo("=" * 40)
    click.echo(f"Version: {app_settings.version}")
    click.echo(f"Description: {app_settings.description}")
    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the development server")
    click.echo("  --action migrate  Apply database migrations")
    click.echo("  --action config   Display configuration")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
