"""Command-line interface for RoleBridge.

This module provides the CLI commands for running the REST server, the
stdio tool server and the database maintenance tasks.
"""

import asyncio
import sys
from typing import NoReturn

import click

from rolebridge import __version__
from rolebridge.core.config import get_settings
from rolebridge.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="RoleBridge")
def cli() -> None:
    """RoleBridge - role and user management behind a tool-call gateway.

    Settings are read from ROLEBRIDGE_* environment variables and .env.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the REST API server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting RoleBridge server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "rolebridge.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
def tools() -> None:
    """Serve the tool gateway as JSON-RPC over stdin/stdout.

    Logs are written to stderr so stdout carries protocol messages only.
    """
    from rolebridge.application.services import MediationGateway
    from rolebridge.infrastructure.persistence.database import (
        close_database,
        get_db_manager,
        init_database,
    )
    from rolebridge.infrastructure.tools import StdioToolServer

    settings = get_settings()
    configure_logging(settings, stream=sys.stderr)

    async def run() -> None:
        try:
            await init_database()
            gateway = MediationGateway(get_db_manager().session, settings=settings)
            await StdioToolServer(gateway).serve()
        finally:
            await close_database()

    asyncio.run(run())


@cli.command()
def seed() -> None:
    """Upsert the default roles and administrator account."""
    from rolebridge.application.services import MediationGateway
    from rolebridge.infrastructure.persistence.database import (
        close_database,
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings, stream=sys.stderr)

    async def run() -> bool:
        try:
            await init_database()
            gateway = MediationGateway(get_db_manager().session, settings=settings)
            response = await gateway.call_tool("seed_database", {})
        finally:
            await close_database()
        click.echo(response.text, err=response.is_error)
        return not response.is_error

    if not asyncio.run(run()):
        raise SystemExit(1)


@cli.command("init-db")
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Skip the confirmation prompt",
)
def init_db(force: bool) -> None:
    """Create the database tables.

    Use this only in development. In production, use migrations instead.
    """
    from rolebridge.infrastructure.persistence.database import (
        close_database,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await close_database()

    asyncio.run(initialize())


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `rolebridge` command is run
    or when using `python -m rolebridge`.
    """
    cli()


if __name__ == "__main__":
    main()
