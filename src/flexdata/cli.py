"""Command-line interface for FlexData.

This module provides the CLI commands for running and managing the
FlexData server.
"""

import asyncio
from typing import NoReturn

import click

from flexdata.core.config import get_settings
from flexdata.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="FlexData")
def cli() -> None:
    """FlexData - headless CMS with drag-and-drop ordered collections.

    Settings are read from FLEXDATA_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
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
    """Start the FlexData server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        click.echo(
            "Error: SQLite does not support multiple worker processes. "
            "Use --workers 1 or switch to PostgreSQL.",
            err=True,
        )
        raise SystemExit(1)

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting FlexData server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "flexdata.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create the database tables if they do not exist yet."""
    from flexdata.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

    configure_logging(get_settings())

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command("delete-collection")
@click.argument("collection_id")
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt")
def delete_collection(collection_id: str, yes: bool) -> None:
    """Delete a collection with all of its fields and rows."""
    from flexdata.domain.services.collection_service import CollectionService
    from flexdata.infrastructure.persistence.database import get_db_manager

    configure_logging(get_settings())

    if not yes:
        click.confirm(
            f"Delete collection {collection_id} and all of its fields and rows?",
            abort=True,
            default=False,
        )

    async def run() -> bool:
        db = get_db_manager()
        try:
            async with db.session() as session:
                deleted = await CollectionService(session).delete_collection(
                    collection_id, confirm=True
                )
                await session.commit()
                return deleted
        finally:
            await db.disconnect()

    if not asyncio.run(run()):
        click.echo(f"ERROR: Collection '{collection_id}' not found.", err=True)
        raise SystemExit(1)
    click.echo(f"Collection '{collection_id}' deleted.")


@cli.command()
def info() -> None:
    """Display FlexData configuration."""
    settings = get_settings()

    click.echo(f"""
FlexData v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  Read API:     {settings.api_prefix}
  Admin API:    {settings.admin_prefix}
  External URL: {settings.external_url}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}

Storage:
  Path:         {settings.storage_path}
  Max Size:     {settings.max_file_size // (1024 * 1024)}MB

Ordering:
  Key Step:     {settings.order_key_step}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `flexdata` command and by `python -m flexdata`.
    """
    cli()


if __name__ == "__main__":
    main()
