"""Command-line interface for the Results Receiver service."""

import asyncio
import logging
import sys
from typing import Optional

import typer
import uvicorn
from sqlalchemy.exc import SQLAlchemyError
from typing_extensions import Annotated

from results_receiver.config.settings import settings
from results_receiver.core.uploader_auth import UploaderAuthenticator
from results_receiver.models import Base
from results_receiver.utils.db_session import get_async_engine, get_async_session_factory

app = typer.Typer(help="Results Receiver management commands")
logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    """Set up basic logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()]
    )


async def _create_schema() -> None:
    engine = get_async_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def _set_password(username: str, password: str) -> None:
    factory = get_async_session_factory()
    try:
        async with factory() as session:
            await UploaderAuthenticator(session).set_uploader_password(username, password)
    finally:
        await get_async_engine().dispose()


@app.command("init-db")
def init_db(
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")] = "INFO",
) -> None:
    """Create the tables used by the service if they do not exist.

    Production deployments should prefer the Alembic migrations.
    """
    setup_logging(loglevel)
    try:
        asyncio.run(_create_schema())
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Failed to create schema: {e}")
        sys.exit(1)
    logger.info("✓ Database schema is properly configured")


@app.command("set-password")
def set_password(
    password: Annotated[str, typer.Option("--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True, help="New password")],
    username: Annotated[Optional[str], typer.Option("--username", "-u", help="Uploader name (defaults to the internal uploader)")] = None,
    loglevel: Annotated[str, typer.Option("--loglevel", "-l", help="Logging level")] = "INFO",
) -> None:
    """Create an uploader or replace its password."""
    setup_logging(loglevel)
    username = username or settings.INTERNAL_USERNAME
    try:
        asyncio.run(_set_password(username, password))
    except ValueError as e:
        logger.error(str(e))
        sys.exit(2)
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Failed to store password for '{username}': {e}")
        sys.exit(1)
    logger.info(f"✓ Password stored for uploader '{username}'")


@app.command("serve")
def serve(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Bind port")] = None,
) -> None:
    """Run the API server."""
    uvicorn.run(
        "results_receiver.api.main:app",
        host=host or settings.API_HOST,
        port=port or settings.API_PORT,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    app()
