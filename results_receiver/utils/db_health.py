"""Database health check utilities for startup scripts."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from results_receiver.utils.db_session import get_async_engine


async def check_db_connection() -> bool:
    """
    Test database connection for startup health checks.

    Returns:
        bool: True if connection successful, False otherwise.
    """
    try:
        engine = get_async_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError):
        return False
