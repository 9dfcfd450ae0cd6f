"""
Uploader authentication store.

Uploaders are stored with a SHA-256 digest of their password; passwords are
compared in constant time and never logged.
"""

import hashlib
import hmac
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from results_receiver.models.uploader_orm import UploaderORM

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Return the hex encoded SHA-256 digest of a password."""
    return hashlib.sha256((password or "").encode("utf-8")).hexdigest()


class UploaderAuthenticator:
    """
    Validates and provisions uploader credentials.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def authenticate(self, username: str, password: str) -> bool:
        """
        Check a username/password pair against the stored uploader.

        Returns:
            bool: True only if the uploader exists and the password matches.
        """
        if not username or not password:
            return False

        try:
            uploader = await self._session.get(UploaderORM, username)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to look up uploader '{username}': {e}")
            return False

        if uploader is None:
            logger.debug(f"Unknown uploader '{username}'")
            return False

        return hmac.compare_digest(hash_password(password), uploader.password_hash)

    async def set_uploader_password(self, username: str, password: str) -> None:
        """
        Create the uploader, or replace its password if it already exists.
        """
        if not username or not password:
            raise ValueError("username and password must not be empty")

        uploader = await self._session.get(UploaderORM, username)
        if uploader is None:
            self._session.add(UploaderORM(username=username, password_hash=hash_password(password)))
            logger.info(f"Created uploader '{username}'")
        else:
            uploader.password_hash = hash_password(password)
            logger.info(f"Updated password of uploader '{username}'")
        await self._session.commit()
