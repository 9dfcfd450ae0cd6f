"""
HTTP Basic authentication for the upload endpoints.

Only the internal uploader may submit test runs. Every failure, whether the
header is missing, malformed, names another user or carries a wrong
password, is reported with the same 401 message.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from fastapi import Depends, Request

from results_receiver.config.settings import settings
from results_receiver.core.errors import Unauthorized
from results_receiver.core.uploader_auth import UploaderAuthenticator
from results_receiver.utils.db_session import get_db_session

AUTHENTICATION_ERROR = "Authentication error"


@dataclass(frozen=True)
class BasicCredentials:
    """Username and password decoded from an Authorization header."""

    username: str
    password: str


def basic_auth_credentials(req: Request) -> BasicCredentials | None:
    """
    Decode HTTP Basic credentials from a request.

    Args:
        req: Incoming request

    Returns:
        BasicCredentials | None: The decoded pair, or None if the header is
            missing, not Basic, not valid base64 or has no colon separator
    """
    raw = req.headers.get("authorization") or ""
    parts = raw.split(None, 1)
    if len(parts) != 2 or parts[0].strip().lower() != "basic":
        return None
    try:
        decoded = base64.b64decode(parts[1].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return BasicCredentials(username=username, password=password)


async def get_uploader_authenticator(session=Depends(get_db_session)) -> UploaderAuthenticator:
    """Dependency provider for the uploader credential store."""
    return UploaderAuthenticator(session)


async def require_internal_uploader(
    req: Request,
    authenticator: UploaderAuthenticator = Depends(get_uploader_authenticator),
) -> str:
    """
    Require the request to be sent by the internal uploader.

    Args:
        req: Incoming request
        authenticator: Credential store used to check the password

    Returns:
        str: The authenticated uploader name

    Raises:
        Unauthorized: If the credentials are missing, malformed or wrong
    """
    creds = basic_auth_credentials(req)
    # Every failure looks the same to the caller.
    if creds is None or creds.username != settings.INTERNAL_USERNAME:
        raise Unauthorized(AUTHENTICATION_ERROR)
    if not await authenticator.authenticate(creds.username, creds.password):
        raise Unauthorized(AUTHENTICATION_ERROR)
    return creds.username
