"""Results Receiver exception hierarchy.

Every error that ends a request carries the HTTP status it maps to. The
application renders them as plain-text responses.
"""

from __future__ import annotations


class ResultsReceiverError(Exception):
    """Base exception for all request-terminating failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Unauthorized(ResultsReceiverError):
    """Raised when the uploader credentials are missing or invalid."""

    status_code = 401


class BadRequest(ResultsReceiverError):
    """Raised for malformed or inconsistent submissions."""

    status_code = 400


class InternalError(ResultsReceiverError):
    """Raised when the server cannot complete an otherwise valid request."""

    status_code = 500


class TestRunStoreError(ResultsReceiverError):
    """Raised by the test run store when the database rejects an operation."""

    __test__ = False  # not a pytest test class


class NotFound(ResultsReceiverError):
    """Raised when a requested test run does not exist."""

    status_code = 404
