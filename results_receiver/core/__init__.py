"""
Core components for the Results Receiver service.
"""

from .errors import BadRequest, InternalError, NotFound, ResultsReceiverError, TestRunStoreError, Unauthorized
from .run_ingestion import apply_default_timestamps, normalize_revision, parse_test_run
from .test_run_store import TestRunStore
from .uploader_auth import UploaderAuthenticator, hash_password

__all__ = [
    "BadRequest",
    "InternalError",
    "NotFound",
    "ResultsReceiverError",
    "TestRunStoreError",
    "Unauthorized",
    "apply_default_timestamps",
    "normalize_revision",
    "parse_test_run",
    "TestRunStore",
    "UploaderAuthenticator",
    "hash_password",
]
