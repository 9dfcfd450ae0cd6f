"""
Ingestion rules for uploaded test runs.

These functions turn a raw request body into a normalized TestRunDTO, raising
BadRequest for anything the dashboard cannot store.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from results_receiver.core.errors import BadRequest
from results_receiver.models.dtos import TestRunDTO

FULL_REVISION_HASH_LENGTH = 40
SHORT_REVISION_LENGTH = 10


def parse_test_run(body: bytes) -> TestRunDTO:
    """
    Parse a JSON request body into a TestRunDTO.

    Unknown keys are ignored.

    Raises:
        BadRequest: If the body is not valid JSON or a field has the wrong type.
    """
    try:
        return TestRunDTO.model_validate_json(body)
    except ValidationError as e:
        raise BadRequest(f"Failed to parse JSON: {e}") from e


def _is_zero_time(value: Optional[datetime]) -> bool:
    # 0001-01-01T00:00:00Z is what some uploaders send for "not set".
    return value is None or value.replace(tzinfo=None) == datetime.min


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def apply_default_timestamps(run: TestRunDTO, now: Optional[datetime] = None) -> TestRunDTO:
    """
    Fill in missing run timestamps and stamp the ingestion time.

    time_start defaults to now, time_end defaults to time_start. created_at is
    always overwritten with now.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    if _is_zero_time(run.time_start):
        run.time_start = now
    else:
        run.time_start = _as_utc(run.time_start)

    if _is_zero_time(run.time_end):
        run.time_end = run.time_start
    else:
        run.time_end = _as_utc(run.time_end)

    run.created_at = now
    return run


def normalize_revision(run: TestRunDTO) -> TestRunDTO:
    """
    Validate the revision fields and replace revision with its short form.

    Raises:
        BadRequest: If full_revision_hash is not 40 characters long, or a
            supplied revision is not a prefix of it.
    """
    if len(run.full_revision_hash) != FULL_REVISION_HASH_LENGTH:
        raise BadRequest(f"full_revision_hash must be the full SHA ({FULL_REVISION_HASH_LENGTH} chars)")

    if run.revision and not run.full_revision_hash.startswith(run.revision):
        raise BadRequest(
            f"Mismatch of full_revision_hash and revision fields: "
            f"{run.full_revision_hash} vs {run.revision}"
        )

    run.revision = run.full_revision_hash[:SHORT_REVISION_LENGTH]
    return run
