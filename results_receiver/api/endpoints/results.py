"""
Test run result API endpoints.

This module implements the upload endpoint used by trusted result processors
to register a finished test run, and a read-back endpoint for stored runs.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from pydantic_core import PydanticSerializationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import ClientDisconnect

from results_receiver.api.auth import require_internal_uploader
from results_receiver.core.errors import InternalError, NotFound, TestRunStoreError
from results_receiver.core.run_ingestion import apply_default_timestamps, normalize_revision, parse_test_run
from results_receiver.core.test_run_store import TestRunStore
from results_receiver.integrations.checks import ChecksClient
from results_receiver.models.dtos import TestRunDTO
from results_receiver.utils.db_session import get_db_session

router = APIRouter()
logger = logging.getLogger(__name__)


# Dependency to get the test run store
async def get_test_run_store(session: AsyncSession = Depends(get_db_session)) -> TestRunStore:
    """Get test run store bound to the request session."""
    return TestRunStore(session)


# Dependency to get the checks client configured at startup
def get_checks_client(request: Request) -> Optional[ChecksClient]:
    """Get the application's checks client, or None if notifications are disabled."""
    return getattr(request.app.state, "checks_client", None)


@router.post("/results/create", status_code=201, response_class=Response)
async def create_test_run(
    request: Request,
    uploader: str = Depends(require_internal_uploader),
    store: TestRunStore = Depends(get_test_run_store),
    checks_client: Optional[ChecksClient] = Depends(get_checks_client),
) -> Response:
    """
    Register a finished test run.

    The body is a JSON test run. Timestamps are defaulted, the revision is
    validated against full_revision_hash and shortened, the run is stored, and
    the check-run reporting service is notified. The stored run, including its
    generated id, is echoed back.

    Raises:
        Unauthorized: If the caller is not the internal uploader
        BadRequest: If the body is malformed or the revision fields are invalid
        InternalError: If the body cannot be read or the run cannot be stored
    """
    try:
        body = await request.body()
    except ClientDisconnect as e:
        raise InternalError(f"Failed to read request body: {e}") from e

    test_run = parse_test_run(body)
    apply_default_timestamps(test_run)
    normalize_revision(test_run)

    try:
        test_run.id = await store.create(test_run)
    except TestRunStoreError as e:
        raise InternalError(e.message) from e

    if checks_client is not None:
        # Best effort; the outcome does not change the response.
        if not await checks_client.complete_check_run(test_run.full_revision_hash, test_run.browser_name):
            logger.warning(
                f"Check run for {test_run.browser_name}@{test_run.revision} was not completed"
            )

    try:
        content = test_run.model_dump_json()
    except PydanticSerializationError as e:
        raise InternalError(str(e)) from e

    logger.info(
        f"Created test run {test_run.id} for {test_run.browser_name}@{test_run.revision} (uploader: {uploader})"
    )
    return Response(content=content, status_code=201, media_type="application/json")


@router.get("/runs/{run_id}", response_model=TestRunDTO)
async def get_test_run(
    run_id: int,
    store: TestRunStore = Depends(get_test_run_store),
) -> TestRunDTO:
    """
    Retrieve a stored test run by id.

    Raises:
        NotFound: If no run has that id
        InternalError: If the database query fails
    """
    try:
        test_run = await store.get(run_id)
    except TestRunStoreError as e:
        raise InternalError(e.message) from e

    if test_run is None:
        raise NotFound(f"Test run {run_id} not found")
    return test_run
