from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from results_receiver.api.auth import get_uploader_authenticator
from results_receiver.api.endpoints.results import get_checks_client, get_test_run_store
from results_receiver.api.main import app as fastapi_app
from results_receiver.core.test_run_store import TestRunStore
from results_receiver.core.uploader_auth import UploaderAuthenticator
from results_receiver.integrations.checks import ChecksClient
from results_receiver.tests.constants import INTERNAL_PASSWORD


@pytest.fixture
def authenticator():
    """Authenticator that only accepts INTERNAL_PASSWORD."""
    mock_authenticator = AsyncMock(spec=UploaderAuthenticator)
    mock_authenticator.authenticate.side_effect = lambda username, password: password == INTERNAL_PASSWORD
    return mock_authenticator


@pytest.fixture
def store():
    """Test run store that assigns id 42 to every created run."""
    mock_store = AsyncMock(spec=TestRunStore)
    mock_store.create.return_value = 42
    mock_store.get.return_value = None
    return mock_store


@pytest.fixture
def checks_client():
    mock_checks = AsyncMock(spec=ChecksClient)
    mock_checks.complete_check_run.return_value = True
    return mock_checks


@pytest.fixture
def app(authenticator, store, checks_client):
    """The application with its collaborators replaced by mocks."""
    fastapi_app.dependency_overrides[get_uploader_authenticator] = lambda: authenticator
    fastapi_app.dependency_overrides[get_test_run_store] = lambda: store
    fastapi_app.dependency_overrides[get_checks_client] = lambda: checks_client
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as http_client:
        yield http_client
