"""
Unit tests for the check-run reporting client.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from httpx import Response

from results_receiver.integrations.checks import ChecksClient
from results_receiver.tests.constants import FULL_SHA

CHECKS_URL = "https://checks.example.test/api/checks/complete"


async def client_with_response(status_code: int) -> ChecksClient:
    mock_response = MagicMock(spec=Response)
    mock_response.status_code = status_code
    mock_response.text = "body"

    mock_http_client = AsyncMock()
    mock_http_client.post.return_value = mock_response

    client = ChecksClient(api_url=CHECKS_URL)
    await client.client.aclose()
    client.client = mock_http_client
    return client


class TestChecksClient:
    """Test cases for ChecksClient."""

    @pytest.mark.asyncio
    async def test_client_initialization(self):
        client = ChecksClient(api_url=CHECKS_URL, api_token="token-123", timeout=5.0)

        assert client.api_url == CHECKS_URL
        assert client.timeout == 5.0
        assert client.client.headers["Authorization"] == "Bearer token-123"

        await client.close()
        assert client.client.is_closed

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self):
        client = ChecksClient(api_url=CHECKS_URL)
        assert "Authorization" not in client.client.headers
        await client.close()

    @pytest.mark.asyncio
    async def test_complete_check_run_success(self):
        client = await client_with_response(201)

        result = await client.complete_check_run(FULL_SHA, "chrome")

        assert result is True
        client.client.post.assert_awaited_once_with(
            CHECKS_URL,
            json={"full_revision_hash": FULL_SHA, "browser_name": "chrome"},
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 404, 500, 503])
    async def test_complete_check_run_error_status(self, status_code):
        client = await client_with_response(status_code)
        assert await client.complete_check_run(FULL_SHA, "chrome") is False
        client.client.post.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_complete_check_run_timeout(self):
        client = await client_with_response(200)
        client.client.post.side_effect = httpx.ReadTimeout("timed out")

        assert await client.complete_check_run(FULL_SHA, "chrome") is False
        # Single attempt only
        client.client.post.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_complete_check_run_transport_error(self):
        client = await client_with_response(200)
        client.client.post.side_effect = httpx.ConnectError("connection refused")

        assert await client.complete_check_run(FULL_SHA, "chrome") is False
