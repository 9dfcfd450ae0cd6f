"""
Check-run reporting client.

This module provides an async client that tells the check-run reporting
service a test run for a revision and browser has been received, so the
corresponding check run can be marked complete.
"""

import logging
from typing import Optional

import httpx

from results_receiver.models.dtos import CheckRunCompletion

logger = logging.getLogger(__name__)


class ChecksClient:
    """
    Async client for the check-run reporting service.

    Notifications are best effort: a single attempt is made and failures are
    reported as False, never raised.
    """

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str] = None,
        timeout: float = 10.0
    ):
        """
        Initialize the checks client.

        Args:
            api_url: Endpoint that accepts check-run completion notifications
            api_token: Optional bearer token for authentication
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_token = api_token
        self.timeout = timeout

        headers = {"Content-Type": "application/json"}
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"

        self.client = httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(timeout)
        )

        logger.info(f"Checks client initialized with API URL: {api_url[:50]}...")

    async def close(self) -> None:
        """
        Close the HTTP client.
        """
        await self.client.aclose()
        logger.info("Checks client closed")

    async def complete_check_run(self, full_revision_hash: str, browser_name: str) -> bool:
        """
        Notify the reporting service that a run for this revision and browser exists.

        Args:
            full_revision_hash: Full revision the run was executed against
            browser_name: Browser the run was executed against

        Returns:
            bool: True if the service accepted the notification, False otherwise
        """
        payload = CheckRunCompletion(
            full_revision_hash=full_revision_hash,
            browser_name=browser_name
        )

        try:
            response = await self.client.post(self.api_url, json=payload.model_dump())
        except httpx.TimeoutException:
            logger.error(f"Timeout completing check run for {browser_name}@{full_revision_hash}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"Error completing check run for {browser_name}@{full_revision_hash}: {str(e)}")
            return False

        if 200 <= response.status_code < 300:
            logger.info(f"Completed check run for {browser_name}@{full_revision_hash[:10]}")
            return True

        logger.error(f"Checks API error: {response.status_code} - {response.text}")
        return False
