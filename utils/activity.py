"""
Activity service client with lazy connection management.

Fetches a single, user-independent "activity" value from the remote
activity endpoint. One best-effort attempt per call: no retries, no caching.
"""

import logging
from typing import Any, Optional

import httpx
import orjson

from utils.config import settings
from utils.errors import ActivityNetworkError, MalformedActivityResponse

logger = logging.getLogger(__name__)


class ActivityClient:
    """HTTP client for the remote activity service."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize activity client.

        Args:
            url: Activity endpoint, defaults to settings.ACTIVITY_API_URL
            timeout: Request timeout in seconds; None waits indefinitely
            client: Pre-built httpx client, used as-is
            transport: Transport for the lazily built client (mock transports in tests)
        """
        self.url = url or settings.ACTIVITY_API_URL
        self.timeout = timeout
        self.transport = transport
        self.client = client

    async def connect(self) -> None:
        """Create the underlying httpx client if none was provided."""
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                transport=self.transport,
            )

    async def fetch_activity(self) -> Any:
        """Fetch the current activity value.

        Returns:
            The response's ``activity`` field, whatever its JSON type

        Raises:
            ActivityNetworkError: On connection failure, timeout or non-2xx status
            MalformedActivityResponse: If the body is not a JSON object with ``activity``
        """
        if self.client is None:
            await self.connect()

        try:
            response = await self.client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ActivityNetworkError(
                f"Activity service returned {e.response.status_code}",
                self.url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ActivityNetworkError(
                f"Activity request failed: {e.__class__.__name__}: {e}", self.url
            ) from e

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise MalformedActivityResponse(
                f"Activity response is not JSON: {e}", self.url
            ) from e

        if not isinstance(body, dict) or "activity" not in body:
            raise MalformedActivityResponse(
                "Activity response lacks the 'activity' field", self.url
            )

        logger.debug("Activity fetched: url=%s, status=%d", self.url, response.status_code)
        return body["activity"]

    async def close(self) -> None:
        """Close the httpx client and cleanup resources."""
        if self.client:
            await self.client.aclose()
            self.client = None
