"""
Async HTTP Client for fwcatalog

This module fetches catalog pages with aiohttp. Requests are plain GETs with
aiohttp's default timeout and redirect handling, no custom headers and no
retries.
"""

import asyncio
from typing import Any, Optional

import aiohttp
from aiohttp import ClientSession

from fwcatalog.constants import DEFAULT_REQUEST_DELAY
from fwcatalog.exceptions import FetchError
from fwcatalog.log_utils import logger


class AsyncCatalogClient:
    """
    Asynchronous page fetcher backed by a single aiohttp session.

    Example:
        async with AsyncCatalogClient() as client:
            html = await client.fetch("https://desktop.firmware.mobi/device:1")
    """

    def __init__(self, request_delay: float = DEFAULT_REQUEST_DELAY) -> None:
        """
        Initialize the client.

        Parameters:
            request_delay (float): Seconds to wait before each request; 0 disables the delay.
        """
        try:
            delay = float(request_delay)
        except (TypeError, ValueError):
            logger.warning(
                "Invalid request_delay value %r; using default of %s",
                request_delay,
                DEFAULT_REQUEST_DELAY,
            )
            delay = DEFAULT_REQUEST_DELAY
        self.request_delay = max(delay, 0.0)
        self._session: Optional[ClientSession] = None
        self._closed: bool = False

    async def __aenter__(self) -> "AsyncCatalogClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _ensure_session(self) -> ClientSession:
        """
        Ensure a session exists, creating one if needed.

        Returns:
            ClientSession: The active aiohttp session.
        """
        if self._session is None or self._session.closed:
            self._session = ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the client session and release resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        self._closed = True

    async def fetch(self, url: str) -> str:
        """
        Fetch a page and return its body text.

        Parameters:
            url (str): Page URL.

        Returns:
            str: Response body decoded as text (undecodable bytes replaced).

        Raises:
            FetchError: On a non-2xx status (message is the reason phrase) or a transport failure.
        """
        session = await self._ensure_session()

        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)

        logger.debug(f"GET {url}")
        try:
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(
                        response.reason or f"HTTP {response.status}",
                        url=url,
                        status_code=response.status,
                    )
                return await response.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(
                f"Request failed: {str(e) or type(e).__name__}", url=url
            ) from e
