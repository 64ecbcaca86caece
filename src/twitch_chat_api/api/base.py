"""Base API client and shared request helpers."""

import asyncio
import json
import logging
from typing import Any

import aiohttp

from .errors import ApiResponseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0  # seconds


async def safe_json(resp: aiohttp.ClientResponse) -> dict | list | None:
    """Safely parse JSON from response, returning None on error.

    This handles common error cases:
    - HTML error pages (ContentTypeError)
    - Malformed JSON (JSONDecodeError)
    - Empty responses

    Args:
        resp: aiohttp response object

    Returns:
        Parsed JSON data or None if parsing failed
    """
    try:
        return await resp.json()
    except (aiohttp.ContentTypeError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to parse JSON response: {e}")
        return None


async def fetch_json(
    session: aiohttp.ClientSession,
    url: str,
    *,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    data: Any = None,
) -> Any:
    """Issue a request and return the decoded JSON body.

    Raises:
        ApiResponseError: Non-2xx status or a body that is not JSON.
        aiohttp.ClientError: Transport failure.
        asyncio.TimeoutError: The session timeout expired.
    """
    logger.debug(f"{method} {url}")
    async with session.request(method, url, headers=headers, data=data) as resp:
        if not 200 <= resp.status < 300:
            body = await resp.text()
            raise ApiResponseError(resp.status, url, body[:200])
        payload = await safe_json(resp)
        if payload is None:
            raise ApiResponseError(resp.status, url, "response body is not JSON")
        return payload


class BaseApiClient:
    """Owns the aiohttp session shared by a client's requests."""

    def __init__(self, session: aiohttp.ClientSession | None = None) -> None:
        self._session = session

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=DEFAULT_TIMEOUT)
            connector = aiohttp.TCPConnector(limit=50)
            self._session = aiohttp.ClientSession(timeout=timeout, connector=connector)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            try:
                await self._session.close()
                # Let the connector finish closing to avoid "Unclosed connector" warnings
                await asyncio.sleep(0.1)
            except RuntimeError as e:
                # Session may be attached to a different event loop
                if "attached to a different loop" in str(e):
                    logger.debug(f"Session attached to different loop, skipping close: {e}")
                else:
                    raise
            finally:
                self._session = None

    def reset_session(self) -> None:
        """Forget the HTTP session; it is recreated on next access.

        Call close() first if the session's event loop is still running.
        """
        self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
