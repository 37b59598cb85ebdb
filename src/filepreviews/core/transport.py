"""HTTP transport for the FilePreviews API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from filepreviews.core.exceptions import TransportError
from filepreviews.utils.logging import DebugLogger, mask_signed_url

if TYPE_CHECKING:
    from filepreviews.types.common import Credentials

logger = logging.getLogger(__name__)


class HttpTransport:
    """Performs single HTTP calls on behalf of the client.

    Wraps an ``httpx.AsyncClient`` that is created lazily and reused for
    every request. Authentication is attached per request, never on the
    underlying client, so signed storage URLs can be fetched without it.

    Example:
        transport = HttpTransport(timeout=30)
        response = await transport.send("GET", url, auth=credentials)
        await transport.close()
    """

    def __init__(
        self,
        timeout: float = 30,
        user_agent: str = "filepreviews-python",
        client: httpx.AsyncClient | None = None,
        debug: bool = False,
    ) -> None:
        self._timeout = timeout
        self._user_agent = user_agent
        self._client = client
        self._log = DebugLogger(logger, debug)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "User-Agent": self._user_agent,
                    "Accept": "application/json",
                },
                timeout=self._timeout,
            )
        return self._client

    async def send(
        self,
        method: str,
        url: str,
        *,
        auth: Credentials | None = None,
        json: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Issue one HTTP request.

        Args:
            method: HTTP method ("GET" or "POST")
            url: Absolute request URL
            auth: API credentials sent as basic auth, or None
            json: JSON-serializable request body
            headers: Extra request headers

        Returns:
            The response, whatever its status code

        Raises:
            TransportError: If no response was received
        """
        client = await self._get_client()
        basic_auth = httpx.BasicAuth(auth.api_key, auth.api_secret) if auth else None

        self._log.debug("%s %s", method, mask_signed_url(url))
        try:
            response = await client.request(
                method,
                url,
                auth=basic_auth,
                json=json,
                headers=headers,
            )
        except httpx.RequestError as e:
            self._log.debug("%s %s failed: %s", method, mask_signed_url(url), e)
            raise TransportError(mask_signed_url(url), str(e)) from e

        self._log.debug("%s %s -> %s", method, mask_signed_url(url), response.status_code)
        return response

    async def close(self) -> None:
        """Close the underlying httpx client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
