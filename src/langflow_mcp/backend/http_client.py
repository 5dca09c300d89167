"""Async HTTP client for the Langflow REST API."""

from __future__ import annotations

from types import TracebackType
from typing import Any, Dict, Optional, Type

import httpx

from ..core.exceptions import BackendResponseError, BackendUnreachableError
from ..core.logger import get_logger

logger = get_logger(__name__)

__all__ = ["LangflowClient"]


class LangflowClient:
    """Issues one request per call against a Langflow instance.

    The base URL is not validated: a missing or malformed URL surfaces as a
    ``BackendUnreachableError`` on the first request, not at construction.
    """

    def __init__(
        self,
        base_url: Optional[str],
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initializes the client.

        Args:
            base_url: Root URL of the Langflow instance, e.g. ``http://localhost:7860``.
            api_key: Optional credential sent as a bearer token.
            timeout: Optional request timeout in seconds. None waits indefinitely.
            transport: Optional httpx transport, mainly for tests.
        """
        self.base_url = (base_url or "").rstrip("/")
        self._api_key = api_key
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "LangflowClient":
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(self, method: str, path: str, json: Any = None) -> Any:
        """Sends a request and returns the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            json: Optional JSON body.

        Returns:
            The decoded response body, or the raw text if it is not JSON.

        Raises:
            BackendUnreachableError: If the request could not be sent.
            BackendResponseError: If the backend answered with a non-2xx status.
        """
        url = self.url(path)
        logger.debug("%s %s", method, url)

        try:
            resp = await self._client.request(method, url, headers=self.headers, json=json)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.error("Request error talking to Langflow at %s: %s", url, exc)
            raise BackendUnreachableError(f"Request error talking to Langflow at {url}: {exc}") from exc

        if resp.status_code >= 400:
            body = _decode(resp)
            logger.error("Langflow returned %s for %s %s", resp.status_code, method, url)
            raise BackendResponseError(
                f"Langflow returned {resp.status_code} for {method} {path}",
                status_code=resp.status_code,
                body=body,
            )

        if not resp.content:
            return None

        return _decode(resp)


def _decode(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text
