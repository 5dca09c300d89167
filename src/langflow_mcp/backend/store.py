"""Table access for flow records stored in Supabase.

Supabase exposes tables through PostgREST, so the table is reached with plain
HTTP. Every operation reports failures through ``StoreResponse.error`` rather
than raising; callers must check ``error`` before trusting ``data``.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, Dict, Mapping, Optional, Protocol, Type

import httpx
from pydantic import BaseModel

from ..core.logger import get_logger

logger = get_logger(__name__)

__all__ = ["StoreResponse", "FlowTable", "SupabaseFlowTable"]


class StoreResponse(BaseModel):
    """Result of a single table operation.

    Attributes:
        data: Rows returned by the store, if any.
        error: Provider error payload, None on success.
    """

    data: Optional[Any] = None
    error: Optional[Any] = None


class FlowTable(Protocol):
    """Table-level operations on the flow records table."""

    async def select(
        self, *, eq: Optional[Mapping[str, Any]] = None, order_by: Optional[str] = None, descending: bool = False
    ) -> StoreResponse:
        """Selects all columns of the rows matching every ``eq`` filter."""
        ...

    async def insert(self, row: Mapping[str, Any]) -> StoreResponse:
        """Inserts a row and returns the stored representation."""
        ...

    async def update(self, row: Mapping[str, Any], *, eq: Mapping[str, Any]) -> StoreResponse:
        """Updates matching rows and returns their new representation."""
        ...

    async def delete(self, *, eq: Mapping[str, Any]) -> StoreResponse:
        """Deletes matching rows."""
        ...


class SupabaseFlowTable:
    """``FlowTable`` backed by a Supabase project's REST endpoint."""

    def __init__(
        self,
        url: Optional[str],
        key: Optional[str],
        table: str = "agent_flows",
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initializes the table client.

        Args:
            url: Supabase project URL, e.g. ``https://xyz.supabase.co``.
            key: Supabase API key (anon or service role).
            table: Table name.
            timeout: Optional request timeout in seconds.
            transport: Optional httpx transport, mainly for tests.
        """
        self.table = table
        self._endpoint = f"{(url or '').rstrip('/')}/rest/v1/{table}"
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if key:
            headers["apikey"] = key
            headers["Authorization"] = f"Bearer {key}"
        self._client = httpx.AsyncClient(headers=headers, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "SupabaseFlowTable":
        return self

    async def __aexit__(
        self, exc_type: Optional[Type[BaseException]], exc_val: Optional[BaseException], exc_tb: Optional[TracebackType]
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def select(
        self, *, eq: Optional[Mapping[str, Any]] = None, order_by: Optional[str] = None, descending: bool = False
    ) -> StoreResponse:
        params = {"select": "*", **_filters(eq)}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        return await self._execute("GET", params=params)

    async def insert(self, row: Mapping[str, Any]) -> StoreResponse:
        return await self._execute("POST", params={"select": "*"}, json=dict(row), returning=True)

    async def update(self, row: Mapping[str, Any], *, eq: Mapping[str, Any]) -> StoreResponse:
        params = {"select": "*", **_filters(eq)}
        return await self._execute("PATCH", params=params, json=dict(row), returning=True)

    async def delete(self, *, eq: Mapping[str, Any]) -> StoreResponse:
        return await self._execute("DELETE", params=_filters(eq))

    async def _execute(
        self,
        method: str,
        params: Dict[str, str],
        json: Optional[Dict[str, Any]] = None,
        returning: bool = False,
    ) -> StoreResponse:
        headers = {"Prefer": "return=representation"} if returning else {}
        logger.debug("%s %s params=%s", method, self._endpoint, params)

        try:
            resp = await self._client.request(method, self._endpoint, params=params, json=json, headers=headers)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.error("Request error talking to Supabase table '%s': %s", self.table, exc)
            return StoreResponse(error={"message": f"Request error talking to Supabase: {exc}"})

        body = _decode(resp)
        if resp.status_code >= 400:
            logger.error("Supabase returned %s for %s on '%s'", resp.status_code, method, self.table)
            if not isinstance(body, dict):
                body = {"message": str(body)}
            return StoreResponse(error={**body, "status": resp.status_code})

        return StoreResponse(data=body)


def _filters(eq: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    return {column: f"eq.{value}" for column, value in (eq or {}).items()}


def _decode(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text
