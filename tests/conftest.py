from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

import pytest

from langflow_mcp.backend import StoreResponse
from langflow_mcp.core.tools import ToolDispatcher, ToolRegistry
from langflow_mcp.flows import FlowService, build_registry


class InMemoryFlowTable:
    """FlowTable fake keeping rows in a list and recording every call."""

    def __init__(self) -> None:
        self.rows: List[Dict[str, Any]] = []
        self.calls: List[str] = []
        self.errors: Dict[str, Dict[str, Any]] = {}
        self.update_returns_rows = True
        self._next_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def seed(self, flow_name: str, flows: Any = "{}") -> Dict[str, Any]:
        row = {
            "id": self._next_id,
            "flow_name": flow_name,
            "flows": flows,
            "created_at": (self._clock + timedelta(minutes=self._next_id)).isoformat(),
        }
        self._next_id += 1
        self.rows.append(row)
        return dict(row)

    def _matches(self, row: Mapping[str, Any], eq: Optional[Mapping[str, Any]]) -> bool:
        return all(row.get(column) == value for column, value in (eq or {}).items())

    async def select(
        self, *, eq: Optional[Mapping[str, Any]] = None, order_by: Optional[str] = None, descending: bool = False
    ) -> StoreResponse:
        self.calls.append("select")
        if "select" in self.errors:
            return StoreResponse(error=self.errors["select"])
        rows = [dict(row) for row in self.rows if self._matches(row, eq)]
        if order_by:
            rows.sort(key=lambda row: row[order_by], reverse=descending)
        return StoreResponse(data=rows)

    async def insert(self, row: Mapping[str, Any]) -> StoreResponse:
        self.calls.append("insert")
        if "insert" in self.errors:
            return StoreResponse(error=self.errors["insert"])
        created = self.seed(row["flow_name"], row["flows"])
        return StoreResponse(data=[created])

    async def update(self, row: Mapping[str, Any], *, eq: Mapping[str, Any]) -> StoreResponse:
        self.calls.append("update")
        if "update" in self.errors:
            return StoreResponse(error=self.errors["update"])
        updated = []
        for stored in self.rows:
            if self._matches(stored, eq):
                stored.update(row)
                updated.append(dict(stored))
        return StoreResponse(data=updated if self.update_returns_rows else [])

    async def delete(self, *, eq: Mapping[str, Any]) -> StoreResponse:
        self.calls.append("delete")
        if "delete" in self.errors:
            return StoreResponse(error=self.errors["delete"])
        self.rows = [row for row in self.rows if not self._matches(row, eq)]
        return StoreResponse(data=None)


@pytest.fixture
def flow_table() -> InMemoryFlowTable:
    return InMemoryFlowTable()


@pytest.fixture
def flow_service(flow_table: InMemoryFlowTable) -> FlowService:
    return FlowService(flow_table)


@pytest.fixture
def flow_registry(flow_service: FlowService) -> ToolRegistry:
    return build_registry("flows", flow_service=flow_service)


@pytest.fixture
def flow_dispatcher(flow_registry: ToolRegistry) -> ToolDispatcher:
    return ToolDispatcher(flow_registry)
