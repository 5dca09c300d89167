"""Flow record operations on top of a ``FlowTable``."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import ValidationError

from ..backend.store import FlowTable
from ..core.exceptions import (
    FlowCreateError,
    FlowDatabaseError,
    FlowDeleteError,
    FlowError,
    FlowNotFoundError,
    FlowUpdateError,
    InvalidFlowIdError,
)
from ..core.logger import get_logger
from .schemas import FLOWS_PAYLOAD, FlowInput, FlowRecord, FlowUpdate

logger = get_logger(__name__)

__all__ = ["FlowService"]


def _is_valid_id(flow_id: Any) -> bool:
    return isinstance(flow_id, int) and not isinstance(flow_id, bool) and flow_id > 0


class FlowService:
    """
    Service managing stored Langflow workflows.

    Every method performs a single table operation (update performs a read
    first) and raises a ``FlowError`` subclass on failure. Unexpected errors
    are wrapped into a ``FlowError`` with an operation-specific code.
    """

    def __init__(self, table: FlowTable) -> None:
        """Initialize the service.

        Args:
            table: The flow records table.
        """
        self._table = table

    async def get_flow(self, flow_id: int) -> FlowRecord:
        """
        Get a flow by ID.

        A stored payload that no longer matches the flow payload schema is
        logged, never rejected.

        Args:
            flow_id: Positive integer identifier.

        Returns:
            The stored flow.

        Raises:
            InvalidFlowIdError: If ``flow_id`` is not a positive integer.
            FlowNotFoundError: If no flow has this identifier.
            FlowDatabaseError: If the store reports an error.
        """
        try:
            if not _is_valid_id(flow_id):
                raise InvalidFlowIdError("Invalid flow ID")

            response = await self._table.select(eq={"id": flow_id})
            if response.error:
                raise FlowDatabaseError("Database error", "DB_ERROR", response.error)

            rows = response.data or []
            if not rows:
                raise FlowNotFoundError("Flow not found")

            flow = FlowRecord.model_validate(rows[0])

            try:
                FLOWS_PAYLOAD.validate_python(flow.flows)
            except ValidationError as validation_error:
                logger.warning(f"Retrieved flow {flow_id} has invalid schema: {validation_error}")

            return flow
        except FlowError:
            raise
        except Exception as exc:
            raise FlowError(f"Failed to get flow {flow_id}", "GET_FLOW_ERROR", exc) from exc

    async def add_flow(self, flow_data: FlowInput) -> FlowRecord:
        """
        Add a new flow.

        Args:
            flow_data: Name and payload of the new flow.

        Returns:
            The created flow, including its store-assigned identifier.

        Raises:
            FlowCreateError: If the insert fails or creates no row.
        """
        try:
            response = await self._table.insert({"flow_name": flow_data.flow_name, "flows": flow_data.flows})
            if response.error:
                raise FlowCreateError("Failed to create flow", "INSERT_ERROR", response.error)

            if not response.data:
                raise FlowCreateError("No flow created", "CREATE_ERROR")

            created = FlowRecord.model_validate(response.data[0])
            logger.info(f"Created flow {created.id} ('{created.flow_name}').")
            return created
        except FlowError:
            raise
        except Exception as exc:
            raise FlowError("Failed to add flow", "ADD_FLOW_ERROR", exc) from exc

    async def update_flow(self, flow_id: int, flow_data: FlowUpdate) -> Optional[FlowRecord]:
        """
        Update an existing flow.

        Args:
            flow_id: Identifier of the flow to update.
            flow_data: New name and payload.

        Returns:
            The updated flow, the unchanged flow if the store reports no
            updated rows, or None if no flow has this identifier.

        Raises:
            FlowUpdateError: If the store reports an error.
        """
        try:
            try:
                existing = await self.get_flow(flow_id)
            except FlowNotFoundError:
                logger.info(f"Flow {flow_id} not found, nothing to update.")
                return None

            response = await self._table.update(
                {"flow_name": flow_data.flow_name, "flows": flow_data.flows}, eq={"id": flow_id}
            )
            if response.error:
                raise FlowUpdateError("Failed to update flow", "UPDATE_ERROR", response.error)

            if not response.data:
                return existing

            return FlowRecord.model_validate(response.data[0])
        except FlowError:
            raise
        except Exception as exc:
            raise FlowError(f"Failed to update flow {flow_id}", "UPDATE_FLOW_ERROR", exc) from exc

    async def get_all_flows(self) -> List[FlowRecord]:
        """
        Get all flows, newest first.

        Returns:
            All stored flows; an empty list when there are none.

        Raises:
            FlowDatabaseError: If the store reports an error.
        """
        try:
            response = await self._table.select(order_by="created_at", descending=True)
            if response.error:
                raise FlowDatabaseError("Failed to fetch flows", "FETCH_ERROR", response.error)

            return [FlowRecord.model_validate(row) for row in response.data or []]
        except FlowError:
            raise
        except Exception as exc:
            raise FlowError("Failed to get all flows", "GET_ALL_ERROR", exc) from exc

    async def delete_flow(self, flow_id: int) -> bool:
        """
        Delete a flow.

        Args:
            flow_id: Positive integer identifier.

        Returns:
            True once the store accepted the delete.

        Raises:
            InvalidFlowIdError: If ``flow_id`` is not a positive integer. No
                store call is made in that case.
            FlowDeleteError: If the store reports an error.
        """
        try:
            if not _is_valid_id(flow_id):
                raise InvalidFlowIdError("Invalid flow ID")

            response = await self._table.delete(eq={"id": flow_id})
            if response.error:
                raise FlowDeleteError("Failed to delete flow", "DELETE_ERROR", response.error)

            logger.info(f"Deleted flow {flow_id}.")
            return True
        except FlowError:
            raise
        except Exception as exc:
            raise FlowError(f"Failed to delete flow {flow_id}", "DELETE_FLOW_ERROR", exc) from exc
