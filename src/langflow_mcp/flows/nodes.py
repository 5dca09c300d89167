"""Read and replace the data of the configured Langflow flow."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from ..backend.http_client import LangflowClient
from ..core.exceptions import BackendError, BackendResponseError
from ..core.logger import get_logger
from .schemas import NodeChain

logger = get_logger(__name__)

__all__ = ["NodeService"]


class NodeService:
    """Operations on a single flow of a Langflow instance."""

    def __init__(self, client: LangflowClient, flow_id: Optional[str]) -> None:
        self._client = client
        self.flow_id = flow_id or ""

    @property
    def path(self) -> str:
        return f"/api/v1/flows/{self.flow_id}"

    async def get_flow_data(self) -> Any:
        """Fetch the current flow document."""
        logger.debug("Request URL: %s", self._client.url(self.path))

        try:
            response = await self._client.request("GET", self.path)
            if not response:
                raise BackendResponseError("No response received from API")
        except BackendError as exc:
            logger.error(f"Error in get_flow_data: {self._client.url(self.path)}: {exc}")
            raise

        return response

    async def update_flow_data(self, nodes_data: NodeChain) -> Any:
        """Replace the flow document with ``nodes_data.payload``, forwarded untouched."""
        logger.debug("Request URL: %s", self._client.url(self.path))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Request payload: %s", json.dumps(nodes_data.payload, indent=2))

        try:
            response = await self._client.request("PATCH", self.path, json=nodes_data.payload)
            if not response:
                raise BackendResponseError("No response received from API")
        except BackendError as exc:
            logger.error(f"Error in updateNode: {self._client.url(self.path)}: {exc}")
            raise

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Raw API response: %s", json.dumps(response, indent=2, default=str))
        return response
