"""Tool registrations for each deployment variant.

``flows`` exposes the stored flow records, ``nodes`` the flow document of
the configured Langflow flow, ``all`` both.
"""

from __future__ import annotations

from typing import Any, List, Optional

from ..core.logger import get_logger
from ..core.tools import ToolRegistry
from .nodes import NodeService
from .schemas import EmptyArguments, FlowInput, FlowLookup, FlowRecord, FlowUpdate, NodeChain
from .service import FlowService

logger = get_logger(__name__)

FLOW_TOOLS = ("add_flow", "update_flow", "get_flow", "get_all_flows", "delete_flow")
NODE_TOOLS = ("get_flow_data", "updateNode")
VARIANTS = {
    "flows": FLOW_TOOLS,
    "nodes": NODE_TOOLS,
    "all": FLOW_TOOLS + NODE_TOOLS,
}


def register_flow_tools(registry: ToolRegistry, service: FlowService) -> None:
    """Registers the flow record tools backed by ``service``."""

    async def add_flow(args: FlowInput) -> FlowRecord:
        return await service.add_flow(args)

    async def update_flow(args: FlowUpdate) -> Optional[FlowRecord]:
        return await service.update_flow(args.id, args)

    async def get_flow(args: FlowLookup) -> FlowRecord:
        return await service.get_flow(args.id)

    async def get_all_flows(args: EmptyArguments) -> List[FlowRecord]:
        return await service.get_all_flows()

    async def delete_flow(args: FlowLookup) -> bool:
        return await service.delete_flow(args.id)

    registry.register(
        "add_flow",
        "Adds a new flow to the stored Langflow workflows",
        add_flow,
        FlowInput,
        success_label="Flow added:",
        error_label="Error adding flow:",
    )
    registry.register(
        "update_flow",
        "Updates the name and data of a stored Langflow workflow",
        update_flow,
        FlowUpdate,
        success_label="Flow updated:",
        error_label="Error updating flow:",
    )
    registry.register(
        "get_flow",
        "Gets a stored Langflow workflow by ID",
        get_flow,
        FlowLookup,
        success_label="Flow data:",
        error_label="Error getting flow:",
    )
    registry.register(
        "get_all_flows",
        "Gets all the stored workflows, newest first",
        get_all_flows,
        EmptyArguments,
        success_label="Flows data:",
        error_label="Error getting flows:",
    )
    registry.register(
        "delete_flow",
        "Deletes a stored Langflow workflow by ID",
        delete_flow,
        FlowLookup,
        success_label="Deleted flow:",
        error_label="Error deleting flow:",
    )


def register_node_tools(registry: ToolRegistry, service: NodeService) -> None:
    """Registers the tools operating on the configured Langflow flow."""

    async def get_flow_data(args: EmptyArguments) -> Any:
        return await service.get_flow_data()

    async def update_node(args: NodeChain) -> Any:
        return await service.update_flow_data(args)

    registry.register(
        "get_flow_data",
        "Gets the current Langflow workflow data",
        get_flow_data,
        EmptyArguments,
        success_label="Flow data:",
        error_label="Error fetching flow data:",
    )
    registry.register(
        "updateNode",
        "Replaces the Langflow workflow data with the given flow JSON",
        update_node,
        NodeChain,
        success_label="Node updated:",
        error_label="Error updating node:",
        propagate_validation_errors=True,
    )


def build_registry(
    variant: str,
    flow_service: Optional[FlowService] = None,
    node_service: Optional[NodeService] = None,
) -> ToolRegistry:
    """Builds the registry for a deployment variant.

    Args:
        variant: One of ``flows``, ``nodes`` or ``all``.
        flow_service: Required for ``flows`` and ``all``.
        node_service: Required for ``nodes`` and ``all``.

    Raises:
        ValueError: For an unknown variant or a missing service.
    """
    if variant not in VARIANTS:
        raise ValueError(f"Unexpected variant: {variant}. Expected one of {sorted(VARIANTS)}.")

    registry = ToolRegistry()
    if variant in ("flows", "all"):
        if flow_service is None:
            raise ValueError(f"Variant '{variant}' requires a FlowService.")
        register_flow_tools(registry, flow_service)
    if variant in ("nodes", "all"):
        if node_service is None:
            raise ValueError(f"Variant '{variant}' requires a NodeService.")
        register_node_tools(registry, node_service)

    logger.info("Built '%s' registry with %d tool(s).", variant, len(registry))
    return registry
