"""Flow domain: argument schemas, services and tool registrations."""

from .nodes import NodeService
from .schemas import EmptyArguments, FlowInput, FlowLookup, FlowRecord, FlowUpdate, NodeChain
from .service import FlowService
from .tools import FLOW_TOOLS, NODE_TOOLS, VARIANTS, build_registry, register_flow_tools, register_node_tools

__all__ = [
    "NodeService",
    "EmptyArguments",
    "FlowInput",
    "FlowLookup",
    "FlowRecord",
    "FlowUpdate",
    "NodeChain",
    "FlowService",
    "FLOW_TOOLS",
    "NODE_TOOLS",
    "VARIANTS",
    "build_registry",
    "register_flow_tools",
    "register_node_tools",
]
