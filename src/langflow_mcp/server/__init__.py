"""MCP transport wiring."""

from .server import FlowMCPServer, build_server

__all__ = ["FlowMCPServer", "build_server"]
