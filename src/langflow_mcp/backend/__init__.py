"""Backend collaborators: the Langflow REST API and the flow records table."""

from .http_client import LangflowClient
from .store import FlowTable, StoreResponse, SupabaseFlowTable

__all__ = ["LangflowClient", "FlowTable", "StoreResponse", "SupabaseFlowTable"]
