"""Environment configuration for the server."""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict


class Settings(BaseModel):
    """
    Settings read from the environment.

    Nothing is required: a missing Langflow URL or Supabase URL only shows
    up as a failed request when a tool is called.

    Attributes:
        langflow_url: Base URL of the Langflow instance (``LANGFLOW_URL``).
        flow_id: Identifier of the flow the node tools operate on (``FLOW_ID``).
        api_key: Langflow API key (``API_KEY``).
        supabase_url: Supabase project URL (``SUPABASE_URL``).
        supabase_key: Supabase API key (``SUPABASE_KEY``).
        supabase_table: Flow records table (``SUPABASE_TABLE``).
        variant: Which tool set to serve (``MCP_VARIANT``).
        log_level: Log level name (``LOG_LEVEL``).
    """

    model_config = ConfigDict(frozen=True)

    langflow_url: Optional[str] = None
    flow_id: Optional[str] = None
    api_key: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_table: str = "agent_flows"
    variant: str = "flows"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> "Settings":
        """Build settings from the environment, loading a ``.env`` file first.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            dotenv: Whether to load a ``.env`` file into ``os.environ`` first.
        """
        if dotenv:
            load_dotenv()
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = (env.get(name) or "").strip()
            return value or None

        return cls(
            langflow_url=get("LANGFLOW_URL"),
            flow_id=get("FLOW_ID"),
            api_key=get("API_KEY"),
            supabase_url=get("SUPABASE_URL"),
            supabase_key=get("SUPABASE_KEY"),
            supabase_table=get("SUPABASE_TABLE") or "agent_flows",
            variant=get("MCP_VARIANT") or "flows",
            log_level=get("LOG_LEVEL") or "INFO",
        )
