"""Export the exception hierarchy used across dispatch, flow handlers and backends."""

from .exceptions import (
    LangflowMCPError,
    ToolRegistrationError,
    MissingArgumentsError,
    UnknownToolError,
    ToolValidationError,
    Violation,
    FlowError,
    FlowNotFoundError,
    InvalidFlowIdError,
    FlowCreateError,
    FlowUpdateError,
    FlowDeleteError,
    FlowDatabaseError,
    BackendError,
    BackendUnreachableError,
    BackendResponseError,
)

__all__ = [
    "LangflowMCPError",
    "ToolRegistrationError",
    "MissingArgumentsError",
    "UnknownToolError",
    "ToolValidationError",
    "Violation",
    "FlowError",
    "FlowNotFoundError",
    "InvalidFlowIdError",
    "FlowCreateError",
    "FlowUpdateError",
    "FlowDeleteError",
    "FlowDatabaseError",
    "BackendError",
    "BackendUnreachableError",
    "BackendResponseError",
]
