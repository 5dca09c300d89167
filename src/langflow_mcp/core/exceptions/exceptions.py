"""
Custom exception classes for the langflow MCP server.

Three families live here: protocol errors raised by the dispatcher before a
tool runs, domain errors raised by the flow handlers, and backend errors
raised by the HTTP and database collaborators. Every error can render itself
as a JSON-serializable dict, which is what ends up in a tool's error text.
"""

from typing import Any, Dict, List, NamedTuple, Optional


class LangflowMCPError(Exception):
    """Base exception for all errors raised by this package."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for rendering in a tool response."""
        return {"name": type(self).__name__, "message": self.message}


# --- Protocol errors ---------------------------------------------------------


class ToolRegistrationError(LangflowMCPError):
    """Raised when there is an error registering a tool."""

    pass


class MissingArgumentsError(LangflowMCPError):
    """Raised when a tool invocation carries no arguments payload at all."""

    def __init__(self, message: str = "Arguments are required") -> None:
        super().__init__(message)


class UnknownToolError(LangflowMCPError):
    """Raised when a requested tool is not found in the registry."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["tool"] = self.tool_name
        return data


class Violation(NamedTuple):
    """A single schema violation: dotted field path plus message."""

    path: str
    message: str


class ToolValidationError(LangflowMCPError):
    """Raised when tool arguments violate the tool's schema.

    Carries every violation found, not just the first one.
    """

    def __init__(self, tool_name: str, violations: List[Violation]) -> None:
        summary = ", ".join(f"{v.path or '<root>'}: {v.message}" for v in violations)
        super().__init__(f"Validation failed for tool '{tool_name}': {summary}")
        self.tool_name = tool_name
        self.violations = violations

    def issues(self) -> List[Dict[str, str]]:
        return [{"path": v.path, "message": v.message} for v in self.violations]

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["issues"] = self.issues()
        return data


# --- Domain errors -----------------------------------------------------------


class FlowError(LangflowMCPError):
    """Error raised by flow operations.

    Attributes:
        code: Machine readable error code, e.g. ``NOT_FOUND``.
        details: Optional provider-specific diagnostic payload.
    """

    default_code = "FLOW_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, details: Any = None) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["code"] = self.code
        if self.details is not None:
            data["details"] = _serialize_details(self.details)
        return data


class FlowNotFoundError(FlowError):
    """No flow record matched the requested identifier."""

    default_code = "NOT_FOUND"


class InvalidFlowIdError(FlowError):
    """The identifier is not a positive integer."""

    default_code = "INVALID_ID"


class FlowCreateError(FlowError):
    default_code = "CREATE_ERROR"


class FlowUpdateError(FlowError):
    default_code = "UPDATE_ERROR"


class FlowDeleteError(FlowError):
    default_code = "DELETE_ERROR"


class FlowDatabaseError(FlowError):
    default_code = "DB_ERROR"


# --- Backend errors ----------------------------------------------------------


class BackendError(LangflowMCPError):
    """Base error for the HTTP collaborator."""

    pass


class BackendUnreachableError(BackendError):
    """The backend could not be reached (DNS, connection refused, bad URL...)."""

    pass


class BackendResponseError(BackendError):
    """The backend answered with a non-2xx status or an empty body."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.status_code is not None:
            data["status_code"] = self.status_code
        if self.body is not None:
            data["body"] = self.body
        return data


def _serialize_details(details: Any) -> Any:
    if isinstance(details, LangflowMCPError):
        return details.to_dict()
    if isinstance(details, BaseException):
        return {"name": type(details).__name__, "message": str(details)}
    return details
