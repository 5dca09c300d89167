from typing import Any, Awaitable, Callable, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict


class ToolDefinition(BaseModel):
    """
    Represents a tool the server advertises and dispatches to.

    Attributes:
        name: The unique name of the tool.
        description: A brief, human-readable description of what the tool does.
        handler: Async callable receiving the validated arguments model and
                 returning a JSON-serializable payload.
        args_model: Pydantic model used as the tool's argument schema.
        success_label: Label prefixed to a successful result.
        error_label: Label prefixed to a rendered failure.
        propagate_validation_errors: If True, argument validation failures are
                 raised to the caller instead of being rendered as error text.
        parameters: The JSON schema advertised as the tool's ``inputSchema``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    handler: Callable[[Any], Awaitable[Any]]
    args_model: Type[BaseModel]
    success_label: str
    error_label: str
    propagate_validation_errors: bool = False
    parameters: Optional[Dict[str, Any]] = None
