"""Operation registry: the fixed set of tools a deployment advertises."""

from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel

from ..models import ToolDefinition
from ..schema import SchemaValidator
from ...exceptions import ToolRegistrationError, UnknownToolError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    A central registry mapping tool names to their definitions.

    The registry drives both capability advertisement (``list_tools``) and
    dispatch (``get``). It is populated once at start-up and only read
    afterwards.
    """

    def __init__(self) -> None:
        """Initialize an empty ToolRegistry."""
        self.tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        name_or_tool: Union[str, ToolDefinition],
        description: Optional[str] = None,
        handler: Optional[Callable[[Any], Awaitable[Any]]] = None,
        args_model: Optional[Type[BaseModel]] = None,
        *,
        success_label: Optional[str] = None,
        error_label: Optional[str] = None,
        propagate_validation_errors: bool = False,
    ) -> ToolDefinition:
        """
        Register a new tool.

        Either pass a complete ``ToolDefinition`` or the individual components.
        The advertised input schema is derived from the arguments model when
        the definition does not carry one.

        Args:
            name_or_tool: Either a ``ToolDefinition`` object or the name of the tool.
            description: Human-readable description. Required with a name.
            handler: Async callable implementing the tool. Required with a name.
            args_model: Pydantic model for the arguments. Required with a name.
            success_label: Label for successful results. Defaults to "<name> result:".
            error_label: Label for rendered failures. Defaults to "Error in <name>:".
            propagate_validation_errors: Raise validation failures to the caller.

        Returns:
            The registered definition.

        Raises:
            ToolRegistrationError: If components are missing or the name is taken.
        """
        if isinstance(name_or_tool, ToolDefinition):
            tool = name_or_tool
        else:
            if description is None or handler is None or args_model is None:
                raise ToolRegistrationError(
                    "If passing name as string, description, handler and args_model are required."
                )
            tool = ToolDefinition(
                name=name_or_tool,
                description=description,
                handler=handler,
                args_model=args_model,
                success_label=success_label or f"{name_or_tool} result:",
                error_label=error_label or f"Error in {name_or_tool}:",
                propagate_validation_errors=propagate_validation_errors,
            )

        if tool.parameters is None:
            tool = tool.model_copy(update={"parameters": SchemaValidator.build_parameters(tool.args_model)})

        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.info(f"Successfully registered tool: '{tool.name}'")
        return tool

    def get(self, tool_name: str) -> ToolDefinition:
        """Resolve a tool by name.

        Raises:
            UnknownToolError: If no tool with this exact name is registered.
        """
        try:
            return self.tools[tool_name]
        except KeyError:
            raise UnknownToolError(tool_name) from None

    def list_tools(self) -> List[ToolDefinition]:
        """Returns all registered tools in registration order."""
        return list(self.tools.values())

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self.tools

    def __len__(self) -> int:
        return len(self.tools)
