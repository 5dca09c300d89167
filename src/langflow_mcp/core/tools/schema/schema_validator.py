from typing import Any, Dict, Set, Type, TypeVar

import jsonref  # type: ignore
from pydantic import BaseModel, ValidationError

from ...exceptions import ToolValidationError, Violation
from ...logger import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class SchemaValidator:
    """
    Validates raw tool arguments against a tool's pydantic model and turns
    those models into JSON schemas suitable for advertising to MCP clients.
    """

    @staticmethod
    def validate(args_model: Type[M], raw_arguments: Any, tool_name: str = "") -> M:
        """
        Validates an untyped argument payload against ``args_model``.

        All violations are collected; the caller gets either a fully typed
        instance or one error listing every offending field.

        Args:
            args_model: The pydantic model describing the arguments.
            raw_arguments: The untyped payload. None is treated as an empty mapping.
            tool_name: Name of the tool, used in the error message.

        Returns:
            The validated model instance. Unknown fields are stripped or
            rejected according to the model's ``extra`` setting.

        Raises:
            ToolValidationError: If the payload does not satisfy the schema.
        """
        payload = {} if raw_arguments is None else raw_arguments
        try:
            return args_model.model_validate(payload)
        except ValidationError as exc:
            violations = [
                Violation(path=".".join(str(part) for part in err["loc"]), message=err["msg"]) for err in exc.errors()
            ]
            logger.debug("Validation of '%s' arguments failed with %d violation(s).", tool_name, len(violations))
            raise ToolValidationError(tool_name, violations) from exc

    @staticmethod
    def build_parameters(args_model: Type[BaseModel]) -> Dict[str, Any]:
        """
        Builds the advertised input schema for an arguments model.

        Args:
            args_model: The pydantic model describing the arguments.

        Returns:
            A self-contained JSON schema without ``$ref`` or ``$defs``.

        Raises:
            ToolValidationError: If the model describes a recursive structure.
        """
        raw_schema = args_model.model_json_schema()
        SchemaValidator.assert_no_recursive_refs(raw_schema)

        # proxies=False ensures we get a plain dict back, not JsonRef objects
        resolved = jsonref.replace_refs(raw_schema, proxies=False)
        return SchemaValidator.sanitize_schema(resolved)

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks if the schema contains recursive references by traversing the graph.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs", {}) or schema.get("definitions", {})

        def check(node: Any, path: Set[str]) -> None:
            if isinstance(node, dict):
                if "$ref" in node:
                    ref = node["$ref"]
                    if ref in path:
                        msg = f"Recursive structure detected: {ref}. Recursive structures are not allowed in tool inputs."
                        logger.error(msg)
                        raise ToolValidationError(schema.get("title", ""), [Violation(path=ref, message=msg)])

                    # e.g. #/$defs/MyModel
                    if ref.startswith("#"):
                        parts = ref.split("/")
                        if len(parts) >= 3:
                            def_name = parts[-1]
                            if def_name in defs:
                                check(defs[def_name], path | {ref})
                    return

                for v in node.values():
                    check(v, path)
            elif isinstance(node, list):
                for item in node:
                    check(item, path)

        check(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Cleans up a generated schema for MCP clients.
        Removes $defs, $schema, $id, title.
        Simplifies Optional fields (anyOf with null).
        Enforces additionalProperties: false for objects that do not set it.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        new_schema = schema.copy()

        for key in ["$defs", "$schema", "$id", "title", "definitions"]:
            new_schema.pop(key, None)

        if "anyOf" in new_schema:
            non_null = [x for x in new_schema["anyOf"] if not (isinstance(x, dict) and x.get("type") == "null")]

            if len(non_null) == 1 and isinstance(non_null[0], dict):
                # The parent's description wins over the member's
                merged = non_null[0].copy()
                if "description" in new_schema:
                    merged["description"] = new_schema["description"]
                if "default" in new_schema:
                    merged["default"] = new_schema["default"]
                return SchemaValidator.sanitize_schema(merged)

        if new_schema.get("type") == "object" and "additionalProperties" not in new_schema:
            new_schema["additionalProperties"] = False

        for key, value in new_schema.items():
            # "properties" maps field names to schemas; a field may itself be called "title"
            if key == "properties" and isinstance(value, dict):
                new_schema[key] = {name: SchemaValidator.sanitize_schema(sub) for name, sub in value.items()}
            elif isinstance(value, dict):
                new_schema[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                new_schema[key] = [
                    SchemaValidator.sanitize_schema(item) if isinstance(item, dict) else item for item in value
                ]

        return new_schema
