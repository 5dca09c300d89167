import pytest
from pydantic import BaseModel, ConfigDict, Field

from langflow_mcp.core.exceptions import ToolValidationError
from langflow_mcp.core.tools.schema import SchemaValidator
from langflow_mcp.flows.schemas import FlowInput, FlowLookup, FlowUpdate, NodeChain


def test_validate_returns_typed_model() -> None:
    args = SchemaValidator.validate(FlowUpdate, {"id": 3, "flow_name": "demo", "flows": "{}"})
    assert isinstance(args, FlowUpdate)
    assert args.id == 3
    assert args.flow_name == "demo"


def test_validate_collects_every_violation() -> None:
    with pytest.raises(ToolValidationError) as excinfo:
        SchemaValidator.validate(FlowUpdate, {"id": -1, "flow_name": ""}, tool_name="update_flow")

    paths = sorted(v.path for v in excinfo.value.violations)
    assert paths == ["flow_name", "flows", "id"]
    assert excinfo.value.tool_name == "update_flow"
    assert "update_flow" in str(excinfo.value)


def test_validate_none_is_treated_as_empty_mapping() -> None:
    with pytest.raises(ToolValidationError) as excinfo:
        SchemaValidator.validate(FlowInput, None)
    assert {v.path for v in excinfo.value.violations} == {"flow_name", "flows"}


def test_validate_strips_unknown_fields() -> None:
    args = SchemaValidator.validate(FlowLookup, {"id": 1, "unexpected": True})
    assert args.model_dump() == {"id": 1}


def test_validate_forbids_unknown_fields_in_strict_models() -> None:
    class StrictArgs(BaseModel):
        model_config = ConfigDict(extra="forbid")
        name: str

    with pytest.raises(ToolValidationError) as excinfo:
        SchemaValidator.validate(StrictArgs, {"name": "a", "other": 1})
    assert excinfo.value.violations[0].path == "other"


@pytest.mark.parametrize("bad_id", ["5", 0, -5, 1.5, True])
def test_flow_id_must_be_a_positive_integer(bad_id: object) -> None:
    with pytest.raises(ToolValidationError) as excinfo:
        SchemaValidator.validate(FlowLookup, {"id": bad_id})
    assert excinfo.value.violations[0].path == "id"


@pytest.mark.parametrize("bad_id", [0.0, -2.0, 2.5])
def test_float_id_must_be_a_positive_whole_number(bad_id: float) -> None:
    with pytest.raises(ToolValidationError):
        SchemaValidator.validate(FlowLookup, {"id": bad_id})


def test_whole_number_float_id_is_accepted_as_int() -> None:
    args = SchemaValidator.validate(FlowLookup, {"id": 4.0})
    assert args.id == 4
    assert type(args.id) is int


def test_validation_error_serializes_issues() -> None:
    with pytest.raises(ToolValidationError) as excinfo:
        SchemaValidator.validate(FlowLookup, {})
    data = excinfo.value.to_dict()
    assert data["name"] == "ToolValidationError"
    assert data["issues"] == [{"path": "id", "message": "Field required"}]


def test_node_chain_accepts_any_json_document() -> None:
    for document in [{"data": {"nodes": [], "edges": []}}, [1, 2, 3], "text", 42, None]:
        args = SchemaValidator.validate(NodeChain, {"json": document})
        assert args.payload == document


def test_node_chain_requires_the_document() -> None:
    with pytest.raises(ToolValidationError) as excinfo:
        SchemaValidator.validate(NodeChain, {})
    assert excinfo.value.violations[0].path == "json"


def test_build_parameters_for_flow_update() -> None:
    schema = SchemaValidator.build_parameters(FlowUpdate)

    assert schema["type"] == "object"
    assert set(schema["required"]) == {"id", "flow_name", "flows"}
    assert schema["properties"]["id"]["type"] == "integer"
    assert schema["properties"]["id"]["exclusiveMinimum"] == 0
    assert schema["properties"]["flows"]["description"] == "Flow data as JSON string"
    assert schema["additionalProperties"] is False
    assert "title" not in schema


def test_build_parameters_uses_alias_for_node_chain() -> None:
    schema = SchemaValidator.build_parameters(NodeChain)
    assert list(schema["properties"]) == ["json"]
    assert schema["required"] == ["json"]


def test_build_parameters_resolves_nested_models() -> None:
    class Position(BaseModel):
        x: float
        y: float

    class NodeArgs(BaseModel):
        node_id: str = Field(description="Node id")
        position: Position

    schema = SchemaValidator.build_parameters(NodeArgs)
    assert "$defs" not in schema
    assert "$ref" not in str(schema)
    assert schema["properties"]["position"]["properties"]["x"]["type"] == "number"


def test_assert_no_recursive_refs_with_recursion() -> None:
    schema = {
        "$defs": {"Node": {"type": "object", "properties": {"child": {"$ref": "#/$defs/Node"}}}},
        "properties": {"root": {"$ref": "#/$defs/Node"}},
    }
    with pytest.raises(ToolValidationError, match="Recursive structure detected"):
        SchemaValidator.assert_no_recursive_refs(schema)


def test_sanitize_schema_simplifies_optional() -> None:
    schema = {
        "type": "object",
        "properties": {
            "optional_field": {
                "anyOf": [{"type": "integer", "description": "An integer"}, {"type": "null"}],
                "description": "Parent description",
            }
        },
    }
    field = SchemaValidator.sanitize_schema(schema)["properties"]["optional_field"]
    assert "anyOf" not in field
    assert field["type"] == "integer"
    assert field["description"] == "Parent description"


def test_sanitize_schema_keeps_fields_named_like_metadata() -> None:
    schema = {"type": "object", "title": "Args", "properties": {"title": {"type": "string", "title": "Title"}}}
    sanitized = SchemaValidator.sanitize_schema(schema)
    assert "title" not in sanitized
    assert sanitized["properties"]["title"] == {"type": "string"}
