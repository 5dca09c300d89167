"""Argument schemas for the flow tools and the stored flow record."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

FlowsPayload = Annotated[str, Field(min_length=1, description="Flow data as JSON string")]


def _whole_number(value: Any) -> Any:
    # JSON clients may send 1.0 for 1
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


FlowId = Annotated[int, BeforeValidator(_whole_number), Field(strict=True, gt=0)]

# Used to re-check payloads read back from the store.
FLOWS_PAYLOAD: TypeAdapter[str] = TypeAdapter(FlowsPayload)


class ToolArguments(BaseModel):
    """Base for tool argument models. Unknown fields are stripped."""

    model_config = ConfigDict(extra="ignore")


class FlowInput(ToolArguments):
    flow_name: str = Field(min_length=1, description="Name of the flow")
    flows: FlowsPayload


class FlowUpdate(ToolArguments):
    id: FlowId = Field(description="Flow ID to update")
    flow_name: str = Field(min_length=1, description="New name for the flow")
    flows: FlowsPayload


class FlowLookup(ToolArguments):
    id: FlowId = Field(description="Flow ID to retrieve")


class EmptyArguments(ToolArguments):
    """No parameters needed."""

    pass


class NodeChain(BaseModel):
    """Opaque flow document forwarded to Langflow as-is.

    Any well-formed JSON value is accepted; no structure is inferred. The
    ``json`` field itself is required.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    payload: Any = Field(alias="json", description="Complete flow JSON sent to Langflow")


class FlowRecord(BaseModel):
    """A workflow record as stored in the flow table.

    Rows are relayed as the store returns them: values are not coerced and
    columns beyond the known ones are kept.
    """

    model_config = ConfigDict(extra="allow")

    id: Any = None
    flow_name: Any = None
    flows: Any = None
    created_at: Any = None
