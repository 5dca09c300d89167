"""End-to-end behaviour of the flow tools through the dispatcher."""

import json

import pytest

from langflow_mcp.core.exceptions import MissingArgumentsError, UnknownToolError
from langflow_mcp.core.tools import ToolCallRequest, ToolDispatcher

from tests.conftest import InMemoryFlowTable


def body_of(text: str) -> object:
    return json.loads(text.split("\n", 1)[1])


@pytest.mark.asyncio
async def test_add_flow_renders_created_record(flow_dispatcher: ToolDispatcher) -> None:
    response = await flow_dispatcher.dispatch(
        ToolCallRequest(name="add_flow", arguments={"flow_name": "demo", "flows": "{}"})
    )

    assert response.text.startswith("Flow added:\n")
    record = body_of(response.text)
    assert record["id"] == 1
    assert record["flow_name"] == "demo"
    assert record["flows"] == "{}"


@pytest.mark.asyncio
async def test_add_flow_with_invalid_arguments_lists_every_issue(
    flow_dispatcher: ToolDispatcher, flow_table: InMemoryFlowTable
) -> None:
    response = await flow_dispatcher.dispatch(ToolCallRequest(name="add_flow", arguments={"flow_name": ""}))

    assert response.text.startswith("Error adding flow:\n")
    issues = body_of(response.text)["issues"]
    assert sorted(issue["path"] for issue in issues) == ["flow_name", "flows"]
    assert flow_table.calls == []


@pytest.mark.asyncio
async def test_get_all_flows_on_empty_store_renders_empty_array(flow_dispatcher: ToolDispatcher) -> None:
    response = await flow_dispatcher.dispatch(ToolCallRequest(name="get_all_flows", arguments={}))

    assert response.text == "Flows data:\n[]"


@pytest.mark.asyncio
async def test_update_missing_flow_renders_null(flow_dispatcher: ToolDispatcher) -> None:
    response = await flow_dispatcher.dispatch(
        ToolCallRequest(name="update_flow", arguments={"id": 5, "flow_name": "x", "flows": "{}"})
    )

    assert response.text == "Flow updated:\nnull"


@pytest.mark.asyncio
async def test_update_existing_flow(flow_dispatcher: ToolDispatcher, flow_table: InMemoryFlowTable) -> None:
    flow_table.seed("before")

    response = await flow_dispatcher.dispatch(
        ToolCallRequest(name="update_flow", arguments={"id": 1, "flow_name": "after", "flows": "{}"})
    )

    assert response.text.startswith("Flow updated:\n")
    assert body_of(response.text)["flow_name"] == "after"


@pytest.mark.asyncio
async def test_get_flow_twice_is_byte_identical(flow_dispatcher: ToolDispatcher, flow_table: InMemoryFlowTable) -> None:
    flow_table.seed("stable", '{"nodes": [1, 2]}')
    request = ToolCallRequest(name="get_flow", arguments={"id": 1})

    first = await flow_dispatcher.dispatch(request)
    second = await flow_dispatcher.dispatch(request)

    assert first.text == second.text
    assert first.text.startswith("Flow data:\n")


@pytest.mark.asyncio
async def test_get_flow_not_found_is_a_normal_response(flow_dispatcher: ToolDispatcher) -> None:
    response = await flow_dispatcher.dispatch(ToolCallRequest(name="get_flow", arguments={"id": 3}))

    assert response.text.startswith("Error getting flow:\n")
    assert body_of(response.text)["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_backend_failure_for_known_tool_is_rendered(
    flow_dispatcher: ToolDispatcher, flow_table: InMemoryFlowTable
) -> None:
    flow_table.errors["select"] = {"message": "Request error talking to Supabase: connection refused"}

    response = await flow_dispatcher.dispatch(ToolCallRequest(name="get_all_flows", arguments={}))

    assert response.text.startswith("Error getting flows:\n")
    body = body_of(response.text)
    assert body["code"] == "FETCH_ERROR"
    assert "connection refused" in body["details"]["message"]


@pytest.mark.asyncio
async def test_delete_flow_renders_boolean(flow_dispatcher: ToolDispatcher, flow_table: InMemoryFlowTable) -> None:
    flow_table.seed("doomed")

    response = await flow_dispatcher.dispatch(ToolCallRequest(name="delete_flow", arguments={"id": 1}))

    assert response.text == "Deleted flow:\ntrue"


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", [0, -5])
async def test_delete_flow_with_invalid_id_never_reaches_store(
    flow_dispatcher: ToolDispatcher, flow_table: InMemoryFlowTable, bad_id: int
) -> None:
    response = await flow_dispatcher.dispatch(ToolCallRequest(name="delete_flow", arguments={"id": bad_id}))

    assert response.text.startswith("Error deleting flow:\n")
    assert flow_table.calls == []


@pytest.mark.asyncio
async def test_protocol_errors_are_raised(flow_dispatcher: ToolDispatcher) -> None:
    with pytest.raises(MissingArgumentsError):
        await flow_dispatcher.dispatch(ToolCallRequest(name="get_all_flows"))
    with pytest.raises(UnknownToolError):
        await flow_dispatcher.dispatch(ToolCallRequest(name="updateNode", arguments={"json": {}}))


@pytest.mark.asyncio
async def test_get_flow_renders_stored_timestamp_unchanged(
    flow_dispatcher: ToolDispatcher, flow_table: InMemoryFlowTable
) -> None:
    flow_table.rows.append({"id": 1, "flow_name": "demo", "flows": "{}", "created_at": "2024-05-01T10:00:00.123+00:00"})

    response = await flow_dispatcher.dispatch(ToolCallRequest(name="get_flow", arguments={"id": 1}))

    assert response.text.startswith("Flow data:\n")
    assert body_of(response.text)["created_at"] == "2024-05-01T10:00:00.123+00:00"


@pytest.mark.asyncio
async def test_get_all_flows_relays_row_with_null_name(
    flow_dispatcher: ToolDispatcher, flow_table: InMemoryFlowTable
) -> None:
    flow_table.seed("good")
    flow_table.rows.append({"id": 2, "flow_name": None, "flows": "{}", "created_at": "2024-01-01T00:00:00+00:00"})

    response = await flow_dispatcher.dispatch(ToolCallRequest(name="get_all_flows", arguments={}))

    assert response.text.startswith("Flows data:\n")
    assert [row["flow_name"] for row in body_of(response.text)] == ["good", None]


@pytest.mark.asyncio
async def test_get_flow_accepts_whole_number_float_id(
    flow_dispatcher: ToolDispatcher, flow_table: InMemoryFlowTable
) -> None:
    flow_table.seed("demo")

    response = await flow_dispatcher.dispatch(ToolCallRequest(name="get_flow", arguments={"id": 1.0}))

    assert response.text.startswith("Flow data:\n")
    assert body_of(response.text)["id"] == 1
