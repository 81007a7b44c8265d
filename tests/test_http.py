"""Tests for the FastAPI JSON-RPC endpoint."""
import json

import pytest
from fastapi.testclient import TestClient

from mcpeasy.capabilities import mcp_server, resource
from mcpeasy.main import create_app
from mcpeasy.mcp.models import (
    ERROR_INTERNAL_ERROR,
    ERROR_INVALID_PARAMS,
    ERROR_INVALID_REQUEST,
    ERROR_METHOD_NOT_FOUND,
    ERROR_PARSE_ERROR,
)


@pytest.fixture
def client(sample):
    return TestClient(create_app(sample))


def rpc(client: TestClient, method: str, params: dict | None = None, request_id: int = 1) -> dict:
    payload = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        payload["params"] = params
    response = client.post("/mcp", json=payload)
    assert response.status_code == 200
    return response.json()


class TestAppRoutes:

    def test_root(self, client):
        assert client.get("/").json() == {"name": "sample-server", "version": "2.0.0", "status": "operational"}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestTools:

    def test_tools_list(self, client):
        body = rpc(client, "tools/list")

        assert body["id"] == 1
        tools = body["result"]["tools"]
        assert tools[0] == {
            "name": "echo",
            "description": "Echoes back the provided message",
            "inputSchema": {
                "type": "object",
                "properties": {"message": {"type": "string", "description": "The message to echo back"}},
                "required": ["message"],
            },
        }

    def test_tools_call(self, client):
        body = rpc(client, "tools/call", {"name": "echo", "arguments": {"message": "Hello"}})

        assert body["result"] == {"content": [{"type": "text", "text": "Echo: Hello"}], "isError": False}
        assert "error" not in body

    def test_tools_call_failure_is_error_result(self, client):
        body = rpc(client, "tools/call", {"name": "boom", "arguments": {"reason": "http"}})

        assert body["result"]["isError"] is True
        assert "exploded: http" in body["result"]["content"][0]["text"]

    def test_unknown_tool_is_error_result(self, client):
        body = rpc(client, "tools/call", {"name": "missing", "arguments": {}})

        assert body["result"]["isError"] is True
        assert "not found" in body["result"]["content"][0]["text"]

    def test_missing_tool_name(self, client):
        body = rpc(client, "tools/call", {"arguments": {}})

        assert body["error"]["code"] == ERROR_INVALID_PARAMS

    def test_arguments_must_be_an_object(self, client):
        body = rpc(client, "tools/call", {"name": "echo", "arguments": ["x"]})

        assert body["error"]["code"] == ERROR_INVALID_PARAMS


class TestResources:

    def test_resources_list(self, client):
        resources = rpc(client, "resources/list")["result"]["resources"]

        assert resources[0] == {
            "uri": "status://server",
            "name": "Server Status",
            "title": "Server Status",
            "mimeType": "application/json",
        }

    def test_resources_read(self, client):
        [contents] = rpc(client, "resources/read", {"uri": "status://server"})["result"]["contents"]

        assert contents["uri"] == "status://server"
        assert contents["mimeType"] == "application/json"
        assert json.loads(contents["text"]) == {"status": "running"}

    def test_unknown_resource(self, client):
        body = rpc(client, "resources/read", {"uri": "missing://x"})

        assert body["error"]["code"] == ERROR_INVALID_PARAMS


class TestPrompts:

    def test_prompts_list(self, client):
        [review] = rpc(client, "prompts/list")["result"]["prompts"]

        assert review["name"] == "code_review"
        assert review["arguments"][1] == {"name": "focusArea", "description": "", "required": False}

    def test_prompts_get(self, client):
        result = rpc(client, "prompts/get", {"name": "code_review", "arguments": {"language": "c"}})["result"]

        assert result["description"] == "Review some code"
        assert result["messages"] == [{"role": "user", "content": {"type": "text", "text": "Review this c code."}}]

    def test_unknown_prompt(self, client):
        body = rpc(client, "prompts/get", {"name": "missing"})

        assert body["error"]["code"] == ERROR_INVALID_PARAMS


@mcp_server(name="failing")
class Failing:
    @resource(uri="broken://resource")
    def broken(self) -> str:
        raise OSError("disk gone")


class TestErrors:

    def test_unknown_method(self, client):
        body = rpc(client, "sampling/createMessage", request_id=7)

        assert body["id"] == 7
        assert body["error"] == {"code": ERROR_METHOD_NOT_FOUND, "message": "Method 'sampling/createMessage' not found"}
        assert "result" not in body

    def test_failing_resource_is_internal_error(self):
        body = rpc(TestClient(create_app(Failing())), "resources/read", {"uri": "broken://resource"})

        assert body["error"]["code"] == ERROR_INTERNAL_ERROR
        assert "disk gone" in body["error"]["message"]

    def test_malformed_json_is_parse_error(self, client):
        response = client.post("/mcp", content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] is None
        assert body["error"]["code"] == ERROR_PARSE_ERROR

    def test_request_without_method_is_invalid(self, client):
        body = client.post("/mcp", json={"jsonrpc": "2.0", "id": 1}).json()

        assert body["id"] is None
        assert body["error"]["code"] == ERROR_INVALID_REQUEST
        assert "method" in body["error"]["message"]

    def test_non_object_request_is_invalid(self, client):
        body = client.post("/mcp", json=[1, 2]).json()

        assert body["error"]["code"] == ERROR_INVALID_REQUEST
