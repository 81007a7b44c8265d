"""
MCP utilities - handler functions for processing JSON-RPC requests.
"""
import logging
from typing import Any

from ..errors import PromptExecutionError, ResourceReadError, ToolExecutionError
from .adapter import CapabilityAdapter
from .models import (
    ERROR_INTERNAL_ERROR,
    ERROR_INVALID_PARAMS,
    ERROR_METHOD_NOT_FOUND,
    PROMPTS_GET,
    PROMPTS_LIST,
    RESOURCES_LIST,
    RESOURCES_READ,
    TOOLS_CALL,
    TOOLS_LIST,
    MCPRequest,
    MCPResponse,
)

logger = logging.getLogger(__name__)


class InvalidParams(Exception):
    """Request params are missing or malformed."""


def _require(params: dict[str, Any], key: str) -> str:
    value = params.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidParams(f"Missing required parameter '{key}'")
    return value


def _arguments(params: dict[str, Any]) -> dict[str, Any]:
    arguments = params.get("arguments") or {}
    if not isinstance(arguments, dict):
        raise InvalidParams("'arguments' must be an object")
    return arguments


def _tool_result(text: str, is_error: bool) -> dict[str, Any]:
    return {
        "content": [{"type": "text", "text": text}],
        "isError": is_error
    }


def handle_tools_list(adapter: CapabilityAdapter) -> dict[str, Any]:
    """Return all registered tools in MCP format."""
    return {"tools": [tool.to_schema().model_dump(exclude_none=True) for tool in adapter.tools.list_all()]}


async def handle_tools_call(adapter: CapabilityAdapter, params: dict[str, Any]) -> dict[str, Any]:
    """
    Execute a tool.
    Unknown tools and failing tools are reported in the result with isError, not as JSON-RPC errors.
    """
    tool_name = _require(params, "name")
    tool_args = _arguments(params)

    try:
        content = await adapter.call_tool(tool_name, tool_args)
    except ToolExecutionError as e:
        return _tool_result(str(e), is_error=True)

    return {
        "content": [item.model_dump(exclude_none=True) for item in content],
        "isError": False
    }


def handle_resources_list(adapter: CapabilityAdapter) -> dict[str, Any]:
    return {
        "resources": [resource.to_schema().model_dump(exclude_none=True) for resource in adapter.resources.list_all()]
    }


async def handle_resources_read(adapter: CapabilityAdapter, params: dict[str, Any]) -> dict[str, Any]:
    uri = _require(params, "uri")
    definition = adapter.find_resource(uri)
    if definition is None:
        raise InvalidParams(f"Resource '{uri}' not found")

    contents = await adapter.read_resource(definition.uri)
    return {
        "contents": [
            {"uri": definition.uri, "mimeType": item.mime_type, "text": item.content}
            for item in contents
        ]
    }


def handle_prompts_list(adapter: CapabilityAdapter) -> dict[str, Any]:
    return {"prompts": [prompt.to_schema().model_dump(exclude_none=True) for prompt in adapter.prompts.list_all()]}


async def handle_prompts_get(adapter: CapabilityAdapter, params: dict[str, Any]) -> dict[str, Any]:
    name = _require(params, "name")
    if name not in adapter.prompts:
        raise InvalidParams(f"Prompt '{name}' not found")

    result = await adapter.get_prompt(name, _arguments(params))
    return result.model_dump(mode="json", by_alias=True, exclude_none=True)


async def dispatch(adapter: CapabilityAdapter, request: MCPRequest) -> MCPResponse:
    """
    Route a JSON-RPC request to its handler.
    Always returns a response, a failing capability never escapes as an exception.
    """
    params = request.params or {}

    try:
        if request.method == TOOLS_LIST:
            result = handle_tools_list(adapter)
        elif request.method == TOOLS_CALL:
            result = await handle_tools_call(adapter, params)
        elif request.method == RESOURCES_LIST:
            result = handle_resources_list(adapter)
        elif request.method == RESOURCES_READ:
            result = await handle_resources_read(adapter, params)
        elif request.method == PROMPTS_LIST:
            result = handle_prompts_list(adapter)
        elif request.method == PROMPTS_GET:
            result = await handle_prompts_get(adapter, params)
        else:
            return MCPResponse.failure(request.id, ERROR_METHOD_NOT_FOUND, f"Method '{request.method}' not found")
    except InvalidParams as e:
        return MCPResponse.failure(request.id, ERROR_INVALID_PARAMS, str(e))
    except (ResourceReadError, PromptExecutionError) as e:
        return MCPResponse.failure(request.id, ERROR_INTERNAL_ERROR, str(e))

    return MCPResponse.success(request.id, result)
