"""
Adapter between capability definitions and the MCP SDK.

Definitions live in the registries; the adapter answers list/call/read/get requests from them
and installs those answers as handlers on a low-level mcp Server.
"""
import json
import logging
from typing import Any, Iterable

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents

from ..capabilities import (
    MethodInvoker,
    PromptDefinition,
    PromptRegistry,
    ResourceDefinition,
    ResourceRegistry,
    ToolDefinition,
    ToolRegistry,
)
from ..errors import InvocationError, PromptExecutionError, ResourceReadError, ToolExecutionError

logger = logging.getLogger(__name__)


def to_text(result: Any) -> str:
    """
    Render an invocation result as text content.
    None -> "", str as-is, anything else as JSON.
    """
    if result is None:
        return ""
    if isinstance(result, str):
        return result
    return json.dumps(result)


class CapabilityAdapter:
    """Maps registered definitions and the invoker onto MCP requests."""

    def __init__(
        self,
        tools: ToolRegistry | None = None,
        resources: ResourceRegistry | None = None,
        prompts: PromptRegistry | None = None,
        invoker: MethodInvoker | None = None
    ):
        self.tools = tools if tools is not None else ToolRegistry()
        self.resources = resources if resources is not None else ResourceRegistry()
        self.prompts = prompts if prompts is not None else PromptRegistry()
        self.invoker = invoker or MethodInvoker()

    # ============ REGISTRATION ============

    def register_tools(self, definitions: Iterable[ToolDefinition]) -> None:
        for definition in definitions:
            self.tools.register(definition)

    def register_resources(self, definitions: Iterable[ResourceDefinition]) -> None:
        for definition in definitions:
            self.resources.register(definition)

    def register_prompts(self, definitions: Iterable[PromptDefinition]) -> None:
        for definition in definitions:
            self.prompts.register(definition)

    # ============ TOOLS ============

    def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(**definition.to_schema().model_dump(exclude_none=True))
            for definition in self.tools.list_all()
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        """
        Execute a tool.

        Raises:
            ToolExecutionError: Unknown tool or failed invocation. The MCP runtime turns this
                into a tool result with isError set.
        """
        definition = self.tools.get(name)
        if definition is None:
            raise ToolExecutionError(f"Tool '{name}' not found")

        try:
            result = await self.invoker.ainvoke(definition, arguments or {})
        except InvocationError as e:
            logger.warning(f"Tool '{name}' failed: {e}")
            raise ToolExecutionError(f"Tool execution failed: {e}") from e

        return [types.TextContent(type="text", text=to_text(result))]

    # ============ RESOURCES ============

    def list_resources(self) -> list[types.Resource]:
        return [
            types.Resource(**definition.to_schema().model_dump(exclude_none=True))
            for definition in self.resources.list_all()
        ]

    def find_resource(self, uri: Any) -> ResourceDefinition | None:
        # URL parsing may add a trailing slash to a declared uri
        uri = str(uri)
        return self.resources.get(uri) or self.resources.get(uri.rstrip("/"))

    async def read_resource(self, uri: Any) -> list[ReadResourceContents]:
        """Read a resource. Resources take no arguments."""
        definition = self.find_resource(uri)
        if definition is None:
            raise ResourceReadError(f"Resource '{uri}' not found")

        try:
            result = await self.invoker.ainvoke(definition, {})
        except InvocationError as e:
            logger.warning(f"Resource '{definition.uri}' failed: {e}")
            raise ResourceReadError(f"Resource read failed: {e}") from e

        return [ReadResourceContents(content=to_text(result), mime_type=definition.mime_type)]

    # ============ PROMPTS ============

    def list_prompts(self) -> list[types.Prompt]:
        return [
            types.Prompt(**definition.to_schema().model_dump(exclude_none=True))
            for definition in self.prompts.list_all()
        ]

    async def get_prompt(self, name: str, arguments: dict[str, str] | None) -> types.GetPromptResult:
        """Render a prompt as a single user message."""
        definition = self.prompts.get(name)
        if definition is None:
            raise PromptExecutionError(f"Prompt '{name}' not found")

        try:
            result = await self.invoker.ainvoke(definition, arguments or {})
        except InvocationError as e:
            logger.warning(f"Prompt '{name}' failed: {e}")
            raise PromptExecutionError(f"Prompt execution failed: {e}") from e

        return types.GetPromptResult(
            description=definition.description or None,
            messages=[
                types.PromptMessage(
                    role="user",
                    content=types.TextContent(type="text", text=to_text(result))
                )
            ]
        )

    # ============ SDK WIRING ============

    def bind(self, server: Server, enable_resources: bool = True, enable_prompts: bool = True) -> Server:
        """
        Install request handlers on a low-level MCP server.

        Tool input validation is switched off: required properties are advisory and the
        method decides what a missing argument means.
        """

        @server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return self.list_tools()

        @server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            return await self.call_tool(name, arguments)

        if enable_resources:
            @server.list_resources()
            async def handle_list_resources() -> list[types.Resource]:
                return self.list_resources()

            @server.read_resource()
            async def handle_read_resource(uri: Any) -> list[ReadResourceContents]:
                return await self.read_resource(uri)

        if enable_prompts:
            @server.list_prompts()
            async def handle_list_prompts() -> list[types.Prompt]:
                return self.list_prompts()

            @server.get_prompt()
            async def handle_get_prompt(name: str, arguments: dict[str, str] | None) -> types.GetPromptResult:
                return await self.get_prompt(name, arguments)

        logger.info(
            f"Bound {len(self.tools)} tools, "
            f"{len(self.resources) if enable_resources else 0} resources, "
            f"{len(self.prompts) if enable_prompts else 0} prompts to '{server.name}'"
        )
        return server
