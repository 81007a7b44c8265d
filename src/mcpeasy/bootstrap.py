"""
mcpeasy bootstrap - scan an @mcp_server class and serve it.

Run:
    start(ExampleServer)                      # transport from MCPEASY_TRANSPORT, stdio by default
    start(ExampleServer, transport="http")    # FastAPI JSON-RPC endpoint on MCPEASY_HOST:MCPEASY_PORT
"""
import logging
from typing import Any

import anyio
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .capabilities import CapabilityScanner, ServerInfo, get_server_info
from .config import configure_logging, get_settings
from .errors import CapabilityConfigurationError
from .mcp.adapter import CapabilityAdapter

logger = logging.getLogger(__name__)


def require_server_info(server_cls: type) -> ServerInfo:
    info = get_server_info(server_cls)
    if info is None:
        raise ValueError(f"Class {server_cls.__name__} must be decorated with @mcp_server")
    return info


def build_adapter(instance: Any, info: ServerInfo | None = None) -> CapabilityAdapter:
    """
    Scan an instance and register its capabilities.
    Resources and prompts are only scanned when the server enables them.
    """
    info = info or require_server_info(type(instance))
    scanner = CapabilityScanner()
    adapter = CapabilityAdapter()

    adapter.register_tools(scanner.scan_tools(instance))
    if info.enable_resources:
        adapter.register_resources(scanner.scan_resources(instance))
    if info.enable_prompts:
        adapter.register_prompts(scanner.scan_prompts(instance))

    logger.info(
        f"Loaded {len(adapter.tools)} tools, {len(adapter.resources)} resources, "
        f"{len(adapter.prompts)} prompts from {type(instance).__name__}"
    )
    for tool in adapter.tools:
        logger.debug(f"   - {tool.name}")
    return adapter


def build_server(instance: Any) -> Server:
    """Create a low-level MCP server exposing the instance's capabilities."""
    info = require_server_info(type(instance))
    adapter = build_adapter(instance, info)
    server = Server(info.name, version=info.version)
    return adapter.bind(server, enable_resources=info.enable_resources, enable_prompts=info.enable_prompts)


def create_instance(server_cls: type) -> Any:
    """Instantiate a server class with its no-argument constructor."""
    try:
        return server_cls()
    except Exception as e:
        raise CapabilityConfigurationError(
            f"Failed to create instance of {server_cls.__name__}: {e}"
        ) from e


async def run_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def start(server_cls: type, transport: str | None = None) -> None:
    """
    Start an MCP server from a class decorated with @mcp_server.

    Raises:
        ValueError: If the class is not decorated or the transport is unknown
        CapabilityConfigurationError: If the class cannot be instantiated or scanned
    """
    info = require_server_info(server_cls)
    settings = get_settings()
    configure_logging(settings.log_level)

    transport = transport or settings.transport
    if transport not in ("stdio", "http"):
        raise ValueError(f"Unknown transport '{transport}'")

    instance = create_instance(server_cls)
    logger.info(f"Starting {info.name} {info.version} over {transport}")

    if transport == "stdio":
        anyio.run(run_stdio, build_server(instance))
    else:
        import uvicorn
        from .main import create_app

        uvicorn.run(create_app(instance), host=settings.host, port=settings.port)
