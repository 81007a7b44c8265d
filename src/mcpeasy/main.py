"""
mcpeasy - FastAPI application serving a capability instance over HTTP JSON-RPC.
"""
from typing import Any

from fastapi import FastAPI

from .bootstrap import build_adapter, require_server_info
from .mcp.server import build_router


def create_app(instance: Any) -> FastAPI:
    """Build the FastAPI app for an instance of an @mcp_server class."""
    info = require_server_info(type(instance))
    adapter = build_adapter(instance, info)

    app = FastAPI(
        title=info.name,
        description="MCP capabilities over JSON-RPC",
        version=info.version
    )
    app.state.adapter = adapter
    app.include_router(build_router(adapter))

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": info.name,
            "version": info.version,
            "status": "operational"
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
