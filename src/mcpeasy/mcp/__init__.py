"""MCP protocol glue: SDK adapter and the HTTP JSON-RPC endpoint."""
from .adapter import CapabilityAdapter, to_text
from .server import build_router

__all__ = ["CapabilityAdapter", "build_router", "to_text"]
