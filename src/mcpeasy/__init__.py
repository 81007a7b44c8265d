"""mcpeasy - expose plain methods as MCP tools, resources and prompts."""
from .bootstrap import build_server, start
from .capabilities import Argument, Property, mcp_server, prompt, resource, tool
from .errors import (
    ArgumentResolutionError,
    CapabilityConfigurationError,
    InvocationError,
    MethodAccessError,
    TargetInvocationError,
)

__version__ = "0.1.0"

__all__ = [
    "Argument",
    "ArgumentResolutionError",
    "CapabilityConfigurationError",
    "InvocationError",
    "MethodAccessError",
    "Property",
    "TargetInvocationError",
    "build_server",
    "mcp_server",
    "prompt",
    "resource",
    "start",
    "tool",
]
