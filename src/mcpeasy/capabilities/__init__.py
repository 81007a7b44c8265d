"""
mcpeasy capabilities.

Decorators and markers to declare capabilities, plus the scanner, schema generator,
invoker and registries that turn them into callable definitions.
"""
from .base import Argument, Property, ServerInfo, get_server_info, mcp_server, prompt, resource, tool
from .invoker import MethodInvoker
from .registry import PromptRegistry, Registry, ResourceRegistry, ToolRegistry
from .scanner import CapabilityScanner
from .schema_generator import generate_schema, json_type_for
from .schemas import (
    ArgumentSchema,
    CapabilityDefinition,
    PromptArgument,
    PromptDefinition,
    PropertyDescriptor,
    ResourceDefinition,
    ToolDefinition,
)

__all__ = [
    "Argument",
    "ArgumentSchema",
    "CapabilityDefinition",
    "CapabilityScanner",
    "MethodInvoker",
    "PromptArgument",
    "PromptDefinition",
    "PromptRegistry",
    "Property",
    "PropertyDescriptor",
    "Registry",
    "ResourceDefinition",
    "ResourceRegistry",
    "ServerInfo",
    "ToolDefinition",
    "ToolRegistry",
    "generate_schema",
    "get_server_info",
    "json_type_for",
    "mcp_server",
    "prompt",
    "resource",
    "tool",
]
