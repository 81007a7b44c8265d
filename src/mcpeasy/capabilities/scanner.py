"""
Capability scanner - turns decorated methods of a live instance into definitions.

Only methods declared directly on the instance's class are scanned. Inherited methods are
ignored, a subclass has to redeclare a capability to expose it.
"""
import inspect
import logging
from typing import Any, Callable, Iterator

from ..errors import CapabilityConfigurationError
from .base import PROMPT, RESOURCE, TOOL, describe, describe_parameters, get_marker
from .schema_generator import generate_schema
from .schemas import PromptArgument, PromptDefinition, ResourceDefinition, ToolDefinition

logger = logging.getLogger(__name__)


class CapabilityScanner:
    """Discovers @tool, @resource and @prompt methods and builds their definitions."""

    def _marked_methods(self, instance: Any, kind: str) -> Iterator[tuple[Callable, Any]]:
        # Class body order, so the same class always scans the same way
        for value in vars(type(instance)).values():
            if not inspect.isfunction(value):
                continue
            marker = get_marker(value, kind)
            if marker is not None:
                yield value, marker

    def scan_tools(self, instance: Any) -> list[ToolDefinition]:
        """
        Scan an instance for @tool methods.

        Args:
            instance: The object whose methods become tools

        Returns:
            ToolDefinitions in declaration order
        """
        tools = []
        for method, marker in self._marked_methods(instance, TOOL):
            tool_def = ToolDefinition(
                name=marker.name or method.__name__,
                description=describe(method, marker.description),
                input_schema=generate_schema(method),
                method=method,
                instance=instance
            )
            logger.debug(f"Found tool '{tool_def.name}' on {type(instance).__name__}")
            tools.append(tool_def)
        return tools

    def scan_resources(self, instance: Any) -> list[ResourceDefinition]:
        """
        Scan an instance for @resource methods.

        Raises:
            CapabilityConfigurationError: If a resource declares an empty uri
                or takes parameters without defaults
        """
        resources = []
        for method, marker in self._marked_methods(instance, RESOURCE):
            if not marker.uri:
                raise CapabilityConfigurationError(
                    f"Resource {type(instance).__name__}.{method.__name__} must declare a non-empty uri"
                )
            required = [
                info.identifier for info in describe_parameters(method)
                if info.parameter.default is inspect.Parameter.empty
            ]
            if required:
                raise CapabilityConfigurationError(
                    f"Resource {type(instance).__name__}.{method.__name__} must not take parameters, got {required}"
                )
            resource_def = ResourceDefinition(
                uri=marker.uri,
                title=marker.title,
                description=describe(method, marker.description),
                mime_type=marker.mime_type,
                method=method,
                instance=instance
            )
            logger.debug(f"Found resource '{resource_def.uri}' on {type(instance).__name__}")
            resources.append(resource_def)
        return resources

    def scan_prompts(self, instance: Any) -> list[PromptDefinition]:
        """Scan an instance for @prompt methods and their Argument-annotated parameters."""
        prompts = []
        for method, marker in self._marked_methods(instance, PROMPT):
            arguments = tuple(
                PromptArgument(
                    name=info.argument_marker.name or info.identifier,
                    description=info.argument_marker.description,
                    required=info.argument_marker.required
                )
                for info in describe_parameters(method)
                if info.argument_marker is not None
            )
            prompt_def = PromptDefinition(
                name=marker.name or method.__name__,
                title=marker.title,
                description=describe(method, marker.description),
                arguments=arguments,
                method=method,
                instance=instance
            )
            logger.debug(f"Found prompt '{prompt_def.name}' on {type(instance).__name__}")
            prompts.append(prompt_def)
        return prompts
