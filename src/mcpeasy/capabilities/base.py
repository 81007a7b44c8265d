"""
Capability decorators and parameter markers for mcpeasy.

NOTE:
1. Decorators only attach metadata to the function. Nothing is registered here; the
   scanner reads the metadata later from a live instance.
2. Parameter metadata is attached with typing.Annotated, the same way pydantic attaches Field().

Usage:
    @mcp_server(name="example-server")
    class ExampleServer:

        @tool(description="Echoes back the provided message")
        def echo(self, message: Annotated[str, Property(description="The message")]) -> str:
            return "Echo: " + message
"""
import builtins
import inspect
import logging
from dataclasses import dataclass
from typing import Annotated, Any, Callable, get_origin, get_type_hints

from ..errors import CapabilityConfigurationError

logger = logging.getLogger(__name__)

CAPABILITY_ATTR = "__mcpeasy_capabilities__"
SERVER_ATTR = "__mcpeasy_server__"

TOOL = "tool"
RESOURCE = "resource"
PROMPT = "prompt"


# ============ PARAMETER MARKERS ============

@dataclass(frozen=True)
class Property:
    """Describes a tool parameter in the generated input schema."""
    name: str = ""
    description: str = ""
    required: bool = True
    format: str = ""


@dataclass(frozen=True)
class Argument:
    """Describes a prompt argument. Prompt arguments are always strings on the wire."""
    name: str = ""
    description: str = ""
    required: bool = True


# ============ METHOD MARKERS ============

@dataclass(frozen=True)
class ToolMarker:
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class ResourceMarker:
    uri: str
    title: str = ""
    description: str = ""
    mime_type: str = "text/plain"


@dataclass(frozen=True)
class PromptMarker:
    name: str = ""
    title: str = ""
    description: str = ""


@dataclass(frozen=True)
class ServerInfo:
    """Server identity attached by @mcp_server."""
    name: str
    version: str = "1.0.0"
    enable_resources: bool = True
    enable_prompts: bool = True


def _mark(kind: str, marker: Any) -> Callable:
    def decorator(func: Callable) -> Callable:
        markers = dict(getattr(func, CAPABILITY_ATTR, {}))
        if kind in markers:
            raise ValueError(f"{func.__qualname__} is already marked as a {kind}")
        markers[kind] = marker
        setattr(func, CAPABILITY_ATTR, markers)
        return func
    return decorator


def tool(name: str = "", description: str = "") -> Callable:
    """
    Decorator to mark a method as an MCP tool.

    Usage:
        @tool(name="echo", description="Returns what you send")
        def echo(self, message: Annotated[str, Property()]) -> str:
            return message
    """
    return _mark(TOOL, ToolMarker(name=name, description=description))


def resource(uri: str, title: str = "", description: str = "", mime_type: str = "text/plain") -> Callable:
    """
    Decorator to mark a method as an MCP resource.

    The uri is the resource's lookup key; the method must take no arguments besides self.
    """
    return _mark(RESOURCE, ResourceMarker(uri=uri, title=title, description=description, mime_type=mime_type))


def prompt(name: str = "", title: str = "", description: str = "") -> Callable:
    """Decorator to mark a method as an MCP prompt template."""
    return _mark(PROMPT, PromptMarker(name=name, title=title, description=description))


def mcp_server(
    name: str = "",
    version: str = "1.0.0",
    enable_resources: bool = True,
    enable_prompts: bool = True
) -> Callable:
    """Class decorator carrying the server identity. An empty name falls back to the class name."""
    def decorator(cls: type) -> type:
        info = ServerInfo(
            name=name or cls.__name__,
            version=version,
            enable_resources=enable_resources,
            enable_prompts=enable_prompts
        )
        setattr(cls, SERVER_ATTR, info)
        return cls
    return decorator


def get_marker(func: Any, kind: str) -> Any:
    """Return the marker of the given kind on func, or None."""
    return getattr(func, CAPABILITY_ATTR, {}).get(kind)


def get_server_info(cls: type) -> ServerInfo | None:
    # Only the class itself counts, a decorated base class does not make a subclass a server
    return cls.__dict__.get(SERVER_ATTR)


def describe(func: Callable, description: str) -> str:
    """Explicit description, else the cleaned docstring."""
    return description or inspect.getdoc(func) or ""


# ============ PARAMETER INTROSPECTION ============

@dataclass(frozen=True)
class ParameterInfo:
    """One formal parameter together with the metadata attached to it."""
    parameter: inspect.Parameter
    annotation: Any
    property_marker: Property | None = None
    argument_marker: Argument | None = None

    @property
    def identifier(self) -> str:
        return self.parameter.name

    @property
    def external_name(self) -> str | None:
        """
        Name looked up in an argument map.
        Property name first, then Argument name, then the identifier.
        Parameters without any marker get no name-based resolution.
        """
        if self.property_marker is not None:
            return self.property_marker.name or self.identifier
        if self.argument_marker is not None:
            return self.argument_marker.name or self.identifier
        return None


class _ForwardNamespace(dict):
    """Eval locals that resolve names the defining module does not know to Any."""

    def __init__(self, module_globals: dict[str, Any]):
        super().__init__()
        self.module_globals = module_globals
        self.unresolved: list[str] = []

    def __missing__(self, key: str) -> Any:
        if key in self.module_globals:
            return self.module_globals[key]
        if hasattr(builtins, key):
            return getattr(builtins, key)
        self.unresolved.append(key)
        return Any


def _resolve_annotation(func: Callable, name: str, annotation: Any) -> Any:
    """
    Evaluate one postponed annotation.

    Names that only existed in a local scope or under TYPE_CHECKING become Any, so the
    Property/Argument metadata around them survives.
    """
    if not isinstance(annotation, str):
        return annotation

    namespace = _ForwardNamespace(getattr(func, "__globals__", {}))
    try:
        hint = eval(annotation, namespace.module_globals, namespace)
    except Exception as e:
        raise CapabilityConfigurationError(
            f"Cannot resolve annotation '{annotation}' of parameter '{name}' on {func.__qualname__}: {e}"
        ) from e

    if namespace.unresolved:
        logger.debug(f"{func.__qualname__}.{name}: treating unknown names {namespace.unresolved} as Any")
    return hint


def _resolve_hints(func: Callable) -> dict[str, Any]:
    try:
        return get_type_hints(func, include_extras=True)
    except Exception as e:
        logger.debug(f"Resolving annotations of {func.__qualname__} one at a time: {e}")

    return {
        name: _resolve_annotation(func, name, annotation)
        for name, annotation in getattr(func, "__annotations__", {}).items()
        if name != "return"
    }


def describe_parameters(func: Callable) -> list[ParameterInfo]:
    """
    Enumerate the formal parameters of func in declaration order.

    For a plain function taken from a class body the leading `self` is dropped, so the result
    is the same for the function and for the method bound to an instance.
    Variadic parameters are never part of a capability signature and are skipped.
    """
    target = getattr(func, "__func__", func)
    signature = inspect.signature(func)
    hints = _resolve_hints(target)

    params = list(signature.parameters.values())
    if not inspect.ismethod(func) and params and params[0].name == "self":
        params = params[1:]

    infos = []
    for param in params:
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        hint = hints.get(param.name, param.annotation)
        if hint is inspect.Parameter.empty:
            hint = Any

        prop = None
        arg = None
        if get_origin(hint) is Annotated:
            for meta in hint.__metadata__:
                if isinstance(meta, Property) and prop is None:
                    prop = meta
                elif isinstance(meta, Argument) and arg is None:
                    arg = meta
            hint = hint.__origin__

        infos.append(ParameterInfo(parameter=param, annotation=hint, property_marker=prop, argument_marker=arg))

    return infos
