"""Custom exceptions for mcpeasy."""


class McpEasyError(Exception):
    """Base class for every error raised by mcpeasy."""


class CapabilityConfigurationError(McpEasyError):
    """Raised when declared capability metadata cannot be turned into a definition."""


# ============ INVOCATION ============

class InvocationError(McpEasyError):
    """A single capability call failed. Never fatal to the server."""


class ArgumentResolutionError(InvocationError):
    """A supplied argument could not be converted to the parameter's declared type."""

    def __init__(self, parameter: str, message: str) -> None:
        self.parameter = parameter
        super().__init__(f"Failed to invoke method: invalid value for '{parameter}': {message}")


class TargetInvocationError(InvocationError):
    """The target method raised while executing."""

    def __init__(self, original: BaseException) -> None:
        self.original = original
        super().__init__(f"Method invocation failed: {original}")


class MethodAccessError(InvocationError):
    """The target method could not be reached on its bound instance."""

    def __init__(self, method_name: str) -> None:
        self.method_name = method_name
        super().__init__(f"Method is not accessible: {method_name}")


# ============ ADAPTER ============

class ToolExecutionError(McpEasyError):
    """Raised to the protocol runtime when a tool call fails."""


class ResourceReadError(McpEasyError):
    """Raised to the protocol runtime when a resource read fails."""


class PromptExecutionError(McpEasyError):
    """Raised to the protocol runtime when a prompt cannot be rendered."""
