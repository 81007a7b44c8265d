"""
Capability schema definitions for mcpeasy.

PropertyDescriptor / ArgumentSchema / PromptArgument: JSON-serializable pieces of the wire format.
ToolSchema / ResourceSchema / PromptSchema: MCP-compliant listing format.
*Definition: Internal storage that includes the method and the instance it is bound to.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, Field


JsonType = Literal["string", "integer", "number", "boolean", "object", "array"]


class PropertyDescriptor(BaseModel):
    """Schema of a single tool argument."""
    type: JsonType = Field(..., description="JSON Schema type")
    description: Optional[str] = Field(default=None, description="Omitted when empty")
    format: Optional[str] = Field(default=None, description="Advertised only, never enforced")


class ArgumentSchema(BaseModel):
    """
    JSON Schema for a tool's arguments.
    properties keep parameter declaration order.
    """
    type: Literal["object"] = Field(default="object")
    properties: dict[str, PropertyDescriptor] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    def to_json_schema(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PromptArgument(BaseModel):
    """Descriptive only. Prompt arguments carry no type."""
    name: str = Field(..., description="Argument name")
    description: str = Field(default="", description="What the argument is for")
    required: bool = Field(default=True, description="Advertised only, never enforced")


# ============ LISTING FORMAT ============

class ToolSchema(BaseModel):
    """
    MCP-compliant tool format.
    Sent to clients via tools/list response.
    """
    name: str = Field(..., description="Unique tool identifier")
    description: str = Field(..., description="What the tool does")
    inputSchema: dict[str, Any] = Field(..., description="JSON Schema for parameters")


class ResourceSchema(BaseModel):
    """MCP-compliant resource format, sent via resources/list."""
    uri: str = Field(..., description="Unique resource identifier")
    name: str = Field(..., description="Display name")
    title: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    mimeType: str = Field(default="text/plain")


class PromptSchema(BaseModel):
    """MCP-compliant prompt format, sent via prompts/list."""
    name: str = Field(..., description="Unique prompt identifier")
    title: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    arguments: list[PromptArgument] = Field(default_factory=list)


# ============ DEFINITIONS ============

@dataclass(frozen=True)
class CapabilityDefinition:
    """
    Internal capability storage.
    method is the plain function found on the class; instance is the owner it gets bound to.
    The instance is shared, never copied, and must live as long as the server.
    """
    description: str
    method: Callable = field(repr=False, compare=False)
    instance: Any = field(repr=False, compare=False)

    @property
    def key(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class ToolDefinition(CapabilityDefinition):
    name: str = ""
    input_schema: ArgumentSchema = field(default_factory=ArgumentSchema)

    @property
    def key(self) -> str:
        return self.name

    def to_schema(self) -> ToolSchema:
        """Convert to MCP-compliant format (drops method and instance)."""
        return ToolSchema(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema.to_json_schema()
        )


@dataclass(frozen=True)
class ResourceDefinition(CapabilityDefinition):
    uri: str = ""
    title: str = ""
    mime_type: str = "text/plain"

    @property
    def key(self) -> str:
        return self.uri

    @property
    def name(self) -> str:
        return self.title or self.uri

    def to_schema(self) -> ResourceSchema:
        return ResourceSchema(
            uri=self.uri,
            name=self.name,
            title=self.title or None,
            description=self.description or None,
            mimeType=self.mime_type
        )


@dataclass(frozen=True)
class PromptDefinition(CapabilityDefinition):
    name: str = ""
    title: str = ""
    arguments: tuple[PromptArgument, ...] = ()

    @property
    def key(self) -> str:
        return self.name

    def to_schema(self) -> PromptSchema:
        return PromptSchema(
            name=self.name,
            title=self.title or None,
            description=self.description or None,
            arguments=list(self.arguments)
        )
