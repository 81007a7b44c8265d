"""
MCP protocol models - JSON-RPC 2.0 format.
"""
from typing import Any, Optional, Union
from pydantic import BaseModel, Field


# ============ BASE MODELS ============

class MCPRequest(BaseModel):
    """Base request - all MCP requests have these fields."""
    jsonrpc: str = Field(default="2.0")
    id: Union[int, str] = Field(...)
    method: str = Field(...)
    params: Optional[dict[str, Any]] = Field(default=None)


class MCPError(BaseModel):
    """Error structure."""
    code: int = Field(...)
    message: str = Field(...)
    data: Optional[dict[str, Any]] = Field(default=None)


class MCPResponse(BaseModel):
    """Base response - all MCP responses have these fields."""
    jsonrpc: str = Field(default="2.0")
    id: Union[int, str, None] = Field(...)
    result: Optional[dict[str, Any]] = Field(default=None)
    error: Optional[MCPError] = Field(default=None)

    @classmethod
    def success(cls, request_id: Union[int, str, None], result: dict[str, Any]) -> "MCPResponse":
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: Union[int, str, None], code: int, message: str) -> "MCPResponse":
        return cls(id=request_id, error=MCPError(code=code, message=message))

    def to_dict(self) -> dict[str, Any]:
        """A JSON-RPC response carries either result or error, never both. id stays even when null."""
        payload = self.model_dump(exclude_none=True)
        payload["id"] = self.id
        return payload


# ============ METHODS ============

TOOLS_LIST = "tools/list"
TOOLS_CALL = "tools/call"
RESOURCES_LIST = "resources/list"
RESOURCES_READ = "resources/read"
PROMPTS_LIST = "prompts/list"
PROMPTS_GET = "prompts/get"


# Error codes
ERROR_PARSE_ERROR = -32700
ERROR_INVALID_REQUEST = -32600
ERROR_METHOD_NOT_FOUND = -32601
ERROR_INVALID_PARAMS = -32602
ERROR_INTERNAL_ERROR = -32603
