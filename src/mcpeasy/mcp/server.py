"""
MCP server - FastAPI routes for JSON-RPC requests.
"""
import json
import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError

from .adapter import CapabilityAdapter
from .models import ERROR_INVALID_REQUEST, ERROR_PARSE_ERROR, MCPRequest, MCPResponse
from .utils import dispatch

logger = logging.getLogger(__name__)


def build_router(adapter: CapabilityAdapter) -> APIRouter:
    """Create the /mcp router answering from the adapter's registries."""
    router = APIRouter()

    @router.post("/mcp")
    async def mcp_endpoint(request: Request):
        """
        Main MCP endpoint.
        Routes requests based on method field.

        Malformed JSON and invalid requests are answered as JSON-RPC errors with a null id.
        """
        try:
            payload = json.loads(await request.body())
        except ValueError as e:
            logger.debug(f"Unparseable request body: {e}")
            return MCPResponse.failure(None, ERROR_PARSE_ERROR, f"Parse error: {e}").to_dict()

        try:
            rpc_request = MCPRequest.model_validate(payload)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or 'request'}: {error['msg']}"
                for error in e.errors()
            )
            return MCPResponse.failure(None, ERROR_INVALID_REQUEST, f"Invalid request: {details}").to_dict()

        response = await dispatch(adapter, rpc_request)
        return response.to_dict()

    return router
