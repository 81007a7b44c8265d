"""Shared fixtures: small capability classes used across the test modules."""
from typing import Annotated, Any, Optional

import pytest
from pydantic import BaseModel

from mcpeasy.capabilities import Argument, Property, mcp_server, prompt, resource, tool


class Point(BaseModel):
    name: str
    value: int


@mcp_server(name="sample-server", version="2.0.0")
class SampleServer:
    """Covers every capability kind plus a few conversion cases."""

    def __init__(self):
        self.calls = []

    @tool(description="Echoes back the provided message")
    def echo(self, message: Annotated[str, Property(description="The message to echo back")]) -> str:
        return "Echo: " + str(message)

    @tool(description="Adds two numbers together")
    def add(
        self,
        a: Annotated[float, Property(description="First number")],
        b: Annotated[float, Property(description="Second number")]
    ) -> float:
        return a + b

    @tool(name="greet_person")
    def greet(
        self,
        name: Annotated[str, Property(description="Who to greet")],
        title: Annotated[Optional[str], Property(required=False)] = None
    ) -> str:
        """Greets somebody."""
        if title:
            return f"Hello, {title} {name}!"
        return f"Hello, {name}!"

    @tool(description="Reads a record")
    def describe_point(self, point: Annotated[Point, Property(name="p")]) -> str:
        return f"{point.name}:{point.value}"

    @tool()
    def boom(self, reason: Annotated[str, Property()]) -> None:
        raise RuntimeError(f"exploded: {reason}")

    @tool()
    def record(self, payload: Annotated[dict[str, Any], Property()]) -> Point:
        self.calls.append(payload)
        return Point(name=payload["name"], value=len(payload))

    @tool()
    def nothing(self) -> None:
        return None

    @resource(uri="status://server", title="Server Status", mime_type="application/json")
    def status(self) -> dict[str, str]:
        return {"status": "running"}

    @resource(uri="notes://today")
    def notes(self) -> str:
        """Today's notes."""
        return "buy milk"

    @prompt(name="code_review", title="Code Review", description="Review some code")
    def code_review(
        self,
        language: Annotated[str, Argument(description="Programming language")],
        focus: Annotated[str, Argument(name="focusArea", required=False)] = ""
    ) -> str:
        suffix = f" focusing on {focus}" if focus else ""
        return f"Review this {language} code{suffix}."

    def helper(self) -> str:
        return "not a capability"


@pytest.fixture
def sample():
    return SampleServer()


@pytest.fixture
def anyio_backend():
    return "asyncio"
