"""
Example MCP server built with mcpeasy decorators.

Run:
    python -m mcpeasy.example_server
"""
import platform
import re
from datetime import datetime
from typing import Annotated, Any

from .bootstrap import start
from .capabilities import Argument, Property, mcp_server, prompt, resource, tool

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


@mcp_server(name="example-server", version="1.0.0")
class ExampleServer:
    """Tools, resources and prompts for demonstration purposes."""

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

    @tool(description="Generates a personalized greeting message")
    def greet(
        self,
        name: Annotated[str, Property(description="Name of the person to greet")],
        title: Annotated[str, Property(description="Optional title (e.g., Mr., Dr.)", required=False)]
    ) -> str:
        if title:
            return f"Hello, {title} {name}!"
        return f"Hello, {name}!"

    @tool(name="validate_email", description="Validates if a string is a properly formatted email address")
    def validate_email(
        self,
        email: Annotated[str, Property(description="Email address to validate", format="email")]
    ) -> dict[str, Any]:
        is_valid = email is not None and EMAIL_PATTERN.match(email) is not None
        return {
            "email": email,
            "isValid": is_valid,
            "message": "Valid email format" if is_valid else "Invalid email format"
        }

    @resource(
        uri="status://server",
        title="Server Status",
        description="Current status and information about the MCP server",
        mime_type="application/json"
    )
    def server_status(self) -> dict[str, Any]:
        return {
            "status": "running",
            "timestamp": datetime.now().isoformat(timespec="seconds"),
            "version": "1.0.0"
        }

    @resource(
        uri="system://info",
        title="System Information",
        description="Information about the Python runtime environment",
        mime_type="application/json"
    )
    def system_info(self) -> dict[str, str]:
        return {
            "pythonVersion": platform.python_version(),
            "implementation": platform.python_implementation(),
            "osName": platform.system(),
            "osVersion": platform.release(),
            "osArch": platform.machine()
        }

    @prompt(
        name="code_review",
        title="Code Review Prompt",
        description="Generates a prompt for reviewing code with specific focus areas"
    )
    def code_review(
        self,
        language: Annotated[str, Argument(description="Programming language of the code")],
        focus_area: Annotated[str, Argument(
            name="focusArea",
            description="Specific area to focus on (e.g., security, performance)",
            required=False
        )]
    ) -> str:
        request = f"Please review the following {language} code"
        if focus_area:
            request += f" with a focus on {focus_area}"

        lines = [
            request + ".",
            "",
            "Provide feedback on:",
            "- Code quality and readability",
            "- Best practices and conventions",
            "- Potential bugs or issues"
        ]
        if focus_area:
            lines.append(f"- {focus_area[:1].upper()}{focus_area[1:]} considerations")
        return "\n".join(lines) + "\n"

    @prompt(title="Writing Style", description="Rewrite content in a professional yet approachable corporate voice")
    def writing_style(self, content: Annotated[str, Argument(description="The text content to rewrite")]) -> str:
        return f"""Please rewrite the following content using this writing style:

TONE: Professional yet approachable, forward-thinking

CORE PRINCIPLES:
- Lead with value and impact
- Use active voice
- Keep sentences concise (max 20 words ideal)
- Avoid jargon unless industry-standard

CONTENT TO REWRITE:
{content}
"""


if __name__ == "__main__":
    start(ExampleServer)
