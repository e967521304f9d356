"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from gelf_reader.core.models import MANDATORY_FIELDS, GelfLevel
from gelf_reader.tools.classify import ClassifyOutcome

SAMPLE_MESSAGE = (
    '{"version":"1.1","host":"example.org","short_message":"A short message",'
    '"level":5,"timestamp":1582213226,"_some_info":"foo","facility":"gelf-reader"}'
)


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://gelf-reader/help")
    def help_resource() -> str:
        """Return a short description of the field routing rules."""
        levels = ", ".join(f"{int(lvl)}={lvl.name.lower()}" for lvl in GelfLevel)
        return (
            "Resources:\n"
            "- app://gelf-reader/help\n"
            "- app://gelf-reader/examples/sample-message\n"
            "- app://gelf-reader/schemas/classify-outcome\n"
            "\nRouting:\n"
            f"- mandatory: {', '.join(MANDATORY_FIELDS)}\n"
            "- `_name` fields go to meta as `name`\n"
            "- any other field goes to mechanism_data\n"
            f"\nLevels: {levels}\n"
        )

    @mcp.resource("app://gelf-reader/examples/sample-message")
    def sample_message() -> str:
        """Return a valid GELF 1.1 message for demos and tests."""
        return SAMPLE_MESSAGE

    @mcp.resource("app://gelf-reader/schemas/classify-outcome")
    def classify_outcome_schema() -> dict[str, Any]:
        """Return the JSON schema for classify_gelf responses."""
        return ClassifyOutcome.model_json_schema()
