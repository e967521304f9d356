"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: classify a single GELF message, or ingest an NDJSON file of them
- Resources: routing help, a sample message and the response schema

Run locally (stdio):
    python -m gelf_reader.server.gelf_server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from gelf_reader.core.config import configure_logging
from gelf_reader.core.pool import GelfReaderPool
from gelf_reader.resources.registry import register_resources
from gelf_reader.tools.classify import classify_message_impl, ingest_file_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("gelf-reader", json_response=True)
pool = GelfReaderPool()

register_resources(mcp)


@mcp.tool()
async def classify_gelf(message: str) -> dict[str, Any]:
    """Validate one GELF JSON message and split its fields.

    Parameters
    ----------
    message:
        A GELF JSON object, e.g. {"version":"1.1","host":"h","short_message":"m",
        "level":3,"timestamp":1582213226.5,"_user":"bob"}.

    Returns
    -------
    dict:
        {"ok": true, "record": {...}, "meta": {...}, "mechanism_data": {...}}
        or {"ok": false, "error": {"kind": ..., "message": ..., "field": ...}}
    """
    return await classify_message_impl(message, pool=pool)


@mcp.tool()
async def ingest_gelf_file(
    log_path: str,
    limit: int | None = None,
    include_errors: bool = True,
) -> dict[str, Any]:
    """Classify every line of a newline-delimited GELF file.

    Parameters
    ----------
    log_path:
        Path to a local file holding one GELF JSON object per line.
    limit:
        Maximum number of per-line results returned (counts cover the whole file).
    include_errors:
        Whether rejected lines appear in the results.
    """
    return await ingest_file_impl(
        log_path=log_path,
        pool=pool,
        limit=limit,
        include_errors=include_errors,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio, workers=%s)", pool.workers)
    _ = argv or sys.argv[1:]
    try:
        mcp.run(transport="stdio")
    finally:
        pool.shutdown(wait=False)


if __name__ == "__main__":
    main()
