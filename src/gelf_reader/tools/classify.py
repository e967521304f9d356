"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from gelf_reader.core.errors import ParseError
from gelf_reader.core.ingest import read_records
from gelf_reader.core.pool import GelfReaderPool

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000


class ErrorInfo(BaseModel):
    kind: Literal[
        "decode_error",
        "validation_error",
        "missing_field",
        "type_mismatch",
        "invalid_value",
        "internal_error",
        "parse_error",
    ] = Field(description="Error class.")
    message: str = Field(description="Human-readable reason.")
    field: str | None = Field(default=None, description="Offending mandatory field, if any.")
    expected: str | None = Field(default=None, description="Expected JSON type for type_mismatch.")


class ClassifyOutcome(BaseModel):
    ok: bool
    line_no: int | None = Field(default=None, description="Source line for file ingestion.")
    record: dict[str, Any] | None = Field(
        default=None, description="Canonical flat GELF object (meta keys prefixed with `_`)."
    )
    meta: dict[str, Any] | None = Field(default=None, description="User fields, prefix stripped.")
    mechanism_data: dict[str, Any] | None = Field(
        default=None, description="Fields that are neither mandatory nor `_`-prefixed."
    )
    error: ErrorInfo | None = None


class IngestSummary(BaseModel):
    count: int
    accepted: int
    rejected: int
    results: list[ClassifyOutcome] = Field(default_factory=list)


def _outcome(record=None, error: ParseError | None = None, line_no: int | None = None) -> ClassifyOutcome:
    if error is not None:
        return ClassifyOutcome(ok=False, line_no=line_no, error=ErrorInfo(**error.to_dict()))
    return ClassifyOutcome(
        ok=True,
        line_no=line_no,
        record=record.to_dict(),
        meta=dict(record.meta),
        mechanism_data=dict(record.mechanism_data),
    )


async def classify_message_impl(message: str, *, pool: GelfReaderPool) -> dict[str, Any]:
    """Implementation for the `classify_gelf` MCP tool."""
    try:
        record = await pool.read(message)
    except ParseError as e:
        return _outcome(error=e).model_dump()
    return _outcome(record).model_dump()


async def ingest_file_impl(
    *,
    log_path: str,
    pool: GelfReaderPool,
    limit: int | None = None,
    include_errors: bool = True,
) -> dict[str, Any]:
    """Implementation for the `ingest_gelf_file` MCP tool.

    Counts cover the whole file; `limit` only caps how many results are
    returned.
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    limit = min(limit, HARD_LIMIT)

    results = await read_records(log_path, pool=pool)
    accepted = sum(1 for r in results if r.ok)

    out: list[ClassifyOutcome] = []
    for r in results:
        if not r.ok and not include_errors:
            continue
        out.append(_outcome(r.record, r.error, line_no=r.line_no))
        if len(out) >= limit:
            break

    summary = IngestSummary(
        count=len(results),
        accepted=accepted,
        rejected=len(results) - accepted,
        results=out,
    )
    return summary.model_dump()
