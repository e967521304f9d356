"""Newline-delimited GELF ingestion.

Reads one GELF JSON message per line and feeds each line through the
reader pool, yielding results in file order.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator
from concurrent.futures import Future
from dataclasses import dataclass
from pathlib import Path

import aiofiles

from .errors import ParseError
from .models import LogRecord
from .pool import GelfReaderPool


@dataclass(frozen=True, slots=True)
class IngestResult:
    """Outcome of one input line: exactly one of record/error is set."""

    line_no: int
    record: LogRecord | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _resolve(line_no: int, fut: Future[LogRecord]) -> IngestResult:
    try:
        record = await asyncio.wrap_future(fut)
    except ParseError as e:
        return IngestResult(line_no=line_no, error=e)
    return IngestResult(line_no=line_no, record=record)


async def iter_records(
    log_path: str | Path,
    *,
    pool: GelfReaderPool,
    window: int | None = None,
) -> AsyncIterator[IngestResult]:
    """Yield one IngestResult per non-blank line, in file order.

    `window` bounds how many lines are in flight at once (default: four per
    worker).
    """
    path = Path(log_path)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {path}")

    if window is None:
        window = max(1, pool.workers * 4)
    if window < 1:
        raise ValueError("window must be >= 1")

    pending: deque[tuple[int, Future[LogRecord]]] = deque()
    line_no = 0
    async with aiofiles.open(path, mode="rb") as f:
        async for raw in f:
            line_no += 1
            raw = raw.rstrip(b"\r\n")
            if not raw.strip():
                continue
            pending.append((line_no, pool.submit(raw)))
            if len(pending) >= window:
                n, fut = pending.popleft()
                yield await _resolve(n, fut)

    for n, fut in pending:
        yield await _resolve(n, fut)


async def read_records(log_path: str | Path, **iter_kwargs) -> list[IngestResult]:
    """Collect iter_records into a list."""
    return [r async for r in iter_records(log_path, **iter_kwargs)]
