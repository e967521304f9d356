"""Console printer: classify NDJSON GELF messages and print canonical records."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections import deque
from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import Future
from pathlib import Path

from gelf_reader.core.config import configure_logging
from gelf_reader.core.errors import ParseError
from gelf_reader.core.ingest import IngestResult, read_records
from gelf_reader.core.models import LogRecord
from gelf_reader.core.pool import GelfReaderPool


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("must be an integer") from e
    if value < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def _result(line_no: int, fut: Future[LogRecord]) -> IngestResult:
    try:
        return IngestResult(line_no=line_no, record=fut.result())
    except ParseError as e:
        return IngestResult(line_no=line_no, error=e)


def _iter_stream(lines: Iterable[bytes], pool: GelfReaderPool, *, window: int) -> Iterator[IngestResult]:
    """Yield results in input order while the stream is still open.

    At most `window` lines are in flight; finished lines at the head are
    flushed as soon as they are ready.
    """
    pending: deque[tuple[int, Future[LogRecord]]] = deque()
    for line_no, raw in enumerate(lines, start=1):
        raw = raw.rstrip(b"\r\n")
        if not raw.strip():
            continue
        pending.append((line_no, pool.submit(raw)))
        while pending and (len(pending) >= window or pending[0][1].done()):
            yield _result(*pending.popleft())

    while pending:
        yield _result(*pending.popleft())


def _emit(source: str, results: Iterable[IngestResult], *, show_errors: bool) -> int:
    rejected = 0
    for r in results:
        if r.record is not None:
            print(r.record.to_json(), flush=True)
            continue
        rejected += 1
        if show_errors:
            err = {"source": source, "line_no": r.line_no, **r.error.to_dict()}
            print(json.dumps(err, ensure_ascii=False), file=sys.stderr)
    return rejected


def main(argv: Sequence[str] | None = None) -> None:
    p = argparse.ArgumentParser(
        description="Classify GELF messages (one JSON object per line) and print canonical records."
    )
    p.add_argument("paths", nargs="*", help="NDJSON files to read (default: stdin)")
    p.add_argument("--workers", type=_positive_int, default=None, help="Worker threads (default: GELF_READER_WORKERS or CPU count)")
    p.add_argument("--window", type=_positive_int, default=None, help="Lines in flight at once (default: 4 per worker; use 1 for live tails)")
    p.add_argument("--errors", action="store_true", help="Print rejected messages to stderr as JSON")
    p.add_argument("--strict", action="store_true", help="Exit with status 1 if any message was rejected")

    args = p.parse_args(argv)
    configure_logging()

    try:
        pool = GelfReaderPool(args.workers)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    window = args.window or pool.workers * 4
    rejected = 0
    with pool:
        if not args.paths:
            rejected += _emit("<stdin>", _iter_stream(sys.stdin.buffer, pool, window=window), show_errors=args.errors)
        for path in args.paths:
            try:
                results = asyncio.run(read_records(Path(path), pool=pool, window=window))
            except FileNotFoundError as e:
                print(str(e), file=sys.stderr)
                raise SystemExit(2)
            rejected += _emit(path, results, show_errors=args.errors)

    if args.strict and rejected:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
