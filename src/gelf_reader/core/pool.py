"""Fixed-size worker pool that runs the GELF reader off the caller's thread.

Each submission gets its own Future, so a reply only ever reaches the
request that produced it. Workers share the executor's unbounded queue and
handle one message at a time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor

from .config import resolve_worker_count
from .errors import InternalError, ParseError
from .models import LogRecord
from .reader import read_message

logger = logging.getLogger(__name__)

Payload = bytes | bytearray | memoryview | str


def _read(payload: Payload) -> LogRecord:
    """Worker body: every failure leaves as a ParseError."""
    try:
        return read_message(payload)
    except ParseError as e:
        logger.debug("Rejected GELF message: %s", e)
        raise
    except Exception as e:
        logger.exception("Unexpected error while reading GELF message")
        raise InternalError(f"reader failed: {type(e).__name__}: {e}") from e


class GelfReaderPool:
    """Run `read_message` on N worker threads."""

    def __init__(self, workers: int | None = None, *, name: str = "gelf-reader") -> None:
        self._workers = resolve_worker_count(workers)
        self._executor = ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix=name)
        logger.debug("Started GELF reader pool with %s workers", self._workers)

    @property
    def workers(self) -> int:
        return self._workers

    def submit(self, payload: Payload) -> Future[LogRecord]:
        """Queue one message; the future yields a LogRecord or raises ParseError."""
        return self._executor.submit(_read, payload)

    def read_many(self, payloads: Iterable[Payload]) -> list[Future[LogRecord]]:
        """Submit every payload and return the futures in input order."""
        return [self.submit(p) for p in payloads]

    async def read(self, payload: Payload) -> LogRecord:
        """Await one message from a running event loop."""
        return await asyncio.wrap_future(self.submit(payload))

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; queued messages are still processed."""
        self._executor.shutdown(wait=wait)
        logger.debug("GELF reader pool shut down")

    def __enter__(self) -> GelfReaderPool:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)
