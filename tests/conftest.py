from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from gelf_reader.core.pool import GelfReaderPool


@pytest.fixture
def gelf_message() -> dict[str, Any]:
    return {
        "version": "1.1",
        "host": "example.org",
        "short_message": "A short message",
        "level": 5,
        "timestamp": 1582213226.5,
        "_some_info": "foo",
        "facility": "app",
    }


@pytest.fixture
def pool() -> Iterator[GelfReaderPool]:
    p = GelfReaderPool(workers=2)
    yield p
    p.shutdown(wait=True)


@pytest.fixture
def write_ndjson() -> Callable[[Path, list[Any]], None]:
    def _write(path: Path, lines: list[Any]) -> None:
        out = [line if isinstance(line, str) else json.dumps(line) for line in lines]
        path.write_text("\n".join(out) + "\n", encoding="utf-8")

    return _write
