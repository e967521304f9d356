"""Bytes-to-record entry point used by the pool workers."""

from __future__ import annotations

import json
import math

from .classifier import classify
from .errors import DecodeError
from .models import LogRecord


def _reject_constant(name: str) -> None:
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(s: str) -> float:
    value = float(s)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {s}")
    return value


def read_message(buf: bytes | bytearray | memoryview | str) -> LogRecord:
    """Decode one GELF JSON message and classify it.

    Raises DecodeError when the payload is not a JSON object; the classifier
    is never invoked in that case.
    """
    if isinstance(buf, str):
        text = buf
    else:
        try:
            text = bytes(buf).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"invalid UTF-8 ({e.reason} at byte {e.start})") from e

    try:
        obj = json.loads(text, parse_float=_finite_float, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise DecodeError(f"{e.msg} at line {e.lineno} column {e.colno}") from e
    except (ValueError, RecursionError) as e:
        # huge or non-finite numbers, or nesting deeper than the recursion limit
        raise DecodeError(str(e) or type(e).__name__) from e

    if not isinstance(obj, dict):
        raise DecodeError(f"expected a JSON object, got {type(obj).__name__}")

    return classify(obj)
