"""GELF field classification.

Splits a decoded JSON object into the five mandatory GELF fields, user
metadata (`_`-prefixed keys) and mechanism data (everything else), and
validates the mandatory fields along the way.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

from .errors import InvalidValue, MissingField, TypeMismatch
from .models import MANDATORY_FIELDS, META_PREFIX, GelfLevel, LogRecord

_LEVEL_CODES: dict[str, GelfLevel] = {str(int(lvl)): lvl for lvl in GelfLevel}


def split_fields(raw: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Route every non-mandatory key into (meta, mechanism_data)."""
    meta: dict[str, Any] = {}
    mechanism: dict[str, Any] = {}
    for k, v in raw.items():
        if k.startswith(META_PREFIX):
            meta[k[len(META_PREFIX):]] = v
        elif k not in MANDATORY_FIELDS:
            mechanism[k] = v
    return meta, mechanism


def _require(raw: Mapping[str, Any], name: str) -> Any:
    if name not in raw:
        raise MissingField(name)
    return raw[name]


def _text(raw: Mapping[str, Any], name: str) -> str:
    val = _require(raw, name)
    if not isinstance(val, str):
        raise TypeMismatch(name, "string")
    return val


def _timestamp(raw: Mapping[str, Any]) -> float:
    val = _require(raw, "timestamp")
    # bool is an int subclass; JSON true/false is not a timestamp.
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise TypeMismatch("timestamp", "number")
    try:
        ts = float(val)
    except OverflowError:
        raise InvalidValue("timestamp", "a finite number") from None
    if not math.isfinite(ts):
        raise InvalidValue("timestamp", "a finite number")
    return ts


def parse_level(val: Any) -> GelfLevel:
    """Map a JSON `level` value onto GelfLevel.

    Only values whose text form is a single digit 0-7 are accepted: the
    integer 5 and the string "5" both map to NOTICE, while "Notice", "08",
    5.0 and true are rejected.
    """
    if val is None or isinstance(val, (list, dict)):
        raise TypeMismatch("level", "integer")
    if isinstance(val, str):
        text = val
    elif isinstance(val, int) and not isinstance(val, bool):
        text = str(val)
    else:
        text = json.dumps(val)
    try:
        return _LEVEL_CODES[text]
    except KeyError:
        raise InvalidValue("level", "integers from 0 to 7") from None


def classify(raw: Mapping[str, Any]) -> LogRecord:
    """Validate a decoded GELF object and return its LogRecord.

    Raises a ValidationError subclass for the first mandatory field that is
    missing or invalid (checked in host, level, short_message, timestamp,
    version order).
    """
    meta, mechanism = split_fields(raw)

    host = _text(raw, "host")
    if not host:
        raise InvalidValue("host", "a non-empty string")
    level = parse_level(_require(raw, "level"))
    short_message = _text(raw, "short_message")
    timestamp = _timestamp(raw)
    version = _text(raw, "version")

    return LogRecord(
        host=host,
        level=level,
        short_message=short_message,
        timestamp=timestamp,
        version=version,
        meta=meta,
        mechanism_data=mechanism,
    )
