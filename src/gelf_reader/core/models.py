"""Core data models for GELF messages."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any

MANDATORY_FIELDS: tuple[str, ...] = ("host", "level", "short_message", "timestamp", "version")
META_PREFIX = "_"


class GelfLevel(IntEnum):
    """Syslog severities used by the GELF `level` field."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7


def _freeze(d: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(d or {}))


@dataclass(frozen=True, slots=True)
class LogRecord:
    """Validated GELF message with its extra fields split into two buckets."""

    host: str
    level: GelfLevel
    short_message: str
    timestamp: float
    version: str
    meta: Mapping[str, Any] = field(default_factory=dict)  # `_`-prefixed fields, prefix stripped
    mechanism_data: Mapping[str, Any] = field(default_factory=dict)  # everything else

    # buckets are mappings, so records compare by value but cannot be hashed
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", _freeze(self.meta))
        object.__setattr__(self, "mechanism_data", _freeze(self.mechanism_data))

    def to_dict(self) -> dict[str, Any]:
        """Return the flat GELF object (meta keys re-prefixed with `_`)."""
        d: dict[str, Any] = {
            "host": self.host,
            "level": int(self.level),
            "short_message": self.short_message,
            "timestamp": self.timestamp,
            "version": self.version,
        }
        for k, v in self.meta.items():
            d[META_PREFIX + k] = v
        d.update(self.mechanism_data)
        return d

    def to_json(self) -> str:
        """Canonical text form used by printers."""
        return json.dumps(self.to_dict(), ensure_ascii=False, allow_nan=False, separators=(",", ":"))
