"""Runtime configuration resolved from arguments and the environment."""

from __future__ import annotations

import logging
import os

WORKERS_ENV = "GELF_READER_WORKERS"
LOG_LEVEL_ENV = "GELF_READER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def resolve_worker_count(workers: int | None = None) -> int:
    """Return the pool size: explicit value, then GELF_READER_WORKERS, then CPU count."""
    if workers is not None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        return workers

    env = os.getenv(WORKERS_ENV)
    if env:
        try:
            value = int(env)
        except ValueError as exc:
            raise ValueError(f"{WORKERS_ENV} must be an integer") from exc
        if value < 1:
            raise ValueError(f"{WORKERS_ENV} must be >= 1")
        return value

    cpu_count = os.cpu_count() or 1
    return min(32, cpu_count)


def configure_logging() -> None:
    """Configure stderr logging for the entry points."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
