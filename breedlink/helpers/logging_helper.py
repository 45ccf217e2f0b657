"""
Logging helpers for log tagging, request context and safe error handling.

This module provides:
- BreedlinkLogFilter: derives [Identity] [Role] tags from logger names
- set_log_context / clear_log_context: per-request context rendered into every line
- log_context: scoped variant of set_log_context for a single operation
- configure_logging: process-wide console logging with the filter installed
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
import sys
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger(__name__)

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(breedlink_identity_tag)s %(breedlink_role_tag)s %(context_str)s%(message)s"
)

# Module suffix -> role tag
_ROLE_SUFFIXES: dict[str, str] = {
    "_svc": "[Service]",
    "_wf": "[Workflow]",
    "_comp": "[Component]",
    "_aql": "[AQL]",
    "_helper": "[Helper]",
    "_dto": "[DTO]",
    "_if": "[Interface]",
}

# Context is per request handler (thread or task), never shared
_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "breedlink_log_context", default=None
)


def set_log_context(**values: Any) -> None:
    """Add key/value pairs to the current logging context."""
    current = dict(_log_context.get() or {})
    current.update(values)
    _log_context.set(current)


def clear_log_context() -> None:
    """Drop all values from the current logging context."""
    _log_context.set(None)


@contextlib.contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """Add values to the logging context for the duration of a with-block."""
    current = dict(_log_context.get() or {})
    current.update(values)
    token = _log_context.set(current)
    try:
        yield
    finally:
        _log_context.reset(token)


def _derive_tags(name: str) -> tuple[str, str]:
    stem = name.rsplit(".", 1)[-1]
    for suffix, role in _ROLE_SUFFIXES.items():
        if stem.endswith(suffix):
            base = stem[: -len(suffix)]
            if not base:
                break
            identity = " ".join(part.capitalize() for part in base.split("_") if part)
            return f"[{identity}]", role
    return name, ""


class BreedlinkLogFilter(logging.Filter):
    """Attach identity/role tags and request context to every record.

    Never suppresses a record. Must be installed on handlers, not loggers,
    so that third-party records get the attributes the format expects.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            identity, role = _derive_tags(str(record.name or ""))
        except Exception:
            identity, role = str(getattr(record, "name", "")), ""
        record.breedlink_identity_tag = identity
        record.breedlink_role_tag = role

        context = _log_context.get()
        if context:
            rendered = " ".join(f"{k}={v}" for k, v in context.items())
            record.context_str = f"[{rendered}] "
        else:
            record.context_str = ""
        return True


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure root logging for the whole process.

    Args:
        level: Logging level name or number
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(BreedlinkLogFilter())

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, handlers=[handler], force=True)
