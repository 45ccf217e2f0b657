"""
Helpers package.
"""

from .exceptions import (
    BreedlinkError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ProjectionError,
    ValidationError,
)
from .logging_helper import clear_log_context, configure_logging, log_context, set_log_context
from .time_helper import now_ms

__all__ = [
    "BreedlinkError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "ProjectionError",
    "ValidationError",
    "clear_log_context",
    "configure_logging",
    "log_context",
    "now_ms",
    "set_log_context",
]
