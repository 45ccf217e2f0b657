"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.

Every exception carries a stable ``code`` string so calling layers can map
failures to transport responses and UI messages without parsing text.
"""

from __future__ import annotations


class BreedlinkError(Exception):
    """Base class for typed domain failures."""

    code = "error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code

    @property
    def message(self) -> str:
        return str(self)


class NotFoundError(BreedlinkError):
    """Raised when a referenced actor or entity does not exist."""

    code = "not_found"


class ForbiddenError(BreedlinkError):
    """Raised when the actor lacks a permission or does not own the target."""

    code = "forbidden"


class ValidationError(BreedlinkError):
    """Raised when an input precondition or a state transition is violated."""

    code = "validation_failed"


class ConflictError(BreedlinkError):
    """Raised when a duplicate-prevention invariant would be violated."""

    code = "already_exists"


class ProjectionError(BreedlinkError):
    """Raised when the ledger write succeeded but the read-model projection failed.

    The ledger record stays authoritative. Re-running the status sync for
    ``application_id`` repairs the projection.
    """

    code = "mirror_out_of_sync"

    def __init__(self, message: str, *, application_id: str) -> None:
        super().__init__(message)
        self.application_id = application_id
