"""Application status state machine.

consultation_pending -> consultation_completed | adoption_approved | adoption_rejected
consultation_completed -> adoption_approved | adoption_rejected
adoption_approved, adoption_rejected: terminal
"""

from __future__ import annotations

from breedlink.helpers.dto.application_dto import (
    ADOPTION_APPROVED,
    ADOPTION_REJECTED,
    APPLICATION_STATUSES,
    CONSULTATION_COMPLETED,
    CONSULTATION_PENDING,
)
from breedlink.helpers.exceptions import ValidationError

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    CONSULTATION_PENDING: frozenset({CONSULTATION_COMPLETED, ADOPTION_APPROVED, ADOPTION_REJECTED}),
    CONSULTATION_COMPLETED: frozenset({ADOPTION_APPROVED, ADOPTION_REJECTED}),
    ADOPTION_APPROVED: frozenset(),
    ADOPTION_REJECTED: frozenset(),
}


def check_transition(current_status: str, new_status: str) -> bool:
    """
    Validate a status move.

    Args:
        current_status: Status currently stored in the ledger
        new_status: Requested status

    Returns:
        True if a write is needed, False if new_status is already current

    Raises:
        ValidationError: Unknown status or a move the table does not allow
    """
    if new_status not in APPLICATION_STATUSES:
        raise ValidationError(f"Unknown application status: {new_status}", code="invalid_status")
    if current_status == new_status:
        return False
    if new_status not in ALLOWED_TRANSITIONS.get(current_status, frozenset()):
        raise ValidationError(
            f"Cannot move application from {current_status} to {new_status}",
            code="invalid_transition",
        )
    return True
