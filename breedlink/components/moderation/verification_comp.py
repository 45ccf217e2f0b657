"""Breeder verification state machine.

pending | rejected | reviewing -> reviewing   (breeder submits documents)
reviewing -> approved | rejected             (admin decision)

An approved breeder stays approved; there is no reset path here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from breedlink.helpers.dto.moderation_dto import (
    BREEDER_PLANS,
    VERIFICATION_APPROVED,
    VERIFICATION_PENDING,
    VERIFICATION_REJECTED,
    VERIFICATION_REVIEWING,
    VerificationResult,
)
from breedlink.helpers.exceptions import ConflictError, NotFoundError, ValidationError
from breedlink.helpers.time_helper import now_ms

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)

SUBMITTABLE_FROM = (VERIFICATION_PENDING, VERIFICATION_REJECTED, VERIFICATION_REVIEWING)
DECISIONS = (VERIFICATION_APPROVED, VERIFICATION_REJECTED)


def _current_status(breeder: dict[str, Any]) -> str:
    return (breeder.get("verification") or {}).get("status") or VERIFICATION_PENDING


def submit_verification(
    db: Database,
    breeder_id: str,
    plan: str,
    documents: list[dict[str, Any]],
    submitted_by_email: bool = False,
) -> VerificationResult:
    """
    Submit (or resubmit) verification documents; moves the breeder to reviewing.

    Args:
        db: Database instance
        breeder_id: Submitting breeder
        plan: "basic" or "premium"
        documents: [{file_name, document_type}] file references, never URLs
        submitted_by_email: Documents were sent by email instead of upload

    Raises:
        NotFoundError: Breeder does not exist
        ValidationError: Bad plan, no documents, or breeder already approved
        ConflictError: Verification status changed concurrently
    """
    breeder = db.breeders.get_breeder(breeder_id)
    if breeder is None:
        raise NotFoundError(f"Breeder not found: {breeder_id}")
    if plan not in BREEDER_PLANS:
        raise ValidationError(f"Unknown plan: {plan}", code="invalid_plan")
    if not documents and not submitted_by_email:
        raise ValidationError("At least one verification document is required", code="documents_required")
    for doc in documents:
        if not doc.get("file_name"):
            raise ValidationError("Verification document is missing file_name", code="invalid_document")

    current = _current_status(breeder)
    if current not in SUBMITTABLE_FROM:
        raise ValidationError(f"Breeder verification is already {current}", code="already_verified")

    fields = {
        "status": VERIFICATION_REVIEWING,
        "plan": plan,
        "documents": [{"file_name": d["file_name"], "document_type": d.get("document_type")} for d in documents],
        "submitted_at": now_ms(),
        "submitted_by_email": submitted_by_email,
        "reviewed_at": None,
        "rejection_reason": None,
    }
    if db.breeders.transition_verification(breeder_id, [current], fields) is None:
        raise ConflictError("Verification status changed, reload and retry", code="verification_changed")

    logger.info(f"[verification] {breeder_id}: {current} -> {VERIFICATION_REVIEWING} (plan={plan})")
    return VerificationResult(breeder_id=breeder_id, status=VERIFICATION_REVIEWING, changed=True)


def decide_verification(
    db: Database,
    breeder_id: str,
    decision: str,
    rejection_reason: str | None = None,
) -> VerificationResult:
    """
    Apply an admin decision to a breeder under review.

    Repeating the decision the breeder already holds is a no-op success.

    Raises:
        NotFoundError: Breeder does not exist
        ValidationError: Not a decision, breeder never submitted, or the
            breeder holds the opposite decision
        ConflictError: Verification status changed concurrently
    """
    if decision not in DECISIONS:
        raise ValidationError(f"Unknown verification decision: {decision}", code="invalid_status")

    breeder = db.breeders.get_breeder(breeder_id)
    if breeder is None:
        raise NotFoundError(f"Breeder not found: {breeder_id}")

    current = _current_status(breeder)
    if current == decision:
        return VerificationResult(breeder_id=breeder_id, status=current, changed=False)
    if current == VERIFICATION_PENDING:
        raise ValidationError("Breeder has not submitted verification documents", code="verification_not_submitted")
    if current != VERIFICATION_REVIEWING:
        raise ValidationError(
            f"Cannot move verification from {current} to {decision}",
            code="invalid_transition",
        )

    fields = {
        "status": decision,
        "reviewed_at": now_ms(),
        "rejection_reason": rejection_reason if decision == VERIFICATION_REJECTED else None,
    }
    if db.breeders.transition_verification(breeder_id, [VERIFICATION_REVIEWING], fields) is None:
        latest = db.breeders.get_breeder(breeder_id)
        if latest is not None and _current_status(latest) == decision:
            return VerificationResult(breeder_id=breeder_id, status=decision, changed=False)
        raise ConflictError("Verification status changed, reload and retry", code="verification_changed")

    logger.info(f"[verification] {breeder_id}: {VERIFICATION_REVIEWING} -> {decision}")
    return VerificationResult(breeder_id=breeder_id, status=decision, changed=True)
