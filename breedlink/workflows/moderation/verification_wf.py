"""Breeder verification workflows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from breedlink.components.admin import log_admin_activity, require_admin_permission
from breedlink.components.moderation import decide_verification, submit_verification
from breedlink.helpers.dto.moderation_dto import VERIFICATION_APPROVED, VerificationResult

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def submit_verification_workflow(
    db: Database,
    breeder_id: str,
    plan: str,
    documents: list[dict[str, Any]],
    submitted_by_email: bool = False,
) -> VerificationResult:
    """Breeder submits (or resubmits) verification documents."""
    return submit_verification(db, breeder_id, plan, documents, submitted_by_email)


def decide_verification_workflow(
    db: Database,
    admin_id: str,
    breeder_id: str,
    decision: str,
    rejection_reason: str | None = None,
) -> VerificationResult:
    """
    Admin approves or rejects a breeder under review.

    Requires can_manage_breeders. Logs approve_breeder / reject_breeder when
    the decision changed the breeder.
    """
    require_admin_permission(db, admin_id, "can_manage_breeders")

    result = decide_verification(db, breeder_id, decision, rejection_reason)
    if result.changed:
        breeder = db.breeders.get_breeder(breeder_id) or {}
        action = "approve_breeder" if decision == VERIFICATION_APPROVED else "reject_breeder"
        description = None
        if rejection_reason and action == "reject_breeder":
            description = f"reject_breeder performed on breeder {breeder.get('name') or breeder_id}: {rejection_reason}"
        log_admin_activity(db, admin_id, action, "breeder", breeder_id, breeder.get("name"), description)
    else:
        logger.info(f"[decide_verification_wf] {breeder_id} already {result.status}, nothing to do")
    return result
