"""Breeder reports embedded in the breeder document."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from breedlink.helpers.dto.moderation_dto import (
    REPORT_DISMISSED,
    REPORT_PENDING,
    REPORT_RESOLVED,
    REPORT_REVIEWING,
    REPORT_STATUSES,
    REPORT_TYPES,
    CreateReportResult,
)
from breedlink.helpers.exceptions import ConflictError, NotFoundError, ValidationError
from breedlink.helpers.time_helper import now_ms

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)

REPORT_TRANSITIONS: dict[str, frozenset[str]] = {
    REPORT_PENDING: frozenset({REPORT_REVIEWING, REPORT_RESOLVED, REPORT_DISMISSED}),
    REPORT_REVIEWING: frozenset({REPORT_RESOLVED, REPORT_DISMISSED}),
    REPORT_RESOLVED: frozenset(),
    REPORT_DISMISSED: frozenset(),
}


def check_report_transition(current_status: str, new_status: str) -> bool:
    """
    Validate a report status move.

    Returns:
        True if a write is needed, False if new_status is already current

    Raises:
        ValidationError: Unknown status or disallowed move
    """
    if new_status not in REPORT_STATUSES:
        raise ValidationError(f"Unknown report status: {new_status}", code="invalid_status")
    if current_status == new_status:
        return False
    if new_status not in REPORT_TRANSITIONS.get(current_status, frozenset()):
        raise ValidationError(
            f"Cannot move report from {current_status} to {new_status}",
            code="invalid_transition",
        )
    return True


def create_report(
    db: Database,
    reporter_id: str,
    breeder_id: str,
    report_type: str,
    description: str,
) -> CreateReportResult:
    """
    File a report from an adopter against a breeder.

    Raises:
        NotFoundError: Reporter or breeder does not exist
        ValidationError: Unknown report type or empty description
    """
    adopter = db.adopters.get_adopter(reporter_id)
    if adopter is None:
        raise NotFoundError(f"Adopter not found: {reporter_id}")
    if report_type not in REPORT_TYPES:
        raise ValidationError(f"Unknown report type: {report_type}", code="invalid_report_type")
    if not description or not description.strip():
        raise ValidationError("Report description is required", code="description_required")

    report_id = str(uuid.uuid4())
    report = {
        "report_id": report_id,
        "reporter_id": reporter_id,
        "reporter_name": adopter.get("name"),
        "type": report_type,
        "description": description.strip(),
        "status": REPORT_PENDING,
        "reported_at": now_ms(),
        "admin_notes": None,
        "processed_at": None,
    }
    if not db.breeders.push_report(breeder_id, report):
        raise NotFoundError(f"Breeder not found: {breeder_id}")

    logger.info(f"[report] {reporter_id} reported breeder {breeder_id} ({report_type}) as {report_id}")
    return CreateReportResult(report_id=report_id, status=REPORT_PENDING)


def update_report_status(
    db: Database,
    breeder_id: str,
    report_id: str,
    new_status: str,
    admin_notes: str | None = None,
) -> tuple[dict[str, Any], bool]:
    """
    Move a report along its state machine.

    Returns:
        Tuple of (report, changed); changed is False when the report already
        held new_status

    Raises:
        NotFoundError: Report does not exist under the breeder
        ValidationError: Disallowed transition
        ConflictError: Report status changed concurrently
    """
    report = db.breeders.get_report(breeder_id, report_id)
    if report is None:
        raise NotFoundError(f"Report not found: {report_id}")

    current = report["status"]
    if not check_report_transition(current, new_status):
        return report, False

    fields: dict[str, Any] = {"status": new_status, "processed_at": now_ms()}
    if admin_notes is not None:
        fields["admin_notes"] = admin_notes

    updated = db.breeders.transition_report(breeder_id, report_id, current, fields)
    if updated is None:
        raise ConflictError("Report status changed, reload and retry", code="report_changed")

    logger.info(f"[report] {report_id}: {current} -> {new_status}")
    return updated, True
