"""Breeder report workflows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from breedlink.components.admin import log_admin_activity, require_admin_permission
from breedlink.components.moderation import create_report, update_report_status
from breedlink.helpers.dto.moderation_dto import (
    REPORT_DISMISSED,
    REPORT_RESOLVED,
    CreateReportResult,
    ReportTransitionResult,
)

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)

_STATUS_ACTIONS = {
    REPORT_RESOLVED: "resolve_report",
    REPORT_DISMISSED: "dismiss_report",
}


def create_report_workflow(
    db: Database,
    reporter_id: str,
    breeder_id: str,
    report_type: str,
    description: str,
) -> CreateReportResult:
    """Adopter reports a breeder; the report starts pending."""
    return create_report(db, reporter_id, breeder_id, report_type, description)


def update_report_status_workflow(
    db: Database,
    admin_id: str,
    breeder_id: str,
    report_id: str,
    new_status: str,
    admin_notes: str | None = None,
) -> ReportTransitionResult:
    """
    Admin moves a report to reviewing, resolved or dismissed.

    Requires can_manage_reports. The permission check runs before anything
    is read, so a denied admin leaves the report untouched.
    """
    require_admin_permission(db, admin_id, "can_manage_reports")

    report, changed = update_report_status(db, breeder_id, report_id, new_status, admin_notes)
    if changed:
        action = _STATUS_ACTIONS.get(new_status, "mark_report_reviewing")
        log_admin_activity(
            db,
            admin_id,
            action,
            "report",
            report_id,
            report.get("breeder_name"),
            admin_notes and f"{action} performed on report {report_id}: {admin_notes}",
        )
    return ReportTransitionResult(report_id=report_id, status=report["status"], changed=changed)
