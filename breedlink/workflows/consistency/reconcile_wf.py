"""Consistency maintenance workflows (read-repair and counter reconciliation)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from breedlink.components.application import build_received_entry, project_application
from breedlink.components.consistency import recalculate_review_stats, reconcile_completed_adoptions
from breedlink.helpers.dto.breeder_dto import ReconcileResult
from breedlink.helpers.exceptions import NotFoundError

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def repair_application_mirror_workflow(db: Database, application_id: str) -> bool:
    """
    Re-project one ledger record into the breeder's received_applications.

    An entry that already matches the ledger is left untouched.

    Returns:
        True if the entry was missing and has been appended

    Raises:
        NotFoundError: Application does not exist
        ProjectionError: The breeder write failed again
    """
    application = db.adoption_applications.get_application(application_id)
    if application is None:
        raise NotFoundError(f"Application not found: {application_id}")
    current = db.breeders.get_received_application(application["breeder_id"], application_id)
    if current == build_received_entry(application):
        logger.debug(f"[reconcile_wf] Breeder view of {application_id} is current")
        return False

    appended = project_application(db, application)
    if appended:
        logger.warning(f"[reconcile_wf] Application {application_id} was missing from breeder view, restored")
    return appended


def reconcile_breeder_stats_workflow(db: Database, breeder_id: str) -> ReconcileResult:
    """Recompute completed adoptions from the ledger and review stats from visible reviews."""
    before, after = reconcile_completed_adoptions(db, breeder_id)
    stats = recalculate_review_stats(db, breeder_id)
    logger.info(
        f"[reconcile_wf] {breeder_id}: completed_adoptions {before} -> {after}, "
        f"avg={stats.average_rating} total={stats.total_reviews}"
    )
    return ReconcileResult(
        breeder_id=breeder_id,
        completed_adoptions_before=before,
        completed_adoptions_after=after,
        average_rating=stats.average_rating,
        total_reviews=stats.total_reviews,
    )
