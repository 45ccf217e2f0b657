"""Review workflows: creation, reports and takedown."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from breedlink.components.admin import log_admin_activity, require_admin_permission
from breedlink.components.consistency import recalculate_review_stats
from breedlink.components.moderation import create_review, dismiss_review_report, flag_review, hide_review
from breedlink.helpers.dto.moderation_dto import CreateReviewResult, ReviewModerationResult
from breedlink.helpers.exceptions import ConflictError

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def create_review_workflow(
    db: Database,
    adopter_id: str,
    breeder_id: str,
    review_type: str,
    rating: Any,
    content: str,
) -> CreateReviewResult:
    """
    Adopter writes a review; the breeder's review stats are recomputed.

    A repeated create that hits review_already_exists recomputes the stats
    before re-raising, which repairs a recalculation that failed the first time.

    Returns:
        CreateReviewResult with the breeder's updated average and count
    """
    try:
        review_id = create_review(db, adopter_id, breeder_id, review_type, rating, content)
    except ConflictError as e:
        if e.code == "review_already_exists":
            recalculate_review_stats(db, breeder_id)
        raise
    stats = recalculate_review_stats(db, breeder_id)
    return CreateReviewResult(
        review_id=review_id,
        average_rating=stats.average_rating,
        total_reviews=stats.total_reviews,
    )


def report_review_workflow(
    db: Database,
    reporter_id: str,
    review_id: str,
    reason: str,
    description: str = "",
) -> ReviewModerationResult:
    """Adopter flags someone else's review for admin attention."""
    return flag_review(db, review_id, reporter_id, reason, description)


def hide_review_workflow(db: Database, admin_id: str, review_id: str, reason: str | None = None) -> ReviewModerationResult:
    """
    Admin soft-deletes a review (requires can_manage_reports).

    Logs delete_review when the review was visible.
    """
    require_admin_permission(db, admin_id, "can_manage_reports")

    review, result = hide_review(db, review_id)
    if result.changed:
        description = f"delete_review performed on review {review_id}: {reason}" if reason else None
        log_admin_activity(db, admin_id, "delete_review", "review", review_id, review.get("adopter_name"), description)
    return result


def dismiss_review_report_workflow(db: Database, admin_id: str, review_id: str) -> ReviewModerationResult:
    """Admin clears a review's report flag (requires can_manage_reports)."""
    require_admin_permission(db, admin_id, "can_manage_reports")

    review, result = dismiss_review_report(db, review_id)
    if result.changed:
        log_admin_activity(db, admin_id, "dismiss_report", "review", review_id, review.get("adopter_name"))
    return result
