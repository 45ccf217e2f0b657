"""Review takedown and review report flags.

Visibility only goes visible -> hidden. Every visibility change is followed
by a review stats recalculation for the breeder.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from breedlink.components.consistency.review_stats_comp import recalculate_review_stats
from breedlink.helpers.dto.moderation_dto import ReviewModerationResult
from breedlink.helpers.exceptions import ConflictError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def _get_review_or_raise(db: Database, review_id: str) -> dict[str, Any]:
    review = db.breeder_reviews.get_review(review_id)
    if review is None:
        raise NotFoundError(f"Review not found: {review_id}")
    return review


def _result(review: dict[str, Any], changed: bool) -> ReviewModerationResult:
    return ReviewModerationResult(
        review_id=review["_key"],
        is_visible=bool(review.get("is_visible", True)),
        is_reported=bool(review.get("is_reported", False)),
        changed=changed,
    )


def hide_review(db: Database, review_id: str) -> tuple[dict[str, Any], ReviewModerationResult]:
    """
    Soft-delete a review. Hiding a hidden review is a no-op success.

    Stats are recomputed on no-ops as well, so repeating the call repairs
    stats left stale by a failed recalculation.

    Returns:
        Tuple of (review document, result)
    """
    review = _get_review_or_raise(db, review_id)
    changed = False
    if review.get("is_visible", True):
        updated = db.breeder_reviews.hide_review(review_id)
        if updated is None:
            # Hidden by a concurrent request
            review = _get_review_or_raise(db, review_id)
        else:
            review, changed = updated, True

    stats = recalculate_review_stats(db, review["breeder_id"])
    if changed:
        logger.info(
            f"[review_visibility] Hid review {review_id}; breeder {review['breeder_id']} "
            f"now avg={stats.average_rating} total={stats.total_reviews}"
        )
    return review, _result(review, changed=changed)


def flag_review(
    db: Database,
    review_id: str,
    reporter_id: str,
    reason: str,
    description: str,
) -> ReviewModerationResult:
    """
    Flag a review for admin attention.

    Raises:
        NotFoundError: Review or reporter does not exist
        ValidationError: Reporter is the author, or reason missing
        ConflictError: code "review_already_reported"
    """
    if db.adopters.get_adopter(reporter_id) is None:
        raise NotFoundError(f"Adopter not found: {reporter_id}")
    review = _get_review_or_raise(db, review_id)
    if review["adopter_id"] == reporter_id:
        raise ValidationError("You cannot report your own review", code="cannot_report_own_review")
    if not reason or not reason.strip():
        raise ValidationError("Report reason is required", code="reason_required")
    if review.get("is_reported"):
        raise ConflictError("Review has already been reported", code="review_already_reported")

    updated = db.breeder_reviews.flag_review(review_id, reporter_id, reason.strip(), (description or "").strip())
    if updated is None:
        raise ConflictError("Review has already been reported", code="review_already_reported")

    logger.info(f"[review_visibility] Review {review_id} reported by {reporter_id}: {reason}")
    return _result(updated, changed=True)


def dismiss_review_report(db: Database, review_id: str) -> tuple[dict[str, Any], ReviewModerationResult]:
    """Clear a review's report flag; the review stays visible."""
    review = _get_review_or_raise(db, review_id)
    if not review.get("is_reported"):
        return review, _result(review, changed=False)

    updated = db.breeder_reviews.clear_report_flag(review_id)
    if updated is None:
        latest = _get_review_or_raise(db, review_id)
        return latest, _result(latest, changed=False)

    logger.info(f"[review_visibility] Dismissed report on review {review_id}")
    return updated, _result(updated, changed=True)
