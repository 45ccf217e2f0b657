"""Review creation.

An adopter may review a breeder once, and only after a consultation took
place: some application to the breeder must be past consultation_pending.
The same rule applies to consultation and adoption reviews.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

from breedlink.components.consistency.duplicate_check_comp import check_no_duplicate_review
from breedlink.helpers.dto.application_dto import ADOPTION_APPROVED, ADOPTION_REJECTED, CONSULTATION_COMPLETED
from breedlink.helpers.dto.moderation_dto import REVIEW_TYPES
from breedlink.helpers.exceptions import NotFoundError, ValidationError
from breedlink.helpers.time_helper import now_ms

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5

_PAST_CONSULTATION = [CONSULTATION_COMPLETED, ADOPTION_APPROVED, ADOPTION_REJECTED]


def validate_rating(rating: Any) -> int:
    # bool is an int subclass; True must not pass as a rating of 1
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Rating must be an integer", code="invalid_rating")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}", code="invalid_rating")
    return rating


def check_review_eligibility(db: Database, adopter_id: str, breeder_id: str, review_type: str) -> None:
    """
    Raises:
        ValidationError: Unknown review type, or no application past consultation_pending
    """
    if review_type not in REVIEW_TYPES:
        raise ValidationError(f"Unknown review type: {review_type}", code="invalid_review_type")

    if not db.adoption_applications.has_application_with_status(adopter_id, breeder_id, _PAST_CONSULTATION):
        raise ValidationError("A completed consultation is required before writing a review", code="review_not_allowed")


def create_review(
    db: Database,
    adopter_id: str,
    breeder_id: str,
    review_type: str,
    rating: Any,
    content: str,
) -> str:
    """
    Store a new visible review.

    Returns:
        Review _key

    Raises:
        NotFoundError: Adopter or breeder does not exist
        ValidationError: Bad rating/content or not eligible
        ConflictError: code "review_already_exists"
    """
    adopter = db.adopters.get_adopter(adopter_id)
    if adopter is None:
        raise NotFoundError(f"Adopter not found: {adopter_id}")
    if db.breeders.get_breeder(breeder_id) is None:
        raise NotFoundError(f"Breeder not found: {breeder_id}")

    validate_rating(rating)
    if not content or not content.strip():
        raise ValidationError("Review content is required", code="content_required")
    check_review_eligibility(db, adopter_id, breeder_id, review_type)
    check_no_duplicate_review(db, adopter_id, breeder_id)

    review_id = uuid.uuid4().hex
    db.breeder_reviews.insert_review(
        {
            "_key": review_id,
            "breeder_id": breeder_id,
            "adopter_id": adopter_id,
            "adopter_name": adopter.get("name"),
            "type": review_type,
            "rating": rating,
            "content": content.strip(),
            "written_at": now_ms(),
            "is_visible": True,
            "is_reported": False,
        }
    )
    logger.info(f"[review] {adopter_id} reviewed breeder {breeder_id} ({review_type}, {rating}) as {review_id}")
    return review_id
