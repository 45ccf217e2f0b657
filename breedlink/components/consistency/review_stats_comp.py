"""Review statistics derived from visible reviews."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from breedlink.helpers.dto.moderation_dto import ReviewStats

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)

RATING_PRECISION = Decimal("0.1")


def compute_average_rating(review_count: int, rating_sum: int) -> float:
    """
    Average rating rounded half-up to one decimal.

    >>> compute_average_rating(2, 9)
    4.5
    >>> compute_average_rating(0, 0)
    0.0
    """
    if review_count <= 0:
        return 0.0
    average = Decimal(rating_sum) / Decimal(review_count)
    return float(average.quantize(RATING_PRECISION, rounding=ROUND_HALF_UP))


def recalculate_review_stats(db: Database, breeder_id: str) -> ReviewStats:
    """
    Recompute and store the breeder's review stats from visible reviews.

    Call after review creation, takedown or any visibility change.
    """
    review_count, rating_sum = db.breeder_reviews.visible_rating_summary(breeder_id)
    stats = ReviewStats(
        average_rating=compute_average_rating(review_count, rating_sum),
        total_reviews=review_count,
    )
    if not db.breeders.set_review_stats(breeder_id, stats.average_rating, stats.total_reviews):
        logger.warning(f"[review_stats] Breeder {breeder_id} not found, review stats not stored")
    else:
        logger.debug(f"[review_stats] {breeder_id}: avg={stats.average_rating} total={stats.total_reviews}")
    return stats
