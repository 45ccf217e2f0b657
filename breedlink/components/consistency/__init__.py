"""
Consistency package.
"""

from .adoption_counter_comp import count_completed_adoption, reconcile_completed_adoptions
from .duplicate_check_comp import check_no_duplicate_pending_application, check_no_duplicate_review
from .favorite_comp import add_favorite, format_location, remove_favorite
from .review_stats_comp import RATING_PRECISION, compute_average_rating, recalculate_review_stats

__all__ = [
    "RATING_PRECISION",
    "add_favorite",
    "check_no_duplicate_pending_application",
    "check_no_duplicate_review",
    "compute_average_rating",
    "count_completed_adoption",
    "format_location",
    "recalculate_review_stats",
    "reconcile_completed_adoptions",
    "remove_favorite",
]
