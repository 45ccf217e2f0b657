"""
Moderation package.
"""

from .report_comp import REPORT_TRANSITIONS, check_report_transition, create_report, update_report_status
from .review_comp import MAX_RATING, MIN_RATING, check_review_eligibility, create_review, validate_rating
from .review_visibility_comp import dismiss_review_report, flag_review, hide_review
from .verification_comp import DECISIONS, SUBMITTABLE_FROM, decide_verification, submit_verification

__all__ = [
    "DECISIONS",
    "MAX_RATING",
    "MIN_RATING",
    "REPORT_TRANSITIONS",
    "SUBMITTABLE_FROM",
    "check_report_transition",
    "check_review_eligibility",
    "create_report",
    "create_review",
    "decide_verification",
    "dismiss_review_report",
    "flag_review",
    "hide_review",
    "submit_verification",
    "update_report_status",
    "validate_rating",
]
