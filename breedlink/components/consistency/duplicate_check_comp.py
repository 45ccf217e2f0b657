"""Query-before-write duplicate checks.

These give a clean error on the common path. Concurrent writers that both
pass the check are stopped by the unique indexes created at bootstrap, which
persistence translates into the same ConflictError codes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from breedlink.helpers.exceptions import ConflictError

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def check_no_duplicate_pending_application(db: Database, adopter_id: str, breeder_id: str) -> None:
    """
    Reject a second pending application for the same (adopter, breeder) pair.

    Raises:
        ConflictError: code "application_already_pending"
    """
    existing = db.adoption_applications.find_pending_application(adopter_id, breeder_id)
    if existing is not None:
        logger.info(f"[duplicate_check] Pending application {existing['_key']} already exists for {adopter_id}:{breeder_id}")
        raise ConflictError(
            "A pending application to this breeder already exists",
            code="application_already_pending",
        )


def check_no_duplicate_review(db: Database, adopter_id: str, breeder_id: str) -> None:
    """
    Reject a second review of the same breeder by the same adopter.

    Raises:
        ConflictError: code "review_already_exists"
    """
    if db.breeder_reviews.find_review(adopter_id, breeder_id) is not None:
        raise ConflictError(
            "This breeder has already been reviewed by the adopter",
            code="review_already_exists",
        )
