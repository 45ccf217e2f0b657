"""Completed adoption counter maintenance.

stats.completed_adoptions must equal the number of ledger applications in
adoption_approved for the breeder. Each approved application carries a
`completed_counted` flag; the live path flips it together with the counter
increment, so repeating the step after a failure counts the adoption exactly
once. Reconciliation recomputes the value from the ledger.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from breedlink.helpers.dto.application_dto import ADOPTION_APPROVED
from breedlink.helpers.exceptions import NotFoundError

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def count_completed_adoption(db: Database, application_id: str) -> bool:
    """
    Count an approved application towards its breeder's completed adoptions.

    Safe to call any number of times for the same application.

    Args:
        db: Database instance
        application_id: Ledger _key of an adoption_approved application

    Returns:
        True if this call incremented the counter
    """
    result = db.adoption_applications.count_completed_adoption(application_id)
    if result is None:
        logger.debug(f"[adoption_counter] {application_id}: not approved or already counted")
        return False

    breeder_id = result["breeder_id"]
    if result["completed_adoptions"] is None:
        logger.warning(f"[adoption_counter] Breeder {breeder_id} not found, {application_id} not counted")
        return False

    logger.info(
        f"[adoption_counter] {breeder_id}: completed_adoptions -> {result['completed_adoptions']} ({application_id})"
    )
    return True


def reconcile_completed_adoptions(db: Database, breeder_id: str) -> tuple[int, int]:
    """
    Recompute stats.completed_adoptions from the ledger.

    Pending `completed_counted` guards are settled first so a later retry of
    the live step cannot count an approval the recomputed value already holds.

    Returns:
        Tuple of (value_before, value_after)

    Raises:
        NotFoundError: Breeder does not exist
    """
    breeder = db.breeders.get_breeder(breeder_id)
    if breeder is None:
        raise NotFoundError(f"Breeder not found: {breeder_id}")

    settled = db.adoption_applications.settle_completed_counts(breeder_id)
    if settled:
        logger.info(f"[adoption_counter] {breeder_id}: settled {settled} uncounted approval(s)")

    before = int((breeder.get("stats") or {}).get("completed_adoptions") or 0)
    after = db.adoption_applications.count_by_status(breeder_id).get(ADOPTION_APPROVED, 0)

    if before != after:
        logger.warning(f"[adoption_counter] {breeder_id}: completed_adoptions drifted ({before} != {after}), repairing")
        db.breeders.set_completed_adoptions(breeder_id, after)

    return before, after
