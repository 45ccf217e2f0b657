"""Ledger status sync and read-model projection.

Order of writes for every status change:
1. ledger (compare-and-set on the status read just before)
2. completed adoption counter (guarded by the ledger's completed_counted flag)
3. breeder received_applications projection

The ledger is never rolled back. If step 2 or 3 fails, re-running the sync
with the current status repeats both; the guard keeps the count at one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from breedlink.components.application.application_transition_comp import check_transition
from breedlink.components.consistency.adoption_counter_comp import count_completed_adoption
from breedlink.helpers.dto.application_dto import ADOPTION_APPROVED
from breedlink.helpers.exceptions import ConflictError, NotFoundError, ProjectionError

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)

# Re-read/re-validate rounds before giving up on a contended application
CAS_MAX_ATTEMPTS = 5

_PROJECTED_FIELDS = (
    "adopter_id",
    "adopter_name",
    "pet_id",
    "pet_name",
    "status",
    "applied_at",
    "processed_at",
)


@dataclass
class SyncOutcome:
    """What sync_application_status did."""

    application: dict[str, Any]
    prior_status: str
    changed: bool
    counted: bool = False


def build_received_entry(application: dict[str, Any]) -> dict[str, Any]:
    """Map a ledger document to its received_applications entry."""
    entry = {"application_id": application["_key"]}
    for key in _PROJECTED_FIELDS:
        entry[key] = application.get(key)
    return entry


def project_application(db: Database, application: dict[str, Any]) -> bool:
    """
    Project one ledger record into the breeder's received_applications.

    Upserts by application_id, so it is safe to repeat.

    Args:
        db: Database instance
        application: Ledger document

    Returns:
        True if a new entry was appended, False if an existing one was updated

    Raises:
        ProjectionError: The breeder write failed or the breeder is gone
    """
    application_id = application["_key"]
    breeder_id = application["breeder_id"]
    try:
        appended = db.breeders.project_received_application(breeder_id, build_received_entry(application))
    except Exception as e:
        logger.error(f"[application_sync] Projection of {application_id} into breeder {breeder_id} failed: {e}")
        raise ProjectionError(
            f"Application {application_id} saved but breeder view not updated: {e}",
            application_id=application_id,
        ) from e

    if appended is None:
        logger.error(f"[application_sync] Breeder {breeder_id} missing while projecting {application_id}")
        raise ProjectionError(
            f"Application {application_id} saved but breeder {breeder_id} was not found",
            application_id=application_id,
        )
    return appended


def sync_application_status(
    db: Database,
    application_id: str,
    new_status: str,
    notes: str | None = None,
) -> SyncOutcome:
    """
    Move a ledger record to new_status and propagate the change.

    Re-invoking with the status the application already holds is a no-op
    that re-runs the counter step and the projection (read-repair).

    Args:
        db: Database instance
        application_id: Ledger _key
        new_status: Target status
        notes: Optional breeder notes stored with the transition

    Returns:
        SyncOutcome with the updated ledger document

    Raises:
        NotFoundError: Application does not exist
        ValidationError: Unknown status or disallowed transition
        ConflictError: Status kept changing under us for CAS_MAX_ATTEMPTS rounds
        ProjectionError: Ledger and counter updated, read model not
    """
    for attempt in range(1, CAS_MAX_ATTEMPTS + 1):
        application = db.adoption_applications.get_application(application_id)
        if application is None:
            raise NotFoundError(f"Application not found: {application_id}")

        current_status = application["status"]
        if not check_transition(current_status, new_status):
            logger.debug(f"[application_sync] {application_id} already {new_status}, re-projecting")
            counted = current_status == ADOPTION_APPROVED and count_completed_adoption(db, application_id)
            project_application(db, application)
            return SyncOutcome(application=application, prior_status=current_status, changed=False, counted=counted)

        updated = db.adoption_applications.compare_and_set_status(application_id, current_status, new_status, notes)
        if updated is None:
            logger.info(
                f"[application_sync] {application_id} changed concurrently "
                f"(was {current_status}), retrying {attempt}/{CAS_MAX_ATTEMPTS}"
            )
            continue

        logger.info(f"[application_sync] {application_id}: {current_status} -> {new_status}")

        counted = False
        if new_status == ADOPTION_APPROVED:
            counted = count_completed_adoption(db, application_id)

        project_application(db, updated)
        return SyncOutcome(application=updated, prior_status=current_status, changed=True, counted=counted)

    raise ConflictError(
        f"Application {application_id} is being updated concurrently, try again",
        code="application_status_contended",
    )
