"""Advance application status workflow (breeder action)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from breedlink.components.application import sync_application_status
from breedlink.helpers.dto.application_dto import AdvanceApplicationResult
from breedlink.helpers.exceptions import ForbiddenError, NotFoundError

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def advance_application_workflow(
    db: Database,
    breeder_id: str,
    application_id: str,
    new_status: str,
    notes: str | None = None,
) -> AdvanceApplicationResult:
    """
    Move one of the breeder's applications to new_status.

    Safe to retry: repeating the status the application already holds
    returns changed=False and re-projects the breeder view.

    Raises:
        NotFoundError: Application does not exist
        ForbiddenError: Application belongs to another breeder
        ValidationError: Unknown status or disallowed transition
        ProjectionError: Ledger updated, breeder view not
    """
    application = db.adoption_applications.get_application(application_id)
    if application is None:
        raise NotFoundError(f"Application not found: {application_id}")
    if application["breeder_id"] != breeder_id:
        logger.warning(f"[advance_application_wf] Breeder {breeder_id} tried to advance {application_id}")
        raise ForbiddenError("Application belongs to another breeder")

    outcome = sync_application_status(db, application_id, new_status, notes)
    return AdvanceApplicationResult(
        application_id=application_id,
        status=outcome.application["status"],
        changed=outcome.changed,
    )
