"""Admin application status override workflow."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from breedlink.components.admin import log_admin_activity, require_admin_permission
from breedlink.components.application import sync_application_status
from breedlink.helpers.dto.application_dto import AdvanceApplicationResult

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def override_application_status_workflow(
    db: Database,
    admin_id: str,
    application_id: str,
    new_status: str,
    notes: str | None = None,
) -> AdvanceApplicationResult:
    """
    Admin moves an application without the ownership check.

    Requires can_manage_breeders. The transition table still applies, and
    the counter and breeder view are maintained exactly as for a breeder
    action.
    """
    require_admin_permission(db, admin_id, "can_manage_breeders")

    outcome = sync_application_status(db, application_id, new_status, notes)
    if outcome.changed:
        log_admin_activity(
            db,
            admin_id,
            "override_application",
            "application",
            application_id,
            outcome.application.get("adopter_name"),
            f"override_application performed on application {application_id}: "
            f"{outcome.prior_status} -> {new_status}",
        )
    return AdvanceApplicationResult(
        application_id=application_id,
        status=outcome.application["status"],
        changed=outcome.changed,
    )
