"""Admin user status management workflow."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from breedlink.components.admin import log_admin_activity, require_admin_permission
from breedlink.helpers.dto.admin_dto import ACCOUNT_STATUSES, USER_ROLES, UserStatusResult
from breedlink.helpers.exceptions import NotFoundError, ValidationError

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def update_user_status_workflow(
    db: Database,
    admin_id: str,
    user_id: str,
    role: str,
    account_status: str,
    reason: str | None = None,
) -> UserStatusResult:
    """
    Suspend, reactivate or delete an adopter or breeder account.

    Requires can_manage_users. Logs activate_user for "active" and
    suspend_user for "suspended" / "deleted".

    Raises:
        ForbiddenError: Permission check failed
        ValidationError: Unknown role or status
        NotFoundError: User does not exist
    """
    require_admin_permission(db, admin_id, "can_manage_users")

    if role not in USER_ROLES:
        raise ValidationError(f"Unknown user role: {role}", code="invalid_role")
    if account_status not in ACCOUNT_STATUSES:
        raise ValidationError(f"Unknown account status: {account_status}", code="invalid_status")

    if role == "adopter":
        user = db.adopters.get_adopter(user_id)
        updated = user is not None and db.adopters.set_account_status(user_id, account_status)
    else:
        user = db.breeders.get_breeder(user_id)
        updated = user is not None and db.breeders.set_account_status(user_id, account_status)
    if user is None or not updated:
        raise NotFoundError(f"{role.capitalize()} not found: {user_id}")

    logger.info(f"[update_user_status_wf] {role} {user_id} -> {account_status} by {admin_id}")

    action = "activate_user" if account_status == "active" else "suspend_user"
    description = f"{action} performed on {role} {user.get('name') or user_id}"
    if reason:
        description = f"{description}: {reason}"
    log_admin_activity(db, admin_id, action, role, user_id, user.get("name"), description)

    return UserStatusResult(user_id=user_id, role=role, account_status=account_status)
