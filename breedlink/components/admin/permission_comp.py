"""Admin permission checks.

The calling layer authenticates the admin; permission flags are re-checked
here against the stored admin document on every privileged action.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from breedlink.helpers.exceptions import ForbiddenError

if TYPE_CHECKING:
    from breedlink.helpers.dto.admin_dto import AdminPermission
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def require_active_admin(db: Database, admin_id: str, action: str = "an admin read") -> dict[str, Any]:
    """
    Load an active admin, whatever their permission flags.

    Raises:
        ForbiddenError: Admin missing or not active
    """
    admin = db.admins.get_admin(admin_id)
    if admin is None:
        logger.warning(f"[permission] Unknown admin {admin_id} attempted {action}")
        raise ForbiddenError("Admin account not found")
    if admin.get("status", "active") != "active":
        logger.warning(f"[permission] Inactive admin {admin_id} attempted {action}")
        raise ForbiddenError("Admin account is not active")
    return admin


def require_admin_permission(db: Database, admin_id: str, permission: AdminPermission) -> dict[str, Any]:
    """
    Load an active admin holding permission.

    Returns:
        Admin document (without activity logs)

    Raises:
        ForbiddenError: Admin missing, not active, or lacking the permission
    """
    admin = require_active_admin(db, admin_id, permission)
    if not (admin.get("permissions") or {}).get(permission):
        logger.warning(f"[permission] Admin {admin_id} lacks {permission}")
        raise ForbiddenError(f"Missing permission: {permission}", code="permission_denied")
    return admin
