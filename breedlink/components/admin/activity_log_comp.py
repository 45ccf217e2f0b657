"""Admin activity log (append-only audit trail).

Logging is best-effort: if the admin cannot be loaded or the append fails,
the entry is skipped with a warning and the parent mutation still stands.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from breedlink.helpers.dto.admin_dto import ADMIN_ACTIONS, ADMIN_TARGET_TYPES, ActivityLogEntry
from breedlink.helpers.time_helper import now_ms

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def default_description(action: str, target_type: str, target_id: str, target_name: str | None = None) -> str:
    return f"{action} performed on {target_type} {target_name or target_id}"


def log_admin_activity(
    db: Database,
    admin_id: str,
    action: str,
    target_type: str,
    target_id: str,
    target_name: str | None = None,
    description: str | None = None,
) -> bool:
    """
    Append one entry to the admin's activity log.

    Returns:
        True if the entry was stored, False if it was skipped
    """
    if action not in ADMIN_ACTIONS or target_type not in ADMIN_TARGET_TYPES:
        logger.warning(f"[activity_log] Skipping unknown action/target {action}/{target_type} by {admin_id}")
        return False

    entry = {
        "log_id": str(uuid.uuid4()),
        "action": action,
        "target_type": target_type,
        "target_id": target_id,
        "target_name": target_name,
        "description": description or default_description(action, target_type, target_id, target_name),
        "performed_at": now_ms(),
    }
    try:
        if db.admins.get_admin(admin_id) is None:
            logger.warning(f"[activity_log] Admin {admin_id} not found, {action} on {target_id} not logged")
            return False
        if not db.admins.append_activity_log(admin_id, entry):
            logger.warning(f"[activity_log] Admin {admin_id} vanished, {action} on {target_id} not logged")
            return False
    except Exception as e:
        logger.warning(f"[activity_log] Failed to log {action} on {target_id} for {admin_id}: {e}")
        return False

    logger.debug(f"[activity_log] {admin_id}: {entry['description']}")
    return True


def list_activity_logs(db: Database, admin_id: str, limit: int) -> list[ActivityLogEntry]:
    """Newest entries first."""
    return [ActivityLogEntry.from_doc(entry) for entry in db.admins.list_activity_logs(admin_id, limit)]
