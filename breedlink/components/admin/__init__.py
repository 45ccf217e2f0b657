"""
Admin package.
"""

from .activity_log_comp import default_description, list_activity_logs, log_admin_activity
from .permission_comp import require_active_admin, require_admin_permission

__all__ = [
    "default_description",
    "list_activity_logs",
    "log_admin_activity",
    "require_active_admin",
    "require_admin_permission",
]
