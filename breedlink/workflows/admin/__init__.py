"""
Admin package.
"""

from .override_application_wf import override_application_status_workflow
from .user_status_wf import update_user_status_workflow

__all__ = [
    "override_application_status_workflow",
    "update_user_status_workflow",
]
