"""
Application package.
"""

from .application_form_comp import ApplicationFormAnswers, validate_form_answers
from .application_sync_comp import (
    CAS_MAX_ATTEMPTS,
    SyncOutcome,
    build_received_entry,
    project_application,
    sync_application_status,
)
from .application_transition_comp import ALLOWED_TRANSITIONS, check_transition

__all__ = [
    "ALLOWED_TRANSITIONS",
    "CAS_MAX_ATTEMPTS",
    "ApplicationFormAnswers",
    "SyncOutcome",
    "build_received_entry",
    "check_transition",
    "project_application",
    "sync_application_status",
    "validate_form_answers",
]
