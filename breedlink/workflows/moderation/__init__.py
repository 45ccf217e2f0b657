"""
Moderation package.
"""

from .report_wf import create_report_workflow, update_report_status_workflow
from .review_wf import (
    create_review_workflow,
    dismiss_review_report_workflow,
    hide_review_workflow,
    report_review_workflow,
)
from .verification_wf import decide_verification_workflow, submit_verification_workflow

__all__ = [
    "create_report_workflow",
    "create_review_workflow",
    "decide_verification_workflow",
    "dismiss_review_report_workflow",
    "hide_review_workflow",
    "report_review_workflow",
    "submit_verification_workflow",
    "update_report_status_workflow",
]
