"""
Application package.
"""

from .advance_application_wf import advance_application_workflow
from .submit_application_wf import submit_application_workflow

__all__ = [
    "advance_application_workflow",
    "submit_application_workflow",
]
