"""
Workflows package.
"""

from .application import advance_application_workflow, submit_application_workflow
from .consistency import reconcile_breeder_stats_workflow, repair_application_mirror_workflow

__all__ = [
    "advance_application_workflow",
    "reconcile_breeder_stats_workflow",
    "repair_application_mirror_workflow",
    "submit_application_workflow",
]
