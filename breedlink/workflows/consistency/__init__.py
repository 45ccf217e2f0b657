"""
Consistency package.
"""

from .reconcile_wf import reconcile_breeder_stats_workflow, repair_application_mirror_workflow

__all__ = ["reconcile_breeder_stats_workflow", "repair_application_mirror_workflow"]
