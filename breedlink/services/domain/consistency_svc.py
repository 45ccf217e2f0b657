"""Consistency service - read-repair and counter reconciliation."""

from __future__ import annotations

import logging

from breedlink.components.consistency import recalculate_review_stats
from breedlink.helpers.dto.breeder_dto import ReconcileResult
from breedlink.helpers.dto.moderation_dto import ReviewStats
from breedlink.persistence.db import Database
from breedlink.workflows.consistency import reconcile_breeder_stats_workflow, repair_application_mirror_workflow

logger = logging.getLogger(__name__)


class ConsistencyService:
    """Maintenance entry points for drifted read models and counters."""

    def __init__(self, db: Database):
        self.db = db

    def repair_application_mirror(self, application_id: str) -> bool:
        return repair_application_mirror_workflow(self.db, application_id)

    def reconcile_breeder_stats(self, breeder_id: str) -> ReconcileResult:
        return reconcile_breeder_stats_workflow(self.db, breeder_id)

    def recalculate_review_stats(self, breeder_id: str) -> ReviewStats:
        return recalculate_review_stats(self.db, breeder_id)
