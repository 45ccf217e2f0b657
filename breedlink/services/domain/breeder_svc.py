"""Breeder service - received applications, verification, dashboard and public profile."""

from __future__ import annotations

import logging
from typing import Any

from breedlink.helpers.dto.application_dto import (
    CONSULTATION_PENDING,
    AdvanceApplicationResult,
    Application,
    ReceivedApplication,
    ReceivedApplicationListResult,
)
from breedlink.helpers.dto.breeder_dto import BreederDashboard, BreederStats, PublicBreederProfile
from breedlink.helpers.dto.config_dto import EngineConfig
from breedlink.helpers.dto.moderation_dto import (
    VERIFICATION_APPROVED,
    Review,
    ReviewListResult,
    VerificationInfo,
    VerificationResult,
)
from breedlink.helpers.exceptions import ForbiddenError, NotFoundError
from breedlink.helpers.logging_helper import log_context
from breedlink.helpers.paging_helper import clamp_page
from breedlink.persistence.db import Database
from breedlink.services.domain._breeder_mapping import map_public_profile
from breedlink.workflows.application import advance_application_workflow
from breedlink.workflows.moderation import submit_verification_workflow

logger = logging.getLogger(__name__)


class BreederService:
    """Operations performed by a breeder, plus the public breeder reads."""

    def __init__(self, db: Database, cfg: EngineConfig):
        self.db = db
        self.cfg = cfg

    def _get_breeder(self, breeder_id: str) -> dict[str, Any]:
        breeder = self.db.breeders.get_breeder(breeder_id)
        if breeder is None:
            raise NotFoundError(f"Breeder not found: {breeder_id}")
        return breeder

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def advance_application(
        self,
        breeder_id: str,
        application_id: str,
        new_status: str,
        notes: str | None = None,
    ) -> AdvanceApplicationResult:
        with log_context(actor=breeder_id, application=application_id):
            return advance_application_workflow(self.db, breeder_id, application_id, new_status, notes)

    def list_received_applications(
        self,
        breeder_id: str,
        status: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> ReceivedApplicationListResult:
        """Received applications from the breeder's read model, newest first."""
        self._get_breeder(breeder_id)
        skip, limit = clamp_page(skip, limit, self.cfg.default_page_size, self.cfg.max_page_size)
        entries = self.db.breeders.list_received_applications(breeder_id, status=status, skip=skip, limit=limit)
        return ReceivedApplicationListResult(
            applications=[ReceivedApplication.from_doc(e) for e in entries],
            total=self.db.breeders.count_received_applications(breeder_id, status=status),
            skip=skip,
            limit=limit,
        )

    def get_application(self, breeder_id: str, application_id: str) -> Application:
        """Full application (with form answers) from the ledger."""
        doc = self.db.adoption_applications.get_application(application_id)
        if doc is None:
            raise NotFoundError(f"Application not found: {application_id}")
        if doc["breeder_id"] != breeder_id:
            raise ForbiddenError("Application belongs to another breeder")
        return Application.from_doc(doc)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def submit_verification(
        self,
        breeder_id: str,
        plan: str,
        documents: list[dict[str, Any]],
        submitted_by_email: bool = False,
    ) -> VerificationResult:
        with log_context(actor=breeder_id):
            return submit_verification_workflow(self.db, breeder_id, plan, documents, submitted_by_email)

    def get_verification_status(self, breeder_id: str) -> VerificationInfo:
        return VerificationInfo.from_doc(self._get_breeder(breeder_id).get("verification"))

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def get_dashboard(self, breeder_id: str) -> BreederDashboard:
        """
        Breeder's own dashboard.

        The pending count comes from the ledger; the recent list comes from
        the read model.
        """
        breeder = self._get_breeder(breeder_id)
        pending = self.db.adoption_applications.count_by_status(breeder_id).get(CONSULTATION_PENDING, 0)
        recent = self.db.breeders.list_received_applications(breeder_id, skip=0, limit=self.cfg.dashboard_recent_count)
        return BreederDashboard(
            breeder_id=breeder_id,
            verification=VerificationInfo.from_doc(breeder.get("verification")),
            stats=BreederStats.from_doc(breeder.get("stats")),
            pending_applications=pending,
            recent_applications=[ReceivedApplication.from_doc(e) for e in recent],
        )

    # ------------------------------------------------------------------
    # Public reads (approved, active breeders only)
    # ------------------------------------------------------------------

    def _get_public_breeder(self, breeder_id: str) -> dict[str, Any]:
        breeder = self.db.breeders.get_breeder(breeder_id)
        if (
            breeder is None
            or breeder.get("status", "active") != "active"
            or VerificationInfo.from_doc(breeder.get("verification")).status != VERIFICATION_APPROVED
        ):
            raise NotFoundError(f"Breeder not found: {breeder_id}")
        return breeder

    def get_public_profile(self, breeder_id: str) -> PublicBreederProfile:
        """Public profile; each read counts as a profile view."""
        breeder = self._get_public_breeder(breeder_id)
        self.db.breeders.increment_profile_views(breeder_id)
        return map_public_profile(breeder)

    def list_public_reviews(
        self,
        breeder_id: str,
        skip: int | None = None,
        limit: int | None = None,
    ) -> ReviewListResult:
        self._get_public_breeder(breeder_id)
        skip, limit = clamp_page(skip, limit, self.cfg.default_page_size, self.cfg.max_page_size)
        docs = self.db.breeder_reviews.list_visible_for_breeder(breeder_id, skip=skip, limit=limit)
        return ReviewListResult(
            reviews=[Review.from_doc(d) for d in docs],
            total=self.db.breeder_reviews.count_visible(breeder_id),
            skip=skip,
            limit=limit,
        )
