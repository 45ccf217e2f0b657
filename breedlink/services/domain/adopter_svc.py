"""Adopter service - the adopter's side of applications, favorites, reviews and reports."""

from __future__ import annotations

import logging
from typing import Any

from breedlink.helpers.dto.application_dto import Application, ApplicationListResult, SubmitApplicationResult
from breedlink.helpers.dto.breeder_dto import FavoriteBreeder, FavoriteListResult, FavoriteResult
from breedlink.helpers.dto.config_dto import EngineConfig
from breedlink.helpers.dto.moderation_dto import CreateReportResult, CreateReviewResult, ReviewModerationResult
from breedlink.helpers.exceptions import ForbiddenError, NotFoundError
from breedlink.helpers.logging_helper import log_context
from breedlink.helpers.paging_helper import clamp_page
from breedlink.persistence.db import Database
from breedlink.workflows.application import submit_application_workflow
from breedlink.workflows.favorites import add_favorite_workflow, remove_favorite_workflow
from breedlink.workflows.moderation import create_report_workflow, create_review_workflow, report_review_workflow

logger = logging.getLogger(__name__)


class AdopterService:
    """Operations performed by (or on behalf of) an adopter."""

    def __init__(self, db: Database, cfg: EngineConfig):
        self.db = db
        self.cfg = cfg

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def submit_application(
        self,
        adopter_id: str,
        breeder_id: str,
        form_answers: dict[str, Any],
        privacy_consent: bool,
        pet_id: str | None = None,
    ) -> SubmitApplicationResult:
        with log_context(actor=adopter_id):
            return submit_application_workflow(self.db, adopter_id, breeder_id, form_answers, privacy_consent, pet_id)

    def list_applications(self, adopter_id: str, skip: int | None = None, limit: int | None = None) -> ApplicationListResult:
        """The adopter's own applications from the ledger, newest first."""
        skip, limit = clamp_page(skip, limit, self.cfg.default_page_size, self.cfg.max_page_size)
        docs = self.db.adoption_applications.list_for_adopter(adopter_id, skip=skip, limit=limit)
        return ApplicationListResult(
            applications=[Application.from_doc(d) for d in docs],
            total=self.db.adoption_applications.count_for_adopter(adopter_id),
            skip=skip,
            limit=limit,
        )

    def get_application(self, adopter_id: str, application_id: str) -> Application:
        doc = self.db.adoption_applications.get_application(application_id)
        if doc is None:
            raise NotFoundError(f"Application not found: {application_id}")
        if doc["adopter_id"] != adopter_id:
            raise ForbiddenError("Application belongs to another adopter")
        return Application.from_doc(doc)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def add_favorite(self, adopter_id: str, breeder_id: str) -> FavoriteResult:
        with log_context(actor=adopter_id):
            return add_favorite_workflow(self.db, adopter_id, breeder_id)

    def remove_favorite(self, adopter_id: str, breeder_id: str) -> FavoriteResult:
        with log_context(actor=adopter_id):
            return remove_favorite_workflow(self.db, adopter_id, breeder_id)

    def list_favorites(self, adopter_id: str, skip: int | None = None, limit: int | None = None) -> FavoriteListResult:
        if self.db.adopters.get_adopter(adopter_id) is None:
            raise NotFoundError(f"Adopter not found: {adopter_id}")
        skip, limit = clamp_page(skip, limit, self.cfg.default_page_size, self.cfg.max_page_size)
        entries = self.db.adopters.list_favorites(adopter_id, skip=skip, limit=limit)
        return FavoriteListResult(
            favorites=[FavoriteBreeder.from_doc(e) for e in entries],
            total=self.db.adopters.count_favorites(adopter_id),
            skip=skip,
            limit=limit,
        )

    # ------------------------------------------------------------------
    # Reviews and reports
    # ------------------------------------------------------------------

    def create_review(
        self,
        adopter_id: str,
        breeder_id: str,
        review_type: str,
        rating: Any,
        content: str,
    ) -> CreateReviewResult:
        with log_context(actor=adopter_id):
            return create_review_workflow(self.db, adopter_id, breeder_id, review_type, rating, content)

    def report_review(
        self,
        adopter_id: str,
        review_id: str,
        reason: str,
        description: str = "",
    ) -> ReviewModerationResult:
        with log_context(actor=adopter_id):
            return report_review_workflow(self.db, adopter_id, review_id, reason, description)

    def report_breeder(
        self,
        adopter_id: str,
        breeder_id: str,
        report_type: str,
        description: str,
    ) -> CreateReportResult:
        with log_context(actor=adopter_id):
            return create_report_workflow(self.db, adopter_id, breeder_id, report_type, description)
