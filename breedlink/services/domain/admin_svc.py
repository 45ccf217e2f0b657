"""Admin service - verification decisions, reports, review moderation, users and statistics.

Every operation re-checks the admin's permission flags against the stored
admin document.
"""

from __future__ import annotations

import logging

from breedlink.components.admin import list_activity_logs, require_active_admin, require_admin_permission
from breedlink.helpers.dto.admin_dto import (
    ACCOUNT_STATUSES,
    USER_ROLES,
    ActivityLogEntry,
    PlatformStats,
    UserListResult,
    UserStatusResult,
    UserSummary,
    VerificationListResult,
)
from breedlink.helpers.dto.application_dto import (
    APPLICATION_STATUSES,
    AdvanceApplicationResult,
    Application,
    ApplicationListResult,
)
from breedlink.helpers.dto.config_dto import EngineConfig
from breedlink.helpers.dto.moderation_dto import (
    REPORT_STATUSES,
    VERIFICATION_APPROVED,
    VERIFICATION_REVIEWING,
    BreederReport,
    ReportListResult,
    ReportTransitionResult,
    Review,
    ReviewListResult,
    ReviewModerationResult,
    VerificationResult,
)
from breedlink.helpers.exceptions import ValidationError
from breedlink.helpers.logging_helper import log_context
from breedlink.helpers.paging_helper import clamp_page
from breedlink.persistence.db import Database
from breedlink.services.domain._breeder_mapping import FileUrlResolver, map_pending_verification
from breedlink.workflows.admin import override_application_status_workflow, update_user_status_workflow
from breedlink.workflows.moderation import (
    decide_verification_workflow,
    dismiss_review_report_workflow,
    hide_review_workflow,
    update_report_status_workflow,
)

logger = logging.getLogger(__name__)


class AdminService:
    """Operations performed by platform admins."""

    def __init__(self, db: Database, cfg: EngineConfig, resolve_file_url: FileUrlResolver | None = None):
        """
        Args:
            db: Database instance
            cfg: Engine settings (page sizes, activity log limit)
            resolve_file_url: Optional file key -> URL resolver for
                verification documents (read-side only)
        """
        self.db = db
        self.cfg = cfg
        self.resolve_file_url = resolve_file_url

    def _page(self, skip: int | None, limit: int | None) -> tuple[int, int]:
        return clamp_page(skip, limit, self.cfg.default_page_size, self.cfg.max_page_size)

    # ------------------------------------------------------------------
    # Breeder verification
    # ------------------------------------------------------------------

    def list_verifications(
        self,
        admin_id: str,
        status: str = VERIFICATION_REVIEWING,
        skip: int | None = None,
        limit: int | None = None,
    ) -> VerificationListResult:
        """Breeders in a verification status (default: awaiting a decision)."""
        require_admin_permission(self.db, admin_id, "can_manage_breeders")
        skip, limit = self._page(skip, limit)
        docs = self.db.breeders.list_by_verification_status(status, skip=skip, limit=limit)
        return VerificationListResult(
            breeders=[map_pending_verification(d, self.resolve_file_url) for d in docs],
            total=self.db.breeders.count_breeders(verification_status=status),
            skip=skip,
            limit=limit,
        )

    def decide_verification(
        self,
        admin_id: str,
        breeder_id: str,
        decision: str,
        rejection_reason: str | None = None,
    ) -> VerificationResult:
        with log_context(actor=admin_id, breeder=breeder_id):
            return decide_verification_workflow(self.db, admin_id, breeder_id, decision, rejection_reason)

    # ------------------------------------------------------------------
    # Breeder reports
    # ------------------------------------------------------------------

    def list_reports(
        self,
        admin_id: str,
        status: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> ReportListResult:
        """Breeder reports, newest first. Without a status, dismissed reports are left out."""
        require_admin_permission(self.db, admin_id, "can_manage_reports")
        skip, limit = self._page(skip, limit)
        docs = self.db.breeders.list_reports(status=status, skip=skip, limit=limit)
        return ReportListResult(
            reports=[BreederReport.from_doc(d) for d in docs],
            total=self.db.breeders.count_reports(status=status),
            skip=skip,
            limit=limit,
        )

    def update_report_status(
        self,
        admin_id: str,
        breeder_id: str,
        report_id: str,
        new_status: str,
        admin_notes: str | None = None,
    ) -> ReportTransitionResult:
        with log_context(actor=admin_id, report=report_id):
            return update_report_status_workflow(self.db, admin_id, breeder_id, report_id, new_status, admin_notes)

    # ------------------------------------------------------------------
    # Review moderation
    # ------------------------------------------------------------------

    def list_reported_reviews(
        self,
        admin_id: str,
        skip: int | None = None,
        limit: int | None = None,
    ) -> ReviewListResult:
        require_admin_permission(self.db, admin_id, "can_manage_reports")
        skip, limit = self._page(skip, limit)
        docs = self.db.breeder_reviews.list_reported(skip=skip, limit=limit)
        return ReviewListResult(
            reviews=[Review.from_doc(d) for d in docs],
            total=self.db.breeder_reviews.count_reported(),
            skip=skip,
            limit=limit,
        )

    def hide_review(self, admin_id: str, review_id: str, reason: str | None = None) -> ReviewModerationResult:
        with log_context(actor=admin_id, review=review_id):
            return hide_review_workflow(self.db, admin_id, review_id, reason)

    def dismiss_review_report(self, admin_id: str, review_id: str) -> ReviewModerationResult:
        with log_context(actor=admin_id, review=review_id):
            return dismiss_review_report_workflow(self.db, admin_id, review_id)

    # ------------------------------------------------------------------
    # Users and applications
    # ------------------------------------------------------------------

    def list_users(
        self,
        admin_id: str,
        role: str,
        account_status: str | None = None,
        keyword: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> UserListResult:
        """
        Adopter or breeder accounts for user management, by name.

        Args:
            admin_id: Acting admin (needs can_manage_users)
            role: "adopter" or "breeder"
            account_status: Optional account status filter
            keyword: Optional case-insensitive match on name or email

        Raises:
            ForbiddenError: Permission check failed
            ValidationError: Unknown role or account status
        """
        require_admin_permission(self.db, admin_id, "can_manage_users")
        if role not in USER_ROLES:
            raise ValidationError(f"Unknown user role: {role}", code="invalid_role")
        if account_status and account_status not in ACCOUNT_STATUSES:
            raise ValidationError(f"Unknown account status: {account_status}", code="invalid_status")
        skip, limit = self._page(skip, limit)

        if role == "adopter":
            docs = self.db.adopters.search_adopters(account_status, keyword, skip=skip, limit=limit)
            users = [UserSummary.from_adopter(d) for d in docs]
            total = self.db.adopters.count_adopters(status=account_status, keyword=keyword)
        else:
            docs = self.db.breeders.search_breeders(account_status, keyword, skip=skip, limit=limit)
            users = [UserSummary.from_breeder(d) for d in docs]
            total = self.db.breeders.count_breeders(status=account_status, keyword=keyword)
        return UserListResult(users=users, total=total, skip=skip, limit=limit)

    def list_applications(
        self,
        admin_id: str,
        breeder_id: str | None = None,
        status: str | None = None,
        applied_from: int | None = None,
        applied_to: int | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> ApplicationListResult:
        """
        Monitor applications across all breeders, newest first.

        Reads the ledger, so the listing holds even while a breeder's
        received_applications view is behind. Any active admin may call it.

        Args:
            applied_from: Inclusive lower bound on applied_at (ms since epoch)
            applied_to: Inclusive upper bound on applied_at (ms since epoch)

        Raises:
            ForbiddenError: Admin missing or not active
            ValidationError: Unknown status
        """
        require_active_admin(self.db, admin_id, "list_applications")
        if status and status not in APPLICATION_STATUSES:
            raise ValidationError(f"Unknown application status: {status}", code="invalid_status")
        skip, limit = self._page(skip, limit)
        filters = {"breeder_id": breeder_id, "status": status, "applied_from": applied_from, "applied_to": applied_to}
        docs = self.db.adoption_applications.list_applications(**filters, skip=skip, limit=limit)
        return ApplicationListResult(
            applications=[Application.from_doc(d) for d in docs],
            total=self.db.adoption_applications.count_applications(**filters),
            skip=skip,
            limit=limit,
        )

    def update_user_status(
        self,
        admin_id: str,
        user_id: str,
        role: str,
        account_status: str,
        reason: str | None = None,
    ) -> UserStatusResult:
        with log_context(actor=admin_id, user=user_id):
            return update_user_status_workflow(self.db, admin_id, user_id, role, account_status, reason)

    def override_application_status(
        self,
        admin_id: str,
        application_id: str,
        new_status: str,
        notes: str | None = None,
    ) -> AdvanceApplicationResult:
        with log_context(actor=admin_id, application=application_id):
            return override_application_status_workflow(self.db, admin_id, application_id, new_status, notes)

    # ------------------------------------------------------------------
    # Statistics and audit trail
    # ------------------------------------------------------------------

    def get_platform_stats(self, admin_id: str) -> PlatformStats:
        require_admin_permission(self.db, admin_id, "can_view_statistics")
        by_status = self.db.adoption_applications.count_by_status()
        applications_by_status = {status: by_status.get(status, 0) for status in APPLICATION_STATUSES}
        report_counts = self.db.breeders.count_reports_by_status()
        reports_by_status = {status: report_counts.get(status, 0) for status in REPORT_STATUSES}
        return PlatformStats(
            active_adopters=self.db.adopters.count_adopters(status="active"),
            active_breeders=self.db.breeders.count_breeders(status="active"),
            approved_breeders=self.db.breeders.count_breeders(verification_status=VERIFICATION_APPROVED),
            reviewing_breeders=self.db.breeders.count_breeders(verification_status=VERIFICATION_REVIEWING),
            applications_by_status=applications_by_status,
            total_applications=sum(applications_by_status.values()),
            visible_reviews=self.db.breeder_reviews.count_visible(),
            reports_by_status=reports_by_status,
            total_reports=sum(reports_by_status.values()),
        )

    def list_activity_logs(self, admin_id: str, limit: int | None = None) -> list[ActivityLogEntry]:
        """The admin's own activity log, newest first."""
        require_active_admin(self.db, admin_id, "list_activity_logs")
        return list_activity_logs(self.db, admin_id, limit or self.cfg.activity_log_view_limit)
