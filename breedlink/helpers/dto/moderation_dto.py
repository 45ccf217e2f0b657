"""
Moderation domain DTOs.

Breeder verification, breeder reports and breeder reviews.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

VerificationStatus = Literal["pending", "reviewing", "approved", "rejected"]
ReportStatus = Literal["pending", "reviewing", "resolved", "dismissed"]
ReportType = Literal["no_contract", "false_info", "inappropriate_content", "other"]
ReviewType = Literal["consultation", "adoption"]

VERIFICATION_PENDING: VerificationStatus = "pending"
VERIFICATION_REVIEWING: VerificationStatus = "reviewing"
VERIFICATION_APPROVED: VerificationStatus = "approved"
VERIFICATION_REJECTED: VerificationStatus = "rejected"

REPORT_PENDING: ReportStatus = "pending"
REPORT_REVIEWING: ReportStatus = "reviewing"
REPORT_RESOLVED: ReportStatus = "resolved"
REPORT_DISMISSED: ReportStatus = "dismissed"

REPORT_STATUSES: tuple[str, ...] = (REPORT_PENDING, REPORT_REVIEWING, REPORT_RESOLVED, REPORT_DISMISSED)
REPORT_TYPES: tuple[str, ...] = ("no_contract", "false_info", "inappropriate_content", "other")
REVIEW_TYPES: tuple[str, ...] = ("consultation", "adoption")
BREEDER_PLANS: tuple[str, ...] = ("basic", "premium")


@dataclass
class VerificationDocument:
    """Stored verification document reference (file key, never a URL)."""

    file_name: str
    document_type: str | None = None


@dataclass
class VerificationInfo:
    """Breeder verification state."""

    status: str
    plan: str | None = None
    submitted_at: int | None = None
    reviewed_at: int | None = None
    rejection_reason: str | None = None
    documents: list[VerificationDocument] = field(default_factory=list)
    submitted_by_email: bool = False

    @classmethod
    def from_doc(cls, verification: dict[str, Any] | None) -> VerificationInfo:
        """Create from the breeder's embedded verification object (missing -> pending)."""
        verification = verification or {}
        return cls(
            status=verification.get("status") or VERIFICATION_PENDING,
            plan=verification.get("plan"),
            submitted_at=verification.get("submitted_at"),
            reviewed_at=verification.get("reviewed_at"),
            rejection_reason=verification.get("rejection_reason"),
            documents=[
                VerificationDocument(file_name=d["file_name"], document_type=d.get("document_type"))
                for d in verification.get("documents") or []
            ],
            submitted_by_email=bool(verification.get("submitted_by_email", False)),
        )


@dataclass
class VerificationResult:
    """Result from verification submit/decision workflows."""

    breeder_id: str
    status: str
    changed: bool


@dataclass
class BreederReport:
    """Report embedded in a breeder document."""

    report_id: str
    breeder_id: str
    reporter_id: str
    type: str
    description: str
    status: str
    reported_at: int
    reporter_name: str | None = None
    breeder_name: str | None = None
    admin_notes: str | None = None
    processed_at: int | None = None

    @classmethod
    def from_doc(cls, report: dict[str, Any]) -> BreederReport:
        """Create from an embedded report merged with breeder_id / breeder_name."""
        return cls(
            report_id=report["report_id"],
            breeder_id=report["breeder_id"],
            reporter_id=report["reporter_id"],
            type=report["type"],
            description=report.get("description", ""),
            status=report["status"],
            reported_at=int(report.get("reported_at") or 0),
            reporter_name=report.get("reporter_name"),
            breeder_name=report.get("breeder_name"),
            admin_notes=report.get("admin_notes"),
            processed_at=report.get("processed_at"),
        )


@dataclass
class CreateReportResult:
    """Result from create_report_workflow."""

    report_id: str
    status: str


@dataclass
class ReportTransitionResult:
    """Result from update_report_status_workflow."""

    report_id: str
    status: str
    changed: bool


@dataclass
class ReportListResult:
    """Paged list of breeder reports."""

    reports: list[BreederReport]
    total: int
    skip: int
    limit: int


@dataclass
class Review:
    """Standalone breeder review."""

    review_id: str
    breeder_id: str
    adopter_id: str
    type: str
    rating: int
    content: str
    written_at: int
    is_visible: bool
    is_reported: bool
    adopter_name: str | None = None
    report_reason: str | None = None
    report_description: str | None = None
    reported_at: int | None = None

    @classmethod
    def from_doc(cls, doc: dict[str, Any]) -> Review:
        return cls(
            review_id=doc["_key"],
            breeder_id=doc["breeder_id"],
            adopter_id=doc["adopter_id"],
            type=doc["type"],
            rating=int(doc["rating"]),
            content=doc.get("content", ""),
            written_at=int(doc.get("written_at") or 0),
            is_visible=bool(doc.get("is_visible", True)),
            is_reported=bool(doc.get("is_reported", False)),
            adopter_name=doc.get("adopter_name"),
            report_reason=doc.get("report_reason"),
            report_description=doc.get("report_description"),
            reported_at=doc.get("reported_at"),
        )


@dataclass
class CreateReviewResult:
    """Result from create_review_workflow."""

    review_id: str
    average_rating: float
    total_reviews: int


@dataclass
class ReviewModerationResult:
    """Result from review takedown / flag workflows."""

    review_id: str
    is_visible: bool
    is_reported: bool
    changed: bool


@dataclass
class ReviewListResult:
    """Paged list of reviews."""

    reviews: list[Review]
    total: int
    skip: int
    limit: int


@dataclass
class ReviewStats:
    """Derived review statistics for one breeder."""

    average_rating: float
    total_reviews: int
