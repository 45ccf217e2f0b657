"""
Admin domain DTOs.

Activity log entries, permissions and admin-facing results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

AdminAction = Literal[
    "approve_breeder",
    "reject_breeder",
    "suspend_user",
    "activate_user",
    "resolve_report",
    "dismiss_report",
    "delete_review",
    "mark_report_reviewing",
    "override_application",
]

AdminTargetType = Literal["breeder", "adopter", "report", "review", "application"]

AdminPermission = Literal[
    "can_manage_users",
    "can_manage_breeders",
    "can_manage_reports",
    "can_view_statistics",
    "can_manage_admins",
]

ADMIN_ACTIONS: tuple[str, ...] = (
    "approve_breeder",
    "reject_breeder",
    "suspend_user",
    "activate_user",
    "resolve_report",
    "dismiss_report",
    "delete_review",
    "mark_report_reviewing",
    "override_application",
)

ADMIN_TARGET_TYPES: tuple[str, ...] = ("breeder", "adopter", "report", "review", "application")

AccountStatus = Literal["active", "suspended", "deleted"]
ACCOUNT_STATUSES: tuple[str, ...] = ("active", "suspended", "deleted")

UserRole = Literal["adopter", "breeder"]
USER_ROLES: tuple[str, ...] = ("adopter", "breeder")


@dataclass
class ActivityLogEntry:
    """One immutable admin activity log entry."""

    log_id: str
    action: str
    target_type: str
    target_id: str
    description: str
    performed_at: int
    target_name: str | None = None

    @classmethod
    def from_doc(cls, entry: dict[str, Any]) -> ActivityLogEntry:
        return cls(
            log_id=entry["log_id"],
            action=entry["action"],
            target_type=entry["target_type"],
            target_id=entry["target_id"],
            description=entry.get("description", ""),
            performed_at=int(entry.get("performed_at") or 0),
            target_name=entry.get("target_name"),
        )


@dataclass
class UserStatusResult:
    """Result from update_user_status_workflow."""

    user_id: str
    role: str
    account_status: str


@dataclass
class UserSummary:
    """Adopter or breeder account as listed for user management."""

    user_id: str
    role: str
    name: str | None
    email: str | None
    account_status: str | None
    stats: dict[str, Any] | None = None

    @classmethod
    def from_adopter(cls, doc: dict[str, Any]) -> UserSummary:
        return cls(
            user_id=doc["_key"],
            role="adopter",
            name=doc.get("name"),
            email=doc.get("email"),
            account_status=doc.get("account_status"),
        )

    @classmethod
    def from_breeder(cls, doc: dict[str, Any]) -> UserSummary:
        return cls(
            user_id=doc["_key"],
            role="breeder",
            name=doc.get("name"),
            email=doc.get("email"),
            account_status=doc.get("status"),
            stats=dict(doc.get("stats") or {}),
        )


@dataclass
class UserListResult:
    """Paged list of user accounts of one role."""

    users: list[UserSummary]
    total: int
    skip: int
    limit: int


@dataclass
class PendingVerification:
    """Breeder awaiting (or past) a verification decision, admin view."""

    breeder_id: str
    breeder_name: str
    email: str | None
    status: str
    plan: str | None
    submitted_at: int | None
    document_refs: list[str] = field(default_factory=list)
    submitted_by_email: bool = False


@dataclass
class VerificationListResult:
    """Paged list of breeders by verification status."""

    breeders: list[PendingVerification]
    total: int
    skip: int
    limit: int


@dataclass
class PlatformStats:
    """Admin platform statistics."""

    active_adopters: int
    active_breeders: int
    approved_breeders: int
    reviewing_breeders: int
    applications_by_status: dict[str, int]
    total_applications: int
    visible_reviews: int
    reports_by_status: dict[str, int]
    total_reports: int
