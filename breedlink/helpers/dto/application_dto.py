"""
Application domain DTOs.

Data transfer objects for the adoption application ledger and its
breeder-side read model.

Rules:
- Import only stdlib and typing (no breedlink.* imports)
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

ApplicationStatus = Literal[
    "consultation_pending",
    "consultation_completed",
    "adoption_approved",
    "adoption_rejected",
]

CONSULTATION_PENDING: ApplicationStatus = "consultation_pending"
CONSULTATION_COMPLETED: ApplicationStatus = "consultation_completed"
ADOPTION_APPROVED: ApplicationStatus = "adoption_approved"
ADOPTION_REJECTED: ApplicationStatus = "adoption_rejected"

APPLICATION_STATUSES: tuple[str, ...] = (
    CONSULTATION_PENDING,
    CONSULTATION_COMPLETED,
    ADOPTION_APPROVED,
    ADOPTION_REJECTED,
)


@dataclass
class Application:
    """
    Authoritative adoption application (ledger record).

    Read by both the adopter and the breeder; status is advanced only by
    the owning breeder or an admin override.
    """

    application_id: str
    breeder_id: str
    adopter_id: str
    status: str
    form_answers: dict[str, Any]
    applied_at: int
    adopter_name: str | None = None
    pet_id: str | None = None
    pet_name: str | None = None
    processed_at: int | None = None
    notes: str | None = None

    @classmethod
    def from_doc(cls, doc: dict[str, Any]) -> Application:
        """Create from an adoption_applications document."""
        return cls(
            application_id=doc["_key"],
            breeder_id=doc["breeder_id"],
            adopter_id=doc["adopter_id"],
            status=doc["status"],
            form_answers=dict(doc.get("form_answers") or {}),
            applied_at=int(doc.get("applied_at") or 0),
            adopter_name=doc.get("adopter_name"),
            pet_id=doc.get("pet_id"),
            pet_name=doc.get("pet_name"),
            processed_at=doc.get("processed_at"),
            notes=doc.get("breeder_notes"),
        )


@dataclass
class ReceivedApplication:
    """Entry of the breeder's received-applications read model."""

    application_id: str
    adopter_id: str
    status: str
    applied_at: int
    adopter_name: str | None = None
    pet_id: str | None = None
    pet_name: str | None = None
    processed_at: int | None = None

    @classmethod
    def from_doc(cls, entry: dict[str, Any]) -> ReceivedApplication:
        return cls(
            application_id=entry["application_id"],
            adopter_id=entry["adopter_id"],
            status=entry["status"],
            applied_at=int(entry.get("applied_at") or 0),
            adopter_name=entry.get("adopter_name"),
            pet_id=entry.get("pet_id"),
            pet_name=entry.get("pet_name"),
            processed_at=entry.get("processed_at"),
        )


@dataclass
class SubmitApplicationResult:
    """Result from submit_application_workflow."""

    application_id: str
    status: str


@dataclass
class AdvanceApplicationResult:
    """Result from advance_application_workflow and sync_application_status.

    changed is False when the application already held the requested status.
    """

    application_id: str
    status: str
    changed: bool


@dataclass
class ApplicationListResult:
    """Paged list of ledger applications."""

    applications: list[Application]
    total: int
    skip: int
    limit: int


@dataclass
class ReceivedApplicationListResult:
    """Paged list from the breeder's received-applications read model."""

    applications: list[ReceivedApplication] = field(default_factory=list)
    total: int = 0
    skip: int = 0
    limit: int = 0
