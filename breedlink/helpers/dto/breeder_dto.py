"""
Breeder and adopter domain DTOs.

Stats, dashboard, public profile and favorite snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .application_dto import ReceivedApplication
from .moderation_dto import VerificationInfo


@dataclass
class BreederStats:
    """Derived counters owned by the consistency engine."""

    total_applications: int = 0
    completed_adoptions: int = 0
    average_rating: float = 0.0
    total_reviews: int = 0
    profile_views: int = 0

    @classmethod
    def from_doc(cls, stats: dict[str, Any] | None) -> BreederStats:
        stats = stats or {}
        return cls(
            total_applications=int(stats.get("total_applications") or 0),
            completed_adoptions=int(stats.get("completed_adoptions") or 0),
            average_rating=float(stats.get("average_rating") or 0.0),
            total_reviews=int(stats.get("total_reviews") or 0),
            profile_views=int(stats.get("profile_views") or 0),
        )


@dataclass
class BreederDashboard:
    """Breeder's own dashboard."""

    breeder_id: str
    verification: VerificationInfo
    stats: BreederStats
    pending_applications: int
    recent_applications: list[ReceivedApplication] = field(default_factory=list)


@dataclass
class PublicBreederProfile:
    """Public breeder card (approved breeders only)."""

    breeder_id: str
    name: str
    profile_image: str | None
    location: str
    stats: BreederStats


@dataclass
class FavoriteBreeder:
    """Favorite entry: a snapshot taken when the favorite was added."""

    breeder_id: str
    breeder_name: str
    breeder_profile_image: str | None
    breeder_location: str
    added_at: int

    @classmethod
    def from_doc(cls, entry: dict[str, Any]) -> FavoriteBreeder:
        return cls(
            breeder_id=entry["favorite_breeder_id"],
            breeder_name=entry.get("breeder_name", ""),
            breeder_profile_image=entry.get("breeder_profile_image"),
            breeder_location=entry.get("breeder_location", ""),
            added_at=int(entry.get("added_at") or 0),
        )


@dataclass
class FavoriteResult:
    """Result from add/remove favorite workflows."""

    adopter_id: str
    breeder_id: str
    is_favorite: bool


@dataclass
class FavoriteListResult:
    """Paged list of favorites."""

    favorites: list[FavoriteBreeder]
    total: int
    skip: int
    limit: int


@dataclass
class ReconcileResult:
    """Result from consistency maintenance."""

    breeder_id: str
    completed_adoptions_before: int
    completed_adoptions_after: int
    average_rating: float
    total_reviews: int
