"""Adopter favorites: one entry per (adopter, breeder).

Entries snapshot the breeder's name, profile image key and location at add
time. Snapshots are not refreshed when the breeder profile changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from breedlink.helpers.dto.breeder_dto import FavoriteResult
from breedlink.helpers.exceptions import ConflictError, NotFoundError
from breedlink.helpers.time_helper import now_ms

if TYPE_CHECKING:
    from breedlink.persistence.db import Database

logger = logging.getLogger(__name__)


def format_location(breeder: dict[str, Any]) -> str:
    """'<city> <district>' from the breeder profile, blank parts dropped."""
    location = ((breeder.get("profile") or {}).get("location")) or {}
    parts = [location.get("city") or "", location.get("district") or ""]
    return " ".join(part for part in parts if part)


def add_favorite(db: Database, adopter_id: str, breeder_id: str) -> FavoriteResult:
    """
    Add a breeder to the adopter's favorites.

    Raises:
        NotFoundError: Adopter or breeder does not exist
        ConflictError: code "favorite_already_exists"
    """
    if db.adopters.get_adopter(adopter_id) is None:
        raise NotFoundError(f"Adopter not found: {adopter_id}")
    breeder = db.breeders.get_breeder(breeder_id)
    if breeder is None:
        raise NotFoundError(f"Breeder not found: {breeder_id}")

    entry = {
        "favorite_breeder_id": breeder_id,
        "breeder_name": breeder.get("name", ""),
        "breeder_profile_image": breeder.get("profile_image"),
        "breeder_location": format_location(breeder),
        "added_at": now_ms(),
    }
    # Membership test and append run in one guarded update
    if not db.adopters.add_favorite(adopter_id, entry):
        raise ConflictError("Breeder is already in favorites", code="favorite_already_exists")

    logger.info(f"[favorite] {adopter_id} added favorite {breeder_id}")
    return FavoriteResult(adopter_id=adopter_id, breeder_id=breeder_id, is_favorite=True)


def remove_favorite(db: Database, adopter_id: str, breeder_id: str) -> FavoriteResult:
    """
    Remove a breeder from the adopter's favorites.

    Raises:
        NotFoundError: Adopter missing, or the breeder is not a favorite
    """
    if db.adopters.get_adopter(adopter_id) is None:
        raise NotFoundError(f"Adopter not found: {adopter_id}")
    if not db.adopters.remove_favorite(adopter_id, breeder_id):
        raise NotFoundError(f"Breeder {breeder_id} is not in favorites", code="favorite_not_found")

    logger.info(f"[favorite] {adopter_id} removed favorite {breeder_id}")
    return FavoriteResult(adopter_id=adopter_id, breeder_id=breeder_id, is_favorite=False)
