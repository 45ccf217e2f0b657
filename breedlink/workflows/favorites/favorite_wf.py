"""Favorite breeder workflows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from breedlink.components.consistency import add_favorite, remove_favorite
from breedlink.helpers.dto.breeder_dto import FavoriteResult

if TYPE_CHECKING:
    from breedlink.persistence.db import Database


def add_favorite_workflow(db: Database, adopter_id: str, breeder_id: str) -> FavoriteResult:
    return add_favorite(db, adopter_id, breeder_id)


def remove_favorite_workflow(db: Database, adopter_id: str, breeder_id: str) -> FavoriteResult:
    return remove_favorite(db, adopter_id, breeder_id)
