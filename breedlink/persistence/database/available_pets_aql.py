"""Available pet lookups for ArangoDB (read-only)."""

from typing import TYPE_CHECKING, Any, cast

from breedlink.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor


class AvailablePetsOperations:
    """Operations for the available_pets collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("available_pets")

    def get_pet(self, pet_id: str) -> dict[str, Any] | None:
        """Get pet by _key.

        Returns:
            Pet dict or None if not found

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            RETURN DOCUMENT("available_pets", @key)
            """,
                bind_vars={"key": pet_id},
            ),
        )
        return next(cursor, None)
