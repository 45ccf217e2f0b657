"""Adopter aggregate operations for ArangoDB.

The favorite_breeder_list holds snapshots of breeder name, image key and
location taken when the favorite was added. Adds and removes are guarded
single-document updates: the membership test and the write happen inside
one exclusive UPDATE, so two concurrent adds of the same breeder leave one
entry.
"""

from typing import TYPE_CHECKING, Any, cast

from breedlink.helpers.time_helper import now_ms
from breedlink.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor


def user_search_filters(
    var: str,
    status_field: str,
    status: str | None,
    keyword: str | None,
) -> tuple[str, dict[str, Any]]:
    """FILTER lines and bind_vars for admin user searches.

    keyword is matched as a case-insensitive substring of name or email.
    """
    filters = []
    bind_vars: dict[str, Any] = {}
    if status:
        filters.append(f"FILTER {var}.{status_field} == @status")
        bind_vars["status"] = status
    if keyword and keyword.strip():
        filters.append(f"FILTER CONTAINS(LOWER({var}.name), @keyword) OR CONTAINS(LOWER({var}.email), @keyword)")
        bind_vars["keyword"] = keyword.strip().lower()
    return "\n                ".join(filters), bind_vars


class AdoptersOperations:
    """Operations for the adopters collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("adopters")

    def get_adopter(self, adopter_id: str) -> dict[str, Any] | None:
        """Get adopter by _key.

        Returns:
            Adopter dict or None if not found

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            RETURN DOCUMENT("adopters", @key)
            """,
                bind_vars={"key": adopter_id},
            ),
        )
        return next(cursor, None)

    def set_account_status(self, adopter_id: str, status: str) -> bool:
        """Set adopter account status. Returns False if adopter not found."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR a IN adopters
                FILTER a._key == @key
                UPDATE a WITH { account_status: @status, updated_at: @timestamp }
                IN adopters OPTIONS { exclusive: true }
                RETURN NEW._key
            """,
                bind_vars={"key": adopter_id, "status": status, "timestamp": now_ms()},
            ),
        )
        return next(cursor, None) is not None

    def count_adopters(self, status: str | None = None, keyword: str | None = None) -> int:
        filter_clause, bind_vars = user_search_filters("a", "account_status", status, keyword)
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            RETURN LENGTH(
                FOR a IN adopters
                    {filter_clause}
                    RETURN 1
            )
            """,
                bind_vars=bind_vars,
            ),
        )
        return int(next(cursor, 0) or 0)

    def search_adopters(
        self,
        status: str | None = None,
        keyword: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        """List adopters for user management, by name.

        keyword matches name or email, case-insensitively.
        """
        filter_clause, bind_vars = user_search_filters("a", "account_status", status, keyword)
        bind_vars.update({"skip": skip, "limit": limit})
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            FOR a IN adopters
                {filter_clause}
                SORT a.name, a._key
                LIMIT @skip, @limit
                RETURN {{ _key: a._key, name: a.name, email: a.email, account_status: a.account_status }}
            """,
                bind_vars=bind_vars,
            ),
        )
        return list(cursor)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def add_favorite(self, adopter_id: str, entry: dict[str, Any]) -> bool:
        """Append a favorite unless one for the same breeder already exists.

        Args:
            adopter_id: Adopter _key
            entry: Favorite snapshot (must include `favorite_breeder_id`)

        Returns:
            True if appended, False if already present (or adopter missing)

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR a IN adopters
                FILTER a._key == @key
                FILTER @breeder_id NOT IN (a.favorite_breeder_list || [])[*].favorite_breeder_id
                UPDATE a WITH {
                    favorite_breeder_list: APPEND(a.favorite_breeder_list || [], [@entry])
                } IN adopters OPTIONS { exclusive: true }
                RETURN NEW._key
            """,
                bind_vars={"key": adopter_id, "breeder_id": entry["favorite_breeder_id"], "entry": entry},
            ),
        )
        return next(cursor, None) is not None

    def remove_favorite(self, adopter_id: str, breeder_id: str) -> bool:
        """Remove the favorite for breeder_id.

        Returns:
            True if an entry was removed, False if none existed

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR a IN adopters
                FILTER a._key == @key
                FILTER @breeder_id IN (a.favorite_breeder_list || [])[*].favorite_breeder_id
                UPDATE a WITH {
                    favorite_breeder_list: (
                        FOR f IN a.favorite_breeder_list
                            FILTER f.favorite_breeder_id != @breeder_id
                            RETURN f
                    )
                } IN adopters OPTIONS { exclusive: true }
                RETURN NEW._key
            """,
                bind_vars={"key": adopter_id, "breeder_id": breeder_id},
            ),
        )
        return next(cursor, None) is not None

    def list_favorites(self, adopter_id: str, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        """List favorites, most recently added first."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR a IN adopters
                FILTER a._key == @key
                FOR f IN (a.favorite_breeder_list || [])
                    SORT f.added_at DESC
                    LIMIT @skip, @limit
                    RETURN f
            """,
                bind_vars={"key": adopter_id, "skip": skip, "limit": limit},
            ),
        )
        return list(cursor)

    def count_favorites(self, adopter_id: str) -> int:
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR a IN adopters
                FILTER a._key == @key
                RETURN LENGTH(a.favorite_breeder_list || [])
            """,
                bind_vars={"key": adopter_id},
            ),
        )
        return int(next(cursor, 0) or 0)
