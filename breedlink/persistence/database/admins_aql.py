"""Admin aggregate operations for ArangoDB.

activity_logs is append-only: there is no update or delete operation.
"""

from typing import TYPE_CHECKING, Any, cast

from breedlink.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor


class AdminsOperations:
    """Operations for the admins collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("admins")

    def get_admin(self, admin_id: str) -> dict[str, Any] | None:
        """Get admin by _key, without the activity log.

        Returns:
            Admin dict or None if not found

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            LET a = DOCUMENT("admins", @key)
            RETURN a == null ? null : UNSET(a, "activity_logs")
            """,
                bind_vars={"key": admin_id},
            ),
        )
        return next(cursor, None)

    def append_activity_log(self, admin_id: str, entry: dict[str, Any]) -> bool:
        """Append one entry to the admin's activity log.

        Returns:
            True if appended, False if admin not found

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR a IN admins
                FILTER a._key == @key
                UPDATE a WITH {
                    activity_logs: APPEND(a.activity_logs || [], [@entry])
                } IN admins OPTIONS { exclusive: true }
                RETURN NEW._key
            """,
                bind_vars={"key": admin_id, "entry": entry},
            ),
        )
        return next(cursor, None) is not None

    def list_activity_logs(self, admin_id: str, limit: int = 50) -> list[dict[str, Any]]:
        """Newest activity log entries first."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR a IN admins
                FILTER a._key == @key
                FOR entry IN (a.activity_logs || [])
                    SORT entry.performed_at DESC
                    LIMIT @limit
                    RETURN entry
            """,
                bind_vars={"key": admin_id, "limit": limit},
            ),
        )
        return list(cursor)
