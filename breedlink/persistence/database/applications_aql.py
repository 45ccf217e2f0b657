"""Adoption application ledger operations for ArangoDB.

The adoption_applications collection is the authoritative record of every
application. The breeder's received_applications list is only a projection
of these documents.

Duplicate pending applications are rejected by a unique sparse index on
`pending_pair` ("<adopter_id>:<breeder_id>" while pending, null afterwards).
Status writes are compare-and-set on the current status.
"""

from typing import TYPE_CHECKING, Any, cast

from arango.exceptions import DocumentInsertError

from breedlink.helpers.exceptions import ConflictError
from breedlink.helpers.time_helper import now_ms
from breedlink.persistence.arango_client import DatabaseLike, is_unique_violation

if TYPE_CHECKING:
    from arango.cursor import Cursor


def pending_pair_key(adopter_id: str, breeder_id: str) -> str:
    """Build the value indexed uniquely while an application is pending."""
    return f"{adopter_id}:{breeder_id}"


class ApplicationsOperations:
    """Operations for the adoption_applications collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("adoption_applications")

    def insert_application(self, doc: dict[str, Any]) -> str:
        """Insert a new ledger record.

        Args:
            doc: Application document including `_key` and `pending_pair`

        Returns:
            Application _key

        Raises:
            ConflictError: A pending application already exists for the pair

        """
        try:
            result = cast("dict[str, Any]", self.collection.insert(doc))
        except DocumentInsertError as exc:
            if is_unique_violation(exc):
                raise ConflictError(
                    "A pending application to this breeder already exists",
                    code="application_already_pending",
                ) from exc
            raise
        return str(result["_key"])

    def get_application(self, application_id: str) -> dict[str, Any] | None:
        """Get a ledger record by _key.

        Returns:
            Application dict or None if not found

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            RETURN DOCUMENT("adoption_applications", @key)
            """,
                bind_vars={"key": application_id},
            ),
        )
        return next(cursor, None)

    def find_pending_application(self, adopter_id: str, breeder_id: str) -> dict[str, Any] | None:
        """Find the pending application for an (adopter, breeder) pair, if any."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR app IN adoption_applications
                FILTER app.pending_pair == @pending_pair
                LIMIT 1
                RETURN app
            """,
                bind_vars={"pending_pair": pending_pair_key(adopter_id, breeder_id)},
            ),
        )
        return next(cursor, None)

    def compare_and_set_status(
        self,
        application_id: str,
        expected_status: str,
        new_status: str,
        notes: str | None = None,
    ) -> dict[str, Any] | None:
        """Move an application to new_status only if it still holds expected_status.

        Leaving the pending state clears `pending_pair`, releasing the pair for
        a new application. Entering adoption_approved arms the
        `completed_counted` guard read by count_completed_adoption.

        Args:
            application_id: Application _key
            expected_status: Status read by the caller
            new_status: Target status
            notes: Optional breeder notes (kept unchanged when None)

        Returns:
            Updated document, or None if the status changed concurrently
            (or the application does not exist)

        """
        ts = now_ms()
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR app IN adoption_applications
                FILTER app._key == @key
                FILTER app.status == @expected_status
                UPDATE app WITH {
                    status: @new_status,
                    pending_pair: null,
                    completed_counted: @new_status == "adoption_approved" ? false : app.completed_counted,
                    processed_at: @timestamp,
                    breeder_notes: @notes != null ? @notes : app.breeder_notes,
                    updated_at: @timestamp
                } IN adoption_applications OPTIONS { exclusive: true }
                RETURN NEW
            """,
                bind_vars=cast(
                    "dict[str, Any]",
                    {
                        "key": application_id,
                        "expected_status": expected_status,
                        "new_status": new_status,
                        "notes": notes,
                        "timestamp": ts,
                    },
                ),
            ),
        )
        return next(cursor, None)

    def count_completed_adoption(self, application_id: str) -> dict[str, Any] | None:
        """Flip `completed_counted` and bump the breeder's completed adoption counter.

        Both writes run in one query, so the counter moves exactly once per
        approved application no matter how often this is repeated. Approved
        documents written before the flag existed are never counted here.

        Returns:
            {"breeder_id", "completed_adoptions"} when this call won the flip
            (completed_adoptions is None if the breeder no longer exists), or
            None if the application is not approved or was already counted

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            LET flipped = (
                FOR app IN adoption_applications
                    FILTER app._key == @key
                    FILTER app.status == "adoption_approved"
                    FILTER app.completed_counted == false
                    UPDATE app WITH { completed_counted: true }
                    IN adoption_applications OPTIONS { exclusive: true }
                    RETURN NEW.breeder_id
            )
            FOR breeder_id IN flipped
                LET counts = (
                    FOR b IN breeders
                        FILTER b._key == breeder_id
                        UPDATE b WITH {
                            stats: { completed_adoptions: (b.stats.completed_adoptions || 0) + 1 }
                        } IN breeders OPTIONS { exclusive: true }
                        RETURN NEW.stats.completed_adoptions
                )
                RETURN { breeder_id, completed_adoptions: FIRST(counts) }
            """,
                bind_vars={"key": application_id},
            ),
        )
        return next(cursor, None)

    def settle_completed_counts(self, breeder_id: str) -> int:
        """Mark every uncounted approved application of the breeder as counted.

        Returns:
            Number of applications whose guard was flipped

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            RETURN LENGTH(
                FOR app IN adoption_applications
                    FILTER app.breeder_id == @breeder_id
                    FILTER app.status == "adoption_approved"
                    FILTER app.completed_counted == false
                    UPDATE app WITH { completed_counted: true }
                    IN adoption_applications OPTIONS { exclusive: true }
                    RETURN 1
            )
            """,
                bind_vars={"breeder_id": breeder_id},
            ),
        )
        return int(next(cursor, 0) or 0)

    @staticmethod
    def _application_filters(
        breeder_id: str | None,
        status: str | None,
        applied_from: int | None,
        applied_to: int | None,
    ) -> tuple[str, dict[str, Any]]:
        """Build FILTER lines and bind_vars for the ledger listings."""
        filters = []
        bind_vars: dict[str, Any] = {}
        if breeder_id:
            filters.append("FILTER app.breeder_id == @breeder_id")
            bind_vars["breeder_id"] = breeder_id
        if status:
            filters.append("FILTER app.status == @status")
            bind_vars["status"] = status
        if applied_from is not None:
            filters.append("FILTER app.applied_at >= @applied_from")
            bind_vars["applied_from"] = applied_from
        if applied_to is not None:
            filters.append("FILTER app.applied_at <= @applied_to")
            bind_vars["applied_to"] = applied_to
        return "\n                ".join(filters), bind_vars

    def list_applications(
        self,
        breeder_id: str | None = None,
        status: str | None = None,
        applied_from: int | None = None,
        applied_to: int | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        """List ledger applications across breeders, newest first.

        Args:
            breeder_id: Only this breeder's applications
            status: Only applications in this status
            applied_from: Inclusive lower bound on applied_at (ms)
            applied_to: Inclusive upper bound on applied_at (ms)
            skip: Offset
            limit: Page size

        """
        filter_clause, bind_vars = self._application_filters(breeder_id, status, applied_from, applied_to)
        bind_vars.update({"skip": skip, "limit": limit})
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            FOR app IN adoption_applications
                {filter_clause}
                SORT app.applied_at DESC, app._key
                LIMIT @skip, @limit
                RETURN app
            """,
                bind_vars=bind_vars,
            ),
        )
        return list(cursor)

    def count_applications(
        self,
        breeder_id: str | None = None,
        status: str | None = None,
        applied_from: int | None = None,
        applied_to: int | None = None,
    ) -> int:
        filter_clause, bind_vars = self._application_filters(breeder_id, status, applied_from, applied_to)
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            RETURN LENGTH(
                FOR app IN adoption_applications
                    {filter_clause}
                    RETURN 1
            )
            """,
                bind_vars=bind_vars,
            ),
        )
        return int(next(cursor, 0) or 0)

    def list_for_adopter(self, adopter_id: str, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        """List an adopter's applications, newest first."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR app IN adoption_applications
                FILTER app.adopter_id == @adopter_id
                SORT app.applied_at DESC
                LIMIT @skip, @limit
                RETURN app
            """,
                bind_vars={"adopter_id": adopter_id, "skip": skip, "limit": limit},
            ),
        )
        return list(cursor)

    def count_for_adopter(self, adopter_id: str) -> int:
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            RETURN LENGTH(
                FOR app IN adoption_applications
                    FILTER app.adopter_id == @adopter_id
                    RETURN 1
            )
            """,
                bind_vars={"adopter_id": adopter_id},
            ),
        )
        return int(next(cursor, 0) or 0)

    def has_application_with_status(self, adopter_id: str, breeder_id: str, statuses: list[str]) -> bool:
        """True if the adopter has an application to the breeder in one of statuses."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR app IN adoption_applications
                FILTER app.adopter_id == @adopter_id
                FILTER app.breeder_id == @breeder_id
                FILTER app.status IN @statuses
                LIMIT 1
                RETURN 1
            """,
                bind_vars={"adopter_id": adopter_id, "breeder_id": breeder_id, "statuses": statuses},
            ),
        )
        return next(cursor, None) is not None

    def count_by_status(self, breeder_id: str | None = None) -> dict[str, int]:
        """Count applications grouped by status, optionally for one breeder.

        Returns:
            Mapping of status -> count (statuses with no applications omitted)

        """
        breeder_filter = "FILTER app.breeder_id == @breeder_id" if breeder_id else ""
        bind_vars: dict[str, Any] = {"breeder_id": breeder_id} if breeder_id else {}
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            FOR app IN adoption_applications
                {breeder_filter}
                COLLECT status = app.status WITH COUNT INTO count
                RETURN {{ status, count }}
            """,
                bind_vars=bind_vars,
            ),
        )
        return {row["status"]: int(row["count"]) for row in cursor}
