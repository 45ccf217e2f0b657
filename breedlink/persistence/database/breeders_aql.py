"""Breeder aggregate operations for ArangoDB.

A breeder document owns its profile, its verification state, the derived
`stats` counters, the `received_applications` read model and the embedded
breeder `reports`. Every mutation here is a targeted single-document UPDATE
so concurrent writers never overwrite each other's fields.
"""

from typing import TYPE_CHECKING, Any, cast

from breedlink.helpers.time_helper import now_ms
from breedlink.persistence.arango_client import DatabaseLike
from breedlink.persistence.database.adopters_aql import user_search_filters

if TYPE_CHECKING:
    from arango.cursor import Cursor


class BreedersOperations:
    """Operations for the breeders collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("breeders")

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def get_breeder(self, breeder_id: str) -> dict[str, Any] | None:
        """Get breeder by _key.

        Returns:
            Breeder dict or None if not found

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            RETURN DOCUMENT("breeders", @key)
            """,
                bind_vars={"key": breeder_id},
            ),
        )
        return next(cursor, None)

    def set_account_status(self, breeder_id: str, status: str) -> bool:
        """Set breeder account status. Returns False if breeder not found."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER b._key == @key
                UPDATE b WITH { status: @status, updated_at: @timestamp }
                IN breeders OPTIONS { exclusive: true }
                RETURN NEW._key
            """,
                bind_vars={"key": breeder_id, "status": status, "timestamp": now_ms()},
            ),
        )
        return next(cursor, None) is not None

    def count_breeders(
        self,
        status: str | None = None,
        verification_status: str | None = None,
        keyword: str | None = None,
    ) -> int:
        """Count breeders, optionally filtered by account status, verification status and keyword."""
        filter_clause, bind_vars = user_search_filters("b", "status", status, keyword)
        if verification_status:
            filter_clause += "\n                    FILTER (b.verification.status || 'pending') == @verification_status"
            bind_vars["verification_status"] = verification_status
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            RETURN LENGTH(
                FOR b IN breeders
                    {filter_clause}
                    RETURN 1
            )
            """,
                bind_vars=bind_vars,
            ),
        )
        return int(next(cursor, 0) or 0)

    def search_breeders(
        self,
        status: str | None = None,
        keyword: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        """List breeders for user management, by name, with their stats."""
        filter_clause, bind_vars = user_search_filters("b", "status", status, keyword)
        bind_vars.update({"skip": skip, "limit": limit})
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            FOR b IN breeders
                {filter_clause}
                SORT b.name, b._key
                LIMIT @skip, @limit
                RETURN {{ _key: b._key, name: b.name, email: b.email, status: b.status, stats: b.stats }}
            """,
                bind_vars=bind_vars,
            ),
        )
        return list(cursor)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def transition_verification(
        self,
        breeder_id: str,
        expected_statuses: list[str],
        fields: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Merge fields into verification if its status is one of expected_statuses.

        A breeder without a verification object counts as pending.

        Args:
            breeder_id: Breeder _key
            expected_statuses: Statuses the caller validated the move from
            fields: Verification fields to merge (must include `status`)

        Returns:
            Updated verification dict, or None if the breeder is missing or
            the status changed concurrently

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER b._key == @key
                FILTER (b.verification.status || "pending") IN @expected_statuses
                UPDATE b WITH {
                    verification: MERGE(b.verification || {}, @fields),
                    updated_at: @timestamp
                } IN breeders OPTIONS { exclusive: true, mergeObjects: false }
                RETURN NEW.verification
            """,
                bind_vars={
                    "key": breeder_id,
                    "expected_statuses": expected_statuses,
                    "fields": fields,
                    "timestamp": now_ms(),
                },
            ),
        )
        return next(cursor, None)

    def list_by_verification_status(self, status: str, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        """List breeders in a verification status, oldest submission first."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER (b.verification.status || "pending") == @status
                SORT b.verification.submitted_at ASC, b._key ASC
                LIMIT @skip, @limit
                RETURN {
                    _key: b._key,
                    name: b.name,
                    email: b.email,
                    verification: b.verification
                }
            """,
                bind_vars={"status": status, "skip": skip, "limit": limit},
            ),
        )
        return list(cursor)

    # ------------------------------------------------------------------
    # Derived stats
    # ------------------------------------------------------------------

    def set_completed_adoptions(self, breeder_id: str, value: int) -> bool:
        """Overwrite the completed adoptions counter (reconciliation only)."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER b._key == @key
                UPDATE b WITH { stats: { completed_adoptions: @value } }
                IN breeders OPTIONS { exclusive: true }
                RETURN NEW._key
            """,
                bind_vars={"key": breeder_id, "value": value},
            ),
        )
        return next(cursor, None) is not None

    def set_review_stats(self, breeder_id: str, average_rating: float, total_reviews: int) -> bool:
        """Store recomputed review statistics."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER b._key == @key
                UPDATE b WITH {
                    stats: { average_rating: @average_rating, total_reviews: @total_reviews }
                } IN breeders OPTIONS { exclusive: true }
                RETURN NEW._key
            """,
                bind_vars={"key": breeder_id, "average_rating": average_rating, "total_reviews": total_reviews},
            ),
        )
        return next(cursor, None) is not None

    def increment_profile_views(self, breeder_id: str) -> None:
        self.db.aql.execute(
            """
            FOR b IN breeders
                FILTER b._key == @key
                UPDATE b WITH { stats: { profile_views: (b.stats.profile_views || 0) + 1 } }
                IN breeders OPTIONS { exclusive: true }
            """,
            bind_vars={"key": breeder_id},
        )

    # ------------------------------------------------------------------
    # Received applications read model
    # ------------------------------------------------------------------

    def project_received_application(self, breeder_id: str, entry: dict[str, Any]) -> bool | None:
        """Upsert one received_applications entry matched by application_id.

        Appending a new entry also bumps `stats.total_applications`; updating
        an existing entry leaves the counter alone, so re-projection is
        idempotent.

        Args:
            breeder_id: Breeder _key
            entry: Projected entry (must include `application_id`)

        Returns:
            True if the entry was appended, False if an existing entry was
            updated, None if the breeder does not exist

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER b._key == @key
                LET existing = b.received_applications || []
                LET found = LENGTH(
                    FOR e IN existing
                        FILTER e.application_id == @application_id
                        RETURN 1
                ) > 0
                LET merged = found
                    ? (FOR e IN existing RETURN e.application_id == @application_id ? MERGE(e, @entry) : e)
                    : APPEND(existing, [@entry])
                UPDATE b WITH {
                    received_applications: merged,
                    stats: {
                        total_applications: found
                            ? (b.stats.total_applications || 0)
                            : (b.stats.total_applications || 0) + 1
                    }
                } IN breeders OPTIONS { exclusive: true }
                RETURN { appended: !found }
            """,
                bind_vars={"key": breeder_id, "application_id": entry["application_id"], "entry": entry},
            ),
        )
        result = next(cursor, None)
        if result is None:
            return None
        return bool(result["appended"])

    def get_received_application(self, breeder_id: str, application_id: str) -> dict[str, Any] | None:
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER b._key == @key
                FOR e IN (b.received_applications || [])
                    FILTER e.application_id == @application_id
                    LIMIT 1
                    RETURN e
            """,
                bind_vars={"key": breeder_id, "application_id": application_id},
            ),
        )
        return next(cursor, None)

    def list_received_applications(
        self,
        breeder_id: str,
        status: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        """List the read model entries, newest first."""
        status_filter = "FILTER e.status == @status" if status else ""
        bind_vars: dict[str, Any] = {"key": breeder_id, "skip": skip, "limit": limit}
        if status:
            bind_vars["status"] = status
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            FOR b IN breeders
                FILTER b._key == @key
                FOR e IN (b.received_applications || [])
                    {status_filter}
                    SORT e.applied_at DESC
                    LIMIT @skip, @limit
                    RETURN e
            """,
                bind_vars=bind_vars,
            ),
        )
        return list(cursor)

    def count_received_applications(self, breeder_id: str, status: str | None = None) -> int:
        status_filter = "FILTER e.status == @status" if status else ""
        bind_vars: dict[str, Any] = {"key": breeder_id}
        if status:
            bind_vars["status"] = status
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            FOR b IN breeders
                FILTER b._key == @key
                RETURN LENGTH(
                    FOR e IN (b.received_applications || [])
                        {status_filter}
                        RETURN 1
                )
            """,
                bind_vars=bind_vars,
            ),
        )
        return int(next(cursor, 0) or 0)

    # ------------------------------------------------------------------
    # Embedded breeder reports
    # ------------------------------------------------------------------

    def push_report(self, breeder_id: str, report: dict[str, Any]) -> bool:
        """Append a report to the breeder. Returns False if breeder not found."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER b._key == @key
                UPDATE b WITH {
                    reports: APPEND(b.reports || [], [@report])
                } IN breeders OPTIONS { exclusive: true }
                RETURN NEW._key
            """,
                bind_vars={"key": breeder_id, "report": report},
            ),
        )
        return next(cursor, None) is not None

    def get_report(self, breeder_id: str, report_id: str) -> dict[str, Any] | None:
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER b._key == @key
                FOR r IN (b.reports || [])
                    FILTER r.report_id == @report_id
                    LIMIT 1
                    RETURN MERGE(r, { breeder_id: b._key, breeder_name: b.name })
            """,
                bind_vars={"key": breeder_id, "report_id": report_id},
            ),
        )
        return next(cursor, None)

    def transition_report(
        self,
        breeder_id: str,
        report_id: str,
        expected_status: str,
        fields: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Merge fields into one report if it still holds expected_status.

        Returns:
            Updated report, or None if breeder/report is missing or the
            status changed concurrently

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FILTER b._key == @key
                FILTER LENGTH(
                    FOR r IN (b.reports || [])
                        FILTER r.report_id == @report_id AND r.status == @expected_status
                        RETURN 1
                ) > 0
                UPDATE b WITH {
                    reports: (
                        FOR r IN b.reports
                            RETURN r.report_id == @report_id ? MERGE(r, @fields) : r
                    )
                } IN breeders OPTIONS { exclusive: true }
                LET updated = FIRST(
                    FOR r IN NEW.reports
                        FILTER r.report_id == @report_id
                        RETURN r
                )
                RETURN MERGE(updated, { breeder_id: NEW._key, breeder_name: NEW.name })
            """,
                bind_vars={
                    "key": breeder_id,
                    "report_id": report_id,
                    "expected_status": expected_status,
                    "fields": fields,
                },
            ),
        )
        return next(cursor, None)

    def list_reports(self, status: str | None = None, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        """List breeder reports across all breeders, newest first.

        Without a status filter, dismissed reports are excluded.
        """
        status_filter = "FILTER r.status == @status" if status else "FILTER r.status != 'dismissed'"
        bind_vars: dict[str, Any] = {"skip": skip, "limit": limit}
        if status:
            bind_vars["status"] = status
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            FOR b IN breeders
                FOR r IN (b.reports || [])
                    {status_filter}
                    SORT r.reported_at DESC
                    LIMIT @skip, @limit
                    RETURN MERGE(r, {{ breeder_id: b._key, breeder_name: b.name }})
            """,
                bind_vars=bind_vars,
            ),
        )
        return list(cursor)

    def count_reports(self, status: str | None = None) -> int:
        status_filter = "FILTER r.status == @status" if status else "FILTER r.status != 'dismissed'"
        bind_vars: dict[str, Any] = {"status": status} if status else {}
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            RETURN LENGTH(
                FOR b IN breeders
                    FOR r IN (b.reports || [])
                        {status_filter}
                        RETURN 1
            )
            """,
                bind_vars=bind_vars,
            ),
        )
        return int(next(cursor, 0) or 0)

    def count_reports_by_status(self) -> dict[str, int]:
        """Count breeder reports of every status (dismissed included), grouped by status."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR b IN breeders
                FOR r IN (b.reports || [])
                    COLLECT status = r.status WITH COUNT INTO count
                    RETURN { status, count }
            """,
            ),
        )
        return {row["status"]: int(row["count"]) for row in cursor}
