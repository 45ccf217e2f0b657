"""Breeder review operations for ArangoDB.

One review per (adopter, breeder) pair, enforced by a unique persistent
index on [adopter_id, breeder_id]. Reviews are never deleted: takedown
clears `is_visible`.
"""

from typing import TYPE_CHECKING, Any, cast

from arango.exceptions import DocumentInsertError

from breedlink.helpers.exceptions import ConflictError
from breedlink.helpers.time_helper import now_ms
from breedlink.persistence.arango_client import DatabaseLike, is_unique_violation

if TYPE_CHECKING:
    from arango.cursor import Cursor


class ReviewsOperations:
    """Operations for the breeder_reviews collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("breeder_reviews")

    def insert_review(self, doc: dict[str, Any]) -> str:
        """Insert a review.

        Returns:
            Review _key

        Raises:
            ConflictError: The adopter already reviewed this breeder

        """
        try:
            result = cast("dict[str, Any]", self.collection.insert(doc))
        except DocumentInsertError as exc:
            if is_unique_violation(exc):
                raise ConflictError(
                    "This breeder has already been reviewed by the adopter",
                    code="review_already_exists",
                ) from exc
            raise
        return str(result["_key"])

    def get_review(self, review_id: str) -> dict[str, Any] | None:
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            RETURN DOCUMENT("breeder_reviews", @key)
            """,
                bind_vars={"key": review_id},
            ),
        )
        return next(cursor, None)

    def find_review(self, adopter_id: str, breeder_id: str) -> dict[str, Any] | None:
        """Find the adopter's review of a breeder, if any."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR r IN breeder_reviews
                FILTER r.adopter_id == @adopter_id
                FILTER r.breeder_id == @breeder_id
                LIMIT 1
                RETURN r
            """,
                bind_vars={"adopter_id": adopter_id, "breeder_id": breeder_id},
            ),
        )
        return next(cursor, None)

    def hide_review(self, review_id: str) -> dict[str, Any] | None:
        """Set is_visible to false if the review is currently visible.

        Returns:
            Updated review, or None if missing or already hidden

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR r IN breeder_reviews
                FILTER r._key == @key
                FILTER r.is_visible == true
                UPDATE r WITH { is_visible: false, hidden_at: @timestamp }
                IN breeder_reviews OPTIONS { exclusive: true }
                RETURN NEW
            """,
                bind_vars={"key": review_id, "timestamp": now_ms()},
            ),
        )
        return next(cursor, None)

    def flag_review(
        self,
        review_id: str,
        reporter_id: str,
        reason: str,
        description: str,
    ) -> dict[str, Any] | None:
        """Flag a review as reported if nobody has flagged it yet.

        Returns:
            Updated review, or None if missing or already reported

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR r IN breeder_reviews
                FILTER r._key == @key
                FILTER r.is_reported != true
                UPDATE r WITH {
                    is_reported: true,
                    reported_by: @reporter_id,
                    report_reason: @reason,
                    report_description: @description,
                    reported_at: @timestamp
                } IN breeder_reviews OPTIONS { exclusive: true }
                RETURN NEW
            """,
                bind_vars={
                    "key": review_id,
                    "reporter_id": reporter_id,
                    "reason": reason,
                    "description": description,
                    "timestamp": now_ms(),
                },
            ),
        )
        return next(cursor, None)

    def clear_report_flag(self, review_id: str) -> dict[str, Any] | None:
        """Clear the report flag if set.

        Returns:
            Updated review, or None if missing or not reported

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR r IN breeder_reviews
                FILTER r._key == @key
                FILTER r.is_reported == true
                UPDATE r WITH { is_reported: false }
                IN breeder_reviews OPTIONS { exclusive: true }
                RETURN NEW
            """,
                bind_vars={"key": review_id},
            ),
        )
        return next(cursor, None)

    def visible_rating_summary(self, breeder_id: str) -> tuple[int, int]:
        """Count and rating sum over the breeder's visible reviews.

        Returns:
            Tuple of (review_count, rating_sum); (0, 0) if none

        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR r IN breeder_reviews
                FILTER r.breeder_id == @breeder_id
                FILTER r.is_visible == true
                COLLECT AGGREGATE review_count = LENGTH(1), rating_sum = SUM(r.rating)
                RETURN { review_count, rating_sum }
            """,
                bind_vars={"breeder_id": breeder_id},
            ),
        )
        result = next(cursor, None)
        if result is None:
            return (0, 0)
        return (int(result.get("review_count") or 0), int(result.get("rating_sum") or 0))

    def list_visible_for_breeder(self, breeder_id: str, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        """Visible reviews of a breeder, newest first."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR r IN breeder_reviews
                FILTER r.breeder_id == @breeder_id
                FILTER r.is_visible == true
                SORT r.written_at DESC
                LIMIT @skip, @limit
                RETURN r
            """,
                bind_vars={"breeder_id": breeder_id, "skip": skip, "limit": limit},
            ),
        )
        return list(cursor)

    def count_visible(self, breeder_id: str | None = None) -> int:
        breeder_filter = "FILTER r.breeder_id == @breeder_id" if breeder_id else ""
        bind_vars: dict[str, Any] = {"breeder_id": breeder_id} if breeder_id else {}
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                f"""
            RETURN LENGTH(
                FOR r IN breeder_reviews
                    FILTER r.is_visible == true
                    {breeder_filter}
                    RETURN 1
            )
            """,
                bind_vars=bind_vars,
            ),
        )
        return int(next(cursor, 0) or 0)

    def list_reported(self, skip: int = 0, limit: int = 20) -> list[dict[str, Any]]:
        """Flagged reviews that are still visible, most recently reported first."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            FOR r IN breeder_reviews
                FILTER r.is_reported == true
                FILTER r.is_visible == true
                SORT r.reported_at DESC
                LIMIT @skip, @limit
                RETURN r
            """,
                bind_vars={"skip": skip, "limit": limit},
            ),
        )
        return list(cursor)

    def count_reported(self) -> int:
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
            RETURN LENGTH(
                FOR r IN breeder_reviews
                    FILTER r.is_reported == true
                    FILTER r.is_visible == true
                    RETURN 1
            )
            """,
            ),
        )
        return int(next(cursor, 0) or 0)
