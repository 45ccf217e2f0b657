"""Unit tests for ReviewsOperations (reviews_aql.py)."""

from unittest.mock import MagicMock

import pytest
from arango.exceptions import DocumentInsertError

from breedlink.helpers.exceptions import ConflictError
from breedlink.persistence.database.available_pets_aql import AvailablePetsOperations
from breedlink.persistence.database.reviews_aql import ReviewsOperations


@pytest.fixture
def ops(mock_db):
    return ReviewsOperations(mock_db)


class TestInsertReview:
    @pytest.mark.unit
    def test_duplicate_pair_becomes_conflict(self, ops, mock_db):
        """A 1210 from the [adopter_id, breeder_id] index should surface as review_already_exists."""
        resp = MagicMock()
        resp.error_code = 1210
        resp.error_message = "unique constraint violated"
        resp.status_code = 409
        mock_db.collection.return_value.insert.side_effect = DocumentInsertError(resp, MagicMock())

        with pytest.raises(ConflictError) as exc_info:
            ops.insert_review({"_key": "rev1", "adopter_id": "a", "breeder_id": "b"})

        assert exc_info.value.code == "review_already_exists"


class TestVisibilityAndFlags:
    @pytest.mark.unit
    def test_hide_review_only_when_visible(self, ops, mock_db):
        mock_db.aql.execute.return_value = iter([])

        assert ops.hide_review("rev1") is None
        query = mock_db.aql.execute.call_args[0][0]
        assert "FILTER r.is_visible == true" in query
        assert "is_visible: false" in query

    @pytest.mark.unit
    def test_flag_review_only_once(self, ops, mock_db):
        mock_db.aql.execute.return_value = iter([{"_key": "rev1", "is_reported": True}])

        result = ops.flag_review("rev1", "adopter_2", "spam", "")

        assert result["is_reported"] is True
        assert "FILTER r.is_reported != true" in mock_db.aql.execute.call_args[0][0]
        bind_vars = mock_db.aql.execute.call_args[1]["bind_vars"]
        assert bind_vars["reporter_id"] == "adopter_2"
        assert bind_vars["reason"] == "spam"


class TestRatingSummary:
    """Test visible_rating_summary() method."""

    @pytest.mark.unit
    def test_no_visible_reviews(self, ops, mock_db):
        mock_db.aql.execute.return_value = iter([])

        assert ops.visible_rating_summary("breeder_1") == (0, 0)

    @pytest.mark.unit
    def test_summary_values(self, ops, mock_db):
        mock_db.aql.execute.return_value = iter([{"review_count": 2, "rating_sum": 9}])

        assert ops.visible_rating_summary("breeder_1") == (2, 9)
        query = mock_db.aql.execute.call_args[0][0]
        assert "FILTER r.is_visible == true" in query
        assert "COLLECT AGGREGATE" in query

    @pytest.mark.unit
    def test_aggregate_nulls_treated_as_zero(self, ops, mock_db):
        mock_db.aql.execute.return_value = iter([{"review_count": 0, "rating_sum": None}])

        assert ops.visible_rating_summary("breeder_1") == (0, 0)


class TestReportedListing:
    @pytest.mark.unit
    def test_list_reported_excludes_hidden(self, ops, mock_db):
        mock_db.aql.execute.return_value = iter([])

        ops.list_reported(skip=0, limit=5)

        query = mock_db.aql.execute.call_args[0][0]
        assert "FILTER r.is_reported == true" in query
        assert "FILTER r.is_visible == true" in query

    @pytest.mark.unit
    def test_count_visible_for_breeder(self, ops, mock_db):
        mock_db.aql.execute.return_value = iter([7])

        assert ops.count_visible("breeder_1") == 7
        assert mock_db.aql.execute.call_args[1]["bind_vars"] == {"breeder_id": "breeder_1"}


class TestAvailablePets:
    @pytest.mark.unit
    def test_get_pet(self, mock_db):
        mock_db.aql.execute.return_value = iter([{"_key": "pet_1", "status": "available"}])

        assert AvailablePetsOperations(mock_db).get_pet("pet_1")["status"] == "available"
