"""
Unit tests for the from_doc constructors of the domain DTOs.

Tests the mapping from stored document shapes to typed DTOs, including
the defaults applied to missing fields.
"""

import pytest

from breedlink.helpers.dto.admin_dto import ActivityLogEntry
from breedlink.helpers.dto.application_dto import Application, ReceivedApplication
from breedlink.helpers.dto.breeder_dto import BreederStats, FavoriteBreeder
from breedlink.helpers.dto.moderation_dto import BreederReport, Review, VerificationInfo


class TestApplicationFromDoc:
    """Tests for Application.from_doc."""

    @pytest.mark.unit
    def test_maps_ledger_document(self) -> None:
        """Should map _key and breeder_notes to application_id and notes."""
        app = Application.from_doc(
            {
                "_key": "app_1",
                "breeder_id": "breeder_1",
                "adopter_id": "adopter_1",
                "status": "consultation_completed",
                "form_answers": {"family_members": "2 adults"},
                "applied_at": 1000,
                "processed_at": 2000,
                "breeder_notes": "Call back Friday",
                "pending_pair": None,
            }
        )
        assert app.application_id == "app_1"
        assert app.notes == "Call back Friday"
        assert app.form_answers == {"family_members": "2 adults"}
        assert app.processed_at == 2000

    @pytest.mark.unit
    def test_missing_form_answers_becomes_empty_dict(self) -> None:
        app = Application.from_doc(
            {"_key": "a", "breeder_id": "b", "adopter_id": "c", "status": "consultation_pending", "form_answers": None}
        )
        assert app.form_answers == {}
        assert app.applied_at == 0


class TestReceivedApplicationFromDoc:
    @pytest.mark.unit
    def test_maps_read_model_entry(self) -> None:
        entry = ReceivedApplication.from_doc(
            {
                "application_id": "app_1",
                "adopter_id": "adopter_1",
                "adopter_name": "Jamie Kim",
                "status": "adoption_approved",
                "applied_at": 5,
                "pet_name": "Mochi",
            }
        )
        assert entry.application_id == "app_1"
        assert entry.pet_name == "Mochi"
        assert entry.processed_at is None


class TestVerificationInfoFromDoc:
    """Tests for VerificationInfo.from_doc."""

    @pytest.mark.unit
    def test_missing_verification_is_pending(self) -> None:
        """A breeder without a verification object should read as pending."""
        info = VerificationInfo.from_doc(None)
        assert info.status == "pending"
        assert info.documents == []
        assert info.submitted_by_email is False

    @pytest.mark.unit
    def test_documents_are_mapped(self) -> None:
        info = VerificationInfo.from_doc(
            {
                "status": "reviewing",
                "plan": "premium",
                "documents": [{"file_name": "docs/license.pdf", "document_type": "business_license"}],
            }
        )
        assert info.plan == "premium"
        assert info.documents[0].file_name == "docs/license.pdf"
        assert info.documents[0].document_type == "business_license"


class TestBreederReportFromDoc:
    @pytest.mark.unit
    def test_maps_merged_report(self) -> None:
        report = BreederReport.from_doc(
            {
                "report_id": "r1",
                "breeder_id": "breeder_1",
                "breeder_name": "Happy Paws Kennel",
                "reporter_id": "adopter_1",
                "type": "false_info",
                "description": "Photos are of another dog",
                "status": "pending",
                "reported_at": 10,
            }
        )
        assert report.breeder_name == "Happy Paws Kennel"
        assert report.admin_notes is None


class TestReviewFromDoc:
    @pytest.mark.unit
    def test_visibility_defaults(self) -> None:
        """Missing flags should default to visible and not reported."""
        review = Review.from_doc(
            {"_key": "rev1", "breeder_id": "b", "adopter_id": "a", "type": "adoption", "rating": "4", "content": "ok"}
        )
        assert review.rating == 4
        assert review.is_visible is True
        assert review.is_reported is False


class TestBreederStatsFromDoc:
    @pytest.mark.unit
    def test_none_gives_zeroes(self) -> None:
        assert BreederStats.from_doc(None) == BreederStats()

    @pytest.mark.unit
    def test_partial_stats(self) -> None:
        stats = BreederStats.from_doc({"completed_adoptions": 3, "average_rating": 4.5})
        assert stats.completed_adoptions == 3
        assert stats.average_rating == 4.5
        assert stats.total_reviews == 0


class TestFavoriteBreederFromDoc:
    @pytest.mark.unit
    def test_maps_favorite_breeder_id(self) -> None:
        fav = FavoriteBreeder.from_doc(
            {
                "favorite_breeder_id": "breeder_1",
                "breeder_name": "Happy Paws Kennel",
                "breeder_profile_image": None,
                "breeder_location": "Seoul Gangnam",
                "added_at": 7,
            }
        )
        assert fav.breeder_id == "breeder_1"
        assert fav.breeder_location == "Seoul Gangnam"


class TestActivityLogEntryFromDoc:
    @pytest.mark.unit
    def test_maps_entry(self) -> None:
        entry = ActivityLogEntry.from_doc(
            {
                "log_id": "l1",
                "action": "approve_breeder",
                "target_type": "breeder",
                "target_id": "breeder_1",
                "description": "approve_breeder performed on breeder Happy Paws Kennel",
                "performed_at": 99,
            }
        )
        assert entry.action == "approve_breeder"
        assert entry.target_name is None
