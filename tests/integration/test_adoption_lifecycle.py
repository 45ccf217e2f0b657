"""
End-to-end adoption flows through the Application services.

Runs against the in-memory database with real threads to exercise the
duplicate guards and the compare-and-set status sync under contention.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from breedlink.app import Application
from breedlink.helpers.exceptions import ConflictError, ForbiddenError, ProjectionError
from breedlink.services.config_svc import ConfigService

WORKERS = 8


@pytest.fixture
def app(seeded_db):
    application = Application(config_service=ConfigService(overrides={"log_level": "WARNING"}), db=seeded_db)
    application.start(bootstrap_schema=False)
    yield application
    application.stop()


def _run_concurrently(fn, count=WORKERS):
    """Call fn() from `count` threads; return (results, errors)."""
    results, errors = [], []

    def call(_):
        try:
            return fn(), None
        except Exception as e:
            return None, e

    with ThreadPoolExecutor(max_workers=count) as pool:
        for result, error in pool.map(call, range(count)):
            if error is None:
                results.append(result)
            else:
                errors.append(error)
    return results, errors


class TestAdoptionLifecycle:
    @pytest.mark.integration
    def test_full_happy_path(self, app, seeded_db, form_answers) -> None:
        adopter = app.get_service("adopter")
        breeder = app.get_service("breeder")

        submitted = adopter.submit_application("adopter_1", "breeder_1", form_answers, True)
        breeder.advance_application("breeder_1", submitted.application_id, "consultation_completed")
        breeder.advance_application("breeder_1", submitted.application_id, "adoption_approved")
        review = adopter.create_review("adopter_1", "breeder_1", "adoption", 4, "Clear contract, healthy puppy")

        profile = breeder.get_public_profile("breeder_1")
        assert profile.stats.completed_adoptions == 1
        assert profile.stats.total_applications == 1
        assert (profile.stats.average_rating, profile.stats.total_reviews) == (4.0, 1)
        assert adopter.get_application("adopter_1", submitted.application_id).status == "adoption_approved"
        assert breeder.list_public_reviews("breeder_1").reviews[0].review_id == review.review_id

    @pytest.mark.integration
    def test_concurrent_duplicate_submits(self, app, seeded_db, form_answers) -> None:
        adopter = app.get_service("adopter")

        results, errors = _run_concurrently(
            lambda: adopter.submit_application("adopter_1", "breeder_1", form_answers, True)
        )

        assert len(results) == 1
        assert len(errors) == WORKERS - 1
        assert all(isinstance(e, ConflictError) and e.code == "application_already_pending" for e in errors)
        assert seeded_db.adoption_applications.count_for_adopter("adopter_1") == 1
        assert seeded_db.breeders.count_received_applications("breeder_1") == 1

    @pytest.mark.integration
    def test_retried_approval_counts_once(self, app, seeded_db) -> None:
        seeded_db.add_application("app_1", "adopter_1", "breeder_1")
        breeder = app.get_service("breeder")

        results, errors = _run_concurrently(
            lambda: breeder.advance_application("breeder_1", "app_1", "adoption_approved")
        )

        assert errors == []
        assert sum(1 for r in results if r.changed) == 1
        assert seeded_db.breeders.get_breeder("breeder_1")["stats"]["completed_adoptions"] == 1
        assert seeded_db.breeders.get_received_application("breeder_1", "app_1")["status"] == "adoption_approved"

    @pytest.mark.integration
    def test_concurrent_favorites_single_entry(self, app, seeded_db) -> None:
        adopter = app.get_service("adopter")

        results, errors = _run_concurrently(lambda: adopter.add_favorite("adopter_1", "breeder_1"))

        assert len(results) == 1
        assert all(isinstance(e, ConflictError) for e in errors)
        assert adopter.list_favorites("adopter_1").total == 1

    @pytest.mark.integration
    def test_hiding_only_review_resets_stats(self, app, seeded_db) -> None:
        seeded_db.add_application("app_1", "adopter_1", "breeder_1", status="consultation_completed")
        created = app.get_service("adopter").create_review("adopter_1", "breeder_1", "consultation", 2, "Slow replies")
        app.get_service("adopter").report_review("adopter_2", created.review_id, "Unfair")

        app.get_service("admin").hide_review("admin_1", created.review_id, "Off-topic")

        stats = seeded_db.breeders.get_breeder("breeder_1")["stats"]
        assert (stats["average_rating"], stats["total_reviews"]) == (0.0, 0)
        assert app.get_service("admin").list_reported_reviews("admin_1").total == 0

    @pytest.mark.integration
    def test_forbidden_report_resolution(self, app, seeded_db) -> None:
        seeded_db.add_admin("admin_2", permissions={"can_view_statistics": True})
        report = app.get_service("adopter").report_breeder("adopter_1", "breeder_1", "other", "Asked for cash only")

        with pytest.raises(ForbiddenError):
            app.get_service("admin").update_report_status("admin_2", "breeder_1", report.report_id, "resolved")

        [listed] = app.get_service("admin").list_reports("admin_1").reports
        assert listed.status == "pending"
        assert listed.processed_at is None

    @pytest.mark.integration
    def test_projection_failure_then_repair(self, app, seeded_db, form_answers, monkeypatch) -> None:
        original = seeded_db.breeders.project_received_application

        def unavailable(breeder_id, entry):
            raise RuntimeError("breeders collection unavailable")

        monkeypatch.setattr(seeded_db.breeders, "project_received_application", unavailable)
        with pytest.raises(ProjectionError) as exc_info:
            app.get_service("adopter").submit_application("adopter_1", "breeder_1", form_answers, True)
        monkeypatch.setattr(seeded_db.breeders, "project_received_application", original)

        application_id = exc_info.value.application_id
        assert app.get_service("breeder").list_received_applications("breeder_1").total == 0

        assert app.get_service("consistency").repair_application_mirror(application_id) is True
        received = app.get_service("breeder").list_received_applications("breeder_1")
        assert [a.application_id for a in received.applications] == [application_id]
