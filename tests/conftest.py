"""
Pytest fixtures and configuration for the test suite.

Strategy:
- AQL operation classes are tested against a MagicMock database handle
- Everything above persistence runs against MemoryDatabase, an in-process
  stand-in with the same operation attributes
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from breedlink.helpers.dto.config_dto import EngineConfig
from breedlink.helpers.logging_helper import clear_log_context
from tests.fixtures.memory_db import MemoryDatabase


@pytest.fixture
def mock_db():
    """Provide mock ArangoDB handle."""
    db = MagicMock()
    db.name = "test_db"
    return db


@pytest.fixture
def memory_db() -> MemoryDatabase:
    """Empty in-memory database."""
    return MemoryDatabase()


@pytest.fixture
def seeded_db(memory_db: MemoryDatabase) -> MemoryDatabase:
    """
    One approved breeder, two active adopters and a fully privileged admin.

    Keys: breeder_1, adopter_1, adopter_2, admin_1
    """
    memory_db.add_breeder("breeder_1")
    memory_db.add_adopter("adopter_1", name="Jamie Kim")
    memory_db.add_adopter("adopter_2", name="Alex Park")
    memory_db.add_admin("admin_1")
    return memory_db


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig(
        default_page_size=20,
        activity_log_view_limit=50,
        dashboard_recent_count=5,
        max_page_size=100,
    )


@pytest.fixture
def form_answers() -> dict:
    """A complete, valid application form."""
    return {
        "self_introduction": "Two adults, working from home, first dog in ten years.",
        "family_members": "2 adults",
        "all_family_consent": True,
        "allergy_test_info": "Tested negative in March",
        "time_away_from_home": "Under 4 hours",
        "living_space_description": "Apartment with a small yard nearby",
        "previous_pet_experience": "Raised a beagle for 12 years",
    }


@pytest.fixture(autouse=True)
def _reset_log_context():
    yield
    clear_log_context()


# === PYTEST MARKERS ===


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: fast test against mocks or the in-memory database")
    config.addinivalue_line("markers", "integration: multi-step lifecycle test across services")
