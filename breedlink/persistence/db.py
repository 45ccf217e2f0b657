"""Breedlink database handle.

Wires one operations class per collection onto a single ArangoDB handle.
Schema creation lives in components/platform/arango_bootstrap_comp.py so the
persistence layer stays "AQL only".
"""

from __future__ import annotations

from breedlink.persistence.arango_client import DatabaseLike, create_arango_client
from breedlink.persistence.database.adopters_aql import AdoptersOperations
from breedlink.persistence.database.admins_aql import AdminsOperations
from breedlink.persistence.database.applications_aql import ApplicationsOperations
from breedlink.persistence.database.available_pets_aql import AvailablePetsOperations
from breedlink.persistence.database.breeders_aql import BreedersOperations
from breedlink.persistence.database.reviews_aql import ReviewsOperations

__all__ = ["Database"]


class Database:
    """
    Application database.

    Single source of truth for persistence across all services.
    Operation attributes are named after the collections they own.
    """

    def __init__(self, db: DatabaseLike):
        self.db = db

        self.breeders = BreedersOperations(db)
        self.adopters = AdoptersOperations(db)
        self.admins = AdminsOperations(db)
        self.adoption_applications = ApplicationsOperations(db)
        self.breeder_reviews = ReviewsOperations(db)
        self.available_pets = AvailablePetsOperations(db)

    @classmethod
    def connect(
        cls,
        hosts: str,
        username: str,
        password: str,
        db_name: str,
    ) -> Database:
        """Open a pooled ArangoDB connection and wrap it."""
        return cls(create_arango_client(hosts=hosts, username=username, password=password, db_name=db_name))
