"""
Database operations package.

Contains collection-specific operations classes (one per collection).
Each *_aql.py file owns all AQL for that specific collection. The one query
that writes two collections in a single step (count_completed_adoption)
lives with the ledger whose guard flag it flips.
"""

from .adopters_aql import AdoptersOperations
from .admins_aql import AdminsOperations
from .applications_aql import ApplicationsOperations, pending_pair_key
from .available_pets_aql import AvailablePetsOperations
from .breeders_aql import BreedersOperations
from .reviews_aql import ReviewsOperations

__all__ = [
    "AdminsOperations",
    "AdoptersOperations",
    "ApplicationsOperations",
    "AvailablePetsOperations",
    "BreedersOperations",
    "ReviewsOperations",
    "pending_pair_key",
]
