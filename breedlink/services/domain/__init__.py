"""
Domain package.
"""

from .admin_svc import AdminService
from .adopter_svc import AdopterService
from .breeder_svc import BreederService
from .consistency_svc import ConsistencyService

__all__ = [
    "AdminService",
    "AdopterService",
    "BreederService",
    "ConsistencyService",
]
