"""
Services package.
"""

from .config_svc import INTERNAL_DASHBOARD_RECENT_COUNT, INTERNAL_MAX_PAGE_SIZE, ConfigService
from .domain import AdminService, AdopterService, BreederService, ConsistencyService

__all__ = [
    "INTERNAL_DASHBOARD_RECENT_COUNT",
    "INTERNAL_MAX_PAGE_SIZE",
    "AdminService",
    "AdopterService",
    "BreederService",
    "ConfigService",
    "ConsistencyService",
]
