"""
Platform package.
"""

from .arango_bootstrap_comp import DOCUMENT_COLLECTIONS, ensure_schema

__all__ = ["DOCUMENT_COLLECTIONS", "ensure_schema"]
