"""
Favorites package.
"""

from .favorite_wf import add_favorite_workflow, remove_favorite_workflow

__all__ = ["add_favorite_workflow", "remove_favorite_workflow"]
