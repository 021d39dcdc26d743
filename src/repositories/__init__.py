"""Persistence for view categories and their view memberships."""

from src.repositories.view_category import ViewCategoryRepository
from src.repositories.view_category_view import CategoryWithViews, ViewCategoryViewRepository

__all__ = [
    "ViewCategoryRepository",
    "ViewCategoryViewRepository",
    "CategoryWithViews",
]
