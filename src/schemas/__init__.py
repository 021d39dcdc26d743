"""Pydantic schemas for API requests and responses."""

from src.schemas.view_category import (
    ViewCategoryCreate,
    ViewCategoryResponse,
    ViewCategoryUpdate,
    ViewCategoryWithViewsResponse,
    ViewMetadataResponse,
)

__all__ = [
    "ViewCategoryCreate",
    "ViewCategoryUpdate",
    "ViewCategoryResponse",
    "ViewCategoryWithViewsResponse",
    "ViewMetadataResponse",
]
