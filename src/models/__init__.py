"""SQLAlchemy models."""

from src.models.board import Board, BoardMember
from src.models.user import User
from src.models.view_category import ViewCategory, ViewCategoryView

__all__ = [
    "User",
    "Board",
    "BoardMember",
    "ViewCategory",
    "ViewCategoryView",
]
