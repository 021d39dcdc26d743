"""View categorization service.

Orchestrates category and membership changes for a board: validates input,
checks board access and category ownership, writes through the repositories
and announces each committed change to the board's team.
"""

import logging

from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.board import Board
from src.models.mixins import get_millis, new_id
from src.models.view_category import (
    UNCATEGORIZED_CATEGORY_ID,
    VIEW_CATEGORY_TYPES,
    ViewCategory,
    ViewCategoryView,
)
from src.repositories.view_category import ViewCategoryRepository
from src.repositories.view_category_view import CategoryWithViews, ViewCategoryViewRepository
from src.services.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    ViewCategoryValidationError,
)
from src.services.permissions import get_board, has_board_view_access
from src.services.realtime import ChangeNotifier

logger = logging.getLogger(__name__)


class CategorizationService:
    """Service for organizing a board's views into ordered categories."""

    def __init__(
        self,
        db: Session,
        notifier: ChangeNotifier | None = None,
        broadcast_uncategorize: bool | None = None,
    ):
        self.db = db
        self.notifier = notifier or ChangeNotifier()
        self.categories = ViewCategoryRepository(db)
        self.memberships = ViewCategoryViewRepository(db, self.categories)
        if broadcast_uncategorize is None:
            broadcast_uncategorize = get_settings().broadcast_uncategorize
        self.broadcast_uncategorize = broadcast_uncategorize

    def _require_board(self, board_id: str, user_id: str) -> Board:
        """Load a board the user can view."""
        board = get_board(self.db, board_id)
        if board is None:
            raise NotFoundError(f"board ID={board_id}")
        if not has_board_view_access(self.db, user_id, board_id):
            raise PermissionDeniedError("access denied to board")
        return board

    def _require_category(self, board_id: str, category_id: str) -> ViewCategory:
        """Load a live category that belongs to the board."""
        category = self.categories.get(category_id)
        if category.is_deleted or category.board_id != board_id:
            raise NotFoundError(f"view category ID={category_id}")
        return category

    def _require_owned_category(self, board_id: str, category_id: str, user_id: str) -> ViewCategory:
        category = self._require_category(board_id, category_id)
        if category.user_id != user_id:
            raise PermissionDeniedError("access denied to view category")
        return category

    def create_category(
        self,
        user_id: str,
        board_id: str,
        name: str,
        category_type: str,
        category_id: str | None = None,
        collapsed: bool = False,
    ) -> ViewCategory:
        """Create a category owned by ``user_id`` at the top of the board."""
        name = (name or "").strip()
        category_id = (category_id or "").strip() or new_id()

        if not name:
            raise ViewCategoryValidationError("view category name is required")
        if not user_id:
            raise ViewCategoryValidationError("view category user id is required")
        if not board_id:
            raise ViewCategoryValidationError("view category board id is required")
        if category_type not in VIEW_CATEGORY_TYPES:
            raise ViewCategoryValidationError("invalid view category type")

        board = self._require_board(board_id, user_id)

        now = get_millis()
        category = ViewCategory(
            id=category_id,
            name=name,
            user_id=user_id,
            board_id=board_id,
            create_at=now,
            update_at=now,
            delete_at=0,
            collapsed=collapsed,
            sort_order=0,
            type=category_type,
        )
        category = self.categories.create(category)
        logger.info(f"User {user_id} created view category {category.id} on board {board_id}")

        self.notifier.category_changed(board.team_id, category)
        return category

    def get_category(self, user_id: str, board_id: str, category_id: str) -> ViewCategory:
        """Get a live category of a board the user can view."""
        self._require_board(board_id, user_id)
        return self._require_category(board_id, category_id)

    def update_category(
        self,
        user_id: str,
        board_id: str,
        category_id: str,
        name: str | None = None,
        collapsed: bool | None = None,
    ) -> ViewCategory:
        """Rename a category or change its collapsed state."""
        if name is not None:
            name = name.strip()
            if not name:
                raise ViewCategoryValidationError("view category name is required")

        board = self._require_board(board_id, user_id)
        category = self._require_owned_category(board_id, category_id, user_id)

        if name is not None:
            category.name = name
        if collapsed is not None:
            category.collapsed = collapsed
        category.update_at = get_millis()

        category = self.categories.update(category)
        self.notifier.category_changed(board.team_id, category)
        return category

    def delete_category(self, user_id: str, board_id: str, category_id: str) -> ViewCategory:
        """Tombstone a category.

        Memberships pointing at it are left as they are.
        """
        board = self._require_board(board_id, user_id)
        self._require_owned_category(board_id, category_id, user_id)

        self.categories.soft_delete(category_id, user_id, board_id)
        category = self.categories.get(category_id)
        logger.info(f"User {user_id} deleted view category {category_id}")

        self.notifier.category_changed(board.team_id, category)
        return category

    def list_categories_with_membership(self, user_id: str, board_id: str) -> list[CategoryWithViews]:
        """Live categories of a board, each with its ordered views."""
        self._require_board(board_id, user_id)
        return self.memberships.list_with_membership(board_id)

    def reorder_categories(self, user_id: str, board_id: str, category_order: list[str]) -> list[str]:
        """Reorder the board's categories; returns the order in effect."""
        board = self._require_board(board_id, user_id)
        new_order = self.categories.reorder(board_id, category_order)

        self.notifier.categories_reordered(board.team_id, board_id, new_order)
        return new_order

    def categorize(
        self, user_id: str, board_id: str, category_id: str, view_ids: list[str]
    ) -> list[ViewCategoryView]:
        """Move views into a category, keeping their hidden flag and order."""
        board = self._require_board(board_id, user_id)
        if category_id != UNCATEGORIZED_CATEGORY_ID:
            self._require_owned_category(board_id, category_id, user_id)

        # One membership and one event per distinct view
        view_ids = list(dict.fromkeys(view_ids))
        memberships = self.memberships.upsert(category_id, view_ids)
        for membership in memberships:
            self.notifier.membership_changed(
                board.team_id, membership.category_id, membership.view_id, membership.hidden
            )
        return memberships

    def uncategorize(self, user_id: str, board_id: str, view_id: str) -> ViewCategoryView:
        """Move a view out of whatever category it is in."""
        board = self._require_board(board_id, user_id)
        (membership,) = self.memberships.upsert(UNCATEGORIZED_CATEGORY_ID, [view_id])

        if self.broadcast_uncategorize:
            self.notifier.membership_changed(
                board.team_id, membership.category_id, membership.view_id, membership.hidden
            )
        return membership

    def reorder_views_in_category(
        self, user_id: str, board_id: str, category_id: str, view_order: list[str]
    ) -> list[str]:
        """Reorder the views of one category; returns the order in effect."""
        board = self._require_board(board_id, user_id)
        self._require_owned_category(board_id, category_id, user_id)

        new_order = self.memberships.reorder_within_category(category_id, view_order)
        self.notifier.views_reordered(board.team_id, category_id, new_order)
        return new_order

    def set_view_visibility(
        self, user_id: str, board_id: str, category_id: str, view_id: str, visible: bool
    ) -> None:
        """Show or hide a view inside a category."""
        board = self._require_board(board_id, user_id)
        self._require_owned_category(board_id, category_id, user_id)

        self.memberships.set_visibility(category_id, view_id, visible)
        self.notifier.membership_changed(board.team_id, category_id, view_id, not visible)
