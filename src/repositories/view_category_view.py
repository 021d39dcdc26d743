"""View-to-category membership persistence."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.view_category import ViewCategory, ViewCategoryView
from src.repositories.view_category import ViewCategoryRepository
from src.services.ordering import reconcile_order

logger = logging.getLogger(__name__)


@dataclass
class CategoryWithViews:
    """A live category together with its ordered memberships."""

    category: ViewCategory
    views: list[ViewCategoryView] = field(default_factory=list)


class ViewCategoryViewRepository:
    """Reads and writes the view_category_views table."""

    def __init__(self, db: Session, categories: ViewCategoryRepository | None = None):
        self.db = db
        self.categories = categories or ViewCategoryRepository(db)

    def get(self, view_id: str) -> ViewCategoryView | None:
        """Get the membership of a view, if it has one."""
        return self.db.query(ViewCategoryView).filter(ViewCategoryView.view_id == view_id).first()

    def list_for_category(self, category_id: str) -> list[ViewCategoryView]:
        """Memberships of one category in display order."""
        return (
            self.db.query(ViewCategoryView)
            .filter(ViewCategoryView.category_id == category_id)
            .order_by(ViewCategoryView.sort_order, ViewCategoryView.view_id)
            .all()
        )

    def list_with_membership(self, board_id: str) -> list[CategoryWithViews]:
        """Every live category of a board with its memberships, both in display order."""
        categories = self.categories.list_live(board_id)
        if not categories:
            return []

        rows = (
            self.db.query(ViewCategoryView)
            .filter(ViewCategoryView.category_id.in_([c.id for c in categories]))
            .order_by(ViewCategoryView.sort_order, ViewCategoryView.view_id)
            .all()
        )

        views_by_category = defaultdict(list)
        for row in rows:
            views_by_category[row.category_id].append(row)

        return [
            CategoryWithViews(category=category, views=views_by_category[category.id])
            for category in categories
        ]

    def upsert(self, category_id: str, view_ids: list[str]) -> list[ViewCategoryView]:
        """Point each view at ``category_id``.

        A view without a membership gets a new visible row at sort_order 0. A
        view that already has one only has its category_id replaced, so its
        hidden flag and sort_order carry over to the new category.
        """
        memberships = []
        try:
            for view_id in view_ids:
                membership = self.get(view_id)
                if membership is None:
                    membership = ViewCategoryView(
                        view_id=view_id,
                        category_id=category_id,
                        hidden=False,
                        sort_order=0,
                    )
                    self.db.add(membership)
                    # Make the row visible to the lookup of a repeated id
                    self.db.flush()
                else:
                    membership.category_id = category_id
                memberships.append(membership)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error upserting views into category '{category_id}': {e}")
            raise

        for membership in memberships:
            self.db.refresh(membership)
        return memberships

    def reorder_within_category(self, category_id: str, proposed_order: list[str]) -> list[str]:
        """Apply a full client ordering of the views in one category."""
        existing = self.list_for_category(category_id)
        plan = reconcile_order([row.view_id for row in existing], proposed_order)

        if not plan.accepted:
            if existing:
                logger.warning(
                    f"Ignoring stale view order for category {category_id}: "
                    f"got {len(proposed_order)} ids, have {len(existing)}"
                )
            return plan.order

        try:
            for row in existing:
                if row.view_id in plan.assignments:
                    row.sort_order = plan.assignments[row.view_id]
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error reordering views in category {category_id}: {e}")
            raise

        return plan.order

    def set_visibility(self, category_id: str, view_id: str, visible: bool) -> int:
        """Hide or show a view inside a category.

        Returns the number of rows affected; zero when the view is not in the
        category.
        """
        try:
            affected = (
                self.db.query(ViewCategoryView)
                .filter(
                    ViewCategoryView.view_id == view_id,
                    ViewCategoryView.category_id == category_id,
                )
                .update({ViewCategoryView.hidden: not visible}, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error setting visibility of view {view_id}: {e}")
            raise

        return affected
