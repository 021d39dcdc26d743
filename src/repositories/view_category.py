"""View category persistence."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.models.mixins import get_millis
from src.models.view_category import ViewCategory
from src.services.exceptions import NotFoundError
from src.services.ordering import SORT_ORDER_GAP, reconcile_order

logger = logging.getLogger(__name__)


class ViewCategoryRepository:
    """Reads and writes the view_categories table.

    Every write commits its own unit of work; multi-row writes (create with
    sibling bump, reorder) land in a single commit and roll back together.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, category_id: str) -> ViewCategory:
        """Get a category by id, tombstoned or not."""
        category = self.db.query(ViewCategory).filter(ViewCategory.id == category_id).first()
        if category is None:
            raise NotFoundError(f"view category ID={category_id}")
        return category

    def create(self, category: ViewCategory) -> ViewCategory:
        """Insert a category at the top of its board.

        The new row keeps the sort_order it was given (0 from the service) and
        every other live category on the board moves down by one gap.
        """
        try:
            self.db.add(category)
            self.db.flush()

            bumped = (
                self.db.query(ViewCategory)
                .filter(
                    ViewCategory.board_id == category.board_id,
                    ViewCategory.delete_at == 0,
                    ViewCategory.id != category.id,
                )
                .update(
                    {ViewCategory.sort_order: ViewCategory.sort_order + SORT_ORDER_GAP},
                    synchronize_session=False,
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating view category '{category.name}': {e}")
            raise

        self.db.refresh(category)
        logger.debug(f"Created view category {category.id}, bumped {bumped} siblings")
        return category

    def update(self, category: ViewCategory) -> ViewCategory:
        """Persist name, collapsed and update_at. Other columns are left alone."""
        try:
            self.db.query(ViewCategory).filter(ViewCategory.id == category.id).update(
                {
                    ViewCategory.name: category.name,
                    ViewCategory.collapsed: category.collapsed,
                    ViewCategory.update_at: category.update_at,
                },
                synchronize_session=False,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error updating view category {category.id}: {e}")
            raise

        return self.get(category.id)

    def soft_delete(self, category_id: str, user_id: str, board_id: str) -> int:
        """Tombstone a category owned by ``user_id`` on ``board_id``.

        Returns the number of rows affected; a mismatch affects none and is not
        an error.
        """
        try:
            affected = (
                self.db.query(ViewCategory)
                .filter(
                    ViewCategory.id == category_id,
                    ViewCategory.user_id == user_id,
                    ViewCategory.board_id == board_id,
                )
                .update({ViewCategory.delete_at: get_millis()}, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting view category {category_id}: {e}")
            raise

        return affected

    def list_live(self, board_id: str) -> list[ViewCategory]:
        """Live categories of a board in display order."""
        return (
            self.db.query(ViewCategory)
            .filter(ViewCategory.board_id == board_id, ViewCategory.delete_at == 0)
            .order_by(ViewCategory.sort_order, ViewCategory.id)
            .all()
        )

    def reorder(self, board_id: str, proposed_order: list[str]) -> list[str]:
        """Apply a full client ordering of the board's categories.

        Returns the order now in effect: ``proposed_order`` when accepted, the
        stored order when the proposal has the wrong length.
        """
        existing = self.list_live(board_id)
        plan = reconcile_order([category.id for category in existing], proposed_order)

        if not plan.accepted:
            if existing:
                logger.warning(
                    f"Ignoring stale category order for board {board_id}: "
                    f"got {len(proposed_order)} ids, have {len(existing)}"
                )
            return plan.order

        try:
            for category in existing:
                if category.id in plan.assignments:
                    category.sort_order = plan.assignments[category.id]
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error reordering view categories for board {board_id}: {e}")
            raise

        return plan.order
