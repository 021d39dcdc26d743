"""View category models."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String

from src.database import Base
from src.models.enums import ViewCategoryType
from src.models.mixins import SoftDeleteMixin, TimestampMixin

# Reserved category id meaning "not in any category". Never a real row.
UNCATEGORIZED_CATEGORY_ID = ""

VIEW_CATEGORY_TYPES = {t.value for t in ViewCategoryType}


class ViewCategory(Base, TimestampMixin, SoftDeleteMixin):
    """Named, ordered grouping of a board's views, shared by everyone on the board."""

    __tablename__ = "view_categories"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    user_id = Column(String(36), nullable=False, index=True)
    board_id = Column(String(36), ForeignKey("boards.id"), nullable=False, index=True)
    collapsed = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    type = Column(String(20), default=ViewCategoryType.CUSTOM.value, nullable=False)


class ViewCategoryView(Base):
    """Membership of a view in a category.

    Keyed by view alone: a view belongs to at most one category. category_id
    holds UNCATEGORIZED_CATEGORY_ID for views moved out of every category, so
    it is not a foreign key.
    """

    __tablename__ = "view_category_views"

    view_id = Column(String(36), primary_key=True)
    category_id = Column(String(36), nullable=False, index=True)
    hidden = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
