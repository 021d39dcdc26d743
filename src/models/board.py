"""Board models.

Boards are owned by other parts of the system; these tables carry only what
view categorization needs to read: the team a board belongs to and who can
view it.
"""

from sqlalchemy import Column, ForeignKey, String

from src.database import Base
from src.models.mixins import SoftDeleteMixin, TimestampMixin, new_id


class Board(Base, TimestampMixin, SoftDeleteMixin):
    """A board whose saved views get categorized."""

    __tablename__ = "boards"

    id = Column(String(36), primary_key=True, default=new_id)
    team_id = Column(String(36), nullable=False, index=True)
    title = Column(String(255), nullable=False, default="")
    created_by = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)


class BoardMember(Base, TimestampMixin):
    """Grants a user view access to a board."""

    __tablename__ = "board_members"

    board_id = Column(String(36), ForeignKey("boards.id"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True, index=True)
