"""User model."""

from sqlalchemy import Column, String

from src.database import Base
from src.models.mixins import TimestampMixin, new_id


class User(Base, TimestampMixin):
    """A principal that can own view categories."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(255), unique=True, nullable=False, index=True)
