"""Mixins for SQLAlchemy models.

Timestamps are stored as epoch milliseconds so they round-trip to clients
unchanged.
"""

import time
import uuid

from sqlalchemy import BigInteger, Column


def get_millis() -> int:
    """Current time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def new_id() -> str:
    """Generate an opaque identifier."""
    return uuid.uuid4().hex


class TimestampMixin:
    """Mixin to add create_at and update_at millisecond columns.

    update_at is written explicitly by callers; reorders must not touch it.
    """

    create_at = Column(BigInteger, default=get_millis, nullable=False)
    update_at = Column(BigInteger, default=get_millis, nullable=False)


class SoftDeleteMixin:
    """Mixin to add soft delete functionality.

    ``delete_at`` is 0 for live rows and the tombstone time otherwise.
    """

    delete_at = Column(BigInteger, default=0, nullable=False, index=True)

    @property
    def is_deleted(self) -> bool:
        """Check if the record is soft-deleted."""
        return bool(self.delete_at)
