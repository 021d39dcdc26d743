"""Enums for model fields."""

from enum import Enum


class ViewCategoryType(str, Enum):
    """Kinds of view category.

    System categories are board defaults; custom ones are created by a user.
    """

    SYSTEM = "system"
    CUSTOM = "custom"
