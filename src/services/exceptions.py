"""Errors raised by the view category service and repositories."""


class ViewCategoryError(Exception):
    """Base class for view categorization errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ViewCategoryValidationError(ViewCategoryError):
    """Request is missing a required field or carries an invalid value."""


class NotFoundError(ViewCategoryError):
    """Referenced board or category does not exist."""


class PermissionDeniedError(ViewCategoryError):
    """Caller cannot view the board or does not own the category."""
