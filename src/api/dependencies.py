"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import resolve_user
from src.services.categorization import CategorizationService
from src.services.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    ViewCategoryError,
    ViewCategoryValidationError,
)
from src.services.realtime import ChangeNotifier

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    user = resolve_user(db, credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_change_notifier() -> ChangeNotifier:
    """Get the notifier used to announce committed changes."""
    return ChangeNotifier()


def get_categorization_service(
    db: Annotated[Session, Depends(get_db)],
    notifier: Annotated[ChangeNotifier, Depends(get_change_notifier)],
) -> CategorizationService:
    """Get categorization service with dependencies."""
    return CategorizationService(db, notifier)


def to_http_exception(error: ViewCategoryError) -> HTTPException:
    """Map a service error onto the HTTP status it stands for."""
    if isinstance(error, ViewCategoryValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=error.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message)
