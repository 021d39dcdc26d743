"""View category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status

from src.api.dependencies import get_categorization_service, get_current_user, to_http_exception
from src.models.user import User
from src.repositories.view_category_view import CategoryWithViews
from src.schemas.view_category import (
    ViewCategoryCreate,
    ViewCategoryResponse,
    ViewCategoryUpdate,
    ViewCategoryWithViewsResponse,
    ViewMetadataResponse,
)
from src.services.categorization import CategorizationService
from src.services.exceptions import ViewCategoryError

router = APIRouter(prefix="/api/v1/boards/{board_id}", tags=["view-categories"])


def to_response(entry: CategoryWithViews) -> ViewCategoryWithViewsResponse:
    response = ViewCategoryWithViewsResponse.model_validate(entry.category)
    response.view_metadata = [ViewMetadataResponse.model_validate(view) for view in entry.views]
    return response


@router.post(
    "/view-categories",
    response_model=ViewCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_view_category(
    board_id: str,
    category_data: ViewCategoryCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Create a view category at the top of the board."""
    if category_data.board_id != board_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="boardID mismatch")

    try:
        return service.create_category(
            user_id=current_user.id,
            board_id=board_id,
            name=category_data.name,
            category_type=category_data.type,
            category_id=category_data.id,
            collapsed=category_data.collapsed,
        )
    except ViewCategoryError as e:
        raise to_http_exception(e) from e


@router.get("/view-categories", response_model=list[ViewCategoryWithViewsResponse])
def get_view_categories(
    board_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Get the board's categories with their views."""
    try:
        entries = service.list_categories_with_membership(current_user.id, board_id)
    except ViewCategoryError as e:
        raise to_http_exception(e) from e

    return [to_response(entry) for entry in entries]


@router.put("/view-categories/reorder", response_model=list[str])
def reorder_view_categories(
    board_id: str,
    category_order: Annotated[list[str], Body()],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Reorder the board's categories. Returns the order now in effect."""
    try:
        return service.reorder_categories(current_user.id, board_id, category_order)
    except ViewCategoryError as e:
        raise to_http_exception(e) from e


@router.get("/view-categories/{category_id}", response_model=ViewCategoryResponse)
def get_view_category(
    board_id: str,
    category_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Get a single view category."""
    try:
        return service.get_category(current_user.id, board_id, category_id)
    except ViewCategoryError as e:
        raise to_http_exception(e) from e


@router.put("/view-categories/{category_id}", response_model=ViewCategoryResponse)
def update_view_category(
    board_id: str,
    category_id: str,
    category_data: ViewCategoryUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Rename a view category or change its collapsed state (owner only)."""
    if category_data.board_id is not None and category_data.board_id != board_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="boardID mismatch")
    if category_data.id is not None and category_data.id != category_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="categoryID mismatch")

    try:
        return service.update_category(
            current_user.id,
            board_id,
            category_id,
            name=category_data.name,
            collapsed=category_data.collapsed,
        )
    except ViewCategoryError as e:
        raise to_http_exception(e) from e


@router.delete("/view-categories/{category_id}", response_model=ViewCategoryResponse)
def delete_view_category(
    board_id: str,
    category_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Soft delete a view category (owner only). Its views keep their membership rows."""
    try:
        return service.delete_category(current_user.id, board_id, category_id)
    except ViewCategoryError as e:
        raise to_http_exception(e) from e


@router.put("/view-categories/{category_id}/views/reorder", response_model=list[str])
def reorder_category_views(
    board_id: str,
    category_id: str,
    view_order: Annotated[list[str], Body()],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Reorder the views of a category (owner only). Returns the order now in effect."""
    try:
        return service.reorder_views_in_category(current_user.id, board_id, category_id, view_order)
    except ViewCategoryError as e:
        raise to_http_exception(e) from e


@router.post(
    "/view-categories/{category_id}/views/{view_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def categorize_view(
    board_id: str,
    category_id: str,
    view_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Move a view into a category (owner only)."""
    try:
        service.categorize(current_user.id, board_id, category_id, [view_id])
    except ViewCategoryError as e:
        raise to_http_exception(e) from e


@router.put(
    "/view-categories/{category_id}/views/{view_id}/hide",
    status_code=status.HTTP_204_NO_CONTENT,
)
def hide_view(
    board_id: str,
    category_id: str,
    view_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Hide a view inside its category (owner only)."""
    try:
        service.set_view_visibility(current_user.id, board_id, category_id, view_id, visible=False)
    except ViewCategoryError as e:
        raise to_http_exception(e) from e


@router.put(
    "/view-categories/{category_id}/views/{view_id}/unhide",
    status_code=status.HTTP_204_NO_CONTENT,
)
def unhide_view(
    board_id: str,
    category_id: str,
    view_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Show a hidden view again (owner only)."""
    try:
        service.set_view_visibility(current_user.id, board_id, category_id, view_id, visible=True)
    except ViewCategoryError as e:
        raise to_http_exception(e) from e


@router.post("/views/{view_id}/uncategorize", status_code=status.HTTP_204_NO_CONTENT)
def uncategorize_view(
    board_id: str,
    view_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CategorizationService, Depends(get_categorization_service)],
):
    """Move a view back to the uncategorized bucket."""
    try:
        service.uncategorize(current_user.id, board_id, view_id)
    except ViewCategoryError as e:
        raise to_http_exception(e) from e
