"""View category schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ViewCategoryCreate(BaseModel):
    """Create a new view category."""

    id: str | None = Field(None, max_length=36)
    board_id: str = Field(..., max_length=36)
    name: str = Field(..., max_length=255)
    type: str = Field("custom", max_length=20)  # 'system' or 'custom'
    collapsed: bool = False


class ViewCategoryUpdate(BaseModel):
    """Update a view category.

    id and board_id are optional; when sent they must match the URL.
    """

    id: str | None = Field(None, max_length=36)
    board_id: str | None = Field(None, max_length=36)
    name: str | None = Field(None, max_length=255)
    collapsed: bool | None = None


class ViewCategoryResponse(BaseModel):
    """View category response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    user_id: str
    board_id: str
    create_at: int
    update_at: int
    delete_at: int
    collapsed: bool
    sort_order: int
    type: str


class ViewMetadataResponse(BaseModel):
    """A view's membership details within its category."""

    model_config = ConfigDict(from_attributes=True)

    view_id: str
    hidden: bool


class ViewCategoryWithViewsResponse(ViewCategoryResponse):
    """View category with its ordered views."""

    view_metadata: list[ViewMetadataResponse] = []
