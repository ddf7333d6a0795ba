"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, Field, StrictStr

from models.bookmark import HOBBY_ID_MAX_LENGTH
from schemas.hobby import HobbyCategory


class BookmarkRequest(BaseModel):
    """Body for adding or removing a bookmark."""

    # StrictStr: a numeric hobbyId is rejected rather than coerced. The length cap
    # matches the bookmarks.hobby_id column
    hobby_id: StrictStr = Field(alias="hobbyId", min_length=1, max_length=HOBBY_ID_MAX_LENGTH)


class BookmarkListResponse(BaseModel):
    """The current user's bookmarked hobby ids."""

    hobby_ids: list[str] = Field(serialization_alias="hobbyIds")


class BookmarkMutationResponse(BaseModel):
    """Acknowledgement for add/remove."""

    ok: bool = True


class CategorySummary(BaseModel):
    """Bookmark count for one catalog category."""

    category: HobbyCategory
    label: str
    count: int


class BookmarkSummaryResponse(BaseModel):
    """
    Per-category bookmark counts.

    Every category is present, including those with a zero count, so the list can be
    fed to a chart directly. `total` only counts hobbies found in the catalog.
    """

    items: list[CategorySummary]
    total: int
