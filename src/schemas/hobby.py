"""Pydantic schemas for the hobby catalog."""
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class HobbyCategory(StrEnum):
    """Catalog categories, in display order."""

    SPORTS = "sports"
    INTELLECTUAL = "intellectual"
    ART = "art"


class Hobby(BaseModel):
    """A static catalog entry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    category: HobbyCategory
    description: str
    image_url: str = Field(serialization_alias="imageUrl")


class HobbyListResponse(BaseModel):
    """Schema for catalog list responses."""

    items: list[Hobby]


class CategoryResponse(BaseModel):
    """A category with its display label."""

    category: HobbyCategory
    label: str
