"""Public hobby catalog endpoints."""
from fastapi import APIRouter, HTTPException, Query

from schemas.hobby import CategoryResponse, Hobby, HobbyCategory, HobbyListResponse
from services import hobby_catalog

router = APIRouter(prefix="/hobbies", tags=["hobbies"])


@router.get("", response_model=HobbyListResponse)
async def list_hobbies(
    category: HobbyCategory | None = Query(default=None, description="Filter by category"),
) -> HobbyListResponse:
    """List catalog hobbies, optionally for a single category."""
    return HobbyListResponse(items=hobby_catalog.list_hobbies(category))


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    """List categories with their display labels."""
    return [
        CategoryResponse(category=category, label=label)
        for category, label in hobby_catalog.CATEGORY_LABELS.items()
    ]


@router.get("/{hobby_id}", response_model=Hobby)
async def get_hobby(hobby_id: str) -> Hobby:
    """Get a single catalog hobby."""
    hobby = hobby_catalog.get_hobby(hobby_id)
    if hobby is None:
        raise HTTPException(status_code=404, detail="Hobby not found")
    return hobby
