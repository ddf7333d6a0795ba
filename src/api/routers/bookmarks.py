"""Bookmark endpoints for the current user."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from schemas.auth import SessionUser
from schemas.bookmark import (
    BookmarkListResponse,
    BookmarkMutationResponse,
    BookmarkRequest,
    BookmarkSummaryResponse,
)
from services import bookmark_service
from services.exceptions import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])

INVALID_HOBBY_ID = "Invalid hobbyId"


async def _read_hobby_id(request: Request) -> str:
    """
    Parse and validate the `{"hobbyId": ...}` body.

    Any malformed body (not JSON, not an object, missing/empty/non-string hobbyId)
    is a 400 with a single message.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_HOBBY_ID)
    try:
        return BookmarkRequest.model_validate(payload).hobby_id
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_HOBBY_ID)


def _internal_error(exc: StoreError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("", response_model=BookmarkListResponse)
async def list_bookmarks(
    current_user: SessionUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkListResponse:
    """List the hobby ids bookmarked by the current user."""
    try:
        hobby_ids = await bookmark_service.list_bookmarks(db, current_user.user_id)
    except StoreError as e:
        raise _internal_error(e)
    return BookmarkListResponse(hobby_ids=hobby_ids)


@router.post("", response_model=BookmarkMutationResponse)
async def add_bookmark(
    request: Request,
    current_user: SessionUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkMutationResponse:
    """Bookmark a hobby. Adding an existing bookmark succeeds without a duplicate."""
    hobby_id = await _read_hobby_id(request)
    try:
        await bookmark_service.add_bookmark(db, current_user.user_id, hobby_id)
    except StoreError as e:
        raise _internal_error(e)
    return BookmarkMutationResponse()


@router.delete("", response_model=BookmarkMutationResponse)
async def remove_bookmark(
    request: Request,
    current_user: SessionUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkMutationResponse:
    """Remove a bookmark. Removing a missing bookmark also succeeds."""
    hobby_id = await _read_hobby_id(request)
    try:
        await bookmark_service.remove_bookmark(db, current_user.user_id, hobby_id)
    except StoreError as e:
        raise _internal_error(e)
    return BookmarkMutationResponse()


@router.get("/summary", response_model=BookmarkSummaryResponse)
async def bookmark_summary(
    current_user: SessionUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkSummaryResponse:
    """Count the current user's bookmarks per hobby category."""
    try:
        hobby_ids = await bookmark_service.list_bookmarks(db, current_user.user_id)
    except StoreError as e:
        raise _internal_error(e)
    items = bookmark_service.summarize_bookmarks(hobby_ids)
    return BookmarkSummaryResponse(items=items, total=sum(item.count for item in items))
