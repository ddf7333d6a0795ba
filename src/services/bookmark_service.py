"""Service layer for bookmark persistence."""
import logging
from collections import Counter

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.dml import Insert

from models.bookmark import Bookmark
from schemas.bookmark import CategorySummary
from schemas.hobby import HobbyCategory
from services.exceptions import StoreError
from services.hobby_catalog import CATEGORY_LABELS, get_hobby

logger = logging.getLogger(__name__)


def _insert_for_dialect(db: AsyncSession) -> Insert:
    """Build an INSERT that supports ON CONFLICT for the session's dialect."""
    dialect_name = db.get_bind().dialect.name
    if dialect_name == "sqlite":
        return sqlite.insert(Bookmark)
    return postgresql.insert(Bookmark)


async def list_bookmarks(db: AsyncSession, user_id: str) -> list[str]:
    """
    Return the hobby ids bookmarked by a user, oldest first.

    Raises:
        StoreError: If the query fails. Details are logged, not propagated.
    """
    try:
        result = await db.execute(
            select(Bookmark.hobby_id)
            .where(Bookmark.user_id == user_id)
            .order_by(Bookmark.id),
        )
    except SQLAlchemyError as e:
        logger.error("Failed to list bookmarks for user %s: %s", user_id, e, exc_info=True)
        raise StoreError("Failed to load bookmarks") from e
    return list(result.scalars().all())


async def add_bookmark(db: AsyncSession, user_id: str, hobby_id: str) -> None:
    """
    Bookmark a hobby for a user.

    Upserts on the (user_id, hobby_id) unique constraint, so adding the same pair twice
    leaves exactly one row and is not an error.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    stmt = (
        _insert_for_dialect(db)
        .values(user_id=user_id, hobby_id=hobby_id)
        .on_conflict_do_nothing(index_elements=["user_id", "hobby_id"])
    )
    try:
        await db.execute(stmt)
    except SQLAlchemyError as e:
        logger.error(
            "Failed to add bookmark %s for user %s: %s", hobby_id, user_id, e, exc_info=True,
        )
        raise StoreError("Failed to add bookmark") from e


async def remove_bookmark(db: AsyncSession, user_id: str, hobby_id: str) -> None:
    """
    Remove a user's bookmark for a hobby.

    Deleting a bookmark that does not exist is a no-op; the predicate delete does not
    report whether any row matched.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    stmt = delete(Bookmark).where(
        Bookmark.user_id == user_id,
        Bookmark.hobby_id == hobby_id,
    )
    try:
        await db.execute(stmt)
    except SQLAlchemyError as e:
        logger.error(
            "Failed to remove bookmark %s for user %s: %s", hobby_id, user_id, e, exc_info=True,
        )
        raise StoreError("Failed to remove bookmark") from e


def summarize_bookmarks(hobby_ids: list[str]) -> list[CategorySummary]:
    """
    Count bookmarked hobbies per catalog category.

    Ids missing from the catalog are skipped. Categories with no bookmarks are
    included with a count of zero.
    """
    counts: Counter[HobbyCategory] = Counter()
    for hobby_id in set(hobby_ids):
        hobby = get_hobby(hobby_id)
        if hobby is None:
            logger.debug("Skipping unknown hobby id in summary: %s", hobby_id)
            continue
        counts[hobby.category] += 1

    return [
        CategorySummary(category=category, label=CATEGORY_LABELS[category], count=counts[category])
        for category in HobbyCategory
    ]
