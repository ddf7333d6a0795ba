"""Bookmark model for storing a user's saved hobbies."""
from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, CreatedAtMixin

HOBBY_ID_MAX_LENGTH = 255


class Bookmark(Base, CreatedAtMixin):
    """
    Bookmark model - one row per (user, hobby) pair.

    `user_id` is the opaque identifier issued by the identity service, so there is no
    users table to reference. `hobby_id` points into the static hobby catalog.
    """

    __tablename__ = "bookmarks"
    __table_args__ = (
        # Conflict target for the add-bookmark upsert
        UniqueConstraint("user_id", "hobby_id", name="uq_bookmark_user_hobby"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    hobby_id: Mapped[str] = mapped_column(String(HOBBY_ID_MAX_LENGTH), nullable=False)
