"""
User Model

Accounts are managed by the authentication flows. Reviews and comments
keep their rows when an account is removed: the author column is set to
NULL and the content stays visible without an owner.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookreview.database import Base

if TYPE_CHECKING:
    from bookreview.models.comment import Comment
    from bookreview.models.review import Review


class User(Base):
    """
    User model.

    Table: users

    Relationships:
    - reviews: One-to-Many with Review
    - comments: One-to-Many with Comment
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(150),
        unique=True,
        index=True,
        nullable=False,
        comment="Public display name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="User's email address"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # passive_deletes lets the database apply ON DELETE SET NULL
    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="user",
        passive_deletes=True,
    )
    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="user",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, username='{self.username}')"
