"""
Book Model

Books are managed by the catalogue flows; the review service only needs
to confirm a book exists and read its title for review details.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookreview.database import Base

if TYPE_CHECKING:
    from bookreview.models.review import Review


class Book(Base):
    """
    Book model.

    Table: books

    Relationships:
    - reviews: One-to-Many (reviews cannot outlive their book)
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Author display name"
    )

    isbn: Mapped[str | None] = mapped_column(
        String(20),
        unique=True,
        index=True,
        nullable=True,
        comment="International Standard Book Number"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # No ORM cascade: the reviews.book_id foreign key is RESTRICT
    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="book",
        passive_deletes="all",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}')"
