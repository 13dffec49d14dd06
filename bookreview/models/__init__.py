"""
SQLAlchemy Models Package

Model Relationships:
- Book -> Review: One-to-Many (RESTRICT on book delete)
- User -> Review, User -> Comment: One-to-Many (SET NULL on user delete)
- Review -> Comment: One-to-Many (RESTRICT on review delete)
- Comment -> Comment: optional parent (reply) reference

Import all models here so they are registered with Base.metadata.
"""

from bookreview.models.user import User
from bookreview.models.book import Book
from bookreview.models.review import Review
from bookreview.models.comment import Comment

__all__ = [
    "User",
    "Book",
    "Review",
    "Comment",
]
