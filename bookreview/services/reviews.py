"""
Review Service

Business rules for reviews, independent of HTTP.

Operations:
- list_reviews: Filtered, paginated listing, newest first
- get_review_detail: One review with book title and author username
- create_review: New review on an existing book
- update_review: Change the content of your own review
- delete_review: Delete your own review if nobody has commented on it

Every operation returns Ok(...) or Err(ServiceError). Input must already
have passed bookreview.validators; the service only checks what needs
storage (existence, ownership, dependent comments).

Delete-guard
============
The comment check and the delete run in one transaction that starts by
locking the review row (SELECT ... FOR UPDATE). Comment creation reads the
review with FOR SHARE, so under READ COMMITTED a racing comment is either
committed before the lock is granted (and seen by the check) or waits for
the delete and then finds no review. SQLite has no row locks; there every
transaction starts with BEGIN IMMEDIATE (database.configure_sqlite), so the
check and the delete run under the database write lock.
"""

import logging
import math

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from bookreview.authorization import is_owner
from bookreview.database import storage_guard
from bookreview.errors import Err, Ok, Result, ServiceError
from bookreview.models import Book, Comment, Review
from bookreview.schemas import (
    CreateReviewCommand,
    ListReviewsQuery,
    PaginationMeta,
    ReviewDetailResponse,
    ReviewListResponse,
    ReviewResponse,
    UpdateReviewCommand,
)

logger = logging.getLogger(__name__)


def list_reviews(db: Session, query: ListReviewsQuery) -> Result[ReviewListResponse]:
    """
    List reviews matching the optional filters.

    Args:
        db: Database session
        query: Validated page, limit and equality filters

    Returns:
        Ok with one page of reviews and pagination metadata
    """
    conditions = []
    if query.book_id is not None:
        conditions.append(Review.book_id == query.book_id)
    if query.user_id is not None:
        conditions.append(Review.user_id == query.user_id)
    if query.rating is not None:
        conditions.append(Review.rating == query.rating)

    with storage_guard(db, "list_reviews"):
        count_stmt = select(func.count()).select_from(Review).where(*conditions)
        total = db.execute(count_stmt).scalar() or 0

        stmt = (
            select(Review)
            .where(*conditions)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .offset(query.offset)
            .limit(query.limit)
        )
        reviews = db.execute(stmt).scalars().all()

    return Ok(
        ReviewListResponse(
            reviews=[ReviewResponse.model_validate(r) for r in reviews],
            pagination=PaginationMeta(
                current_page=query.page,
                total_pages=math.ceil(total / query.limit),
                total_items=total,
                items_per_page=query.limit,
            ),
        )
    )


def get_review_detail(db: Session, review_id: int) -> Result[ReviewDetailResponse]:
    """
    Get a review with its book title and author username.

    Returns:
        Ok with the review, or Err(REVIEW_NOT_FOUND)
    """
    with storage_guard(db, "get_review_detail"):
        stmt = (
            select(Review)
            .options(selectinload(Review.user), selectinload(Review.book))
            .where(Review.id == review_id)
        )
        review = db.execute(stmt).scalar_one_or_none()

        if review is None:
            return Err(ServiceError.review_not_found(review_id))

        detail = ReviewDetailResponse.model_validate(review).model_copy(
            update={
                "book_title": review.book.title if review.book else None,
                "username": review.user.username if review.user else None,
            }
        )

    return Ok(detail)


def create_review(
    db: Session,
    command: CreateReviewCommand,
    actor_id: int | None,
) -> Result[ReviewResponse]:
    """
    Create a review owned by the actor.

    Returns:
        Ok with the new review, Err(AUTHENTICATION_REQUIRED) without an
        actor, or Err(BOOK_NOT_FOUND) when the book does not exist
    """
    if actor_id is None:
        return Err(ServiceError.authentication_required())

    with storage_guard(db, "create_review"):
        book = db.get(Book, command.book_id)
        if book is None:
            logger.info(f"Review rejected: book {command.book_id} not found")
            return Err(ServiceError.book_not_found(command.book_id))

        review = Review(
            book_id=command.book_id,
            user_id=actor_id,
            content=command.content,
            rating=command.rating,
        )
        db.add(review)
        db.commit()
        db.refresh(review)

    logger.info(f"Review {review.id} created by user {actor_id} on book {command.book_id}")
    return Ok(ReviewResponse.model_validate(review))


def update_review(
    db: Session,
    command: UpdateReviewCommand,
    actor_id: int | None,
) -> Result[ReviewResponse]:
    """
    Replace the content of a review. The rating is never changed here.

    Returns:
        Ok with the updated review, or Err with AUTHENTICATION_REQUIRED,
        REVIEW_NOT_FOUND or FORBIDDEN (nothing is written in those cases)
    """
    if actor_id is None:
        return Err(ServiceError.authentication_required())

    with storage_guard(db, "update_review"):
        review = db.get(Review, command.review_id)
        if review is None:
            return Err(ServiceError.review_not_found(command.review_id))

        if not is_owner(actor_id, review.user_id):
            logger.warning(
                f"User {actor_id} tried to update review {review.id} owned by {review.user_id}"
            )
            return Err(ServiceError.forbidden("update this review"))

        review.content = command.content
        db.commit()
        db.refresh(review)

    logger.info(f"Review {review.id} updated by user {actor_id}")
    return Ok(ReviewResponse.model_validate(review))


def delete_review(
    db: Session,
    review_id: int,
    actor_id: int | None,
) -> Result[None]:
    """
    Delete a review owned by the actor if it has no comments.

    Returns:
        Ok(None) once the review is gone, or Err with
        AUTHENTICATION_REQUIRED, REVIEW_NOT_FOUND, FORBIDDEN or
        RELATED_DATA_EXISTS; the transaction is rolled back on every Err
    """
    if actor_id is None:
        return Err(ServiceError.authentication_required())

    with storage_guard(db, "delete_review"):
        stmt = select(Review).where(Review.id == review_id).with_for_update()
        review = db.execute(stmt).scalar_one_or_none()

        if review is None:
            db.rollback()
            return Err(ServiceError.review_not_found(review_id))

        if not is_owner(actor_id, review.user_id):
            owner_id = review.user_id
            db.rollback()
            logger.warning(
                f"User {actor_id} tried to delete review {review_id} owned by {owner_id}"
            )
            return Err(ServiceError.forbidden("delete this review"))

        comment_stmt = select(Comment.id).where(Comment.review_id == review_id).limit(1)
        if db.execute(comment_stmt).first() is not None:
            db.rollback()
            logger.info(f"Review {review_id} not deleted: comments exist")
            return Err(ServiceError.related_data_exists())

        db.delete(review)
        db.commit()

    logger.info(f"Review {review_id} deleted by user {actor_id}")
    return Ok(None)
