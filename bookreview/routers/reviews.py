"""
Reviews Router

Endpoints:
- GET /reviews - List reviews (filters: bookId, userId, rating; page, limit)
- GET /reviews/{review_id} - Get a review with book title and username
- POST /reviews - Create a review (authenticated)
- PUT /reviews/{review_id} - Update review content (owner only)
- DELETE /reviews/{review_id} - Delete a review (owner only, no comments)

Path and query values are taken as raw strings and handed to the
validators, so malformed ids come back as VALIDATION_ERROR with a field
code such as INVALID_REVIEW_ID rather than a framework error. Mutations
check for an authenticated actor before looking at the input.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, status
from fastapi.responses import JSONResponse, Response

from bookreview.dependencies import Actor, DbSession
from bookreview.errors import ServiceError
from bookreview.routers.responses import error_response, respond, respond_no_content
from bookreview.services import reviews as review_service
from bookreview.validators import (
    validate_create_review,
    validate_list_reviews_query,
    validate_review_id,
    validate_update_review,
)

router = APIRouter(
    tags=["Reviews"],
    responses={
        400: {"description": "Validation failed"},
        404: {"description": "Review or book not found"},
    },
)

JsonBody = Annotated[dict[str, Any] | None, Body()]


@router.get(
    "/reviews",
    summary="List reviews",
    description="Paginated reviews, newest first. Public.",
)
def list_reviews(
    db: DbSession,
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
    book_id: Annotated[str | None, Query(alias="bookId")] = None,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
    rating: Annotated[str | None, Query()] = None,
) -> JSONResponse:
    """
    List reviews.

    page defaults to 1 and limit to 20 (max 100); non-numeric values fall
    back to those defaults instead of failing.
    """
    validated = validate_list_reviews_query(
        {"page": page, "limit": limit, "bookId": book_id, "userId": user_id, "rating": rating}
    )
    if not validated.ok:
        return error_response(validated.error)

    result = review_service.list_reviews(db, validated.value)
    return respond(result, lambda data: data.to_json())


@router.get(
    "/reviews/{review_id}",
    summary="Get a review",
    description="Review with the reviewed book's title and the author's username. Public.",
)
def get_review(review_id: str, db: DbSession) -> JSONResponse:
    validated = validate_review_id(review_id)
    if not validated.ok:
        return error_response(validated.error)

    result = review_service.get_review_detail(db, validated.value.review_id)
    return respond(result, lambda data: data.to_json())


@router.post(
    "/reviews",
    status_code=status.HTTP_201_CREATED,
    summary="Create a review",
    description="Create a review on an existing book. Requires authentication.",
)
def create_review(db: DbSession, actor_id: Actor, body: JsonBody = None) -> JSONResponse:
    """
    Create a review.

    Request body:
        {"bookId": 42, "content": "A must-read.", "rating": 5}
    """
    if actor_id is None:
        return error_response(ServiceError.authentication_required())

    validated = validate_create_review(body or {})
    if not validated.ok:
        return error_response(validated.error)

    result = review_service.create_review(db, validated.value, actor_id)
    return respond(result, lambda data: data.to_json(), status.HTTP_201_CREATED)


@router.put(
    "/reviews/{review_id}",
    summary="Update a review",
    description="Replace the content of your own review. The rating cannot change.",
)
def update_review(
    review_id: str,
    db: DbSession,
    actor_id: Actor,
    body: JsonBody = None,
) -> JSONResponse:
    if actor_id is None:
        return error_response(ServiceError.authentication_required())

    validated = validate_update_review(review_id, body or {})
    if not validated.ok:
        return error_response(validated.error)

    result = review_service.update_review(db, validated.value, actor_id)
    return respond(result, lambda data: data.to_json())


@router.delete(
    "/reviews/{review_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a review",
    description="Delete your own review. Fails with 409 while the review has comments.",
    responses={409: {"description": "The review has comments"}},
)
def delete_review(review_id: str, db: DbSession, actor_id: Actor) -> Response:
    if actor_id is None:
        return error_response(ServiceError.authentication_required())

    validated = validate_review_id(review_id)
    if not validated.ok:
        return error_response(validated.error)

    result = review_service.delete_review(db, validated.value.review_id, actor_id)
    return respond_no_content(result)
