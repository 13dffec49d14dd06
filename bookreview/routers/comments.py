"""
Comments Router

Endpoints:
- GET /reviews/{review_id}/comments - Comments of a review as threads
- POST /reviews/{review_id}/comments - Comment on a review or reply to a
  comment on the same review (authenticated)
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from bookreview.dependencies import Actor, DbSession
from bookreview.errors import ServiceError
from bookreview.routers.responses import error_response, respond
from bookreview.services import comments as comment_service
from bookreview.validators import validate_create_comment, validate_list_comments

router = APIRouter(
    tags=["Comments"],
    responses={400: {"description": "Validation failed"}},
)


@router.get(
    "/reviews/{review_id}/comments",
    summary="List comments of a review",
    description="Top-level comments newest first, each with its direct replies. Public.",
)
def list_comments(review_id: str, db: DbSession) -> JSONResponse:
    validated = validate_list_comments(review_id)
    if not validated.ok:
        return error_response(validated.error)

    result = comment_service.list_comments(db, validated.value.review_id)
    return respond(
        result,
        lambda threads: {"comments": [thread.to_json() for thread in threads]},
    )


@router.post(
    "/reviews/{review_id}/comments",
    status_code=status.HTTP_201_CREATED,
    summary="Create a comment",
    description="Comment on a review, or reply with parentId. Requires authentication.",
    responses={404: {"description": "Review or parent comment not found"}},
)
def create_comment(
    review_id: str,
    db: DbSession,
    actor_id: Actor,
    body: Annotated[dict[str, Any] | None, Body()] = None,
) -> JSONResponse:
    """
    Create a comment.

    Request body:
        {"content": "Agreed!", "parentId": 12}
    """
    if actor_id is None:
        return error_response(ServiceError.authentication_required())

    validated = validate_create_comment(review_id, body or {})
    if not validated.ok:
        return error_response(validated.error)

    result = comment_service.create_comment(db, validated.value, actor_id)
    return respond(result, lambda data: data.to_json(), status.HTTP_201_CREATED)
