"""
FastAPI Dependencies Module

Reusable components injected into route handlers:
- DbSession: per-request SQLAlchemy session
- Actor: id of the authenticated user, or None

Authentication is resolved here but never enforced here: a missing or bad
token yields no actor, and the services answer AUTHENTICATION_REQUIRED for
operations that need one. Reads stay public.
"""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from bookreview.database import get_db
from bookreview.models import User
from bookreview.services.security import get_token_user_id

logger = logging.getLogger(__name__)

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
# auto_error=False: a missing header is not an error at this layer
oauth2_scheme_optional = OAuth2PasswordBearer(
    tokenUrl="/api/v1/auth/login",
    auto_error=False,
)


def get_actor_id(
    db: DbSession,
    token: str | None = Depends(oauth2_scheme_optional),
) -> int | None:
    """
    Resolve the acting user from the Authorization header.

    Args:
        db: Database session
        token: Bearer token, if one was sent

    Returns:
        The user id when the token is valid and the account still exists,
        None otherwise
    """
    if not token:
        return None

    user_id = get_token_user_id(token)
    if user_id is None:
        return None

    if db.get(User, user_id) is None:
        logger.warning(f"Token for unknown user {user_id}")
        return None

    return user_id


Actor = Annotated[int | None, Depends(get_actor_id)]
