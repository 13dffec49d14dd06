"""
Token Service

Bearer token helpers. Tokens are issued by the authentication service;
this service only needs to read the user id back out of them (and to mint
tokens for internal callers and tests).

Token layout:
- sub: user id as a string
- type: "access"
- exp: expiry timestamp

Usage:
    from bookreview.services.security import create_access_token, get_token_user_id

    token = create_access_token(7)
    get_token_user_id(token)  # 7
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from bookreview.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    user_id: int,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user_id: User the token is issued to
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "exp": datetime.now(UTC) + expires_delta,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def get_token_user_id(token: str) -> int | None:
    """
    Extract the user id from an access token.

    Returns:
        The user id, or None for invalid, expired, non-access tokens or a
        malformed subject
    """
    payload = decode_token(token)
    if payload is None:
        return None

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        logger.warning(f"Token type mismatch: expected {ACCESS_TOKEN_TYPE}")
        return None

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        logger.warning("Token subject is not a user id")
        return None

    return user_id if user_id > 0 else None
