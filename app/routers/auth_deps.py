"""
Authentication dependencies.
Resolves the caller from a bearer token and binds the request session to that identity.
"""
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.access_policy import bind_identity
from app.core.exceptions import AuthenticationError
from app.database import get_db
from app.models.user import User
from app.services import auth as auth_service

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported through our own 401 envelope
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Extracts and validates the current user from the JWT token,
    then scopes ``db`` to that user for the rest of the request.
    """
    if not token:
        if request.headers.get("Authorization"):
            # Present but not a usable bearer credential
            logger.warning("Authentication failed: Unsupported authorization scheme")
            raise AuthenticationError("Unauthorized")
        logger.info("Authentication failed: No authorization header")
        raise AuthenticationError("No authorization header")

    payload = auth_service.decode_access_token(token)

    if payload is None:
        logger.warning("Authentication failed: Invalid token")
        raise AuthenticationError("Unauthorized")

    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Authentication failed: Token expired")
        raise AuthenticationError("TOKEN_EXPIRED")

    if payload.get("type") != "access":
        logger.warning("Authentication failed: Invalid token type")
        raise AuthenticationError("Unauthorized")

    user_id = payload.get("sub")
    if user_id is None:
        logger.warning("Authentication failed: Missing subject in token")
        raise AuthenticationError("Unauthorized")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None or not user.is_active:
        logger.warning(f"Authentication failed: User {user_id} not found or inactive")
        raise AuthenticationError("Unauthorized")

    bind_identity(db, user.id)
    request.state.user_id = user.id
    return user
