"""Request guards shared by the protected routers."""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from devconnector.core.security import InvalidTokenError, verify_token
from devconnector.db.session import get_db
from devconnector.models.user import User

logger = logging.getLogger(__name__)


async def get_current_user_id(
    x_auth_token: Optional[str] = Header(None, alias="x-auth-token"),
) -> int:
    """
    Resolve the caller from the ``x-auth-token`` header.

    Either returns the authenticated user id or rejects the request with 401;
    the route handler never runs for a rejected request.
    """
    if not x_auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
        )

    try:
        return verify_token(x_auth_token)
    except InvalidTokenError as exc:
        logger.warning("Token verification failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        ) from exc


async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        # token outlived its account
        raise HTTPException(status_code=404, detail="User not found")
    return user
