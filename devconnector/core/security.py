import hashlib
import logging
from passlib.context import CryptContext
from datetime import datetime, timedelta
from jose import JWTError, jwt
from devconnector.config import settings

logger = logging.getLogger(__name__)

# Use argon2 instead of bcrypt to avoid 72-byte password limitation
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


class InvalidTokenError(Exception):
    """Raised when a bearer token is malformed, forged or expired."""


# Password hashing


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"//www.gravatar.com/avatar/{digest}?s={size}&r={rating}&d={default}"

# JWT token creation


def create_access_token(data: dict, expires_delta: timedelta | None = None):
    to_encode = data.copy()
    expire = datetime.utcnow() + \
        (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(
        to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def issue_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    return create_access_token({"sub": str(user_id)}, expires_delta)


def verify_token(token: str) -> int:
    """
    Decode a bearer token and return the user id it was issued for.

    Signature and expiry are both checked by jose; anything that does not
    carry a numeric ``sub`` claim is rejected as well.
    """
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM],
            options={"require_exp": True})
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as e:
        raise InvalidTokenError("Token missing user identifier") from e
