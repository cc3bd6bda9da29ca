from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from devconnector.schemas.auth_schema import UserCreate, UserLogin, Token
from devconnector.models.user import User
from devconnector.core.errors import RequestError, server_error
from devconnector.core.security import hash_password, verify_password, issue_token, gravatar_url
import logging

logger = logging.getLogger(__name__)


def register_user(user: UserCreate, db: Session) -> Token:
    logger.debug("Registering user: %s", user.email)
    # Check if the email already exists
    existing_user = db.query(User).filter(User.email == user.email).first()
    if existing_user:
        raise RequestError("User already exists", param="email")

    # Hash the password and create a new user
    new_user = User(
        name=user.name,
        email=user.email,
        avatar=gravatar_url(user.email),
        password=hash_password(user.password),
    )
    try:
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        raise RequestError("User already exists", param="email")
    except SQLAlchemyError as e:
        raise server_error(db, e, "register user") from e

    logger.info("Registered user %s", new_user.id)
    return Token(token=issue_token(new_user.id))


def login_user(user: UserLogin, db: Session) -> Token:
    logger.debug("Logging in user: %s", user.email)
    db_user = db.query(User).filter(User.email == user.email).first()
    # Same answer for unknown email and wrong password
    if not db_user or not verify_password(user.password, db_user.password):
        raise RequestError("Invalid credentials")

    return Token(token=issue_token(db_user.id))
