from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from devconnector.core.deps import get_current_user
from devconnector.models.user import User
from devconnector.schemas.auth_schema import UserLogin, Token, UserResponse
from devconnector.services.auth import login_user
from devconnector.db.session import get_db

router = APIRouter()


@router.get("", response_model=UserResponse)
async def read_current_user(user: User = Depends(get_current_user)):
    return user


@router.post("", response_model=Token)
def login(user: UserLogin, db: Session = Depends(get_db)):
    return login_user(user, db)
