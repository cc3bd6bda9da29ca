from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from devconnector.schemas.auth_schema import UserCreate, Token
from devconnector.services.auth import register_user
from devconnector.db.session import get_db

router = APIRouter()


@router.post("", response_model=Token)
def register(user: UserCreate, db: Session = Depends(get_db)):
    return register_user(user, db)
