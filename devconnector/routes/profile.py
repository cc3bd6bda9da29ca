import logging
from typing import Any, Dict, List

import httpx
from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from devconnector.core.deps import get_current_user, get_current_user_id
from devconnector.core.errors import SERVER_ERROR, server_error
from devconnector.db.session import get_db
from devconnector.models.profile import Education, Profile
from devconnector.models.user import User
from devconnector.schemas.profile_schema import EducationCreate, ProfileCreate, ResponseProfile
from devconnector.services.github import GithubProfileNotFound, fetch_user_repos

logger = logging.getLogger(__name__)

router = APIRouter()


def _profile_query(db: Session):
    return db.query(Profile).options(joinedload(Profile.user))


def _own_profile(db: Session, user_id: int) -> Profile:
    profile = _profile_query(db).filter(Profile.user_id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="There is no profile for this user")
    return profile

# Current user's profile


@router.get("/me", response_model=ResponseProfile)
async def get_my_profile(user_id: int = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return _own_profile(db, user_id)

# Create or update

@router.post("", response_model=ResponseProfile)
async def upsert_profile(
    data: ProfileCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create the caller's profile, or update it when one already exists.

    Optional fields left out of the request keep their stored values.
    """
    profile = db.query(Profile).filter(Profile.user_id == user.id).first()
    try:
        if profile is None:
            profile = Profile(user_id=user.id, social={})
            db.add(profile)
        for key, value in data.profile_fields().items():
            setattr(profile, key, value)
        profile.update_social(data.social_links())
        db.commit()
        db.refresh(profile)
    except SQLAlchemyError as e:
        raise server_error(db, e, "save profile") from e
    return profile

# All profiles

@router.get("", response_model=List[ResponseProfile])
async def list_profiles(db: Session = Depends(get_db)):
    return _profile_query(db).order_by(Profile.id).all()

# Profile by user id

@router.get("/user/{user_id}", response_model=ResponseProfile)
async def get_profile_by_user(
    user_id: int = Path(..., description="Id of the profile owner"),
    db: Session = Depends(get_db),
):
    profile = _profile_query(db).filter(Profile.user_id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile

# Delete profile and user

@router.delete("")
async def delete_account(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    # Posts are kept; they lose their author reference when the user goes
    user_id = user.id
    try:
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        if profile is not None:
            db.delete(profile)
        db.delete(user)
        db.commit()
    except SQLAlchemyError as e:
        raise server_error(db, e, "delete user") from e

    logger.info("Deleted user %s and profile", user_id)
    return {"message": "User deleted"}

# Education


@router.patch("/education", response_model=ResponseProfile)
async def add_education(
    data: EducationCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    profile = _own_profile(db, user.id)
    try:
        profile.education.insert(0, Education(**data.model_dump()))
        db.commit()
        db.refresh(profile)
    except SQLAlchemyError as e:
        raise server_error(db, e, "add education") from e
    return profile


@router.patch("/education/{edu_id}", response_model=ResponseProfile)
async def remove_education(
    edu_id: int = Path(..., description="Education entry to remove"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    profile = _own_profile(db, user.id)
    entry = next((edu for edu in profile.education if edu.id == edu_id), None)
    if entry is None:
        raise HTTPException(status_code=404, detail="Education not found")
    try:
        profile.education.remove(entry)
        db.commit()
        db.refresh(profile)
    except SQLAlchemyError as e:
        raise server_error(db, e, "remove education") from e
    return profile

# GitHub repositories


@router.get("/github/{username}", response_model=List[Dict[str, Any]])
async def get_github_repos(username: str = Path(..., description="GitHub login")):
    try:
        return await fetch_user_repos(username)
    except GithubProfileNotFound:
        raise HTTPException(status_code=404, detail="No Github profile found")
    except httpx.HTTPError as e:
        logger.error("GitHub request for %s failed: %s", username, e)
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
