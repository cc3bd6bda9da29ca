from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Optional, Union
from datetime import date, datetime

from devconnector.schemas.auth_schema import UserSummary

SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


class ProfileCreate(BaseModel):
    status: str
    skills: Union[str, List[str]]
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    @field_validator("status")
    @classmethod
    def status_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Status is required")
        return v.strip()

    @field_validator("skills")
    @classmethod
    def split_skills(cls, v: Union[str, List[str]]) -> List[str]:
        # the form posts skills as "python, sql, docker"
        items = v.split(",") if isinstance(v, str) else v
        skills = [skill.strip() for skill in items if skill.strip()]
        if not skills:
            raise ValueError("Skills is required")
        return skills

    def profile_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude=set(SOCIAL_FIELDS))

    def social_links(self) -> Dict[str, Optional[str]]:
        return {name: getattr(self, name) for name in SOCIAL_FIELDS if name in self.model_fields_set}


class EducationCreate(BaseModel):
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(validation_alias=AliasChoices("from", "from_date"))
    to_date: Optional[date] = Field(None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: Optional[str] = None

    @field_validator("school", "degree", "fieldofstudy")
    @classmethod
    def not_blank(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v.strip()


class EducationResponse(BaseModel):
    id: int
    school: str
    degree: str
    fieldofstudy: str
    # same keys the create request accepts
    from_date: date = Field(serialization_alias="from")
    to_date: Optional[date] = Field(None, serialization_alias="to")
    current: bool = False
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ResponseProfile(BaseModel):
    id: int
    user_id: int
    user: Optional[UserSummary] = None
    status: str
    skills: List[str] = []
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = None
    social: Dict[str, str] = {}
    education: List[EducationResponse] = []
    date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
