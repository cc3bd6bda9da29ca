from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime


class PostBase(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def text_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Text field is required")
        return v


class PostCreate(PostBase):
    pass


class CommentCreate(PostBase):
    pass


class ResponseLike(BaseModel):
    id: int
    user_id: int

    model_config = ConfigDict(from_attributes=True)


class ResponseComment(BaseModel):
    id: int
    user_id: Optional[int]
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ResponsePost(BaseModel):
    id: int
    user_id: Optional[int]
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    likes: List[ResponseLike] = []
    comments: List[ResponseComment] = []
    date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
