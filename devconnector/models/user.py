from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from devconnector.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    avatar = Column(String, nullable=True)
    date = Column(DateTime(timezone=True), server_default=func.now())

    profile = relationship("Profile", back_populates="user", uselist=False,
                           cascade="all, delete-orphan")
    # posts and comments outlive their author; only the reference is cleared
    posts = relationship("Post", back_populates="user")
    comments = relationship("Comment", back_populates="user")
    likes = relationship("Like", back_populates="user", cascade="all, delete-orphan")
