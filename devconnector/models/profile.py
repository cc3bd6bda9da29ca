from sqlalchemy import Column, Integer, String, ForeignKey, JSON, Text, Boolean, Date, DateTime, func
from sqlalchemy.orm import relationship
from devconnector.db.session import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"),
                     unique=True, nullable=False)
    company = Column(String, nullable=True)
    website = Column(String, nullable=True)
    location = Column(String, nullable=True)
    status = Column(String, nullable=False)
    skills = Column(JSON, default=list)
    bio = Column(Text, nullable=True)
    githubusername = Column(String, nullable=True)
    social = Column(JSON, default=dict)
    date = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="profile")
    education = relationship("Education", back_populates="profile",
                             cascade="all, delete-orphan",
                             order_by="Education.id.desc()")

    def update_social(self, links: dict):
        merged = dict(self.social or {})
        for name, link in links.items():
            # an explicit null or empty link clears it
            if link:
                merged[name] = link
            else:
                merged.pop(name, None)
        # reassign so the JSON column is flagged dirty
        self.social = merged


class Education(Base):
    __tablename__ = "education"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    school = Column(String, nullable=False)
    degree = Column(String, nullable=False)
    fieldofstudy = Column(String, nullable=False)
    from_date = Column(Date, nullable=False)
    to_date = Column(Date, nullable=True)
    current = Column(Boolean, default=False)
    description = Column(Text, nullable=True)

    profile = relationship("Profile", back_populates="education")
