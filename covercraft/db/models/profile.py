"""
Contact profile models.

``profiles`` holds the display identity (one row per user, keyed by the user id);
``user_profiles`` holds the extended contact fields and the cached resume text
so later generations skip re-extraction.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from covercraft.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    full_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Profile(id={self.id}, email='{self.email}')>"


class UserProfile(Base):
    __tablename__ = "user_profiles"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    address = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)

    # Queryable projection of the latest uploaded resume file
    cv_filename = Column(String, nullable=True)
    cv_content = Column(Text, nullable=True)
    cv_storage_key = Column(String, nullable=True)

    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<UserProfile(user_id={self.user_id}, cv_filename='{self.cv_filename}')>"
