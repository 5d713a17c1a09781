"""
Saved cover letters.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from covercraft.db.base import Base


class CoverLetter(Base):
    """
    A generated (and possibly edited) cover letter owned by one user.

    Listed newest first; only ``content`` is mutable after creation.
    """
    __tablename__ = "cover_letters"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)

    # Generation inputs kept for reference
    job_description = Column(Text, nullable=True)
    company_name = Column(String, nullable=True)
    position_title = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", backref="cover_letters")

    __table_args__ = (
        Index("idx_cover_letters_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<CoverLetter(id={self.id}, title='{self.title}')>"
