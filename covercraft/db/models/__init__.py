"""
Database models module.

Imports every model so they are registered with SQLAlchemy's Base.metadata
before table creation and migrations.
"""
from covercraft.db.models.user import User
from covercraft.db.models.profile import Profile, UserProfile
from covercraft.db.models.cover_letter import CoverLetter

__all__ = [
    "User",
    "Profile",
    "UserProfile",
    "CoverLetter",
]
