"""
Profile store accessor.

Reads and writes the ``profiles`` and ``user_profiles`` rows of a user.
Upserts only touch the keys they are given.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from covercraft.db.models.user import User
from covercraft.db.models.profile import Profile, UserProfile

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("full_name", "email")
USER_PROFILE_FIELDS = ("address", "phone_number", "cv_filename", "cv_content", "cv_storage_key")


def get_profile(db: Session, user_id: int) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.id == user_id).first()


def get_user_profile(db: Session, user_id: int) -> Optional[UserProfile]:
    return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()


def _stage_profile(db: Session, user_id: int, fields: Dict[str, Any]) -> Profile:
    unknown = set(fields) - set(PROFILE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown profile fields: {sorted(unknown)}")

    profile = get_profile(db, user_id)
    if profile is None:
        profile = Profile(id=user_id)
        db.add(profile)
    for name, value in fields.items():
        setattr(profile, name, value)
    return profile


def _stage_user_profile(db: Session, user_id: int, fields: Dict[str, Any]) -> UserProfile:
    unknown = set(fields) - set(USER_PROFILE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown user profile fields: {sorted(unknown)}")

    user_profile = get_user_profile(db, user_id)
    if user_profile is None:
        user_profile = UserProfile(user_id=user_id)
        db.add(user_profile)
    for name, value in fields.items():
        setattr(user_profile, name, value)
    return user_profile


def upsert_profile(db: Session, user_id: int, **fields) -> Profile:
    """Insert or update the ``profiles`` row keyed by the user id."""
    profile = _stage_profile(db, user_id, fields)
    db.commit()
    db.refresh(profile)
    return profile


def upsert_user_profile(db: Session, user_id: int, **fields) -> UserProfile:
    """Insert or update the ``user_profiles`` row keyed by the user id."""
    user_profile = _stage_user_profile(db, user_id, fields)
    db.commit()
    db.refresh(user_profile)
    logger.debug(f"user_profiles upserted: user_id={user_id}, fields={sorted(fields)}")
    return user_profile


def save_contact_details(
    db: Session,
    user_id: int,
    full_name: Optional[str],
    email: Optional[str],
    address: Optional[str],
    phone_number: Optional[str],
):
    """
    Save the profile screen's fields across both tables in one transaction.

    Either both rows are written or neither is.
    """
    try:
        profile = _stage_profile(db, user_id, {"full_name": full_name, "email": email})
        user_profile = _stage_user_profile(db, user_id, {"address": address, "phone_number": phone_number})
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(profile)
    db.refresh(user_profile)
    logger.info(f"Contact details saved: user_id={user_id}")
    return profile, user_profile


def combined_profile(db: Session, user: User) -> Dict[str, Any]:
    """
    Merge user_profiles and profiles into the dict sent with a generation request.

    ``profiles`` values win on key collisions; email falls back to the account email.
    """
    merged: Dict[str, Any] = {}

    user_profile = get_user_profile(db, user.id)
    if user_profile is not None:
        merged.update({
            "user_id": user_profile.user_id,
            "address": user_profile.address,
            "phone_number": user_profile.phone_number,
            "cv_filename": user_profile.cv_filename,
        })

    profile = get_profile(db, user.id)
    if profile is not None:
        merged.update({
            "id": profile.id,
            "full_name": profile.full_name,
            "email": profile.email,
        })

    if not merged.get("email"):
        merged["email"] = user.email
    return merged
