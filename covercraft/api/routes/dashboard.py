from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from covercraft.db.models.user import User
from covercraft.core.auth_dependency import get_db, get_current_user_obj
from covercraft.schemas.cover_letter import CoverLetterResponse, DashboardResponse
from covercraft.services import cover_letter_service, profile_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

RECENT_LETTERS = 6


@router.get("", response_model=DashboardResponse)
def dashboard(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Welcome data and the most recent letters."""
    recent = cover_letter_service.list_cover_letters(db, user.id, limit=RECENT_LETTERS)
    profile = profile_service.get_profile(db, user.id)

    return DashboardResponse(
        email=user.email,
        full_name=profile.full_name if profile else None,
        recent_cover_letters=[CoverLetterResponse.model_validate(letter) for letter in recent],
        total=cover_letter_service.count_cover_letters(db, user.id),
    )
