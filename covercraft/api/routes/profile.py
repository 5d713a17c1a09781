"""
Profile endpoints: contact details and resume upload.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, status
from sqlalchemy.orm import Session

from covercraft.db.models.user import User
from covercraft.core.auth_dependency import get_db, get_current_user_obj
from covercraft.schemas.profile import ProfileUpdate, ProfileResponse, CvUploadResponse
from covercraft.services import profile_service, storage_service
from covercraft.services.resume_parser import (
    ResumeExtractionError,
    UnsupportedResumeType,
    extract_resume_text,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])


def _profile_response(db: Session, user: User) -> ProfileResponse:
    profile = profile_service.get_profile(db, user.id)
    user_profile = profile_service.get_user_profile(db, user.id)

    return ProfileResponse(
        full_name=(profile.full_name if profile else None) or "",
        email=(profile.email if profile else None) or user.email,
        address=(user_profile.address if user_profile else None) or "",
        phone_number=(user_profile.phone_number if user_profile else None) or "",
        cv_filename=user_profile.cv_filename if user_profile else None,
        has_cv=bool(user_profile and user_profile.cv_content),
    )


@router.get("", response_model=ProfileResponse)
def get_profile(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return _profile_response(db, user)


@router.put("", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Save both profile tables together."""
    try:
        profile_service.save_contact_details(
            db,
            user.id,
            full_name=payload.full_name,
            email=payload.email,
            address=payload.address,
            phone_number=payload.phone_number,
        )
    except Exception as e:
        logger.error(f"Failed to update profile: user_id={user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile. Please try again."
        )

    return _profile_response(db, user)


async def read_and_extract(file: UploadFile) -> tuple[bytes, str]:
    """Read an uploaded resume and extract its text, mapping failures to 400s."""
    data = await file.read()
    try:
        text = extract_resume_text(file.filename, data)
    except UnsupportedResumeType as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ResumeExtractionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return data, text


def store_cv(db: Session, user_id: int, filename: str, data: bytes, text: str):
    """Write the blob to the bucket, then point user_profiles at it."""
    key = storage_service.upload_cv(user_id, filename, data)
    return profile_service.upsert_user_profile(
        db,
        user_id,
        cv_filename=filename,
        cv_content=text,
        cv_storage_key=key,
    )


@router.post("/cv", status_code=status.HTTP_201_CREATED, response_model=CvUploadResponse)
async def upload_cv(
    file: UploadFile = File(...),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    """Upload a resume (.txt, .pdf, .docx); its text is cached for later generations."""
    data, text = await read_and_extract(file)

    try:
        store_cv(db, user.id, file.filename, data, text)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to store CV: user_id={user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save CV. Please try again."
        )

    return CvUploadResponse(
        message="CV uploaded successfully",
        cv_filename=file.filename,
        characters=len(text),
    )
