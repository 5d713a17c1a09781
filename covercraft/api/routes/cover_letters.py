"""
Cover letter endpoints.

Covers the create screen (generate, save, export a draft) and the saved
letters screens (list, detail, edit, delete, export).
"""
import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from sqlalchemy.orm import Session

from covercraft.db.models.user import User
from covercraft.core.auth_dependency import get_db, get_current_user_obj
from covercraft.llm.provider import LLMProvider
from covercraft.llm.openai_provider import get_llm_provider
from covercraft.api.routes.profile import read_and_extract, store_cv
from covercraft.schemas.cover_letter import (
    CoverLetterResponse,
    CoverLetterListResponse,
    CoverLetterUpdate,
    GeneratedLetterResponse,
    PdfExportRequest,
)
from covercraft.services import cover_letter_service, profile_service
from covercraft.services.generation_service import (
    GenerationValidationError,
    generate_cover_letter,
)
from covercraft.services.pdf_export_service import pdf_filename, render_cover_letter_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cover-letters", tags=["Cover Letters"])

MISSING_GENERATION_INPUT = "Please provide both a job description and upload your CV."
MISSING_SAVE_INPUT = "Please provide a title and generate content first."


def _has_upload(file: Optional[UploadFile]) -> bool:
    return file is not None and bool(file.filename)


def _pdf_response(title: str, content: str) -> Response:
    filename = pdf_filename(title)
    ascii_name = filename.encode("ascii", "ignore").decode("ascii") or "cover-letter.pdf"
    return Response(
        content=render_cover_letter_pdf(title, content),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
        },
    )


def _get_owned_or_404(db: Session, user: User, letter_id: int):
    letter = cover_letter_service.get_cover_letter(db, user.id, letter_id)
    if letter is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Cover letter not found"
        )
    return letter


@router.post("/generate", response_model=GeneratedLetterResponse)
async def generate(
    job_description: str = Form(""),
    company_name: str = Form(""),
    position_title: str = Form(""),
    cv_file: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
    provider: LLMProvider = Depends(get_llm_provider),
):
    """
    Generate a letter for the signed-in user.

    The cached resume text is used when present; otherwise the uploaded file is
    extracted. Nothing is saved here.
    """
    user_profile = profile_service.get_user_profile(db, user.id)
    cached_cv = user_profile.cv_content if user_profile else None

    if not job_description.strip() or (not cached_cv and not _has_upload(cv_file)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_GENERATION_INPUT)

    cv_content = cached_cv
    if not cv_content:
        _, cv_content = await read_and_extract(cv_file)

    try:
        content = await run_in_threadpool(
            generate_cover_letter,
            provider,
            job_description=job_description,
            cv_content=cv_content,
            company_name=company_name,
            position_title=position_title,
            user_profile=profile_service.combined_profile(db, user),
        )
    except GenerationValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error generating cover letter: user_id={user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate cover letter. Please try again."
        )

    return GeneratedLetterResponse(content=content, used_cached_cv=bool(cached_cv))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CoverLetterResponse)
async def save_cover_letter(
    title: str = Form(""),
    content: str = Form(""),
    job_description: str = Form(""),
    company_name: str = Form(""),
    position_title: str = Form(""),
    cv_file: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db),
):
    """
    Save a generated letter.

    An attached CV is stored and cached on the profile after the letter is
    inserted; that second write is independent of the first.
    """
    if not title.strip() or not content.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_SAVE_INPUT)

    try:
        letter = cover_letter_service.create_cover_letter(
            db,
            user.id,
            title=title,
            content=content,
            job_description=job_description or None,
            company_name=company_name or None,
            position_title=position_title or None,
        )
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to save cover letter: user_id={user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save cover letter. Please try again."
        )

    if _has_upload(cv_file):
        try:
            data, text = await read_and_extract(cv_file)
            store_cv(db, user.id, cv_file.filename, data, text)
        except Exception as e:
            db.rollback()
            logger.error(f"Letter saved but CV upload failed: user_id={user.id}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Cover letter saved, but the CV could not be stored."
            )

    return CoverLetterResponse.model_validate(letter)


@router.post("/export-pdf")
def export_draft_pdf(
    payload: PdfExportRequest,
    user: User = Depends(get_current_user_obj),
):
    """Export a letter that has not been saved yet."""
    return _pdf_response(payload.title or "", payload.content)


@router.get("", response_model=CoverLetterListResponse)
def list_cover_letters(
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        letters = cover_letter_service.list_cover_letters(db, user.id)
    except Exception as e:
        logger.error(f"Failed to list cover letters: user_id={user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load cover letters."
        )

    return CoverLetterListResponse(
        cover_letters=[CoverLetterResponse.model_validate(letter) for letter in letters],
        total=len(letters),
    )


@router.get("/{letter_id}", response_model=CoverLetterResponse)
def get_cover_letter(
    letter_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    return CoverLetterResponse.model_validate(_get_owned_or_404(db, user, letter_id))


@router.put("/{letter_id}", response_model=CoverLetterResponse)
def update_cover_letter(
    letter_id: int,
    payload: CoverLetterUpdate,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        letter = cover_letter_service.update_cover_letter_content(db, user.id, letter_id, payload.content)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update cover letter: letter_id={letter_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update cover letter."
        )

    if letter is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cover letter not found")
    return CoverLetterResponse.model_validate(letter)


@router.delete("/{letter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cover_letter(
    letter_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    try:
        deleted = cover_letter_service.delete_cover_letter(db, user.id, letter_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete cover letter: letter_id={letter_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete cover letter."
        )

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cover letter not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{letter_id}/pdf")
def export_cover_letter_pdf(
    letter_id: int,
    user: User = Depends(get_current_user_obj),
    db: Session = Depends(get_db)
):
    letter = _get_owned_or_404(db, user, letter_id)
    return _pdf_response(letter.title, letter.content)
