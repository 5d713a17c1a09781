"""
Letter store accessor. Every query is scoped to the owning user.
"""
import logging
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from covercraft.db.models.cover_letter import CoverLetter

logger = logging.getLogger(__name__)


def _owned(db: Session, user_id: int, letter_id: int):
    return db.query(CoverLetter).filter(
        and_(
            CoverLetter.id == letter_id,
            CoverLetter.user_id == user_id,
        )
    )


def list_cover_letters(db: Session, user_id: int, limit: Optional[int] = None) -> List[CoverLetter]:
    """Owner's letters, newest first."""
    query = (
        db.query(CoverLetter)
        .filter(CoverLetter.user_id == user_id)
        .order_by(CoverLetter.created_at.desc(), CoverLetter.id.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def count_cover_letters(db: Session, user_id: int) -> int:
    return db.query(CoverLetter).filter(CoverLetter.user_id == user_id).count()


def get_cover_letter(db: Session, user_id: int, letter_id: int) -> Optional[CoverLetter]:
    return _owned(db, user_id, letter_id).first()


def create_cover_letter(
    db: Session,
    user_id: int,
    title: str,
    content: str,
    job_description: Optional[str] = None,
    company_name: Optional[str] = None,
    position_title: Optional[str] = None,
) -> CoverLetter:
    letter = CoverLetter(
        user_id=user_id,
        title=title,
        content=content,
        job_description=job_description,
        company_name=company_name,
        position_title=position_title,
    )
    db.add(letter)
    db.commit()
    db.refresh(letter)

    logger.info(f"Cover letter created: letter_id={letter.id}, user_id={user_id}")
    return letter


def update_cover_letter_content(db: Session, user_id: int, letter_id: int, content: str) -> Optional[CoverLetter]:
    letter = get_cover_letter(db, user_id, letter_id)
    if letter is None:
        return None

    letter.content = content
    db.commit()
    db.refresh(letter)

    logger.info(f"Cover letter updated: letter_id={letter_id}, user_id={user_id}")
    return letter


def delete_cover_letter(db: Session, user_id: int, letter_id: int) -> bool:
    letter = get_cover_letter(db, user_id, letter_id)
    if letter is None:
        return False

    db.delete(letter)
    db.commit()

    logger.info(f"Cover letter deleted: letter_id={letter_id}, user_id={user_id}")
    return True
