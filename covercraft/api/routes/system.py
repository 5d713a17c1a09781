import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from covercraft.core.auth_dependency import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["System"])


# ✅ LANDING
@router.get("/")
def root():
    return {"status": "CoverCraft API running"}


@router.get("/system/health")
def system_health(db: Session = Depends(get_db)):
    db_ok = True
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Health check database probe failed: {e}")
        db_ok = False

    return {
        "status": "ok" if db_ok else "degraded",
        "database": "connected" if db_ok else "error",
        "api_version": "1.0.0",
        "service": "CoverCraft API"
    }
