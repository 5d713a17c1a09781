"""
Generate-cover-letter function.

Stateless and unauthenticated: the caller sends everything the prompt needs and
receives ``{"coverLetterContent": ...}`` or ``{"error": ...}``. The model API
key comes from process configuration only.
"""
import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from covercraft.core.logging_config import sanitize_log_data
from covercraft.llm.provider import LLMProvider
from covercraft.llm.openai_provider import get_llm_provider
from covercraft.schemas.generation import GenerationRequest
from covercraft.services.generation_service import (
    GenerationValidationError,
    generate_cover_letter,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["Functions"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

GENERIC_ERROR = "Failed to generate cover letter"


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


@router.options("/generate-cover-letter")
def generate_cover_letter_preflight():
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post("/generate-cover-letter")
async def generate_cover_letter_function(
    request: Request,
    provider: LLMProvider = Depends(get_llm_provider),
):
    try:
        body = await request.json()
        payload = GenerationRequest.model_validate(body)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        logger.warning(f"Rejected malformed generation request: {type(e).__name__}")
        return _error(GENERIC_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.debug(f"generate-cover-letter request: {sanitize_log_data(body)}")

    try:
        content = await run_in_threadpool(
            generate_cover_letter,
            provider,
            job_description=payload.job_description,
            cv_content=payload.cv_content,
            company_name=payload.company_name,
            position_title=payload.position_title,
            user_profile=payload.user_profile,
        )
    except GenerationValidationError as e:
        return _error(str(e), status.HTTP_400_BAD_REQUEST)
    except Exception as e:
        logger.error(f"Error in generate-cover-letter function: {type(e).__name__}: {e}", exc_info=True)
        return _error(GENERIC_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return JSONResponse({"coverLetterContent": content}, headers=CORS_HEADERS)
