"""
Cover letter generation.

Builds a single instruction from the job description, resume text, target
company/position and the user's contact profile, and sends it as one chat
completion. The first choice's text is returned as-is.
"""
import logging
from typing import Any, Dict, Optional

from covercraft.llm.provider import LLMProvider, LLMProviderError

logger = logging.getLogger(__name__)

MODEL = "gpt-4o-mini"
TEMPERATURE = 0.7
MAX_TOKENS = 1000

SYSTEM_PROMPT = (
    "You are a professional career counselor and cover letter expert. "
    "Generate high-quality, personalized cover letters that help candidates stand out."
)

NOT_PROVIDED = "Not provided"


class GenerationValidationError(ValueError):
    """Required input is missing; no model call was made."""


class GenerationError(Exception):
    """The model call failed."""


def _profile_value(user_profile: Optional[Dict[str, Any]], key: str) -> str:
    value = (user_profile or {}).get(key)
    return value if value else NOT_PROVIDED


def build_prompt(
    job_description: str,
    cv_content: str,
    company_name: Optional[str],
    position_title: Optional[str],
    user_profile: Optional[Dict[str, Any]],
) -> str:
    return f"""Generate a professional cover letter based on the following information:

Job Description: {job_description}

CV/Resume Content: {cv_content}

Company Name: {company_name or ""}
Position Title: {position_title or ""}

User Profile:
- Name: {_profile_value(user_profile, "full_name")}
- Email: {_profile_value(user_profile, "email")}
- Phone: {_profile_value(user_profile, "phone_number")}
- Address: {_profile_value(user_profile, "address")}

Please create a compelling cover letter that:
1. Addresses the specific requirements mentioned in the job description
2. Highlights relevant experience and skills from the CV
3. Shows enthusiasm for the role and company
4. Maintains a professional tone
5. Is properly formatted with appropriate sections

The cover letter should be ready to send and specifically tailored to this job opportunity."""


def validate_generation_inputs(job_description: Optional[str], cv_content: Optional[str]):
    if not job_description or not job_description.strip():
        raise GenerationValidationError("A job description is required.")
    if not cv_content or not cv_content.strip():
        raise GenerationValidationError("CV/resume content is required.")


def generate_cover_letter(
    provider: LLMProvider,
    job_description: str,
    cv_content: str,
    company_name: Optional[str] = None,
    position_title: Optional[str] = None,
    user_profile: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Generate a cover letter with exactly one completion request.

    Raises:
        GenerationValidationError: job description or resume text is blank
        GenerationError: the provider call failed
    """
    validate_generation_inputs(job_description, cv_content)

    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(
            job_description, cv_content, company_name, position_title, user_profile
        )},
    ]

    try:
        response = provider.chat(
            messages=messages,
            model=MODEL,
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
    except LLMProviderError as e:
        raise GenerationError(str(e)) from e

    logger.info(
        f"Cover letter generated: model={response.model}, "
        f"tokens_in={response.tokens_in}, tokens_out={response.tokens_out}"
    )
    return response.content
