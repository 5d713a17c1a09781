"""
Wire schema of the generate-cover-letter function (camelCase keys).
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class GenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    job_description: Optional[str] = Field(None, alias="jobDescription")
    cv_content: Optional[str] = Field(None, alias="cvContent")
    company_name: Optional[str] = Field(None, alias="companyName")
    position_title: Optional[str] = Field(None, alias="positionTitle")
    user_profile: Optional[Dict[str, Any]] = Field(None, alias="userProfile")
