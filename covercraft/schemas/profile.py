"""
Pydantic schemas for the profile screen.
"""
from typing import Optional
from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=320)
    address: Optional[str] = Field(None, max_length=500)
    phone_number: Optional[str] = Field(None, max_length=50)

    class Config:
        json_schema_extra = {
            "example": {
                "full_name": "Jane Doe",
                "email": "jane.doe@example.com",
                "address": "1 Main St, Springfield",
                "phone_number": "+1 555 0100"
            }
        }


class ProfileResponse(BaseModel):
    full_name: str = ""
    email: str = ""
    address: str = ""
    phone_number: str = ""
    cv_filename: Optional[str] = None
    has_cv: bool = False


class CvUploadResponse(BaseModel):
    message: str
    cv_filename: str
    characters: int = Field(..., description="Length of the extracted resume text")
