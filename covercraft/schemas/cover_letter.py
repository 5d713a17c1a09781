"""
Pydantic schemas for cover letter endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


class CoverLetterResponse(BaseModel):
    """Schema for a saved cover letter."""
    id: int = Field(..., description="Cover letter ID")
    user_id: int = Field(..., description="Owner user ID")
    title: str = Field(..., description="Cover letter title")
    content: str = Field(..., description="Letter body")
    job_description: Optional[str] = Field(None, description="Job description the letter was generated from")
    company_name: Optional[str] = Field(None, description="Target company")
    position_title: Optional[str] = Field(None, description="Target position")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last edit timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": 1,
                "title": "Backend Engineer at Acme",
                "content": "Dear Hiring Manager,\n\n...",
                "job_description": "Backend engineer at Acme",
                "company_name": "Acme",
                "position_title": "Backend Engineer",
                "created_at": "2026-10-19T10:30:00Z",
                "updated_at": "2026-10-19T10:30:00Z"
            }
        }


class CoverLetterListResponse(BaseModel):
    cover_letters: List[CoverLetterResponse] = Field(..., description="Letters, newest first")
    total: int = Field(..., description="Number of letters owned by the user")


class CoverLetterUpdate(BaseModel):
    """Only the body is editable after saving."""
    content: str = Field(..., min_length=1, description="New letter body")


class PdfExportRequest(BaseModel):
    """Export an unsaved draft."""
    title: Optional[str] = Field(None, description="Document title; defaults to 'Cover Letter'")
    content: str = Field(..., min_length=1, description="Letter body")


class GeneratedLetterResponse(BaseModel):
    content: str = Field(..., description="Generated letter text, unmodified")
    used_cached_cv: bool = Field(..., description="Whether the stored resume text was used")


class DashboardResponse(BaseModel):
    email: str
    full_name: Optional[str] = None
    recent_cover_letters: List[CoverLetterResponse]
    total: int
