#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from database.models import JobPreferences


class JobSummary(BaseModel):
    """Summary of an open job, optionally scored against the viewer."""
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 42,
                "employer_id": 7,
                "title": "Backend Engineer",
                "location": "Berlin, Germany",
                "job_type": "full-time",
                "is_remote": False,
                "salary_min": 8000,
                "salary_max": 12000,
                "salary_type": "monthly",
                "experience_required": "mid-level",
                "education_required": "bachelor",
                "skills_required": ["python", "sql"],
                "applications_count": 3,
                "match_score": 72,
                "match_insufficient_data": False,
                "created_at": "2026-02-01T12:00:00"
            }
        }
    )

    id: int
    employer_id: int
    title: str
    location: Optional[str] = None
    job_type: Optional[str] = None
    is_remote: bool = False
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    salary_type: Optional[str] = None
    experience_required: Optional[str] = None
    education_required: Optional[str] = None
    skills_required: List[str] = Field(default_factory=list)
    applications_count: int = 0

    # Present only for a seeker viewer with a profile
    match_score: Optional[int] = Field(None, ge=0, le=100)
    match_insufficient_data: Optional[bool] = None
    match_components: Optional[Dict[str, Optional[float]]] = None

    created_at: Optional[datetime] = None


class JobsResponse(BaseModel):
    """Response containing a page of jobs."""
    success: bool
    count: int
    jobs: List[JobSummary]


class RecommendedJobsResponse(BaseModel):
    """Response containing the best-matching jobs for a seeker."""
    success: bool
    count: int
    jobs: List[JobSummary]
    preferences: JobPreferences


class ApplicationResponse(BaseModel):
    """Response after submitting an application."""
    success: bool
    application_id: int
    job_id: int
    status: str
    match_score: Optional[int] = Field(None, ge=0, le=100)
    applications_count: int


class ChatRoomResponse(BaseModel):
    """Response after changing a chat room."""
    success: bool
    room_id: int
    status: str
