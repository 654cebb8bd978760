#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Optional


class ApplicationRequest(BaseModel):
    """Request to apply for a job."""
    cover_letter: Optional[str] = Field(None, max_length=10000, description="Optional cover letter")
    resume_id: Optional[int] = Field(None, description="Resume to attach; defaults to the seeker's default resume")
