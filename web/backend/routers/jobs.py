#!/usr/bin/env python3
"""
Job endpoints - browse open jobs, get recommendations and apply.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.config_loader import AppConfig
from database.models import User
from ..dependencies import get_db, get_current_user, get_app_config
from ..services.job_service import JobService
from ..models.requests import ApplicationRequest
from ..models.responses import (
    JobsResponse,
    RecommendedJobsResponse,
    ApplicationResponse
)

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": str(exc),
            "type": "RateLimitExceeded"
        }
    )


@router.get("", response_model=JobsResponse)
def list_jobs(
    keyword: Optional[str] = Query(default=None, description="Match against title and description"),
    location: Optional[str] = Query(default=None, description="Substring of the job location"),
    remote_only: bool = Query(default=False, description="Filter to remote jobs only"),
    limit: int = Query(default=20, ge=1, le=100, description="Maximum results to return"),
    offset: int = Query(default=0, ge=0, description="Results to skip"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config)
):
    """
    Get open jobs, newest first.

    Seekers with a profile also get a 0-100 match score per job.
    """
    service = JobService(db, config.matching)
    jobs = service.list_jobs(
        user,
        keyword=keyword,
        location=location,
        remote_only=remote_only,
        limit=limit,
        offset=offset
    )

    return JobsResponse(success=True, count=len(jobs), jobs=jobs)


@router.get("/recommended", response_model=RecommendedJobsResponse)
def recommended_jobs(
    limit: int = Query(default=10, ge=1, le=100, description="Maximum results to return"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config)
):
    """
    Get the open jobs that best match the calling seeker.

    Jobs the scorer could not evaluate for lack of data rank below every
    genuinely scored job.
    """
    service = JobService(db, config.matching)
    jobs, preferences = service.recommend_jobs(user, limit=limit)

    return RecommendedJobsResponse(
        success=True,
        count=len(jobs),
        jobs=jobs,
        preferences=preferences
    )


@router.post("/{job_id}/applications", response_model=ApplicationResponse, status_code=201)
@limiter.limit("10/minute")
def apply_to_job(
    request: Request,
    job_id: int,
    body: Optional[ApplicationRequest] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config)
):
    """
    Apply to an open job.

    The seeker's match score at the time of applying is stored with the
    application.
    """
    body = body or ApplicationRequest()
    service = JobService(db, config.matching)
    return service.apply(
        user,
        job_id,
        cover_letter=body.cover_letter,
        resume_id=body.resume_id
    )
