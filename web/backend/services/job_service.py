#!/usr/bin/env python3
"""
Job service - business logic for browsing, recommending and applying to jobs.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.config_loader import MatchingConfig
from core.scorer import MatchScore, evaluate_match, top_matches
from database.models import Job, JobPreferences, Resume, SeekerProfile, User
from database.repositories import JobRepository, UserRepository
from ..models.responses import JobSummary, ApplicationResponse
from ..exceptions import (
    AuthorizationException,
    ConflictException,
    JobNotFoundException,
    NotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class JobService:
    """Service for job listings and applications."""

    def __init__(self, db: Session, config: Optional[MatchingConfig] = None):
        self.db = db
        self.config = config or MatchingConfig()
        self.jobs = JobRepository(db)
        self.users = UserRepository(db)

    def list_jobs(
        self,
        viewer: User,
        keyword: Optional[str] = None,
        location: Optional[str] = None,
        remote_only: bool = False,
        limit: int = 20,
        offset: int = 0
    ) -> List[JobSummary]:
        """
        Get open jobs, newest first.

        For a seeker with a profile every job carries its match score.
        """
        jobs = self.jobs.list_open_jobs(
            keyword=keyword,
            location=location,
            remote_only=remote_only,
            limit=limit,
            offset=offset
        )

        profile, resume = self._seeker_context(viewer)
        if profile is None:
            return [self._to_job_summary(job) for job in jobs]

        return [
            self._to_job_summary(job, self._score(job, profile, resume))
            for job in jobs
        ]

    def recommend_jobs(self, viewer: User, limit: int = 10) -> Tuple[List[JobSummary], JobPreferences]:
        """
        Score the open-job pool against a seeker and return the best matches.

        Raises:
            AuthorizationException: If the viewer is not a seeker.
            ValidationException: If the seeker has no profile yet.
        """
        if viewer.role != 'seeker':
            raise AuthorizationException("Only job seekers can get recommendations")

        profile, resume = self._seeker_context(viewer)
        if profile is None:
            raise ValidationException("Complete your seeker profile to get recommendations")

        pool = self.jobs.list_open_jobs(limit=self.config.recommendation_pool)
        scored = [(job, self._score(job, profile, resume)) for job in pool]
        best = top_matches(scored, limit)

        logger.info(f"Recommended {len(best)} of {len(pool)} open jobs to user {viewer.id}")
        return [self._to_job_summary(job, result) for job, result in best], profile.preferences

    def apply(
        self,
        viewer: User,
        job_id: int,
        cover_letter: Optional[str] = None,
        resume_id: Optional[int] = None
    ) -> ApplicationResponse:
        """
        Submit an application and bump the job's application counter.

        Raises:
            AuthorizationException: If the viewer is not a seeker.
            JobNotFoundException: If the job does not exist.
            NotFoundException: If resume_id is not one of the seeker's resumes.
            ValidationException: If the job is not open.
            ConflictException: If the seeker already applied.
        """
        if viewer.role != 'seeker':
            raise AuthorizationException("Only job seekers can apply to jobs")

        job = self.jobs.get_by_id(job_id)
        if job is None:
            raise JobNotFoundException(f"Job {job_id} not found")
        if job.status != 'open':
            raise ValidationException(f"Job {job_id} is not accepting applications")

        if self.jobs.get_application(job_id, viewer.id) is not None:
            raise ConflictException(f"You have already applied to job {job_id}")

        if resume_id is not None:
            resume = self.users.get_resume(resume_id, viewer.id)
            if resume is None:
                raise NotFoundException(f"Resume {resume_id} not found")
        else:
            resume = self.users.get_default_resume(viewer.id)

        profile = self.users.get_seeker_profile(viewer.id)
        match_score = None
        if profile is not None:
            match_score = self._score(job, profile, resume).score

        try:
            application = self.jobs.create_application(
                job_id=job.id,
                seeker_id=viewer.id,
                match_score=match_score,
                cover_letter=cover_letter,
                resume_id=resume.id if resume is not None else None
            )
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent application by the same seeker
            self.db.rollback()
            raise ConflictException(f"You have already applied to job {job_id}")

        self.db.refresh(job)
        logger.info(f"User {viewer.id} applied to job {job.id} (match_score={match_score})")

        return ApplicationResponse(
            success=True,
            application_id=application.id,
            job_id=job.id,
            status=application.status,
            match_score=match_score,
            applications_count=job.applications_count
        )

    def _seeker_context(self, viewer: User) -> Tuple[Optional[SeekerProfile], Optional[Resume]]:
        if viewer.role != 'seeker':
            return None, None
        profile = self.users.get_seeker_profile(viewer.id)
        if profile is None:
            return None, None
        return profile, self.users.get_default_resume(viewer.id)

    def _score(self, job: Job, profile: SeekerProfile, resume: Optional[Resume]) -> MatchScore:
        return evaluate_match(job, profile, resume, self.config.scorer)

    def _to_job_summary(self, job: Job, result: Optional[MatchScore] = None) -> JobSummary:
        summary = JobSummary.model_validate(job)
        if result is None:
            return summary
        return summary.model_copy(update={
            'match_score': result.score,
            'match_insufficient_data': result.insufficient_data,
            'match_components': result.components,
        })
