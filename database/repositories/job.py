import logging
from typing import Any, List, Optional
from sqlalchemy import select, update, or_

from database.models import Job, JobApplication
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class JobRepository(BaseRepository):
    def get_by_id(self, job_id: Any) -> Optional[Job]:
        return self.db.get(Job, job_id)

    def list_open_jobs(
        self,
        keyword: Optional[str] = None,
        location: Optional[str] = None,
        remote_only: bool = False,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Job]:
        stmt = select(Job).where(Job.status == 'open')

        if keyword:
            pattern = f"%{keyword}%"
            stmt = stmt.where(or_(Job.title.ilike(pattern), Job.description.ilike(pattern)))

        if location:
            stmt = stmt.where(Job.location.ilike(f"%{location}%"))

        if remote_only:
            stmt = stmt.where(Job.is_remote.is_(True))

        stmt = stmt.order_by(Job.created_at.desc(), Job.id.desc())

        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        return list(self.db.execute(stmt).scalars().all())

    def get_application(self, job_id: Any, seeker_id: Any) -> Optional[JobApplication]:
        stmt = select(JobApplication).where(
            JobApplication.job_id == job_id,
            JobApplication.seeker_id == seeker_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def create_application(
        self,
        job_id: Any,
        seeker_id: Any,
        match_score: Optional[int],
        cover_letter: Optional[str] = None,
        resume_id: Optional[Any] = None
    ) -> JobApplication:
        application = JobApplication(
            job_id=job_id,
            seeker_id=seeker_id,
            resume_id=resume_id,
            cover_letter=cover_letter,
            status='submitted',
            match_score=match_score
        )
        self.db.add(application)

        # Counter is updated in SQL so concurrent applications don't lose increments
        self.db.execute(
            update(Job)
            .where(Job.id == job_id)
            .values(applications_count=Job.applications_count + 1)
        )
        self.db.flush()
        return application
