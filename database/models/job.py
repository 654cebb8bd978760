from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Boolean, JSON, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base


class Job(Base):
    __tablename__ = 'jobs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    employer_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)

    # Core Identity
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default='')
    location = Column(Text)
    job_type = Column(Text)  # full-time|part-time|contract|internship|remote
    is_remote = Column(Boolean, nullable=False, default=False)

    # Compensation
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    salary_type = Column(Text, nullable=False, default='monthly')  # monthly|yearly|hourly|daily|negotiable

    # Requirements
    experience_required = Column(Text)  # entry|junior|mid-level|senior|executive, or a number of years
    education_required = Column(Text, default='none')  # none|high_school|associate|bachelor|master|phd
    skills_required = Column(JSON, nullable=False, default=list)

    status = Column(Text, nullable=False, default='open')  # open|closed|draft|paused
    applications_count = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    employer = relationship("User")

    __table_args__ = (
        Index('idx_jobs_status', 'status'),
        Index('idx_jobs_location', 'location'),
    )


class JobApplication(Base):
    """
    A seeker's application to a job, with the match score computed when the
    application was submitted.
    """
    __tablename__ = 'job_applications'

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False)
    seeker_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    resume_id = Column(Integer, ForeignKey('resumes.id', ondelete='SET NULL'), nullable=True)

    cover_letter = Column(Text)
    status = Column(Text, nullable=False, default='submitted')

    # NULL when the seeker had no profile to score
    match_score = Column(Integer)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    job = relationship("Job")

    __table_args__ = (
        UniqueConstraint('job_id', 'seeker_id', name='uq_application_job_seeker'),
        Index('idx_applications_seeker', 'seeker_id'),
    )
