"""Business logic services."""

from .job_service import JobService
