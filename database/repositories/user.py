import logging
from typing import Any, Optional
from sqlalchemy import select

from database.models import User, SeekerProfile, Resume
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    def get_by_id(self, user_id: Any) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_seeker_profile(self, user_id: Any) -> Optional[SeekerProfile]:
        stmt = select(SeekerProfile).where(SeekerProfile.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_default_resume(self, user_id: Any) -> Optional[Resume]:
        """Most recently updated active default resume, if any."""
        stmt = (
            select(Resume)
            .where(
                Resume.user_id == user_id,
                Resume.is_default.is_(True),
                Resume.status == 'active'
            )
            .order_by(Resume.updated_at.desc(), Resume.id.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_resume(self, resume_id: Any, user_id: Any) -> Optional[Resume]:
        stmt = select(Resume).where(Resume.id == resume_id, Resume.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()
