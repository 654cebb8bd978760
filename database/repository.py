import logging

from sqlalchemy.orm import Session

from database.repositories import UserRepository, JobRepository, ChatRepository

logger = logging.getLogger(__name__)


class MarketplaceRepository:
    """Facade bundling the per-aggregate repositories over one Session."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.jobs = JobRepository(db)
        self.chat = ChatRepository(db)
