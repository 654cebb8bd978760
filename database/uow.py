import contextlib
import logging
from typing import Iterator

from database.database import SessionFactory
from database.repository import MarketplaceRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def marketplace_uow(session_factory: SessionFactory) -> Iterator[MarketplaceRepository]:
    """Per-unit-of-work transaction scope.

    Yields a MarketplaceRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with marketplace_uow(session_factory) as repo:
            room = repo.chat.get_room(room_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = session_factory()
    try:
        repo = MarketplaceRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
