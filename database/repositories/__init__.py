from database.repositories.base import BaseRepository
from database.repositories.user import UserRepository
from database.repositories.job import JobRepository
from database.repositories.chat import ChatRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'JobRepository',
    'ChatRepository',
]
