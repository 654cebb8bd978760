from .base import Base
from .preferences import JobPreferences
from .user import User, SeekerProfile, EmployerProfile, USER_ROLES, USER_STATUSES
from .job import Job, JobApplication
from .resume import Resume
from .chat import ChatRoom, ChatMessage, MESSAGE_TYPES

__all__ = [
    'Base',
    'JobPreferences',
    'User',
    'SeekerProfile',
    'EmployerProfile',
    'USER_ROLES',
    'USER_STATUSES',
    'Job',
    'JobApplication',
    'Resume',
    'ChatRoom',
    'ChatMessage',
    'MESSAGE_TYPES',
]
