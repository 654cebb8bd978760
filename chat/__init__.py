"""Realtime messaging between employers and job seekers."""

from chat.connection import AuthenticatedUser, Connection
from chat.exceptions import (
    ChatError,
    ChatValidationError,
    ChatAuthorizationError,
    ChatNotFoundError,
)
from chat.hub import ChatHub
from chat.sessions import SessionRegistry

__all__ = [
    'AuthenticatedUser',
    'Connection',
    'ChatError',
    'ChatValidationError',
    'ChatAuthorizationError',
    'ChatNotFoundError',
    'ChatHub',
    'SessionRegistry',
]
