#!/usr/bin/env python3
"""
Connection abstraction for the messaging hub.

The hub only needs to know who is on the other end and how to push an event;
transports (WebSocket, test doubles) implement Connection.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity snapshot taken once, when the connection authenticated."""
    id: int
    username: str
    role: str

    def to_dict(self) -> dict:
        return {'id': self.id, 'username': self.username, 'role': self.role}


class Connection(ABC):
    """An authenticated, live client connection."""

    def __init__(self, user: AuthenticatedUser):
        self.user = user
        self.connection_id = uuid.uuid4().hex

    @abstractmethod
    async def send_event(self, event: str, data: Any) -> None:
        """Push one server event to the client."""
        pass

    async def close(self, reason: str = "") -> None:
        """End the connection from the server side."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} user={self.user.id} id={self.connection_id[:8]}>"
