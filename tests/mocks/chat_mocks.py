#!/usr/bin/env python3
"""
Test Mock Implementations - in-memory hub connections.

These connections record every pushed event instead of writing to a socket,
so hub tests can assert exactly what each participant received.
"""
from typing import Any, List, Optional, Tuple

from chat.connection import AuthenticatedUser, Connection


def as_identity(user) -> AuthenticatedUser:
    """Identity snapshot of an ORM User, as the hub takes it at handshake."""
    return AuthenticatedUser(id=user.id, username=user.username, role=user.role)


class RecordingConnection(Connection):
    """Connection that keeps every (event, data) pair it was sent."""

    def __init__(self, user: AuthenticatedUser):
        super().__init__(user)
        self.events: List[Tuple[str, Any]] = []
        self.closed_reason: Optional[str] = None

    async def send_event(self, event: str, data: Any) -> None:
        self.events.append((event, data))

    async def close(self, reason: str = "") -> None:
        self.closed_reason = reason

    def received(self, event: str) -> List[Any]:
        return [data for name, data in self.events if name == event]

    def last(self, event: str) -> Any:
        matching = self.received(event)
        return matching[-1] if matching else None

    def clear(self) -> None:
        self.events.clear()


class BrokenConnection(Connection):
    """Connection whose transport is gone; every push fails."""

    async def send_event(self, event: str, data: Any) -> None:
        raise ConnectionResetError("socket closed")
