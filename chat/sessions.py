#!/usr/bin/env python3
"""
Session Registry - who is connected, and who is listening to which room.

Two maps, both guarded by one lock:
- user id -> the user's active connection (last connection wins)
- room id -> connections that joined the room's broadcast group

Readers get snapshots, so broadcasting never iterates a set that a
connect/disconnect handler is mutating.
"""

import logging
from collections import defaultdict
from threading import Lock
from typing import Dict, List, Optional, Set

from chat.connection import Connection

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Concurrency-safe registry of live connections and room groups."""

    def __init__(self):
        self._lock = Lock()
        self._sessions: Dict[int, Connection] = {}
        self._groups: Dict[int, Set[Connection]] = defaultdict(set)
        self._memberships: Dict[Connection, Set[int]] = defaultdict(set)

    def register(self, connection: Connection) -> Optional[Connection]:
        """
        Make connection the user's active connection.

        Returns:
            The connection it replaced, if any.
        """
        with self._lock:
            previous = self._sessions.get(connection.user.id)
            self._sessions[connection.user.id] = connection

        if previous is not None and previous is not connection:
            logger.info(f"User {connection.user.id} reconnected; replacing {previous!r}")
            return previous
        return None

    def unregister(self, connection: Connection) -> bool:
        """
        Forget a connection and drop it from every room group.

        The user's session entry is only removed if it still points at this
        connection, so a stale connection closing cannot log out a newer one.

        Returns:
            True if the user's active session was removed.
        """
        with self._lock:
            for room_id in self._memberships.pop(connection, set()):
                members = self._groups.get(room_id)
                if members is not None:
                    members.discard(connection)
                    if not members:
                        del self._groups[room_id]

            if self._sessions.get(connection.user.id) is connection:
                del self._sessions[connection.user.id]
                return True
        return False

    def get(self, user_id: int) -> Optional[Connection]:
        with self._lock:
            return self._sessions.get(user_id)

    def is_online(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._sessions

    def join_group(self, room_id: int, connection: Connection) -> None:
        with self._lock:
            self._groups[room_id].add(connection)
            self._memberships[connection].add(room_id)

    def leave_group(self, room_id: int, connection: Connection) -> None:
        with self._lock:
            members = self._groups.get(room_id)
            if members is not None:
                members.discard(connection)
                if not members:
                    del self._groups[room_id]
            rooms = self._memberships.get(connection)
            if rooms is not None:
                rooms.discard(room_id)

    def group_members(self, room_id: int) -> List[Connection]:
        with self._lock:
            return list(self._groups.get(room_id, ()))

    def in_group(self, room_id: int, connection: Connection) -> bool:
        with self._lock:
            return connection in self._groups.get(room_id, ())

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
