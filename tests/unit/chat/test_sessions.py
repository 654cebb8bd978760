#!/usr/bin/env python3
"""
Unit tests for the session registry.
"""

import unittest
from threading import Thread

from chat.connection import AuthenticatedUser
from chat.sessions import SessionRegistry
from tests.mocks.chat_mocks import RecordingConnection


def make_connection(user_id: int, role: str = 'seeker') -> RecordingConnection:
    return RecordingConnection(AuthenticatedUser(id=user_id, username=f"user{user_id}", role=role))


class TestSessionRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = SessionRegistry()

    def test_register_and_lookup(self):
        conn = make_connection(1)
        self.assertIsNone(self.registry.register(conn))

        self.assertIs(self.registry.get(1), conn)
        self.assertTrue(self.registry.is_online(1))
        self.assertFalse(self.registry.is_online(2))
        self.assertEqual(len(self.registry), 1)

    def test_last_connection_wins(self):
        first = make_connection(1)
        second = make_connection(1)
        self.registry.register(first)

        self.assertIs(self.registry.register(second), first)
        self.assertIs(self.registry.get(1), second)

    def test_stale_disconnect_keeps_newer_session(self):
        first = make_connection(1)
        second = make_connection(1)
        self.registry.register(first)
        self.registry.register(second)

        self.assertFalse(self.registry.unregister(first))
        self.assertIs(self.registry.get(1), second)

        self.assertTrue(self.registry.unregister(second))
        self.assertFalse(self.registry.is_online(1))

    def test_groups(self):
        a = make_connection(1)
        b = make_connection(2, role='employer')
        self.registry.join_group(10, a)
        self.registry.join_group(10, b)
        self.registry.join_group(11, a)

        self.assertCountEqual(self.registry.group_members(10), [a, b])
        self.assertTrue(self.registry.in_group(11, a))

        self.registry.leave_group(10, b)
        self.assertEqual(self.registry.group_members(10), [a])
        self.assertFalse(self.registry.in_group(10, b))

    def test_unregister_drops_group_memberships(self):
        conn = make_connection(1)
        self.registry.register(conn)
        self.registry.join_group(10, conn)
        self.registry.join_group(11, conn)

        self.registry.unregister(conn)

        self.assertEqual(self.registry.group_members(10), [])
        self.assertEqual(self.registry.group_members(11), [])

    def test_group_members_is_a_snapshot(self):
        conn = make_connection(1)
        self.registry.join_group(10, conn)
        members = self.registry.group_members(10)

        self.registry.leave_group(10, conn)
        self.assertEqual(members, [conn])

    def test_concurrent_registration(self):
        connections = [make_connection(i) for i in range(200)]

        def churn(chunk):
            for conn in chunk:
                self.registry.register(conn)
                self.registry.join_group(conn.user.id % 5, conn)

        threads = [Thread(target=churn, args=(connections[i::4],)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertTrue(all(self.registry.is_online(i) for i in range(200)))
        self.assertEqual(len(self.registry), 200)
        self.assertEqual(sum(len(self.registry.group_members(g)) for g in range(5)), 200)


if __name__ == "__main__":
    unittest.main()
