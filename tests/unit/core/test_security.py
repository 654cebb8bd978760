#!/usr/bin/env python3
"""
Unit tests for bearer token helpers.
"""

import unittest
from datetime import timedelta

import jwt

from core.config_loader import AuthConfig
from core.security import (
    AuthenticationError,
    create_access_token,
    decode_access_token,
    extract_bearer_token,
)


class TestAccessTokens(unittest.TestCase):

    def setUp(self):
        self.config = AuthConfig(secret_key="unit-test-secret-0123456789abcdef0123")

    def test_round_trip_returns_user_id(self):
        token = create_access_token(42, self.config)
        self.assertEqual(decode_access_token(token, self.config), 42)

    def test_missing_token(self):
        with self.assertRaises(AuthenticationError):
            decode_access_token(None, self.config)
        with self.assertRaises(AuthenticationError):
            decode_access_token("", self.config)

    def test_expired_token(self):
        token = create_access_token(42, self.config, expires_delta=timedelta(seconds=-5))
        with self.assertRaises(AuthenticationError) as ctx:
            decode_access_token(token, self.config)
        self.assertIn("expired", str(ctx.exception))

    def test_wrong_secret(self):
        token = create_access_token(42, AuthConfig(secret_key="someone-else-0123456789abcdef0123456789"))
        with self.assertRaises(AuthenticationError):
            decode_access_token(token, self.config)

    def test_garbage_token(self):
        with self.assertRaises(AuthenticationError):
            decode_access_token("not-a-jwt", self.config)

    def test_token_without_subject(self):
        token = jwt.encode({"role": "seeker"}, self.config.secret_key, algorithm="HS256")
        with self.assertRaises(AuthenticationError):
            decode_access_token(token, self.config)

    def test_non_numeric_subject(self):
        token = jwt.encode({"sub": "alice"}, self.config.secret_key, algorithm="HS256")
        with self.assertRaises(AuthenticationError):
            decode_access_token(token, self.config)


class TestExtractBearerToken(unittest.TestCase):

    def test_bearer_header(self):
        self.assertEqual(extract_bearer_token("Bearer abc.def"), "abc.def")
        self.assertEqual(extract_bearer_token("bearer abc.def"), "abc.def")

    def test_other_schemes_and_blanks(self):
        self.assertIsNone(extract_bearer_token(None))
        self.assertIsNone(extract_bearer_token(""))
        self.assertIsNone(extract_bearer_token("Basic dXNlcjpwYXNz"))
        self.assertIsNone(extract_bearer_token("Bearer "))


if __name__ == "__main__":
    unittest.main()
