#!/usr/bin/env python3
"""
Bearer token helpers.

Tokens are HS256 JWTs whose "sub" claim is the user id. Issuing tokens belongs
to the account service; create_access_token exists for that service and for
tests.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from core.config_loader import AuthConfig

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Raised when a credential is missing, invalid, expired or unusable."""
    pass


def create_access_token(
    user_id: int,
    config: AuthConfig,
    expires_delta: Optional[timedelta] = None,
    extra_claims: Optional[Dict[str, Any]] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=config.access_token_expire_minutes))
    payload: Dict[str, Any] = {
        'sub': str(user_id),
        'iat': now,
        'exp': expire,
    }
    if extra_claims:
        payload.update(extra_claims)
    return jwt.encode(payload, config.secret_key, algorithm=config.algorithm)


def decode_access_token(token: Optional[str], config: AuthConfig) -> int:
    """
    Verify a token and return the user id it was issued for.

    Raises:
        AuthenticationError: If the token is missing, malformed, expired or
            carries no usable subject.
    """
    if not token:
        raise AuthenticationError("Missing authentication token")

    try:
        payload = jwt.decode(token, config.secret_key, algorithms=[config.algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected token: {e}")
        raise AuthenticationError("Invalid token")

    try:
        return int(payload['sub'])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Token has no valid subject")


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an 'Authorization: Bearer <token>' header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()
