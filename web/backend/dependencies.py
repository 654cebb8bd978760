#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

The database manager and the chat hub are created by the application factory
and stored on app.state, so tests can build an app against their own engine.
"""

from typing import Generator, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from core.config_loader import AppConfig, DatabaseConfig
from core.security import AuthenticationError, decode_access_token, extract_bearer_token
from database.database import build_engine, build_session_factory
from database.models import User
from .exceptions import AuthenticationException


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, config: Optional[DatabaseConfig] = None, url: Optional[str] = None):
        config = config or DatabaseConfig()
        self.engine = build_engine(url or config.url, echo=config.echo)
        self.SessionLocal = build_session_factory(self.engine)

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.

        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from request.app.state.db_manager.get_session()


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config)
) -> User:
    """
    Resolve the bearer token on the request to an active user.

    Raises:
        AuthenticationException: If the token is missing or invalid, or the
            account is unknown or not active.
    """
    token = extract_bearer_token(request.headers.get('Authorization'))
    try:
        user_id = decode_access_token(token, config.auth)
    except AuthenticationError as e:
        raise AuthenticationException(str(e))

    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationException("Invalid user")
    if not user.is_active:
        raise AuthenticationException("Account is not active")
    return user
