#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v

Repository, hub and API tests run against an in-memory SQLite database built
by make_test_database(); nothing external is required.
"""

from typing import Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from database.database import build_engine, build_session_factory
from database.init_db import init_db

TEST_DB_URL = "sqlite:///:memory:"


def make_test_database() -> Tuple[Engine, sessionmaker]:
    """
    Create a fresh in-memory database with all tables.

    Returns:
        (engine, session_factory). Dispose the engine when done.
    """
    engine = build_engine(TEST_DB_URL)
    init_db(engine)
    return engine, build_session_factory(engine)
