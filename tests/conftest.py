# /tests/conftest.py

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from psyassist.core.deps import SessionContext
from psyassist.db.base import Base
from psyassist.services.database_service import DatabaseService


@pytest.fixture
def db_session():
    """
    A session on a fresh in-memory SQLite database for EACH test function.
    StaticPool keeps the single connection alive so every session sees the
    same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session=db_session)


@pytest.fixture
def context():
    return SessionContext(user_id="user_psych_1", display_name="Dr. Rachel Levi")


@pytest.fixture
def other_context():
    return SessionContext(user_id="user_psych_2")
