"""
pytest configuration
"""
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from blog import models
from blog.config import settings
from blog.database import Base

# Force the test branch of environment-dependent code
settings.env = "test"


@pytest.fixture(scope="session")
def test_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(test_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.query(models.Board).delete()
        session.query(models.User).delete()
        session.commit()
        session.close()


@pytest.fixture
def user_factory(db_session: Session):
    def _create(username: str = "alice", password: str = "p1", email: str = None) -> models.User:
        user = models.User(username=username, password=password, email=email)
        db_session.add(user)
        db_session.commit()
        return user

    return _create
