import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from database.db import Base, SessionLocal, init_schema
from services.student_store import StudentStore


@pytest.fixture
def engine():
    # 테스트마다 새 in-memory SQLite (연결 1개 공유)
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_schema(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = SessionLocal(bind=engine)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return StudentStore(db)


@pytest.fixture
def reader():
    """input() 대체: 준비된 답을 순서대로 반환"""
    def make(*answers):
        it = iter(answers)
        return lambda prompt="": next(it)
    return make
