"""Shared pytest fixtures for backend tests."""

import os
import tempfile
import uuid
from datetime import timedelta

# Settings are read at import time, so point them at throwaway storage first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="quizserver-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from quizserver.core.clock import utcnow
from quizserver.db import session as db_session
from quizserver.db.models import Question, QuestionTypeEnum, Quiz, RoleEnum, User
from quizserver.db.session import Base, get_db
from quizserver.main import app


# Use an in-memory SQLite database for testing with static pool
SQLALCHEMY_TEST_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,  # Use StaticPool to keep connection alive
    echo=False,
)
TestSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

# The app lifespan calls init_db(); make it use the test engine.
db_session._engine = engine
db_session._SessionLocal = TestSession

# Create all tables once at startup
Base.metadata.create_all(bind=engine)


@pytest.fixture(scope="function")
def db():
    """Get a fresh DB session for each test; all rows are wiped afterwards."""
    session = TestSession()
    try:
        yield session
    finally:
        session.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
        session.close()


@pytest.fixture(scope="function")
def client(db: Session):
    """FastAPI test client with overridden DB dependency."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ── Factories ─────────────────────────────────────────────────────────────────


@pytest.fixture
def make_user(db: Session):
    def _make(role: RoleEnum = RoleEnum.STUDENT, name: str = "Test User") -> User:
        user = User(
            email=f"{role.value}_{uuid.uuid4().hex[:8]}@ex.com",
            hashed_password="not-a-real-hash",
            name=name,
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_quiz(db: Session, make_user):
    def _make(owner: User | None = None, **fields) -> Quiz:
        owner = owner or make_user(RoleEnum.ADMIN)
        fields.setdefault("title", "General Knowledge")
        fields.setdefault("duration_minutes", 30)
        quiz = Quiz(created_by=owner.id, **fields)
        db.add(quiz)
        db.commit()
        db.refresh(quiz)
        return quiz

    return _make


@pytest.fixture
def make_question(db: Session):
    def _make(
        quiz: Quiz,
        question_type: QuestionTypeEnum = QuestionTypeEnum.MCQ,
        correct_answer="A",
        marks: int = 1,
        **fields,
    ) -> Question:
        question = Question(
            quiz_id=quiz.id,
            question_type=question_type,
            text=fields.pop("text", "Pick one"),
            correct_answer=correct_answer,
            marks=marks,
            **fields,
        )
        db.add(question)
        db.commit()
        db.refresh(question)
        return question

    return _make


@pytest.fixture
def hour() -> timedelta:
    return timedelta(hours=1)


@pytest.fixture
def now():
    return utcnow()
