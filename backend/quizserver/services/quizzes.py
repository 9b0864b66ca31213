"""Quiz and question management.

Admin operations are scoped to the owning admin: a quiz that exists but
belongs to someone else is reported as not found.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizserver.core.clock import as_utc, utcnow
from quizserver.core.errors import NotFoundError, StorageError, ValidationError
from quizserver.db.models import Question, QuestionTypeEnum, Quiz
from quizserver.schemas.quiz import QuizCreate, QuizUpdate
from quizserver.services.availability import ensure_open
from quizserver.services.storage import delete_image

logger = logging.getLogger(__name__)

_TEXT_TYPES = {QuestionTypeEnum.FILL_IN_BLANK, QuestionTypeEnum.IMAGE}


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database error while trying to %s", action)
        raise StorageError(f"Could not {action}") from exc


# ── Admin: quizzes ────────────────────────────────────────────────────────────


def create_quiz(db: Session, owner_id: uuid.UUID, body: QuizCreate) -> Quiz:
    quiz = Quiz(
        title=body.title,
        subject=body.subject,
        duration_minutes=body.duration_minutes,
        start_at=body.start_at,
        end_at=body.end_at,
        created_by=owner_id,
    )
    db.add(quiz)
    _commit(db, "create quiz")
    db.refresh(quiz)
    logger.info("Quiz %s created by %s", quiz.id, owner_id)
    return quiz


def list_owned_quizzes(db: Session, owner_id: uuid.UUID) -> list[Quiz]:
    """Quizzes created by *owner_id*, newest first."""
    return (
        db.query(Quiz)
        .filter(Quiz.created_by == owner_id)
        .order_by(Quiz.created_at.desc())
        .all()
    )


def get_owned_quiz(db: Session, quiz_id: uuid.UUID, owner_id: uuid.UUID) -> Quiz:
    quiz = (
        db.query(Quiz)
        .filter(Quiz.id == quiz_id, Quiz.created_by == owner_id)
        .first()
    )
    if quiz is None:
        raise NotFoundError("Quiz not found")
    return quiz


def update_quiz(
    db: Session, quiz_id: uuid.UUID, owner_id: uuid.UUID, body: QuizUpdate
) -> Quiz:
    """Apply the fields present in *body*; omitted or null fields keep their value."""
    quiz = get_owned_quiz(db, quiz_id, owner_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    start = changes.get("start_at", as_utc(quiz.start_at))
    end = changes.get("end_at", as_utc(quiz.end_at))
    if start and end and start > end:
        raise ValidationError("start_at must not be after end_at")

    for name, value in changes.items():
        setattr(quiz, name, value)
    _commit(db, "update quiz")
    db.refresh(quiz)
    logger.info("Quiz %s updated: %s", quiz.id, sorted(changes))
    return quiz


def delete_quiz(db: Session, quiz_id: uuid.UUID, owner_id: uuid.UUID) -> None:
    """Delete the quiz and its questions. Attempts are kept."""
    quiz = get_owned_quiz(db, quiz_id, owner_id)
    images = [q.image_path for q in quiz.questions if q.image_path]
    db.delete(quiz)
    _commit(db, "delete quiz")
    for path in images:
        delete_image(path)
    logger.info("Quiz %s deleted with %d image(s)", quiz_id, len(images))


# ── Admin: questions ──────────────────────────────────────────────────────────


def _parse_json_field(raw: str | None, field_name: str) -> Any:
    if raw is None or raw == "":
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(
            f"{field_name} must be valid JSON", details={"field": field_name}
        ) from exc


def _parse_options(raw: str | None) -> list[str]:
    options = _parse_json_field(raw, "options")
    if options is None:
        return []
    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise ValidationError(
            "options must be a JSON array of strings", details={"field": "options"}
        )
    return options


def add_question(
    db: Session,
    quiz_id: uuid.UUID,
    owner_id: uuid.UUID,
    *,
    question_type: QuestionTypeEnum,
    text: str | None = None,
    options: str | None = None,
    correct_answer: str | None = None,
    marks: int | None = None,
    image_path: str | None = None,
) -> Question:
    """Add a question to an owned quiz.

    *options* and *correct_answer* arrive as JSON text (multipart forms carry
    strings only). A missing correct answer is stored as null and can never
    be graded correct.
    """
    quiz = get_owned_quiz(db, quiz_id, owner_id)
    if marks is not None and marks < 1:
        raise ValidationError("marks must be at least 1", details={"field": "marks"})

    question_type = QuestionTypeEnum(question_type)
    answer = _parse_json_field(correct_answer, "correct_answer")
    # Text questions only ever match text; anything else could never be scored.
    if (
        question_type in _TEXT_TYPES
        and answer is not None
        and not isinstance(answer, str)
    ):
        raise ValidationError(
            f"correct_answer must be a JSON string for {question_type.value} questions",
            details={"field": "correct_answer"},
        )

    position = (
        db.query(func.count(Question.id)).filter(Question.quiz_id == quiz.id).scalar()
    ) or 0
    question = Question(
        quiz_id=quiz.id,
        question_type=question_type,
        text=text or "",
        image_path=image_path,
        options=_parse_options(options),
        correct_answer=answer,
        marks=marks if marks is not None else 1,
        position=position,
    )
    db.add(question)
    _commit(db, "add question")
    db.refresh(question)
    logger.info(
        "Question %s (%s, %d marks) added to quiz %s",
        question.id, question.question_type.value, question.marks, quiz.id,
    )
    return question


def list_quiz_questions(
    db: Session, quiz_id: uuid.UUID, owner_id: uuid.UUID
) -> list[Question]:
    """Full questions of an owned quiz, answers included."""
    return get_owned_quiz(db, quiz_id, owner_id).questions


# ── Students ──────────────────────────────────────────────────────────────────


def list_open_quizzes(db: Session, now: datetime | None = None) -> list[Quiz]:
    """Quizzes open at *now*: unscheduled ones first, then by start, newest created first."""
    now = as_utc(now) or utcnow()
    return (
        db.query(Quiz)
        .filter(
            or_(Quiz.start_at.is_(None), Quiz.start_at <= now),
            or_(Quiz.end_at.is_(None), Quiz.end_at >= now),
        )
        .order_by(
            Quiz.start_at.is_not(None), Quiz.start_at, Quiz.created_at.desc()
        )
        .all()
    )


def get_quiz_for_attempt(
    db: Session, quiz_id: uuid.UUID, now: datetime | None = None
) -> Quiz:
    """Return the quiz with its questions if it is open for attempting.

    Raises:
        NotFoundError: unknown quiz
        AccessWindowError: quiz not started yet, or already ended
    """
    quiz = db.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFoundError("Quiz not found")
    ensure_open(quiz, now)
    return quiz
