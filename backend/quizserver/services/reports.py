"""Admin score reports."""

import logging
import uuid
from datetime import date
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session, joinedload

from quizserver.config import settings
from quizserver.core.clock import as_utc
from quizserver.db.models import Attempt, Quiz
from quizserver.schemas.admin import QuizAttemptRow, StudentRef, StudentScoreRow
from quizserver.services.quizzes import get_owned_quiz

logger = logging.getLogger(__name__)


def list_quiz_attempts(
    db: Session, quiz_id: uuid.UUID, owner_id: uuid.UUID
) -> list[QuizAttemptRow]:
    """All attempts on an owned quiz, newest first."""
    quiz = get_owned_quiz(db, quiz_id, owner_id)
    rows = (
        db.query(Attempt)
        .options(joinedload(Attempt.student))
        .filter(Attempt.quiz_id == quiz.id)
        .order_by(Attempt.submitted_at.desc())
        .all()
    )
    return [
        QuizAttemptRow(
            id=a.id,
            student=StudentRef.model_validate(a.student),
            total_score=a.total_score,
            submitted_at=a.submitted_at,
        )
        for a in rows
    ]


def student_scores(
    db: Session,
    subject: str | None = None,
    on_date: date | None = None,
) -> list[StudentScoreRow]:
    """Every attempt with its student and quiz, best scores first.

    *subject* keeps attempts whose quiz has exactly that subject. *on_date*
    keeps attempts submitted on that calendar day in ``REPORT_TIMEZONE``.
    """
    query = (
        db.query(Attempt)
        .options(joinedload(Attempt.student), joinedload(Attempt.quiz))
        .outerjoin(Quiz, Attempt.quiz_id == Quiz.id)
    )
    if subject:
        query = query.filter(Quiz.subject == subject)
    attempts = query.order_by(
        Attempt.total_score.desc(), Attempt.submitted_at.desc()
    ).all()

    if on_date is not None:
        zone = ZoneInfo(settings.REPORT_TIMEZONE)
        attempts = [
            a for a in attempts
            if as_utc(a.submitted_at).astimezone(zone).date() == on_date
        ]

    logger.debug(
        "Score report subject=%s date=%s -> %d rows", subject, on_date, len(attempts)
    )
    return [
        StudentScoreRow(
            id=a.id,
            student=StudentRef.model_validate(a.student),
            total_score=a.total_score,
            submitted_at=a.submitted_at,
            quiz_id=a.quiz_id,
            quiz_title=a.quiz.title if a.quiz else None,
            quiz_subject=a.quiz.subject if a.quiz else None,
            duration_minutes=a.quiz.duration_minutes if a.quiz else None,
        )
        for a in attempts
    ]
