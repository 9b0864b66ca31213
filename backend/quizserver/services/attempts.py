"""Attempt submission: grade a full answer set and persist one attempt."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizserver.config import settings
from quizserver.core.clock import utcnow
from quizserver.core.errors import NotFoundError, StorageError, ValidationError
from quizserver.db.models import Attempt, AttemptAnswer, Question, Quiz
from quizserver.schemas.attempt import AnswerIn
from quizserver.services.availability import ensure_open
from quizserver.services.grading import evaluate

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    attempt_id: uuid.UUID
    total_score: int
    # Question ids that did not resolve to a question of the quiz
    skipped: list[Any] = field(default_factory=list)


def _parse_answers(answers: Any) -> list[AnswerIn]:
    if not isinstance(answers, list):
        raise ValidationError("Answers must be an array")
    try:
        return [
            item if isinstance(item, AnswerIn) else AnswerIn.model_validate(item)
            for item in answers
        ]
    except pydantic.ValidationError as exc:
        raise ValidationError(
            "Malformed answer entry",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc


def _to_uuid(raw: Any) -> uuid.UUID | None:
    if not isinstance(raw, str):
        return None
    try:
        return uuid.UUID(raw)
    except ValueError:
        return None


def submit_attempt(
    db: Session,
    quiz_id: uuid.UUID,
    student_id: uuid.UUID,
    answers: Any,
    now: datetime | None = None,
) -> SubmissionResult:
    """Grade *answers* for *quiz_id* and store them as a new attempt.

    Answers are graded in input order. Entries whose question id is malformed
    or does not belong to the quiz are left out of the attempt and listed in
    ``SubmissionResult.skipped``. The stored total always equals the sum of
    the stored per-answer marks.

    Raises:
        ValidationError: *answers* is not a list, or an entry is malformed
        NotFoundError: the quiz does not exist
        AccessWindowError: the quiz is closed and ``ENFORCE_WINDOW_ON_SUBMIT`` is set
        StorageError: the attempt could not be written
    """
    entries = _parse_answers(answers)
    now = now or utcnow()

    quiz = db.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFoundError("Quiz not found")
    if settings.ENFORCE_WINDOW_ON_SUBMIT:
        ensure_open(quiz, now)

    wanted = {qid for qid in (_to_uuid(e.question) for e in entries) if qid}
    question_map: dict[uuid.UUID, Question] = {}
    if wanted:
        rows = (
            db.query(Question)
            .filter(Question.quiz_id == quiz.id, Question.id.in_(wanted))
            .all()
        )
        question_map = {q.id: q for q in rows}

    total_score = 0
    skipped: list[Any] = []
    records: list[AttemptAnswer] = []

    for entry in entries:
        qid = _to_uuid(entry.question)
        question = question_map.get(qid) if qid else None
        if question is None:
            skipped.append(entry.question)
            continue

        result = evaluate(question, entry.answer)
        logger.debug(
            "Graded question %s (%s): correct=%s marks=%d",
            question.id, question.question_type.value,
            result.is_correct, result.marks_awarded,
        )
        total_score += result.marks_awarded
        records.append(
            AttemptAnswer(
                question_id=question.id,
                position=len(records),
                answer=entry.answer,
                is_correct=result.is_correct,
                marks_awarded=result.marks_awarded,
            )
        )

    attempt = Attempt(
        quiz_id=quiz.id,
        student_id=student_id,
        total_score=total_score,
        submitted_at=now,
        answers=records,
    )
    try:
        db.add(attempt)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to store attempt for quiz %s", quiz.id)
        raise StorageError("Could not save attempt") from exc
    db.refresh(attempt)

    logger.info(
        "Attempt %s stored: quiz=%s student=%s score=%d answers=%d skipped=%d",
        attempt.id, quiz.id, student_id, total_score, len(records), len(skipped),
    )
    return SubmissionResult(attempt.id, total_score, skipped)


def list_student_attempts(db: Session, student_id: uuid.UUID) -> list[Attempt]:
    """All attempts of *student_id*, newest first."""
    return (
        db.query(Attempt)
        .filter(Attempt.student_id == student_id)
        .order_by(Attempt.submitted_at.desc())
        .all()
    )


def get_student_attempt(
    db: Session, attempt_id: uuid.UUID, student_id: uuid.UUID
) -> Attempt:
    """Fetch one of the student's own attempts."""
    attempt = (
        db.query(Attempt)
        .filter(Attempt.id == attempt_id, Attempt.student_id == student_id)
        .first()
    )
    if attempt is None:
        raise NotFoundError("Attempt not found")
    return attempt
