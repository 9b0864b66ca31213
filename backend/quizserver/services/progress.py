"""Per-student progress report.

Each attempt is paired with the total marks its quiz is worth *today*: the
sum is taken over the quiz's current questions, so adding or removing
questions after an attempt changes the reported total for that attempt.
"""

import logging
import uuid

from sqlalchemy import func
from sqlalchemy.orm import Session

from quizserver.db.models import Attempt, Question, Quiz
from quizserver.schemas.progress import ProgressEntry
from quizserver.services.attempts import list_student_attempts

logger = logging.getLogger(__name__)

UNTITLED_QUIZ = "Untitled Quiz"


def _total_marks(db: Session, quiz_id: uuid.UUID | None) -> int:
    if quiz_id is None:
        return 0
    total = (
        db.query(func.coalesce(func.sum(Question.marks), 0))
        .filter(Question.quiz_id == quiz_id)
        .scalar()
    )
    return int(total or 0)


def _percentage(score: int, total: int) -> float:
    return round(score / total * 100, 2) if total else 0.0


def progress_report(db: Session, student_id: uuid.UUID) -> list[ProgressEntry]:
    """Return the student's attempts, newest first, with current quiz totals."""
    attempts: list[Attempt] = list_student_attempts(db, student_id)

    entries: list[ProgressEntry] = []
    for attempt in attempts:
        quiz = db.get(Quiz, attempt.quiz_id) if attempt.quiz_id else None
        total = _total_marks(db, quiz.id) if quiz else 0
        entries.append(
            ProgressEntry(
                title=quiz.title if quiz else UNTITLED_QUIZ,
                attempt_date=attempt.submitted_at,
                score=attempt.total_score,
                total_marks=total,
                percentage=_percentage(attempt.total_score, total),
            )
        )

    logger.debug("Progress for student %s: %d attempts", student_id, len(entries))
    return entries
