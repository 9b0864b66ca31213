"""Student routes: open quizzes, taking a quiz, attempt history, progress."""

import logging
import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from quizserver.api.deps import get_current_user
from quizserver.db.models import Attempt, User
from quizserver.db.session import get_db
from quizserver.schemas.attempt import (
    AttemptAnswerRead,
    AttemptDetailRead,
    AttemptRead,
    AttemptSubmit,
    SubmissionRead,
)
from quizserver.schemas.progress import ProgressEntry
from quizserver.schemas.quiz import (
    QuizMeta,
    QuizQuestionsRead,
    QuizRead,
    StudentQuestionRead,
)
from quizserver.services import attempts as attempt_service
from quizserver.services import quizzes as quiz_service
from quizserver.services.progress import progress_report

logger = logging.getLogger(__name__)
router = APIRouter()


def _attempt_read(attempt: Attempt) -> AttemptRead:
    return AttemptRead(
        id=attempt.id,
        quiz_id=attempt.quiz_id,
        quiz_title=attempt.quiz.title if attempt.quiz else None,
        quiz_subject=attempt.quiz.subject if attempt.quiz else None,
        total_score=attempt.total_score,
        submitted_at=attempt.submitted_at,
    )


@router.get("/quizzes", response_model=list[QuizRead])
def list_available_quizzes(
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Quizzes that are open right now."""
    return quiz_service.list_open_quizzes(db)


@router.get("/quizzes/{quiz_id}/questions", response_model=QuizQuestionsRead)
def get_quiz_questions(
    quiz_id: uuid.UUID,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Question set for attempting a quiz. Correct answers are never sent."""
    quiz = quiz_service.get_quiz_for_attempt(db, quiz_id)
    return QuizQuestionsRead(
        quiz=QuizMeta.model_validate(quiz),
        questions=[StudentQuestionRead.model_validate(q) for q in quiz.questions],
    )


@router.post(
    "/quizzes/{quiz_id}/submit",
    response_model=SubmissionRead,
    status_code=status.HTTP_201_CREATED,
)
def submit_attempt(
    quiz_id: uuid.UUID,
    body: AttemptSubmit,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Grade a full answer set and record the attempt."""
    result = attempt_service.submit_attempt(
        db, quiz_id=quiz_id, student_id=current_user.id, answers=body.answers
    )
    return SubmissionRead(
        attempt_id=result.attempt_id,
        total_score=result.total_score,
        skipped=result.skipped,
    )


@router.get("/attempts", response_model=list[AttemptRead])
def my_attempts(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The caller's attempts, newest first."""
    rows = attempt_service.list_student_attempts(db, current_user.id)
    return [_attempt_read(a) for a in rows]


@router.get("/attempts/{attempt_id}", response_model=AttemptDetailRead)
def get_attempt(
    attempt_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """One of the caller's attempts with every graded answer."""
    attempt = attempt_service.get_student_attempt(db, attempt_id, current_user.id)
    return AttemptDetailRead(
        **_attempt_read(attempt).model_dump(),
        answers=[AttemptAnswerRead.model_validate(a) for a in attempt.answers],
    )


@router.get("/progress", response_model=list[ProgressEntry])
def get_progress(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Score against current total marks for every attempt, newest first."""
    return progress_report(db, current_user.id)
