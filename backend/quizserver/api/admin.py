"""Admin routes: quiz management, questions, attempts and score reports."""

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from quizserver.api.deps import require_admin
from quizserver.core.errors import QuizServerError
from quizserver.db.models import QuestionTypeEnum, User
from quizserver.db.session import get_db
from quizserver.schemas.admin import QuizAttemptRow, StudentScoreRow
from quizserver.schemas.common import SuccessResponse
from quizserver.schemas.quiz import (
    QuestionRead,
    QuestionType,
    QuizCreate,
    QuizRead,
    QuizUpdate,
)
from quizserver.services import quizzes as quiz_service
from quizserver.services import reports
from quizserver.services.storage import delete_image, save_image

logger = logging.getLogger(__name__)
router = APIRouter()


# ── Quizzes ───────────────────────────────────────────────────────────────────


@router.post("/quizzes", response_model=QuizRead, status_code=status.HTTP_201_CREATED)
def create_quiz(
    body: QuizCreate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return quiz_service.create_quiz(db, admin.id, body)


@router.get("/quizzes", response_model=list[QuizRead])
def list_quizzes(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """The caller's quizzes, newest first."""
    return quiz_service.list_owned_quizzes(db, admin.id)


@router.put("/quizzes/{quiz_id}", response_model=QuizRead)
def update_quiz(
    quiz_id: uuid.UUID,
    body: QuizUpdate,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return quiz_service.update_quiz(db, quiz_id, admin.id, body)


@router.delete("/quizzes/{quiz_id}", response_model=SuccessResponse)
def delete_quiz(
    quiz_id: uuid.UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Delete a quiz together with its questions."""
    quiz_service.delete_quiz(db, quiz_id, admin.id)
    return SuccessResponse(message="Quiz deleted successfully")


# ── Questions ─────────────────────────────────────────────────────────────────


@router.post(
    "/quizzes/{quiz_id}/questions",
    response_model=QuestionRead,
    status_code=status.HTTP_201_CREATED,
)
def add_question(
    quiz_id: uuid.UUID,
    question_type: QuestionType = Form(...),
    text: str | None = Form(None),
    options: str | None = Form(None, description="JSON array of option strings"),
    correct_answer: str | None = Form(None, description="JSON-encoded correct answer"),
    marks: int | None = Form(None),
    image: UploadFile | None = File(None),
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Add a question (optionally with an image) to one of the caller's quizzes."""
    # Check ownership before anything is written to disk.
    quiz_service.get_owned_quiz(db, quiz_id, admin.id)

    image_path = None
    if image is not None and image.filename:
        image_path = save_image(image.file, image.filename)
    try:
        return quiz_service.add_question(
            db,
            quiz_id,
            admin.id,
            question_type=QuestionTypeEnum(question_type.value),
            text=text,
            options=options,
            correct_answer=correct_answer,
            marks=marks,
            image_path=image_path,
        )
    except QuizServerError:
        delete_image(image_path)
        raise


@router.get("/quizzes/{quiz_id}/questions", response_model=list[QuestionRead])
def list_questions(
    quiz_id: uuid.UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """All questions of a quiz, correct answers included."""
    return quiz_service.list_quiz_questions(db, quiz_id, admin.id)


# ── Attempts & scores ─────────────────────────────────────────────────────────


@router.get("/quizzes/{quiz_id}/attempts", response_model=list[QuizAttemptRow])
def view_attempts(
    quiz_id: uuid.UUID,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return reports.list_quiz_attempts(db, quiz_id, admin.id)


@router.get("/student-scores", response_model=list[StudentScoreRow])
def student_scores(
    subject: str | None = Query(None, description="Exact quiz subject"),
    date_: date | None = Query(None, alias="date", description="Submission date (YYYY-MM-DD)"),
    _admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Every student's attempts across all quizzes, best scores first."""
    return reports.student_scores(db, subject=subject, on_date=date_)
