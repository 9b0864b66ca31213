"""Attempt schemas."""

import uuid
from datetime import datetime
from typing import Any, Union

from pydantic import BaseModel, field_validator

from quizserver.core.clock import as_utc

# A submitted answer is a JSON scalar, or a list of scalars for multi-part
# answers. Objects are rejected at the boundary.
Scalar = Union[str, int, float, bool]
AnswerValue = Union[Scalar, list[Scalar], None]


class AnswerIn(BaseModel):
    """One (question, answer) pair in a submission."""

    # question id; anything that does not resolve to a question is skipped
    question: Scalar | None = None
    answer: AnswerValue = None


class AttemptSubmit(BaseModel):
    """POST /api/student/quizzes/{id}/submit"""

    # Checked entry by entry in submit_attempt, so a non-array is reported
    # as a validation_error like every other malformed submission.
    answers: Any = None


class SubmissionRead(BaseModel):
    """Result of grading a submission."""

    attempt_id: uuid.UUID
    total_score: int
    skipped: list[Scalar | None] = []


class AttemptAnswerRead(BaseModel):
    """Single graded answer within an attempt."""

    question_id: uuid.UUID | None = None
    answer: AnswerValue = None
    is_correct: bool
    marks_awarded: int

    model_config = {"from_attributes": True}


class AttemptRead(BaseModel):
    """Attempt row for history listings."""

    id: uuid.UUID
    quiz_id: uuid.UUID | None = None
    quiz_title: str | None = None
    quiz_subject: str | None = None
    total_score: int
    submitted_at: datetime

    @field_validator("submitted_at")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class AttemptDetailRead(AttemptRead):
    """Attempt with every graded answer, in submission order."""

    answers: list[AttemptAnswerRead] = []
