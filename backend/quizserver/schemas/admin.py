"""Admin reporting schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, field_validator

from quizserver.core.clock import as_utc


class StudentRef(BaseModel):
    """Student identity shown next to an attempt."""

    id: uuid.UUID
    name: str
    email: str

    model_config = {"from_attributes": True}


class QuizAttemptRow(BaseModel):
    """An attempt on one of the admin's quizzes."""

    id: uuid.UUID
    student: StudentRef
    total_score: int
    submitted_at: datetime

    @field_validator("submitted_at")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class StudentScoreRow(QuizAttemptRow):
    """An attempt row in the cross-quiz score report."""

    quiz_id: uuid.UUID | None = None
    quiz_title: str | None = None
    quiz_subject: str | None = None
    duration_minutes: int | None = None
