"""Quiz & question schemas."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from quizserver.core.clock import as_utc


class QuestionType(str, Enum):
    MCQ = "mcq"
    TRUE_FALSE = "tf"
    FILL_IN_BLANK = "fitb"
    IMAGE = "image"


class _WindowMixin(BaseModel):
    """Normalises window bounds to UTC and checks their order."""

    start_at: datetime | None = None
    end_at: datetime | None = None

    @field_validator("start_at", "end_at")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    @model_validator(mode="after")
    def _check_window(self):
        if self.start_at and self.end_at and self.start_at > self.end_at:
            raise ValueError("start_at must not be after end_at")
        return self


class QuizCreate(_WindowMixin):
    """POST /api/admin/quizzes"""

    title: str = Field(min_length=1)
    subject: str | None = None
    duration_minutes: int = Field(gt=0)


class QuizUpdate(_WindowMixin):
    """PUT /api/admin/quizzes/{id}: only provided fields change."""

    title: str | None = Field(default=None, min_length=1)
    subject: str | None = None
    duration_minutes: int | None = Field(default=None, gt=0)


class QuizRead(BaseModel):
    """Quiz as returned to admins and in student listings."""

    id: uuid.UUID
    title: str
    subject: str | None = None
    duration_minutes: int
    start_at: datetime | None = None
    end_at: datetime | None = None
    created_by: uuid.UUID
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("start_at", "end_at", "created_at")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class QuizMeta(BaseModel):
    """Quiz header sent alongside its question set."""

    id: uuid.UUID
    title: str
    duration_minutes: int

    model_config = {"from_attributes": True}


class StudentQuestionRead(BaseModel):
    """Question as shown to a student taking the quiz, without the correct answer."""

    id: uuid.UUID
    question_type: QuestionType
    text: str
    image_path: str | None = None
    options: list[str] = []
    marks: int

    model_config = {"from_attributes": True}


class QuestionRead(StudentQuestionRead):
    """Full question for the owning admin."""

    quiz_id: uuid.UUID
    correct_answer: Any = None


class QuizQuestionsRead(BaseModel):
    """GET /api/student/quizzes/{id}/questions"""

    quiz: QuizMeta
    questions: list[StudentQuestionRead]
