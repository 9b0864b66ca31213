"""Progress schemas."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from quizserver.core.clock import as_utc


class ProgressEntry(BaseModel):
    """One attempt joined with the current total marks of its quiz."""

    title: str
    attempt_date: datetime
    score: int
    total_marks: int
    percentage: float = 0.0

    @field_validator("attempt_date")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return as_utc(value)
