"""Answer grading.

Every question is marked all-or-nothing:

- Choice questions (``mcq``, ``tf``) compare the *string form* of the
  submitted value with the string form of the correct answer, so ``True``
  matches ``"true"`` and ``2`` matches ``"2"``.
- Text questions (``fitb``, ``image``) only accept text. A number submitted
  for a fill-in-the-blank is wrong, not coerced.

Both rules trim surrounding whitespace and ignore case. Grading never raises;
anything it cannot make sense of is simply not correct.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from quizserver.db.models import QuestionTypeEnum

logger = logging.getLogger(__name__)


class Gradable(Protocol):
    question_type: Any
    correct_answer: Any
    marks: int


@dataclass(frozen=True)
class Evaluation:
    is_correct: bool
    marks_awarded: int


NOT_CORRECT = Evaluation(is_correct=False, marks_awarded=0)


# ── Normalisation ─────────────────────────────────────────────────────────────


def _string_form(value: Any) -> str:
    """Render a JSON value the way it would be displayed to the student."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_string_form(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    return str(value)


def _normalise(text: str) -> str:
    return text.strip().casefold()


# ── Rules ─────────────────────────────────────────────────────────────────────


def _grade_choice(submitted: Any, correct: Any) -> bool:
    return _normalise(_string_form(submitted)) == _normalise(_string_form(correct))


def _grade_text(submitted: Any, correct: Any) -> bool:
    if not isinstance(submitted, str) or not isinstance(correct, str):
        return False
    return _normalise(submitted) == _normalise(correct)


_RULES: dict[QuestionTypeEnum, Callable[[Any, Any], bool]] = {
    QuestionTypeEnum.MCQ: _grade_choice,
    QuestionTypeEnum.TRUE_FALSE: _grade_choice,
    QuestionTypeEnum.FILL_IN_BLANK: _grade_text,
    QuestionTypeEnum.IMAGE: _grade_text,
}

_ungraded = set(QuestionTypeEnum) - set(_RULES)
if _ungraded:
    raise RuntimeError(f"No grading rule for question types: {sorted(_ungraded)}")


def _coerce_type(question_type: Any) -> QuestionTypeEnum | None:
    if isinstance(question_type, QuestionTypeEnum):
        return question_type
    try:
        return QuestionTypeEnum(question_type)
    except ValueError:
        logger.debug("No grading rule for question type %r", question_type)
        return None


# ── Public API ────────────────────────────────────────────────────────────────


def grade_answer(question_type: Any, submitted: Any, correct_answer: Any) -> bool:
    """Return True if *submitted* matches *correct_answer* for *question_type*."""
    if submitted is None or correct_answer is None:
        return False
    qtype = _coerce_type(question_type)
    if qtype is None:
        return False
    return _RULES[qtype](submitted, correct_answer)


def evaluate(question: Gradable | None, submitted: Any) -> Evaluation:
    """Grade one submitted answer against *question*.

    A missing question or a ``None`` answer is never correct.
    """
    if question is None:
        return NOT_CORRECT
    if not grade_answer(question.question_type, submitted, question.correct_answer):
        return NOT_CORRECT
    return Evaluation(is_correct=True, marks_awarded=question.marks)
