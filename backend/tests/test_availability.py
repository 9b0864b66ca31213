"""Tests for quiz availability windows."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from quizserver.core.errors import AccessWindowError, WindowReason
from quizserver.services.availability import Availability, ensure_open, is_open

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
HOUR = timedelta(hours=1)


def _quiz(start=None, end=None):
    return SimpleNamespace(id="quiz-1", start_at=start, end_at=end)


@pytest.mark.parametrize("offset", [-1000 * HOUR, timedelta(0), 1000 * HOUR])
def test_unscheduled_quiz_is_always_open(offset):
    assert is_open(_quiz(), NOW + offset) == Availability(True)


def test_start_only():
    quiz = _quiz(start=NOW)
    assert is_open(quiz, NOW).allowed
    assert is_open(quiz, NOW + HOUR).allowed
    assert is_open(quiz, NOW - HOUR) == Availability(False, WindowReason.NOT_STARTED)


def test_end_only():
    quiz = _quiz(end=NOW)
    assert is_open(quiz, NOW).allowed
    assert is_open(quiz, NOW - HOUR).allowed
    assert is_open(quiz, NOW + HOUR) == Availability(False, WindowReason.ENDED)


def test_both_bounds_are_inclusive():
    quiz = _quiz(start=NOW - HOUR, end=NOW + HOUR)
    assert is_open(quiz, NOW - HOUR).allowed
    assert is_open(quiz, NOW).allowed
    assert is_open(quiz, NOW + HOUR).allowed
    assert is_open(quiz, NOW - 2 * HOUR).reason == WindowReason.NOT_STARTED
    assert is_open(quiz, NOW + 2 * HOUR).reason == WindowReason.ENDED


def test_naive_datetimes_are_utc():
    quiz = _quiz(start=datetime(2026, 3, 1, 11, 0), end=datetime(2026, 3, 1, 13, 0))
    assert is_open(quiz, NOW).allowed
    assert not is_open(quiz, datetime(2026, 3, 1, 14, 0)).allowed


def test_other_timezones_are_compared_in_utc():
    cet = timezone(timedelta(hours=1))
    # 12:30 CET is 11:30 UTC, before the start
    quiz = _quiz(start=NOW)
    assert not is_open(quiz, datetime(2026, 3, 1, 12, 30, tzinfo=cet)).allowed


def test_ensure_open_raises_with_reason():
    with pytest.raises(AccessWindowError) as info:
        ensure_open(_quiz(start=NOW + HOUR), NOW)
    assert info.value.reason == WindowReason.NOT_STARTED
    assert info.value.error_code == "quiz_not_started"

    with pytest.raises(AccessWindowError) as info:
        ensure_open(_quiz(end=NOW - HOUR), NOW)
    assert info.value.reason == WindowReason.ENDED
    assert info.value.error_code == "quiz_ended"


def test_ensure_open_passes_when_open():
    ensure_open(_quiz(start=NOW - HOUR, end=NOW + HOUR), NOW)
