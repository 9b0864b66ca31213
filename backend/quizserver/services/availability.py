"""Quiz availability window rules.

A quiz may carry an optional ``start_at`` and ``end_at``. Both bounds are
inclusive; a missing bound leaves that side of the window open.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from quizserver.core.clock import as_utc, utcnow
from quizserver.core.errors import AccessWindowError, WindowReason

logger = logging.getLogger(__name__)


class Scheduled(Protocol):
    start_at: datetime | None
    end_at: datetime | None


@dataclass(frozen=True)
class Availability:
    allowed: bool
    reason: WindowReason | None = None


def is_open(quiz: Scheduled, now: datetime | None = None) -> Availability:
    """Decide whether *quiz* accepts students at *now* (defaults to current UTC)."""
    now = as_utc(now) or utcnow()
    start = as_utc(quiz.start_at)
    end = as_utc(quiz.end_at)

    if start is not None and now < start:
        return Availability(False, WindowReason.NOT_STARTED)
    if end is not None and now > end:
        return Availability(False, WindowReason.ENDED)
    return Availability(True)


def ensure_open(quiz: Scheduled, now: datetime | None = None) -> None:
    """Raise :class:`AccessWindowError` unless *quiz* is open at *now*."""
    availability = is_open(quiz, now)
    if not availability.allowed:
        logger.warning(
            "Access to quiz %s denied: %s",
            getattr(quiz, "id", "?"),
            availability.reason.value,
        )
        raise AccessWindowError(availability.reason)
