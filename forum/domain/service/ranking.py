"""Time-decayed ranking ("hot" sort).

hot = score / (age_hours + time_offset) ** gravity

``age_hours`` counts whole elapsed hours and never goes below zero, so
content stamped in the future ranks as brand new. Scores are recomputed at
sort time and never persisted, since they change as time passes.
"""

import math
from datetime import datetime
from typing import Iterable, Protocol, TypeVar

from forum.config import RankingSettings

from .base import Service

DEFAULT_GRAVITY = 1.8
DEFAULT_TIME_OFFSET = 2.0


class Rankable(Protocol):
    """Anything with a net score and a creation time."""

    @property
    def score(self) -> int: ...

    @property
    def created_at(self) -> datetime: ...


R = TypeVar("R", bound=Rankable)


def age_in_hours(created_at: datetime, now: datetime) -> int:
    """Whole hours between ``created_at`` and ``now``, clamped at 0."""
    hours = math.floor((now - created_at).total_seconds() / 3600)
    return max(0, hours)


def hot_score(
    score: int,
    created_at: datetime,
    now: datetime,
    gravity: float = DEFAULT_GRAVITY,
    time_offset: float = DEFAULT_TIME_OFFSET,
) -> float:
    """Compute the time-decayed score of an item.

    Args:
        score: Net score (upvotes minus downvotes)
        created_at: When the item was created
        now: Reference time
        gravity: Decay exponent
        time_offset: Hours added to the age before decaying

    Returns:
        Hot score; 0.0 for a zero score at any age
    """
    age_hours = age_in_hours(created_at, now)
    return score / math.pow(age_hours + time_offset, gravity)


class RankingService(Service):
    """Orders content by hot score using the configured decay parameters."""

    def __init__(self, settings: RankingSettings) -> None:
        self.settings = settings

    def hot_score(self, item: Rankable, now: datetime) -> float:
        return hot_score(
            item.score,
            item.created_at,
            now,
            gravity=self.settings.gravity,
            time_offset=self.settings.time_offset,
        )

    def rank(self, items: Iterable[R], now: datetime) -> list[R]:
        """Sort items by hot score, highest first.

        The sort is stable, so items with equal scores keep their input order.
        """
        return sorted(items, key=lambda item: self.hot_score(item, now), reverse=True)
