from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from threading import Lock
from typing import Callable

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
_MIN_MASK = 4


class RatingValidationError(ValueError):
    """Raised when a submitted rating is incomplete or out of range."""


def mask_username(username: str) -> str:
    """Keep the first and last character and star out the rest.

    At least four stars are always used, so short names do not give away
    their length. Names under two characters are returned unchanged.
    """

    if len(username) < 2:
        return username
    middle = "*" * max(len(username) - 2, _MIN_MASK)
    return f"{username[0]}{middle}{username[-1]}"


@dataclass(slots=True, frozen=True)
class Rating:
    masked_username: str
    rating: int
    review: str
    at: datetime


@dataclass(slots=True, frozen=True)
class RatingSummary:
    ratings: tuple[Rating, ...]
    average: float
    total: int


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RatingLog:
    """Append-only record of submitted ratings."""

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._ratings: list[Rating] = []
        self._lock = Lock()
        self._clock = clock

    def submit(self, username: str | None, rating: float | None, review: str | None = None) -> Rating:
        """Validate and record a rating.

        The range check runs on the submitted value, then fractional stars are
        truncated, so 4.5 is stored as 4 and 5.5 is rejected.
        """

        if not username or rating is None:
            raise RatingValidationError("Missing fields")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise RatingValidationError(f"Rating must be {MIN_RATING}-{MAX_RATING}")

        entry = Rating(
            masked_username=mask_username(username),
            rating=int(rating),
            review=review or "",
            at=self._clock(),
        )
        with self._lock:
            self._ratings.append(entry)
        logger.info("Recorded %d-star rating from %s", entry.rating, entry.masked_username)
        return entry

    def summary(self) -> RatingSummary:
        with self._lock:
            ratings = tuple(self._ratings)
        if not ratings:
            return RatingSummary(ratings=(), average=0, total=0)
        mean = Decimal(sum(item.rating for item in ratings)) / Decimal(len(ratings))
        average = float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
        return RatingSummary(ratings=ratings, average=average, total=len(ratings))
