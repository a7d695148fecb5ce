"""Sources of the current time used for status derivation."""

from __future__ import annotations

import abc
from datetime import datetime, timezone


class Clock(abc.ABC):
    """Contract for a current-time source."""

    @abc.abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""


# PUBLIC_INTERFACE
class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
class FixedClock(Clock):
    """
    Frozen clock that always reports the same instant.

    Naive datetimes are taken to be UTC.
    """

    def __init__(self, at: datetime) -> None:
        if at.tzinfo is None:
            at = at.replace(tzinfo=timezone.utc)
        self._at = at

    def now(self) -> datetime:
        return self._at
