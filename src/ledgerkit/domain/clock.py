"""Clock abstraction supplying "now" to the scheduler and aggregators."""

from datetime import datetime
from typing import Callable

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Return the current local time."""
    return datetime.now()


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock that always reports ``moment``."""

    def clock() -> datetime:
        return moment

    return clock
