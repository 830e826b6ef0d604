"""Clock abstraction for local calendar days."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current timezone-aware instant."""


@dataclass
class SystemClock(Clock):
    """Clock backed by the machine time."""

    def now(self) -> datetime:
        """Return the current UTC instant."""
        return datetime.now(tz=UTC)


def local_today(clock: Clock, timezone_name: str) -> date:
    """Return today's calendar date in the given IANA timezone."""
    return clock.now().astimezone(ZoneInfo(timezone_name)).date()
