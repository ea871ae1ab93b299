"""Calendar clock used to decide which day is today."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current calendar day."""

    def today(self) -> date:
        """Return today's date in the acting user's timezone."""


@dataclass
class ZoneClock(Clock):
    """Clock reading the wall time of a configured timezone."""

    timezone_name: str = "UTC"

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()
