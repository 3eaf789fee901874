"""Value types passed between the pipeline, the public API, and the adapters."""

from dataclasses import dataclass
from datetime import date, time
from enum import Enum


class SunEvent(Enum):
    """Which half of the day the calculation targets."""

    RISE = "rise"
    SET = "set"


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer position in decimal degrees. Longitude is positive East."""

    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        return -90 <= self.latitude <= 90 and -180 <= self.longitude <= 180


@dataclass(frozen=True)
class CalendarDate:
    """Gregorian civil date. Not validated."""

    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Local clock time of an event, truncated to whole seconds."""

    hour: int
    minute: int
    second: int

    def to_time(self) -> time:
        return time(self.hour, self.minute, self.second)

    def total_seconds(self) -> int:
        return self.hour * 3600 + self.minute * 60 + self.second

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
