"""
timebase.py
===========
Julian Day conversions and the ``Instant`` value type.

An Instant is a point on the continuous UT day-count. Adding a float adds
fractional days; subtracting two instants yields the difference in days.

Source: Meeus, "Astronomical Algorithms" 2nd ed., Ch. 7.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import total_ordering
from typing import Tuple, Union

J2000 = 2451545.0
UNIX_EPOCH_JD = 2440587.5
SECONDS_PER_DAY = 86400.0


def gregorian_to_jd(year: int, month: int, day: int, hour: float = 0.0) -> float:
    """Meeus Ch. 7."""
    if month <= 2:
        year -= 1; month += 12
    A = int(year / 100)
    B = 2 - A + int(A / 4)
    return int(365.25*(year+4716)) + int(30.6001*(month+1)) + day + B - 1524.5 + hour/24.0


def jd_to_gregorian(jd: float) -> Tuple[int, int, float]:
    """Meeus Ch. 7. Returns (year, month, fractional day)."""
    jd += 0.5
    Z = int(math.floor(jd)); F = jd - Z
    if Z < 2299161:
        A = Z
    else:
        alpha = int((Z - 1867216.25) / 36524.25)
        A = Z + 1 + alpha - int(alpha / 4)
    B = A + 1524; C = int((B-122.1)/365.25); D = int(365.25*C); E = int((B-D)/30.6001)
    day   = B - D - int(30.6001*E) + F
    month = E-1 if E < 14 else E-13
    year  = C-4716 if month > 2 else C-4715
    return int(year), int(month), day


def julian_centuries(jd: float) -> float:
    return (jd - J2000) / 36525.0


@total_ordering
@dataclass(frozen=True)
class Instant:
    """A moment in UT, held as a Julian Day number."""
    jd: float

    @classmethod
    def from_calendar(cls, year: int, month: int, day: int,
                      hour: float = 0.0) -> "Instant":
        return cls(gregorian_to_jd(year, month, day, hour))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """Naive datetimes are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        seconds = dt.timestamp()
        return cls(UNIX_EPOCH_JD + seconds / SECONDS_PER_DAY)

    def to_datetime(self) -> datetime:
        """Aware UTC datetime, rounded to the microsecond."""
        seconds = (self.jd - UNIX_EPOCH_JD) * SECONDS_PER_DAY
        epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
        return epoch + timedelta(microseconds=round(seconds * 1_000_000))

    def shifted_datetime(self, utc_offset_hours: float) -> datetime:
        """Naive civil datetime at a fixed UTC offset."""
        local = self.to_datetime() + timedelta(hours=utc_offset_hours)
        return local.replace(tzinfo=None)

    @property
    def centuries(self) -> float:
        """Julian centuries since J2000."""
        return julian_centuries(self.jd)

    def __add__(self, days: float) -> "Instant":
        if isinstance(days, Instant):
            return NotImplemented
        return Instant(self.jd + float(days))

    def __sub__(self, other: Union["Instant", float]):
        if isinstance(other, Instant):
            return self.jd - other.jd
        return Instant(self.jd - float(other))

    def __lt__(self, other: "Instant") -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.jd < other.jd

    def __str__(self) -> str:
        return self.to_datetime().strftime("%Y-%m-%d %H:%M:%S UTC")
