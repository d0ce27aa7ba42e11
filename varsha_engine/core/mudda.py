"""
mudda.py
========
Mudda Dasha: the annual year compressed into nine planetary periods
totalling 360 days.

The rotation starts at the lord of the annual Moon's nakshatra and runs
through the fixed nine-planet order. Each planet keeps its own duration
wherever it falls in the rotation. Every period is subdivided into nine
sub-periods, starting with its own lord, in the same proportions.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

MUDDA_ROTATION: Tuple[str, ...] = (
    "Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn", "Rahu", "Ketu",
)

MUDDA_DAYS: Mapping[str, int] = MappingProxyType({
    "Sun": 18, "Moon": 30, "Mars": 21, "Mercury": 54, "Jupiter": 48,
    "Venus": 57, "Saturn": 51, "Rahu": 21, "Ketu": 60,
})

MUDDA_TOTAL_DAYS = 360


@dataclass(frozen=True)
class MuddaSubPeriod:
    planet: str
    start:  date
    days:   float


@dataclass(frozen=True)
class MuddaPeriod:
    planet:      str
    start:       date
    days:        int
    sub_periods: Tuple[MuddaSubPeriod, ...] = ()

    @property
    def end(self) -> date:
        """Last day inside the period."""
        return self.start + timedelta(days=self.days - 1)

    def contains(self, on_date: date) -> bool:
        return self.start <= on_date <= self.end


def _rotation_from(planet: str) -> List[str]:
    if planet not in MUDDA_ROTATION:
        raise ValueError(f"Unknown Mudda lord '{planet}'")
    i = MUDDA_ROTATION.index(planet)
    return list(MUDDA_ROTATION[i:] + MUDDA_ROTATION[:i])


def sub_periods(planet: str, start: date, days: int) -> Tuple[MuddaSubPeriod, ...]:
    """Nine proportional sub-periods, starting with the period's own lord."""
    origin = datetime.combine(start, time())
    elapsed = 0.0
    subs = []
    for sub in _rotation_from(planet):
        length = days * MUDDA_DAYS[sub] / MUDDA_TOTAL_DAYS
        subs.append(MuddaSubPeriod(planet=sub,
                                   start=(origin + timedelta(days=elapsed)).date(),
                                   days=length))
        elapsed += length
    return tuple(subs)


def partition_mudda(start_date: date, starting_owner: str) -> List[MuddaPeriod]:
    """
    Nine back-to-back periods from start_date.

    Raises ValueError if starting_owner is not one of the nine Mudda lords.
    """
    if isinstance(start_date, datetime):
        start_date = start_date.date()
    periods = []
    current = start_date
    for planet in _rotation_from(starting_owner):
        days = MUDDA_DAYS[planet]
        periods.append(MuddaPeriod(planet=planet, start=current, days=days,
                                   sub_periods=sub_periods(planet, current, days)))
        current = current + timedelta(days=days)
    return periods


def current_mudda(periods: Sequence[MuddaPeriod], on_date: date) -> Optional[MuddaPeriod]:
    if isinstance(on_date, datetime):
        on_date = on_date.date()
    for p in periods:
        if p.contains(on_date):
            return p
    return None
