"""
natal.py
========
Natal chart builder: turns raw birth data into the ``NatalChart`` the annual
engine consumes.

Usage:
    from varsha_engine.tools.natal import build_natal_chart

    natal = build_natal_chart(
        year=1990, month=6, day=15,
        hour=10, minute=30, second=0,
        timezone_offset=5.5,        # IST = UTC+5:30
        latitude=28.6139,           # Delhi
        longitude=77.2090,
        ayanamsa="lahiri",          # or raman, kp, fagan
    )
"""

from datetime import datetime, timedelta, timezone

from ..core.ephemeris import EphemerisAdapter, GeoLocation
from ..core.houses import HouseSystem
from ..core.timebase import Instant
from ..core.varshphal import NatalChart


def birth_instant(year: int, month: int, day: int,
                  hour: int = 0, minute: int = 0, second: int = 0,
                  timezone_offset: float = 0.0) -> Instant:
    """Local civil birth time -> UT Instant (day/month/year rollover included)."""
    tz = timezone(timedelta(hours=timezone_offset))
    return Instant.from_datetime(datetime(year, month, day, hour, minute, second, tzinfo=tz))


def build_natal_chart(
    year: int, month: int, day: int,
    hour: int = 0, minute: int = 0, second: int = 0,
    timezone_offset: float = 0.0,     # hours offset from UTC (e.g. 5.5 for IST)
    latitude: float = 0.0,
    longitude: float = 0.0,
    ayanamsa: str = "lahiri",
    house_system: str = "whole_sign",
    ephemeris=None,
) -> NatalChart:
    """
    Args:
        year, month, day: Birth date (Gregorian)
        hour, minute, second: Birth time in LOCAL time
        timezone_offset: Hours ahead of UTC (e.g. 5.5 for India, -5 for EST)
        latitude: Geographic latitude in degrees (positive = North)
        longitude: Geographic longitude in degrees (positive = East)
        ephemeris: optional oracle; defaults to MeeusEphemeris
    """
    birth = birth_instant(year, month, day, hour, minute, second, timezone_offset)
    location = GeoLocation(latitude, longitude)
    adapter = ephemeris if isinstance(ephemeris, EphemerisAdapter) \
        else EphemerisAdapter(ephemeris, ayanamsa=ayanamsa)

    frame = HouseSystem(house_system, ayanamsa).compute(birth, latitude, longitude)

    return NatalChart(
        birth=birth,
        latitude=latitude,
        longitude=longitude,
        utc_offset_hours=timezone_offset,
        sun_longitude=adapter.longitude("Sun", birth, location),
        ascendant=frame.ascendant,
        moon_longitude=adapter.longitude("Moon", birth, location),
    )
