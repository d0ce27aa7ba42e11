"""
solar_return.py
===============
Finds the instant the transiting Sun returns to its natal sidereal longitude.

Algorithm:
1. Bracket: ±2 days around the birthday anniversary in the target year, taken
   in local civil time at the birth UTC offset and converted back to UT.
2. Bisection on f(t) = signed angle from natal Sun to transiting Sun, fixed
   iteration count; the midpoint of the final bracket is returned.
3. If the bracket shows no sign change, retry once with a wider window.
"""

import calendar
import logging
from datetime import timedelta
from typing import Optional, Tuple

from ..config import DEFAULT_CONFIG, EngineConfig
from ..errors import RootNotBracketedError
from .angles import signed_normalize
from .ephemeris import EphemerisAdapter, GeoLocation
from .timebase import Instant

log = logging.getLogger(__name__)


def anniversary(birth: Instant, target_year: int, utc_offset_hours: float = 0.0) -> Instant:
    """
    Local civil birth date and time carried into target_year, returned in UT.

    The birthday is read at the birth UTC offset, so a birth just after local
    midnight on 1 January stays a 1 January birthday even though its UT date
    falls in the previous year.
    """
    local = birth.shifted_datetime(utc_offset_hours)
    day = local.day
    if local.month == 2 and day == 29 and not calendar.isleap(target_year):
        day = 28
    local = local.replace(year=target_year, day=day)
    return Instant.from_datetime(local - timedelta(hours=utc_offset_hours))


class SolarReturnSolver:

    def __init__(self, ephemeris: EphemerisAdapter,
                 config: Optional[EngineConfig] = None):
        self.ephemeris = ephemeris
        self.config = config or DEFAULT_CONFIG

    def _offset(self, natal_sun: float, t: Instant,
                location: Optional[GeoLocation]) -> float:
        return signed_normalize(self.ephemeris.longitude("Sun", t, location) - natal_sun)

    def _bracket(self, natal_sun: float, center: Instant, half_window: float,
                 location: Optional[GeoLocation]) -> Optional[Tuple[Instant, float, Instant, float]]:
        lo, hi = center - half_window, center + half_window
        f_lo = self._offset(natal_sun, lo, location)
        f_hi = self._offset(natal_sun, hi, location)
        log.debug("Bracket %s .. %s: f=(%.6f, %.6f)", lo, hi, f_lo, f_hi)
        # a jump across ±180° is the far side of the circle, not a root
        if f_lo * f_hi <= 0.0 and abs(f_hi - f_lo) < 180.0:
            return lo, f_lo, hi, f_hi
        return None

    def solve(self, natal_sun_longitude: float, target_year: int, birth: Instant,
              location: Optional[GeoLocation] = None,
              utc_offset_hours: float = 0.0) -> Instant:
        """
        Solar return instant for target_year.

        utc_offset_hours is the birth offset; the search is centred on the
        local civil anniversary.

        Raises RootNotBracketedError when neither the default nor the widened
        window contains a crossing.
        """
        if not 0.0 <= natal_sun_longitude < 360.0:
            raise ValueError(f"natal Sun longitude out of range: {natal_sun_longitude}")

        cfg = self.config
        center = anniversary(birth, target_year, utc_offset_hours)

        bracket = self._bracket(natal_sun_longitude, center,
                                cfg.search_half_window_days, location)
        if bracket is None:
            log.warning("No Sun crossing within ±%.1f days of %s; widening to ±%.1f days",
                        cfg.search_half_window_days, center, cfg.widened_half_window_days)
            bracket = self._bracket(natal_sun_longitude, center,
                                    cfg.widened_half_window_days, location)
            if bracket is None:
                raise RootNotBracketedError(target_year, natal_sun_longitude,
                                            cfg.widened_half_window_days)

        lo, f_lo, hi, f_hi = bracket
        if f_lo == 0.0:
            return lo
        if f_hi == 0.0:
            return hi

        for _ in range(cfg.bisection_iterations):
            mid = lo + (hi - lo) / 2.0
            f_mid = self._offset(natal_sun_longitude, mid, location)
            if f_mid == 0.0:
                log.debug("Exact solar return at %s", mid)
                return mid
            if (f_mid < 0.0) == (f_lo < 0.0):
                lo, f_lo = mid, f_mid
            else:
                hi = mid

        result = lo + (hi - lo) / 2.0
        log.debug("Solar return %s, residual %.3e deg", result,
                  self._offset(natal_sun_longitude, result, location))
        return result


def solve_solar_return(natal_sun_longitude: float, target_year: int, birth: Instant,
                       location: Optional[GeoLocation] = None,
                       ephemeris: Optional[EphemerisAdapter] = None,
                       config: Optional[EngineConfig] = None,
                       utc_offset_hours: float = 0.0) -> Instant:
    """Convenience wrapper around SolarReturnSolver."""
    cfg = config or DEFAULT_CONFIG
    adapter = ephemeris or EphemerisAdapter(ayanamsa=cfg.ayanamsa)
    return SolarReturnSolver(adapter, cfg).solve(natal_sun_longitude, target_year,
                                                 birth, location, utc_offset_hours)
