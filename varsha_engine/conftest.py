"""
Pytest configuration for the Varsha Engine suite.

- Registers Hypothesis profiles for local dev and CI.
- Provides deterministic fake collaborators: a linear-motion ephemeris oracle
  and a fixed whole-sign house system, so numeric tests have exact answers.
"""

import os
from typing import Dict, Iterable, Optional, Tuple

import pytest
from hypothesis import HealthCheck, settings

from varsha_engine.core.angles import normalize
from varsha_engine.core.annual_chart import AnnualChart, PlanetPosition
from varsha_engine.core.ephemeris import PLANETS
from varsha_engine.core.houses import HouseFrame, house_of, whole_sign_cusps
from varsha_engine.core.timebase import Instant

# ──────────────────────────────────────────────────────────────────────────────
# Hypothesis profiles
# ──────────────────────────────────────────────────────────────────────────────
settings.register_profile(
    "dev",
    settings(deadline=None, max_examples=60,
             suppress_health_check=[HealthCheck.too_slow]),
)
settings.register_profile(
    "ci",
    settings(deadline=None, max_examples=150,
             suppress_health_check=[HealthCheck.too_slow]),
)
settings.load_profile(
    "ci" if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)


# ──────────────────────────────────────────────────────────────────────────────
# Fake collaborators
# ──────────────────────────────────────────────────────────────────────────────

SUN_RATE = 360.0 / 365.2422     # deg/day, one tropical year per revolution

DEFAULT_SPEEDS = {
    "Sun": SUN_RATE, "Moon": 13.176, "Mars": 0.524, "Mercury": 1.383,
    "Jupiter": 0.083, "Venus": 1.2, "Saturn": 0.033,
    "Rahu": -0.053, "Ketu": -0.053,
}


class LinearOracle:
    """Every planet moves at constant speed from a base longitude at epoch_jd."""

    def __init__(self, epoch_jd: float, base: Dict[str, float],
                 speeds: Optional[Dict[str, float]] = None,
                 fail: Iterable[str] = (), none_for: Iterable[str] = ()):
        self.epoch_jd = epoch_jd
        self.base = dict(base)
        self.speeds = {**DEFAULT_SPEEDS, **(speeds or {})}
        self.fail = set(fail)
        self.none_for = set(none_for)
        self.calls = []

    def position(self, planet, instant, lat, lon):
        self.calls.append((planet, instant.jd))
        if planet in self.fail:
            raise RuntimeError(f"{planet} unavailable")
        if planet in self.none_for:
            return None
        speed = self.speeds[planet]
        return {
            "longitude": normalize(self.base.get(planet, 0.0)
                                   + speed * (instant.jd - self.epoch_jd)),
            "latitude": 0.0,
            "distance": 1.0,
            "speed": speed,
        }


class FixedHouses:
    """Whole-sign houses from a fixed ascendant, whatever the instant."""

    def __init__(self, ascendant: float = 0.0, cusps: Optional[Tuple[float, ...]] = None):
        self.ascendant = ascendant
        self.cusps = cusps
        self.calls = 0

    def compute(self, instant, lat, lon):
        self.calls += 1
        cusps = self.cusps if self.cusps is not None else tuple(whole_sign_cusps(self.ascendant))
        return HouseFrame(ascendant=self.ascendant,
                          midheaven=normalize(self.ascendant + 270.0),
                          cusps=cusps)


def build_chart(longitudes: Dict[str, float], speeds: Optional[Dict[str, float]] = None,
                ascendant: float = 0.0, instant: Optional[Instant] = None,
                year: int = 2024, utc_offset_hours: float = 0.0) -> AnnualChart:
    """AnnualChart with whole-sign houses; unspecified planets sit at 0° Aries."""
    speeds = {**DEFAULT_SPEEDS, **(speeds or {})}
    cusps = tuple(whole_sign_cusps(ascendant))
    positions = tuple(
        PlanetPosition(planet=p, longitude=normalize(longitudes.get(p, 0.0)),
                       latitude=0.0, distance=1.0, speed=speeds[p],
                       house=house_of(longitudes.get(p, 0.0), cusps))
        for p in PLANETS
    )
    return AnnualChart(year=year,
                       instant=instant or Instant.from_calendar(2024, 1, 7, 12.0),
                       ascendant=ascendant, midheaven=normalize(ascendant + 270.0),
                       cusps=cusps, positions=positions,
                       utc_offset_hours=utc_offset_hours)


@pytest.fixture
def linear_oracle():
    return LinearOracle


@pytest.fixture
def fixed_houses():
    return FixedHouses


@pytest.fixture
def make_chart():
    return build_chart
