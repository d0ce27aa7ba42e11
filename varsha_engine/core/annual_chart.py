"""
annual_chart.py
===============
Casts the annual chart at the solar return instant: one ephemeris query per
tracked planet, one house-system query, then a cusp-arc house for every
planet.

The build is all-or-nothing. A failed query for any tracked planet raises
MissingPositionError and no partial chart is returned.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Tuple

from .angles import degree_in_sign, normalize, sign_index
from .ephemeris import PLANETS, EphemerisAdapter, GeoLocation
from .houses import HouseFrame, HouseSystem, house_of, validate_cusps
from .timebase import Instant

log = logging.getLogger(__name__)

TRACKED_PLANETS = PLANETS


@dataclass(frozen=True)
class PlanetPosition:
    planet:    str
    longitude: float
    latitude:  float
    distance:  float
    speed:     float
    house:     int

    @property
    def is_retrograde(self) -> bool:
        return self.speed < 0

    @property
    def sign_index(self) -> int:
        return sign_index(self.longitude)

    @property
    def degree_in_sign(self) -> float:
        return degree_in_sign(self.longitude)


@dataclass(frozen=True)
class AnnualChart:
    year:             int
    instant:          Instant
    ascendant:        float
    midheaven:        float
    cusps:            Tuple[float, ...]
    positions:        Tuple[PlanetPosition, ...]
    latitude:         float = 0.0
    longitude:        float = 0.0
    utc_offset_hours: float = 0.0

    def __post_init__(self):
        validate_cusps(self.cusps)

    def position(self, planet: str) -> PlanetPosition:
        for p in self.positions:
            if p.planet == planet:
                return p
        raise KeyError(planet)

    def house_of(self, longitude: float) -> int:
        return house_of(longitude, self.cusps)

    @property
    def ascendant_sign_index(self) -> int:
        return sign_index(self.ascendant)

    @property
    def local_datetime(self) -> datetime:
        """Civil time of the solar return at the birth UTC offset."""
        return self.instant.shifted_datetime(self.utc_offset_hours)

    @property
    def is_day_chart(self) -> bool:
        """Sun above the horizon: sign-houses 7 through 12 counted from the Lagna."""
        sun_house = (self.position("Sun").sign_index - self.ascendant_sign_index) % 12 + 1
        return sun_house >= 7


def _coerce_frame(raw) -> HouseFrame:
    if isinstance(raw, HouseFrame):
        frame = raw
    elif isinstance(raw, Mapping):
        frame = HouseFrame(ascendant=float(raw["ascendant"]),
                           midheaven=float(raw.get("midheaven", 0.0)),
                           cusps=tuple(float(c) for c in raw["cusps"]))
    else:
        raise TypeError(f"house system returned {type(raw).__name__}")
    return HouseFrame(ascendant=normalize(frame.ascendant),
                      midheaven=normalize(frame.midheaven),
                      cusps=tuple(normalize(c) for c in frame.cusps))


class AnnualChartBuilder:

    def __init__(self, ephemeris: EphemerisAdapter, houses=None):
        self.ephemeris = ephemeris
        self.houses = houses if houses is not None else HouseSystem()

    def build(self, instant: Instant, location: GeoLocation, year: int,
              utc_offset_hours: float = 0.0) -> AnnualChart:
        raw_positions = {}
        for planet in TRACKED_PLANETS:
            # adapter already maps oracle failures to MissingPositionError
            raw_positions[planet] = self.ephemeris.position(planet, instant, location)

        frame = _coerce_frame(self.houses.compute(instant, location.latitude,
                                                  location.longitude))
        validate_cusps(frame.cusps)

        positions = tuple(
            PlanetPosition(planet=planet, longitude=raw.longitude, latitude=raw.latitude,
                           distance=raw.distance, speed=raw.speed,
                           house=house_of(raw.longitude, frame.cusps))
            for planet, raw in raw_positions.items()
        )
        log.debug("Annual chart %d at %s: asc %.4f", year, instant, frame.ascendant)
        return AnnualChart(year=year, instant=instant, ascendant=frame.ascendant,
                           midheaven=frame.midheaven, cusps=frame.cusps,
                           positions=positions, latitude=location.latitude,
                           longitude=location.longitude,
                           utc_offset_hours=utc_offset_hours)
