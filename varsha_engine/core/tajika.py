"""
tajika.py
=========
Tajika aspects between the seven visible planets of the annual chart.

Each unordered pair is tested against five aspect angles, each with its own
orb (boundary inclusive). A pair yields at most one record: the aspect with
the smallest measured orb.

Applying vs separating projects both planets a short step forward along
their stored daily speeds and compares orbs. This is a linear approximation
and only holds for short steps.
"""

from dataclasses import dataclass
from itertools import combinations
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from ..config import DEFAULT_CONFIG
from .angles import orb_distance
from .annual_chart import AnnualChart, PlanetPosition

ASPECT_PLANETS = ("Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn")

# aspect angle -> orb (degrees)
ASPECT_ORBS: Mapping[int, float] = MappingProxyType({
    0: 12.0, 60: 6.0, 90: 7.0, 120: 8.0, 180: 9.0,
})

ASPECT_NAMES: Mapping[int, str] = MappingProxyType({
    0: "conjunction", 60: "sextile", 90: "square", 120: "trine", 180: "opposition",
})

# strength bonus by aspect angle
ASPECT_BONUS: Mapping[int, float] = MappingProxyType({
    0: 0.2, 60: 0.1, 90: -0.1, 120: 0.2, 180: -0.1,
})
APPLYING_BONUS = 0.1

# (minimum strength, grade), checked in order
STRENGTH_GRADES = (
    (0.9, "very_strong"),
    (0.7, "strong"),
    (0.5, "moderate"),
    (0.3, "weak"),
)


@dataclass(frozen=True)
class TajikaAspectRecord:
    planet_a: str
    planet_b: str
    angle:    int
    orb:      float
    applying: bool

    @property
    def max_orb(self) -> float:
        return ASPECT_ORBS[self.angle]

    @property
    def name(self) -> str:
        return ASPECT_NAMES[self.angle]

    @property
    def strength(self) -> float:
        """1 at an exact aspect, less the orb used, plus angle and applying bonuses."""
        return (1.0 - self.orb / self.max_orb + ASPECT_BONUS[self.angle]
                + (APPLYING_BONUS if self.applying else 0.0))

    @property
    def grade(self) -> str:
        for minimum, name in STRENGTH_GRADES:
            if self.strength >= minimum:
                return name
        return "very_weak"


def match_aspect(lon_a: float, lon_b: float) -> Optional[Tuple[int, float]]:
    """(angle, orb) of the closest aspect within its orb, or None."""
    best = None
    for angle, max_orb in ASPECT_ORBS.items():
        orb = orb_distance(lon_a, lon_b, angle)
        if orb > max_orb:
            continue
        if best is None or (orb, max_orb) < (best[1], ASPECT_ORBS[best[0]]):
            best = (angle, orb)
    return best


def is_applying(a: PlanetPosition, b: PlanetPosition, angle: int,
                step_days: float) -> bool:
    now = orb_distance(a.longitude, b.longitude, angle)
    later = orb_distance(a.longitude + a.speed * step_days,
                         b.longitude + b.speed * step_days, angle)
    return later < now


def find_tajika_aspects(chart: AnnualChart,
                        step_days: Optional[float] = None) -> List[TajikaAspectRecord]:
    if step_days is None:
        step_days = DEFAULT_CONFIG.applying_step_days
    if step_days <= 0:
        raise ValueError(f"step_days must be positive, got {step_days}")

    records = []
    for name_a, name_b in combinations(ASPECT_PLANETS, 2):
        a, b = chart.position(name_a), chart.position(name_b)
        match = match_aspect(a.longitude, b.longitude)
        if match is None:
            continue
        angle, orb = match
        records.append(TajikaAspectRecord(planet_a=name_a, planet_b=name_b,
                                          angle=angle, orb=orb,
                                          applying=is_applying(a, b, angle, step_days)))
    return records
