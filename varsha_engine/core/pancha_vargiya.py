"""
pancha_vargiya.py
=================
Pancha-Vargiya Bala: the five-fold Tajika strength of the seven visible
planets in the annual chart.

Components (points):
  Uchcha        0-5   closeness to the exaltation degree
  Hadda         1-4   relation to the lord of the Hadda (term) occupied
  Drekkana      1-4   relation to the lord of the decanate sign
  Navamsha      1-4   relation to the lord of the navamsha sign
  Dwadashamsha  1-3   relation to the lord of the twelfth-part sign

Relation points are own > friend > neutral > other. Rahu and Ketu are not
rated.

Source: Tajika Neelakanthi, Samjna Tantra; Hadda table after Ptolemy's Egyptian terms
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .angles import degree_in_sign, normalize, separation, sign_index
from .annual_chart import AnnualChart
from .dignity import sign_lord

BALA_PLANETS = ("Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn")

# Deep exaltation points (sidereal longitude)
EXALTATION_DEGREES: Mapping[str, float] = MappingProxyType({
    "Sun": 10.0, "Moon": 33.0, "Mars": 298.0, "Mercury": 165.0,
    "Jupiter": 95.0, "Venus": 357.0, "Saturn": 200.0,
})

# Hadda (term) ranges per sign index: (start°, end°, lord)
HADDA: Mapping[int, Tuple[Tuple[float, float, str], ...]] = MappingProxyType({
    0:  ((0, 6, "Jupiter"), (6, 12, "Venus"), (12, 20, "Mercury"), (20, 25, "Mars"), (25, 30, "Saturn")),
    1:  ((0, 8, "Venus"), (8, 14, "Mercury"), (14, 22, "Jupiter"), (22, 27, "Saturn"), (27, 30, "Mars")),
    2:  ((0, 6, "Mercury"), (6, 12, "Jupiter"), (12, 17, "Venus"), (17, 24, "Mars"), (24, 30, "Saturn")),
    3:  ((0, 7, "Mars"), (7, 13, "Venus"), (13, 19, "Mercury"), (19, 26, "Jupiter"), (26, 30, "Saturn")),
    4:  ((0, 6, "Jupiter"), (6, 11, "Venus"), (11, 18, "Saturn"), (18, 24, "Mercury"), (24, 30, "Mars")),
    5:  ((0, 7, "Mercury"), (7, 17, "Venus"), (17, 21, "Jupiter"), (21, 28, "Mars"), (28, 30, "Saturn")),
    6:  ((0, 6, "Saturn"), (6, 14, "Mercury"), (14, 21, "Jupiter"), (21, 28, "Venus"), (28, 30, "Mars")),
    7:  ((0, 7, "Mars"), (7, 11, "Venus"), (11, 19, "Mercury"), (19, 24, "Jupiter"), (24, 30, "Saturn")),
    8:  ((0, 12, "Jupiter"), (12, 17, "Venus"), (17, 21, "Mercury"), (21, 26, "Saturn"), (26, 30, "Mars")),
    9:  ((0, 7, "Mercury"), (7, 14, "Jupiter"), (14, 22, "Venus"), (22, 26, "Saturn"), (26, 30, "Mars")),
    10: ((0, 7, "Mercury"), (7, 13, "Venus"), (13, 20, "Jupiter"), (20, 25, "Mars"), (25, 30, "Saturn")),
    11: ((0, 12, "Venus"), (12, 16, "Jupiter"), (16, 19, "Mercury"), (19, 28, "Mars"), (28, 30, "Saturn")),
})

FRIENDS: Mapping[str, frozenset] = MappingProxyType({
    "Sun":     frozenset({"Moon", "Mars", "Jupiter"}),
    "Moon":    frozenset({"Sun", "Mercury"}),
    "Mars":    frozenset({"Sun", "Moon", "Jupiter"}),
    "Mercury": frozenset({"Sun", "Venus"}),
    "Jupiter": frozenset({"Sun", "Moon", "Mars"}),
    "Venus":   frozenset({"Mercury", "Saturn"}),
    "Saturn":  frozenset({"Mercury", "Venus"}),
})

NEUTRALS: Mapping[str, frozenset] = MappingProxyType({
    "Sun":     frozenset({"Mercury"}),
    "Moon":    frozenset({"Mars", "Jupiter", "Venus", "Saturn"}),
    "Mars":    frozenset({"Mercury", "Venus", "Saturn"}),
    "Mercury": frozenset({"Mars", "Jupiter", "Saturn"}),
    "Jupiter": frozenset({"Mercury", "Saturn"}),
    "Venus":   frozenset({"Mars", "Jupiter"}),
    "Saturn":  frozenset({"Mars", "Jupiter"}),
})

# relation -> points; the twelfth-part scale is lighter
VARGA_POINTS = MappingProxyType({"own": 4.0, "friend": 3.0, "neutral": 2.0, "other": 1.0})
DWADASHAMSHA_POINTS = MappingProxyType({"own": 3.0, "friend": 2.5, "neutral": 1.5, "other": 1.0})
HADDA_FALLBACK = 2.0

# (minimum total, category), checked in order
CATEGORIES = (
    (15.0, "excellent"),
    (12.0, "good"),
    (8.0, "average"),
    (5.0, "below_average"),
)

# Navamsha count starts from the movable sign of the element: fire, earth, air, water
_NAVAMSHA_START = (0, 9, 6, 3)


@dataclass(frozen=True)
class PanchaVargiyaBala:
    planet:       str
    uchcha:       float
    hadda:        float
    drekkana:     float
    navamsha:     float
    dwadashamsha: float

    @property
    def total(self) -> float:
        return self.uchcha + self.hadda + self.drekkana + self.navamsha + self.dwadashamsha

    @property
    def category(self) -> str:
        return bala_category(self.total)


def relation(planet: str, lord: str) -> str:
    """'own', 'friend', 'neutral' or 'other' for planet towards a varga lord."""
    if lord == planet:
        return "own"
    if lord in FRIENDS.get(planet, ()):
        return "friend"
    if lord in NEUTRALS.get(planet, ()):
        return "neutral"
    return "other"


def bala_category(total: float) -> str:
    for minimum, name in CATEGORIES:
        if total >= minimum:
            return name
    return "weak"


def uchcha_bala(planet: str, longitude: float) -> float:
    """5 at the deep exaltation point, falling linearly to 0 at debilitation."""
    point = EXALTATION_DEGREES.get(planet)
    if point is None:
        return 0.0
    return min(5.0, max(0.0, (180.0 - separation(longitude, point)) / 180.0 * 5.0))


def hadda_lord(longitude: float) -> Optional[str]:
    deg = degree_in_sign(longitude)
    for start, end, lord in HADDA[sign_index(longitude)]:
        if start <= deg < end:
            return lord
    return None


def hadda_bala(planet: str, longitude: float) -> float:
    lord = hadda_lord(longitude)
    if lord is None:
        return HADDA_FALLBACK
    return VARGA_POINTS[relation(planet, lord)]


def drekkana_sign(longitude: float) -> int:
    """Decanates fall in the sign itself, then its 5th and 9th."""
    part = min(int(degree_in_sign(longitude) // 10), 2)
    return (sign_index(longitude) + 4 * part) % 12


def navamsha_sign(longitude: float) -> int:
    part = min(int(degree_in_sign(longitude) * 9 / 30), 8)
    return (_NAVAMSHA_START[sign_index(longitude) % 4] + part) % 12


def dwadashamsha_sign(longitude: float) -> int:
    part = min(int(degree_in_sign(longitude) / 2.5), 11)
    return (sign_index(longitude) + part) % 12


def pancha_vargiya_bala(planet: str, longitude: float) -> PanchaVargiyaBala:
    lon = normalize(longitude)
    return PanchaVargiyaBala(
        planet=planet,
        uchcha=uchcha_bala(planet, lon),
        hadda=hadda_bala(planet, lon),
        drekkana=VARGA_POINTS[relation(planet, sign_lord(drekkana_sign(lon)))],
        navamsha=VARGA_POINTS[relation(planet, sign_lord(navamsha_sign(lon)))],
        dwadashamsha=DWADASHAMSHA_POINTS[relation(planet, sign_lord(dwadashamsha_sign(lon)))],
    )


def compute_pancha_vargiya(chart: AnnualChart) -> List[PanchaVargiyaBala]:
    """Bala for each of the seven visible planets, in the usual planet order."""
    return [pancha_vargiya_bala(p, chart.position(p).longitude) for p in BALA_PLANETS]
