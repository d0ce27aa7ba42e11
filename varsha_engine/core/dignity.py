"""
dignity.py
==========
Sign rulership and the dignity score used to rank year-lord candidates.

Score terms:
  +15  planet in an angular house (1, 4, 7, 10)
  -15  planet in a dusthana house (6, 8, 12)
  +25  exaltation sign
  -25  debilitation sign
  +20  own sign

Exaltation and debilitation are tested before own sign, so a planet earns at
most one sign term. Rahu and Ketu carry no sign dignity.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

# Ruler of each sign, by sign index (0 = Aries)
SIGN_LORDS: Tuple[str, ...] = (
    "Mars", "Venus", "Mercury", "Moon", "Sun", "Mercury",
    "Venus", "Mars", "Jupiter", "Saturn", "Saturn", "Jupiter",
)

# Weekday ruler, indexed with Sunday = 0
WEEKDAY_LORDS: Tuple[str, ...] = (
    "Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn",
)

OWN_SIGNS: Mapping[str, Tuple[int, ...]] = MappingProxyType({
    "Sun": (4,), "Moon": (3,), "Mars": (0, 7), "Mercury": (2, 5),
    "Jupiter": (8, 11), "Venus": (1, 6), "Saturn": (9, 10),
})

EXALTATION_SIGN: Mapping[str, int] = MappingProxyType({
    "Sun": 0, "Moon": 1, "Mars": 9, "Mercury": 5,
    "Jupiter": 3, "Venus": 11, "Saturn": 6,
})

DEBILITATION_SIGN: Mapping[str, int] = MappingProxyType(
    {p: (s + 6) % 12 for p, s in EXALTATION_SIGN.items()}
)

ANGULAR_HOUSES = frozenset({1, 4, 7, 10})
DUSTHANA_HOUSES = frozenset({6, 8, 12})

ANGULAR_SCORE   = 15
DUSTHANA_SCORE  = -15
OWN_SIGN_SCORE  = 20
EXALTED_SCORE   = 25
DEBILITATED_SCORE = -25


def sign_lord(sign_idx: int) -> str:
    return SIGN_LORDS[sign_idx % 12]


def sign_dignity(planet: str, sign_idx: int) -> str:
    """One of 'exalted', 'debilitated', 'own', or 'neutral'."""
    if EXALTATION_SIGN.get(planet) == sign_idx:
        return "exalted"
    if DEBILITATION_SIGN.get(planet) == sign_idx:
        return "debilitated"
    if sign_idx in OWN_SIGNS.get(planet, ()):
        return "own"
    return "neutral"


def dignity_score(planet: str, sign_idx: int, house: int) -> int:
    score = 0
    if house in ANGULAR_HOUSES:
        score += ANGULAR_SCORE
    elif house in DUSTHANA_HOUSES:
        score += DUSTHANA_SCORE

    dignity = sign_dignity(planet, sign_idx)
    if dignity == "exalted":
        score += EXALTED_SCORE
    elif dignity == "debilitated":
        score += DEBILITATED_SCORE
    elif dignity == "own":
        score += OWN_SIGN_SCORE
    return score
