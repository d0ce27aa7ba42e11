"""
nakshatra.py
============
Lunar mansion lookup: 27 equal divisions of the sidereal zodiac, each
owned by a Vimshottari lord.
"""

from typing import Tuple

from .angles import normalize

NAKSHATRA_SPAN = 360.0 / 27.0

NAKSHATRAS: Tuple[str, ...] = (
    "Ashwini","Bharani","Krittika","Rohini","Mrigashira","Ardra",
    "Punarvasu","Pushya","Ashlesha","Magha","Purva Phalguni","Uttara Phalguni",
    "Hasta","Chitra","Swati","Vishakha","Anuradha","Jyeshtha",
    "Mula","Purva Ashadha","Uttara Ashadha","Shravana","Dhanishtha",
    "Shatabhisha","Purva Bhadrapada","Uttara Bhadrapada","Revati",
)

# Vimshottari lords, repeating every nine nakshatras
NAKSHATRA_LORDS: Tuple[str, ...] = (
    "Ketu","Venus","Sun","Moon","Mars","Rahu","Jupiter","Saturn","Mercury",
) * 3


def nakshatra_index(sidereal_lon: float) -> int:
    return int(normalize(sidereal_lon) / NAKSHATRA_SPAN) % 27


def nakshatra_name(sidereal_lon: float) -> str:
    return NAKSHATRAS[nakshatra_index(sidereal_lon)]


def nakshatra_owner(sidereal_lon: float) -> str:
    """Vimshottari lord of the nakshatra containing the longitude."""
    return NAKSHATRA_LORDS[nakshatra_index(sidereal_lon)]


def nakshatra_pada(sidereal_lon: float) -> int:
    """Quarter (1-4) of the nakshatra."""
    within = normalize(sidereal_lon) % NAKSHATRA_SPAN
    return min(int(within / (NAKSHATRA_SPAN / 4)) + 1, 4)
