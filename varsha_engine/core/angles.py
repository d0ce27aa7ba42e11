"""
angles.py
=========
Angle arithmetic on the ecliptic circle.

Every helper returns a value already folded into its documented range so that
callers never carry an un-normalized longitude between steps.
"""

import math

SIGNS = ["Aries","Taurus","Gemini","Cancer","Leo","Virgo",
         "Libra","Scorpio","Sagittarius","Capricorn","Aquarius","Pisces"]

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi


def normalize(x: float) -> float:
    """Fold an angle into [0, 360)."""
    v = math.fmod(x, 360.0)
    if v < 0.0:
        v += 360.0
    # fmod of a tiny negative can round up to exactly 360.0
    if v >= 360.0:
        v = 0.0
    return v


def signed_normalize(x: float) -> float:
    """Fold an angle into (-180, 180]."""
    v = normalize(x)
    if v > 180.0:
        v -= 360.0
    return v


def separation(a: float, b: float) -> float:
    """Shortest arc between two longitudes, in [0, 180]."""
    return abs(signed_normalize(a - b))


def orb_distance(a: float, b: float, aspect_angle: float) -> float:
    """
    Distance of the pair (a, b) from an exact aspect.

    The raw difference |a - b| is tested both ways round the circle, so a
    sextile is found whether the gap is 60° or 300°.
    """
    raw = abs(normalize(a) - normalize(b))
    return min(abs(raw - aspect_angle), abs((360.0 - raw) - aspect_angle))


def sign_index(lon: float) -> int:
    return int(normalize(lon) / 30.0) % 12


def sign_name(lon: float) -> str:
    return SIGNS[sign_index(lon)]


def degree_in_sign(lon: float) -> float:
    return normalize(lon) % 30.0


def dms(degrees: float) -> str:
    """Format decimal degrees as D°M'S\" string."""
    d = int(degrees)
    m_float = (degrees - d) * 60
    m = int(m_float)
    s = round((m_float - m) * 60, 1)
    return f"{d}°{m}'{s}\""
