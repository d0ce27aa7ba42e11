"""
houses.py
=========
Ascendant, midheaven and house cusps, plus the cusp-arc house lookup.

Supported systems:
  - Whole Sign (Vedic default)
  - Equal House
  - Placidus (falls back to Equal where the semi-arcs are undefined or the
    cusps come out of order)

All public outputs are sidereal longitudes.

Source: Meeus Ch. 12–14; Holden, J.H. (1994). "A History of Horoscopic Astrology"
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from .angles import DEG_TO_RAD, RAD_TO_DEG, normalize
from .ephemeris import nutation_and_obliquity, tropical_to_sidereal
from .timebase import J2000, Instant

log = logging.getLogger(__name__)

HOUSE_SYSTEMS = ("whole_sign", "equal", "placidus")


@dataclass(frozen=True)
class HouseFrame:
    ascendant: float
    midheaven: float
    cusps:     Tuple[float, ...]   # cusp of house N at index N-1


# ---------------------------------------------------------------------------
# Sidereal time
# ---------------------------------------------------------------------------

def greenwich_mean_sidereal_time(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees.
    Source: Meeus Ch. 12, Eq. 12.4
    """
    T = (jd - J2000) / 36525.0
    theta = (280.46061837
             + 360.98564736629 * (jd - J2000)
             + 0.000387933 * T * T
             - T * T * T / 38710000.0)
    return theta % 360.0


def local_sidereal_time(jd: float, longitude_deg: float) -> float:
    """
    Local Apparent Sidereal Time (degrees).
    longitude_deg: geographic longitude, positive East
    """
    T = (jd - J2000) / 36525.0
    dpsi, _, obliquity = nutation_and_obliquity(T)
    eq_eq = dpsi * math.cos(obliquity * DEG_TO_RAD) / 3600.0
    return normalize(greenwich_mean_sidereal_time(jd) + eq_eq + longitude_deg)


# ---------------------------------------------------------------------------
# Angles
# ---------------------------------------------------------------------------

def compute_ascendant(lst: float, latitude_deg: float, obliquity: float) -> float:
    """
    Tropical Ascendant (Lagna) degree.
    lst: Local Sidereal Time in degrees
    Source: Meeus Ch. 14
    """
    e = obliquity * DEG_TO_RAD
    phi = latitude_deg * DEG_TO_RAD
    ramc = lst * DEG_TO_RAD

    y = -math.cos(ramc)
    x = math.sin(e) * math.tan(phi) + math.cos(e) * math.sin(ramc)
    # +180° selects the eastern intersection of horizon and ecliptic
    return normalize(math.atan2(y, x) * RAD_TO_DEG + 180.0)


def compute_midheaven(lst: float, obliquity: float) -> float:
    """Tropical Midheaven (MC) degree. Source: Meeus Ch. 14"""
    e = obliquity * DEG_TO_RAD
    ramc = lst * DEG_TO_RAD
    mc = math.atan2(math.sin(ramc), math.cos(ramc) * math.cos(e)) * RAD_TO_DEG
    return normalize(mc)


# ---------------------------------------------------------------------------
# House systems (tropical)
# ---------------------------------------------------------------------------

def whole_sign_cusps(ascendant: float) -> List[float]:
    """House 1 = sign containing the Ascendant; each house a whole sign."""
    lagna_sign = int(ascendant / 30) * 30
    return [normalize(lagna_sign + 30 * i) for i in range(12)]


def equal_house_cusps(ascendant: float) -> List[float]:
    """House 1 begins exactly at the Ascendant; each house 30°."""
    return [normalize(ascendant + 30 * i) for i in range(12)]


def _placidus_cusp(ramc: float, phi: float, eps: float,
                   ra_of: Callable[[float], float]) -> float:
    """
    Iterate the cusp's right ascension against its own diurnal semi-arc.
    ra_of maps a semi-arc (degrees) to the cusp RA (degrees).
    """
    ra = ra_of(90.0)
    for _ in range(30):
        dec = math.atan(math.tan(eps) * math.sin(ra * DEG_TO_RAD))
        dsa = math.acos(-math.tan(phi) * math.tan(dec)) * RAD_TO_DEG
        ra_new = ra_of(dsa)
        if abs(ra_new - ra) < 1e-9:
            ra = ra_new
            break
        ra = ra_new
    ra_r = ra * DEG_TO_RAD
    return normalize(math.atan2(math.sin(ra_r), math.cos(ra_r) * math.cos(eps)) * RAD_TO_DEG)


def placidus_cusps(lst: float, latitude_deg: float, obliquity: float) -> List[float]:
    """
    Placidus cusps: intermediate cusps trisect the diurnal (11, 12) and
    nocturnal (2, 3) semi-arcs of their own degree.
    Source: Meeus Ch. 16; Koch & Knappich (1971)
    """
    asc = compute_ascendant(lst, latitude_deg, obliquity)
    mc  = compute_midheaven(lst, obliquity)
    eps = obliquity * DEG_TO_RAD
    phi = latitude_deg * DEG_TO_RAD

    try:
        h11 = _placidus_cusp(lst, phi, eps, lambda dsa: lst + dsa / 3.0)
        h12 = _placidus_cusp(lst, phi, eps, lambda dsa: lst + 2.0 * dsa / 3.0)
        h2  = _placidus_cusp(lst, phi, eps, lambda dsa: lst + 60.0 + 2.0 * dsa / 3.0)
        h3  = _placidus_cusp(lst, phi, eps, lambda dsa: lst + 120.0 + dsa / 3.0)
    except ValueError:
        log.warning("Placidus undefined at latitude %.2f; using equal houses", latitude_deg)
        return equal_house_cusps(asc)

    cusps = [asc, h2, h3, normalize(mc + 180.0), normalize(h11 + 180.0),
             normalize(h12 + 180.0), normalize(asc + 180.0), normalize(h2 + 180.0),
             normalize(h3 + 180.0), mc, h11, h12]
    try:
        validate_cusps(cusps)
    except ValueError:
        log.warning("Placidus cusps out of order at latitude %.2f; using equal houses",
                    latitude_deg)
        return equal_house_cusps(asc)
    return cusps


class HouseSystem:
    """Default house-system collaborator: sidereal frame for an instant/place."""

    def __init__(self, system: str = "whole_sign", ayanamsa: str = "lahiri"):
        if system not in HOUSE_SYSTEMS:
            raise ValueError(f"Unknown house system '{system}'")
        self.system = system
        self.ayanamsa = ayanamsa

    def compute(self, instant: Instant, lat: float, lon: float) -> HouseFrame:
        T = instant.centuries
        _, _, obliquity = nutation_and_obliquity(T)
        lst = local_sidereal_time(instant.jd, lon)
        asc_trop = compute_ascendant(lst, lat, obliquity)
        mc_trop = compute_midheaven(lst, obliquity)

        asc = tropical_to_sidereal(asc_trop, T, self.ayanamsa)
        mc  = tropical_to_sidereal(mc_trop, T, self.ayanamsa)

        # whole-sign houses follow the sidereal sign of the Lagna
        if self.system == "whole_sign":
            cusps = whole_sign_cusps(asc)
        elif self.system == "equal":
            cusps = equal_house_cusps(asc)
        else:
            cusps = [tropical_to_sidereal(c, T, self.ayanamsa)
                     for c in placidus_cusps(lst, lat, obliquity)]
        return HouseFrame(ascendant=asc, midheaven=mc, cusps=tuple(cusps))


# ---------------------------------------------------------------------------
# House lookup
# ---------------------------------------------------------------------------

def validate_cusps(cusps: Sequence[float]) -> None:
    """Cusps must run forward round the circle, wrapping past 0° exactly once."""
    if len(cusps) != 12:
        raise ValueError(f"Expected 12 house cusps, got {len(cusps)}")
    drops = sum(1 for i in range(12) if cusps[(i + 1) % 12] < cusps[i])
    if drops != 1:
        raise ValueError(f"House cusps are not monotonic around the circle: {list(cusps)}")


def house_of(longitude: float, cusps: Sequence[float]) -> int:
    """
    1-based house whose cusp-to-cusp arc contains the longitude.

    Arcs are measured modulo 360 from each cusp, so the arc that crosses
    0° Aries needs no special case. A longitude exactly on a cusp belongs to
    the house that begins there.
    """
    lon = normalize(longitude)
    for i in range(12):
        start = cusps[i]
        arc = normalize(cusps[(i + 1) % 12] - start)
        if normalize(lon - start) < arc:
            return i + 1
    # Rounding can leave a sliver at an arc's far edge; the latest cusp passed wins.
    return min(range(12), key=lambda i: normalize(lon - cusps[i])) + 1
