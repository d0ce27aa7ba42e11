"""
ephemeris.py  —  Geocentric sidereal planetary positions
=========================================================
Uses Jean Meeus "Astronomical Algorithms" 2nd ed.

Two layers live here:

``MeeusEphemeris``
    The default ephemeris oracle. Answers
    ``position(planet, instant, lat, lon)`` with sidereal ecliptic longitude,
    latitude, distance and longitudinal speed. Positions are geocentric, so
    the observer location is accepted but not used.

``EphemerisAdapter``
    Thin call-through used by the annual engine. Wraps any oracle with the
    same call shape (returning a ``RawPosition`` or a mapping with the same
    keys) and turns oracle failures into ``MissingPositionError``.

Method:
  Sun      Meeus Ch. 25 (geocentric, apparent)
  Moon     Meeus Ch. 47, main periodic terms
  Planets  Mean orbital elements of date (Meeus Table 31.A), Kepler's
           equation, heliocentric -> geocentric by subtracting Earth
  Rahu     Mean lunar node; Ketu = Rahu + 180°

Accuracy: Sun/Moon within a few arcminutes, planets within ~1° for 1800–2100
(no planetary perturbations, no light-time). Adequate for sign/house work and
for the solar return, which only depends on the Sun.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

from ..errors import MissingPositionError
from .angles import DEG_TO_RAD, RAD_TO_DEG, normalize, signed_normalize
from .timebase import Instant, julian_centuries

log = logging.getLogger(__name__)

ARCSEC = 1.0 / 3600.0
AU_KM = 149597870.7
SPEED_STEP_DAYS = 0.5

PLANETS = ("Sun","Moon","Mars","Mercury","Jupiter","Venus","Saturn","Rahu","Ketu")


def _r(x):
    return x * DEG_TO_RAD


def _d(x):
    return x * RAD_TO_DEG


@dataclass(frozen=True)
class GeoLocation:
    latitude:  float   # degrees, positive North
    longitude: float   # degrees, positive East


@dataclass(frozen=True)
class RawPosition:
    longitude: float   # sidereal, [0, 360)
    latitude:  float   # degrees
    distance:  float   # AU
    speed:     float   # deg/day, negative = retrograde


# ── Nutation & Obliquity (Meeus Ch. 22) ────────────────────────

def nutation_and_obliquity(T: float) -> Tuple[float, float, float]:
    """Returns (dpsi_arcsec, deps_arcsec, true_obliquity_deg)."""
    omega = normalize(125.04452 - 1934.136261*T + 0.0020708*T*T)
    L0    = normalize(280.4664567 + 360007.6982779*T)
    Lm    = normalize(218.3165085 + 481267.8813398*T)

    dpsi  = (-17.20 - 0.1742*T)*math.sin(_r(omega))
    dpsi += -1.32 * math.sin(_r(2*L0))
    dpsi += -0.23 * math.sin(_r(2*Lm))
    dpsi +=  0.21 * math.sin(_r(2*omega))

    deps  = ( 9.20 + 0.0897*T)*math.cos(_r(omega))
    deps +=  0.57 * math.cos(_r(2*L0))
    deps +=  0.10 * math.cos(_r(2*Lm))
    deps += -0.09 * math.cos(_r(2*omega))

    eps0 = (23.0 + 26.0/60 + 21.448/3600
            - (46.8150*T + 0.00059*T*T - 0.001813*T*T*T)/3600.0)
    return dpsi, deps, eps0 + deps/3600.0


# ── Ayanamsa ────────────────────────────────────────────────────

AYANAMSA = {
    # value at J2000 (deg) and precession rate (deg/yr)
    "lahiri": {"j2000": 23.85045, "rate": 50.2882 / 3600.0},
    "raman":  {"j2000": 22.46000, "rate": 50.2388 / 3600.0},
    "kp":     {"j2000": 23.86000, "rate": 50.2388 / 3600.0},
    "fagan":  {"j2000": 24.74000, "rate": 50.2388 / 3600.0},
}


def get_ayanamsa(T: float, system: str = "lahiri") -> float:
    p = AYANAMSA.get(system.lower())
    if p is None:
        raise ValueError(f"Unknown ayanamsa '{system}'")
    return p["j2000"] + p["rate"] * T * 100  # T is centuries


def tropical_to_sidereal(lon: float, T: float, ayanamsa: str = "lahiri") -> float:
    return normalize(lon - get_ayanamsa(T, ayanamsa))


# ── Sun (Meeus Ch. 25) ─────────────────────────────────────────

def sun_longitude(T: float, dpsi: float) -> Tuple[float, float]:
    """Returns (apparent tropical longitude deg, radius AU)."""
    L0  = normalize(280.46646  + 36000.76983*T + 0.0003032*T*T)
    M   = normalize(357.52911  + 35999.05029*T - 0.0001537*T*T)
    M_r = _r(M)
    e   = 0.016708634 - 0.000042037*T - 0.0000001267*T*T

    C = ((1.914602 - 0.004817*T - 0.000014*T*T)*math.sin(M_r)
         + (0.019993 - 0.000101*T)*math.sin(2*M_r)
         + 0.000289*math.sin(3*M_r))

    true_lon = normalize(L0 + C)
    v = normalize(M + C)
    R = (1.000001018*(1 - e*e)) / (1 + e*math.cos(_r(v)))

    # nutation and aberration
    return normalize(true_lon + dpsi*ARCSEC - 20.4898*ARCSEC), R


# ── Moon (Meeus Ch. 47) ─────────────────────────────────────────
# Periodic terms as (D, M, M', F, coefficient). Terms containing the Sun's
# mean anomaly M are scaled by E (|M| = 1) or E² (|M| = 2).

MOON_LONGITUDE_TERMS = (
    (0, 0, 1, 0, 6288774), (2, 0, -1, 0, 1274027), (2, 0, 0, 0, 658314),
    (0, 0, 2, 0, 213618), (0, 1, 0, 0, -185116), (0, 0, 0, 2, -114332),
    (2, 0, -2, 0, 58793), (2, -1, -1, 0, 57066), (2, 0, 1, 0, 53322),
    (2, -1, 0, 0, 45758), (0, 1, -1, 0, -40923), (1, 0, 0, 0, -34720),
    (0, 1, 1, 0, -30383), (2, 0, 0, -2, 15327), (0, 0, 1, 2, -12528),
    (0, 0, 1, -2, 10980), (4, 0, -1, 0, 10675), (0, 0, 3, 0, 10034),
    (4, 0, -2, 0, 8548), (2, 1, -1, 0, -7888), (2, 1, 0, 0, -6766),
    (1, 0, -1, 0, -5163), (1, 1, 0, 0, 4987), (2, -1, 1, 0, 4036),
    (2, 0, 2, 0, 3994), (4, 0, 0, 0, 3861), (2, 0, -3, 0, 3665),
    (0, 1, -2, 0, -2689), (2, 0, -1, 2, -2602), (2, -1, -2, 0, 2390),
    (1, 0, 1, 0, -2348), (2, -2, 0, 0, 2236), (0, 1, 2, 0, -2120),
    (0, 2, 0, 0, -2069), (2, -2, -1, 0, 2048), (2, 0, 1, -2, -1773),
    (2, 0, 0, 2, -1595), (4, -1, -1, 0, 1215), (0, 0, 2, 2, -1110),
    (3, 0, -1, 0, -892), (2, 1, 1, 0, -810), (4, -1, -2, 0, 759),
    (0, 2, -1, 0, -713), (2, 2, -1, 0, -700), (2, 1, -2, 0, 691),
    (2, -1, 0, -2, 596), (4, 0, 1, 0, 549), (0, 0, 4, 0, 537),
    (4, -1, 0, 0, 520), (1, 0, -2, 0, -487), (2, 1, 0, -2, -399),
    (0, 0, 2, -2, -381), (1, 1, 1, 0, 351), (3, 0, -2, 0, -340),
    (4, 0, -3, 0, 330), (2, -1, 2, 0, 327), (0, 2, 1, 0, -323),
    (1, 1, -1, 0, 299), (2, 0, 3, 0, 294),
)

MOON_LATITUDE_TERMS = (
    (0, 0, 0, 1, 5128122), (0, 0, 1, 1, 280602), (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237), (2, 0, -1, 1, 55413), (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573), (0, 0, 2, 1, 17198), (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822), (2, -1, 0, -1, 8216), (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200), (2, 1, 0, -1, -3359), (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211), (2, -1, -1, -1, 2065), (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828), (0, 1, 0, 1, -1794), (0, 0, 0, 3, -1749),
    (0, 1, -1, 1, -1565), (1, 0, 0, 1, -1491), (0, 1, 1, 1, -1475),
    (0, 1, 1, -1, -1410), (0, 1, 0, -1, -1344), (1, 0, 0, -1, -1335),
    (0, 0, 3, 1, 1107), (4, 0, 0, -1, 1021), (4, 0, -1, 1, 833),
)

# Distance, cosine terms, in 0.001 km (rows with a zero coefficient omitted)
MOON_DISTANCE_TERMS = (
    (0, 0, 1, 0, -20905355), (2, 0, -1, 0, -3699111), (2, 0, 0, 0, -2955968),
    (0, 0, 2, 0, -569925), (0, 1, 0, 0, 48888), (0, 0, 0, 2, -3149),
    (2, 0, -2, 0, 246158), (2, -1, -1, 0, -152138), (2, 0, 1, 0, -170733),
    (2, -1, 0, 0, -204586), (0, 1, -1, 0, -129620), (1, 0, 0, 0, 108743),
    (0, 1, 1, 0, 104755), (2, 0, 0, -2, 10321), (0, 0, 1, -2, 79661),
    (4, 0, -1, 0, -34782), (0, 0, 3, 0, -23210), (4, 0, -2, 0, -21636),
    (2, 1, -1, 0, 24208), (2, 1, 0, 0, 30824), (1, 0, -1, 0, -8379),
    (1, 1, 0, 0, -16675), (2, -1, 1, 0, -12831), (2, 0, 2, 0, -10445),
    (4, 0, 0, 0, -11650), (2, 0, -3, 0, 14403), (0, 1, -2, 0, -7003),
    (2, -1, -2, 0, 10056), (1, 0, 1, 0, 6322), (2, -2, 0, 0, -9884),
    (0, 1, 2, 0, 5751), (2, -2, -1, 0, -4950), (2, 0, 1, -2, 4130),
    (4, -1, -1, 0, -3958), (3, 0, -1, 0, 3258), (2, 1, 1, 0, 2616),
    (4, -1, -2, 0, -1897), (0, 2, -1, 0, -2117), (2, 2, -1, 0, 2354),
    (4, 0, 1, 0, -1423), (0, 0, 4, 0, -1117), (4, -1, 0, 0, -1571),
    (1, 0, -2, 0, -1739), (0, 0, 2, -2, -4421), (0, 2, 1, 0, 1165),
    (2, 0, -1, -2, 8752),
)


def _moon_arguments(T: float) -> Dict[str, float]:
    return {
        "Lp": normalize(218.3164477 + 481267.88123421*T - 0.0015786*T*T + T**3/538841.0),
        "D":  normalize(297.8501921 + 445267.1114034*T  - 0.0018819*T*T + T**3/545868.0),
        "M":  normalize(357.5291092 + 35999.0502909*T   - 0.0001536*T*T + T**3/24490000.0),
        "Mp": normalize(134.9633964 + 477198.8675055*T  + 0.0087414*T*T + T**3/69699.0),
        "F":  normalize(93.2720950  + 483202.0175233*T  - 0.0036539*T*T - T**3/3526000.0),
        "E":  1.0 - 0.002516*T - 0.0000074*T*T,
    }


def _periodic_sum(terms, a: Dict[str, float], fn) -> float:
    total = 0.0
    for d, m, mp, f, coeff in terms:
        arg = d*a["D"] + m*a["M"] + mp*a["Mp"] + f*a["F"]
        total += coeff * a["E"]**abs(m) * fn(_r(arg))
    return total


def moon_position(T: float, dpsi: float) -> Tuple[float, float, float]:
    """Returns (apparent tropical longitude deg, latitude deg, distance km)."""
    a = _moon_arguments(T)
    A1 = normalize(119.75 + 131.849*T)
    A2 = normalize(53.09 + 479264.290*T)
    A3 = normalize(313.45 + 481266.484*T)

    sl = _periodic_sum(MOON_LONGITUDE_TERMS, a, math.sin)
    sl += (3958*math.sin(_r(A1)) + 1962*math.sin(_r(a["Lp"] - a["F"]))
           + 318*math.sin(_r(A2)))

    sb = _periodic_sum(MOON_LATITUDE_TERMS, a, math.sin)
    sb += (-2235*math.sin(_r(a["Lp"])) + 382*math.sin(_r(A3))
           + 175*math.sin(_r(A1 - a["F"])) + 175*math.sin(_r(A1 + a["F"]))
           + 127*math.sin(_r(a["Lp"] - a["Mp"])) - 115*math.sin(_r(a["Lp"] + a["Mp"])))

    sr = _periodic_sum(MOON_DISTANCE_TERMS, a, math.cos)

    longitude = normalize(a["Lp"] + sl/1_000_000.0 + dpsi*ARCSEC)
    return longitude, sb/1_000_000.0, 385000.56 + sr/1000.0


def mean_node_longitude(T: float) -> float:
    """Mean ascending lunar node (Rahu). Meeus Ch. 47."""
    return normalize(125.0445479 - 1934.1362891*T + 0.0020754*T*T + T**3/467441.0)


# ── Planets from mean elements (Meeus Table 31.A) ──────────────
# (L, a, e, i, node, perihelion): each a (constant, rate per century) pair
# except the semi-major axis.

ORBITAL_ELEMENTS = {
    "Mercury": ((252.250906, 149474.0722491), 0.387098310,
                (0.20563175, 0.000020406), (7.004986, 0.0018215),
                (48.330893, 1.1861890), (77.456119, 1.5564775)),
    "Venus":   ((181.979801, 58519.2130302), 0.723329820,
                (0.00677188, -0.000047766), (3.394662, 0.0010037),
                (76.679920, 0.9011190), (131.563707, 1.4022188)),
    "Mars":    ((355.433275, 19141.6964746), 1.523679342,
                (0.09340062, 0.000090483), (1.849726, -0.0006010),
                (49.558093, 0.7720923), (336.060234, 1.8410331)),
    "Jupiter": ((34.351484, 3036.3027889), 5.202603191,
                (0.04849485, 0.000163244), (1.303270, -0.0054966),
                (100.464441, 1.0209550), (14.331309, 1.6126668)),
    "Saturn":  ((50.077471, 1223.5110141), 9.554909596,
                (0.05550862, -0.000346818), (2.488878, -0.0037363),
                (113.665524, 0.8770979), (93.056787, 1.9637694)),
}


def _solve_kepler(M_r: float, e: float) -> float:
    E = M_r + e*math.sin(M_r)
    for _ in range(15):
        dE = (E - e*math.sin(E) - M_r) / (1 - e*math.cos(E))
        E -= dE
        if abs(dE) < 1e-12:
            break
    return E


def _heliocentric(planet: str, T: float) -> Tuple[float, float, float]:
    """Heliocentric ecliptic (L, B, R) from mean elements."""
    (L0, L1), a, (e0, e1), (i0, i1), (n0, n1), (p0, p1) = ORBITAL_ELEMENTS[planet]
    L    = normalize(L0 + L1*T)
    e    = e0 + e1*T
    inc  = i0 + i1*T
    node = normalize(n0 + n1*T)
    peri = normalize(p0 + p1*T)

    E = _solve_kepler(_r(normalize(L - peri)), e)
    v = _d(2*math.atan2(math.sqrt(1+e)*math.sin(E/2), math.sqrt(1-e)*math.cos(E/2)))
    r = a*(1 - e*math.cos(E))

    u = _r(v + peri - node)   # argument of latitude
    lh = normalize(_d(math.atan2(math.sin(u)*math.cos(_r(inc)), math.cos(u))) + node)
    bh = _d(math.asin(math.sin(u)*math.sin(_r(inc))))
    return lh, bh, r


def _helio_to_geo(L_planet, B_planet, R_planet,
                  L_earth, B_earth, R_earth) -> Tuple[float, float, float]:
    """Planet and Earth heliocentric coords -> geocentric (lon, lat, AU)."""
    x = R_planet*math.cos(_r(B_planet))*math.cos(_r(L_planet)) \
      - R_earth *math.cos(_r(B_earth)) *math.cos(_r(L_earth))
    y = R_planet*math.cos(_r(B_planet))*math.sin(_r(L_planet)) \
      - R_earth *math.cos(_r(B_earth)) *math.sin(_r(L_earth))
    z = R_planet*math.sin(_r(B_planet)) \
      - R_earth *math.sin(_r(B_earth))

    delta = math.sqrt(x*x + y*y + z*z)
    lam   = normalize(_d(math.atan2(y, x)))
    beta  = _d(math.atan2(z, math.sqrt(x*x + y*y)))
    return lam, beta, delta


def tropical_position(planet: str, jd: float) -> Tuple[float, float, float]:
    """Geocentric tropical (longitude, latitude, distance AU) at a JD (UT)."""
    T = julian_centuries(jd)
    dpsi, _, _ = nutation_and_obliquity(T)

    if planet == "Sun":
        lon, R = sun_longitude(T, dpsi)
        return lon, 0.0, R
    if planet == "Moon":
        lon, lat, dist_km = moon_position(T, dpsi)
        return lon, lat, dist_km / AU_KM
    if planet == "Rahu":
        return mean_node_longitude(T), 0.0, 0.0
    if planet == "Ketu":
        return normalize(mean_node_longitude(T) + 180.0), 0.0, 0.0
    if planet in ORBITAL_ELEMENTS:
        sun_lon, sun_R = sun_longitude(T, dpsi)
        lh, bh, rh = _heliocentric(planet, T)
        lon, lat, dist = _helio_to_geo(lh, bh, rh, normalize(sun_lon + 180.0), 0.0, sun_R)
        return normalize(lon + dpsi*ARCSEC), lat, dist
    raise MissingPositionError(planet, "not covered by the Meeus ephemeris")


class MeeusEphemeris:
    """Default ephemeris oracle: sidereal geocentric positions."""

    def __init__(self, ayanamsa: str = "lahiri"):
        get_ayanamsa(0.0, ayanamsa)   # validate early
        self.ayanamsa = ayanamsa

    def sidereal_longitude(self, planet: str, jd: float) -> float:
        lon, _, _ = tropical_position(planet, jd)
        return tropical_to_sidereal(lon, julian_centuries(jd), self.ayanamsa)

    def position(self, planet: str, instant: Instant,
                 lat: float = 0.0, lon: float = 0.0) -> RawPosition:
        jd = instant.jd
        trop, latitude, distance = tropical_position(planet, jd)
        sid = tropical_to_sidereal(trop, julian_centuries(jd), self.ayanamsa)

        # central difference across the 360/0 seam
        ahead  = self.sidereal_longitude(planet, jd + SPEED_STEP_DAYS)
        behind = self.sidereal_longitude(planet, jd - SPEED_STEP_DAYS)
        speed = signed_normalize(ahead - behind) / (2 * SPEED_STEP_DAYS)

        return RawPosition(longitude=sid, latitude=latitude,
                           distance=distance, speed=speed)


# ── Adapter used by the annual engine ──────────────────────────

def _coerce(planet: str, raw) -> RawPosition:
    if isinstance(raw, RawPosition):
        return RawPosition(normalize(raw.longitude), raw.latitude, raw.distance, raw.speed)
    if isinstance(raw, Mapping):
        try:
            return RawPosition(
                longitude=normalize(float(raw["longitude"])),
                latitude=float(raw.get("latitude", 0.0)),
                distance=float(raw.get("distance", 0.0)),
                speed=float(raw["speed"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise MissingPositionError(planet, f"malformed oracle response ({exc})") from exc
    raise MissingPositionError(planet, f"oracle returned {type(raw).__name__}")


class EphemerisAdapter:
    """
    Call-through to an ephemeris oracle.

    The oracle must be deterministic: the solar return solver queries it
    repeatedly for nearby instants and relies on identical answers for
    identical arguments.
    """

    def __init__(self, oracle=None, ayanamsa: str = "lahiri"):
        self.oracle = oracle if oracle is not None else MeeusEphemeris(ayanamsa)

    def position(self, planet: str, instant: Instant,
                 location: Optional[GeoLocation] = None) -> RawPosition:
        lat = location.latitude if location else 0.0
        lon = location.longitude if location else 0.0
        try:
            raw = self.oracle.position(planet, instant, lat, lon)
        except MissingPositionError:
            raise
        except Exception as exc:
            raise MissingPositionError(planet, str(exc)) from exc
        if raw is None:
            raise MissingPositionError(planet, "oracle returned no position")
        return _coerce(planet, raw)

    def longitude(self, planet: str, instant: Instant,
                  location: Optional[GeoLocation] = None) -> float:
        return self.position(planet, instant, location).longitude

    def speed(self, planet: str, instant: Instant,
              location: Optional[GeoLocation] = None) -> float:
        return self.position(planet, instant, location).speed
