"""
varshphal_tool.py  --  Varshphal API tool
=========================================
Wraps the core annual timing engine for the FastAPI endpoint.

    POST /api/varshphal       -- Annual chart for a target year
"""

from datetime import date, datetime
from typing import Optional

from ..config import DEFAULT_CONFIG, EngineConfig
from ..core.angles import SIGNS, dms, sign_name
from ..core.annual_chart import AnnualChart
from ..core.mudda import MuddaPeriod, current_mudda
from ..core.nakshatra import nakshatra_name, nakshatra_owner, nakshatra_pada
from ..core.varshphal import AnnualTiming, compute_annual_timing
from .natal import build_natal_chart


def _format_chart(chart: AnnualChart) -> dict:
    planets = {}
    for pos in chart.positions:
        planets[pos.planet] = {
            "sidereal_longitude": round(pos.longitude, 4),
            "sign":               SIGNS[pos.sign_index],
            "degree_in_sign":     round(pos.degree_in_sign, 4),
            "degree_formatted":   dms(pos.degree_in_sign),
            "nakshatra":          nakshatra_name(pos.longitude),
            "nakshatra_pada":     nakshatra_pada(pos.longitude),
            "house":              pos.house,
            "speed":              round(pos.speed, 6),
            "is_retrograde":      pos.is_retrograde,
        }
    return planets


def _format_mudda(p: MuddaPeriod) -> dict:
    return {
        "lord": p.planet,
        "start": p.start.isoformat(),
        "end": p.end.isoformat(),
        "duration_days": p.days,
        "sub_periods": [
            {"lord": s.planet, "start": s.start.isoformat(), "days": round(s.days, 2)}
            for s in p.sub_periods
        ],
    }


def format_annual_timing(timing: AnnualTiming, today: Optional[date] = None) -> dict:
    """AnnualTiming -> JSON-ready dict."""
    chart = timing.annual_chart
    asc = chart.ascendant
    muntha = timing.muntha
    year_lord = timing.year_lord
    lord_pos = chart.position(year_lord.planet)
    active = current_mudda(timing.mudda_periods, today) if today else None
    tri = timing.tri_pataki

    return {
        "meta": {
            "target_year":        chart.year,
            "solar_return_utc":   chart.instant.to_datetime().strftime("%Y-%m-%d %H:%M:%S UTC"),
            "solar_return_local": chart.local_datetime.strftime("%Y-%m-%d %H:%M:%S"),
            "solar_return_jd":    round(chart.instant.jd, 6),
            "is_day_chart":       chart.is_day_chart,
        },
        "varsha_lagna": {
            "sign":               sign_name(asc),
            "sidereal_longitude": round(asc, 4),
            "degree_formatted":   dms(asc % 30),
            "midheaven":          round(chart.midheaven, 4),
        },
        "houses": [
            {"house": i + 1, "sidereal_longitude": round(c, 4), "sign": sign_name(c)}
            for i, c in enumerate(chart.cusps)
        ],
        "muntha": {
            "longitude":    round(muntha.longitude, 4),
            "sign":         muntha.sign,
            "lord":         muntha.lord,
            "annual_house": muntha.house,
        },
        "varshesh": {
            "planet":        year_lord.planet,
            "role":          year_lord.role,
            "score":         year_lord.score,
            "sign":          SIGNS[lord_pos.sign_index],
            "house":         lord_pos.house,
            "is_retrograde": lord_pos.is_retrograde,
            "candidates": [
                {"planet": c.planet, "role": c.role, "score": c.score}
                for c in year_lord.candidates
            ],
        },
        "annual_planets": _format_chart(chart),
        "tajika_aspects": [
            {
                "planets":  [a.planet_a, a.planet_b],
                "aspect":   a.name,
                "angle":    a.angle,
                "orb":      round(a.orb, 4),
                "max_orb":  a.max_orb,
                "applying": a.applying,
                "strength": round(a.strength, 3),
                "grade":    a.grade,
            }
            for a in timing.aspects
        ],
        "sahams": {
            s.name: {
                "longitude": round(s.longitude, 4),
                "sign":      SIGNS[s.sign_index],
                "degree":    round(s.longitude % 30, 2),
                "house":     s.house,
                "formula":   s.formula,
            }
            for s in timing.sahams
        },
        "pancha_vargiya_bala": {
            b.planet: {
                "uchcha":       round(b.uchcha, 3),
                "hadda":        b.hadda,
                "drekkana":     b.drekkana,
                "navamsha":     b.navamsha,
                "dwadashamsha": b.dwadashamsha,
                "total":        round(b.total, 3),
                "category":     b.category,
            }
            for b in timing.pancha_vargiya
        },
        "tri_pataki": {
            "rising_sign": SIGNS[tri.rising_sign],
            "sectors": {
                s.name: {"signs": [SIGNS[i] for i in s.signs], "planets": list(s.planets)}
                for s in tri.sectors
            },
            "dominant": tri.dominant.name,
        },
        "mudda_dasha": [_format_mudda(p) for p in timing.mudda_periods],
        "current_mudda": _format_mudda(active) if active else None,
    }


def get_varshphal(
    # Birth details (local civil time)
    year: int, month: int, day: int,
    hour: int, minute: int, second: int,
    timezone_offset: float,
    latitude: float,
    longitude: float,
    # Annual chart target
    target_year: Optional[int] = None,
    ayanamsa: Optional[str] = None,
    house_system: Optional[str] = None,
    today: Optional[date] = None,
    config: Optional[EngineConfig] = None,
) -> dict:
    """
    Generate a complete Varshphal (Solar Return Annual Chart).

    Steps:
    1. Compute the natal Sun, Moon and Lagna
    2. Find exact Solar Return moment for target_year
    3. Cast annual chart at SR moment
    4. Compute Muntha, Varshesh, Tajika aspects, Sahams, Mudda Dasha,
       Pancha-Vargiya Bala and Tri-Pataki Chakra
    """
    cfg = config or DEFAULT_CONFIG
    overrides = {k: v for k, v in (("ayanamsa", ayanamsa), ("house_system", house_system))
                 if v is not None}
    if overrides:
        cfg = EngineConfig(**{**cfg.model_dump(), **overrides})
    if target_year is None:
        target_year = datetime.now().year
    if today is None:
        today = date.today()

    # Step 1: Natal chart
    natal = build_natal_chart(
        year=year, month=month, day=day,
        hour=hour, minute=minute, second=second,
        timezone_offset=timezone_offset,
        latitude=latitude, longitude=longitude,
        ayanamsa=cfg.ayanamsa,
        house_system=cfg.house_system,
    )

    # Step 2-4: Varshphal
    timing = compute_annual_timing(natal, target_year, config=cfg)

    return {
        "natal_summary": {
            "lagna":          sign_name(natal.ascendant),
            "sun_sign":       sign_name(natal.sun_longitude),
            "moon_sign":      sign_name(natal.moon_longitude),
            "moon_nakshatra": nakshatra_name(natal.moon_longitude),
            "nakshatra_lord": nakshatra_owner(natal.moon_longitude),
        },
        "settings": {"ayanamsa": cfg.ayanamsa, "house_system": cfg.house_system},
        "varshphal": format_annual_timing(timing, today),
    }
