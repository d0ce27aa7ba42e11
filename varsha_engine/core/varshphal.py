"""
varshphal.py  —  Vedic Annual Chart (Varshaphal / Tajika Shastra)
=================================================================
Annual timing for one person and one target year:

1.  Solar Return finder   -- bisection on the Sun's sidereal longitude
2.  Annual chart cast     -- planetary positions and houses at the SR moment
3.  Muntha                -- progressed ascendant (one sign/year)
4.  Varshesh (Year Lord)  -- strongest of weekday, Lagna and Muntha lords
5.  Sahams                -- Tajika sensitive points
6.  Tajika aspects        -- orbs, applying / separating
7.  Mudda Dasha           -- 360-day compressed planetary periods
8.  Pancha-Vargiya Bala   -- five-fold strength of the seven planets
9.  Tri-Pataki Chakra     -- planets by dharma, artha and kama trines

Sources:
  - Bepin Behari "A Textbook of Varshaphala" (Motilal Banarsidass)
  - Saraswati "Tajika Shastra" (classical text)
  - Astrowindows blog (Muntha calculation manual)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config import DEFAULT_CONFIG, EngineConfig
from ..errors import InvalidYearError
from .angles import degree_in_sign, sign_index
from .annual_chart import AnnualChart, AnnualChartBuilder
from .ephemeris import EphemerisAdapter, GeoLocation
from .houses import HouseSystem
from .mudda import MuddaPeriod, partition_mudda
from .muntha import Muntha, advance_muntha
from .nakshatra import nakshatra_owner
from .pancha_vargiya import PanchaVargiyaBala, compute_pancha_vargiya
from .sahams import Saham, compute_sahams
from .solar_return import SolarReturnSolver
from .tajika import TajikaAspectRecord, find_tajika_aspects
from .timebase import Instant
from .tri_pataki import TriPatakiChakra, compute_tri_pataki
from .year_lord import YearLord, score_year_lord_candidates, select_year_lord

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NatalChart:
    birth:            Instant
    latitude:         float
    longitude:        float
    utc_offset_hours: float
    sun_longitude:    float
    ascendant:        float
    moon_longitude:   float

    @property
    def birth_year(self) -> int:
        """Civil year of birth at the birth UTC offset."""
        return self.birth.shifted_datetime(self.utc_offset_hours).year

    @property
    def location(self) -> GeoLocation:
        return GeoLocation(self.latitude, self.longitude)


@dataclass(frozen=True)
class AnnualTiming:
    annual_chart:   AnnualChart
    muntha:         Muntha
    year_lord:      YearLord
    sahams:         Tuple[Saham, ...]
    aspects:        Tuple[TajikaAspectRecord, ...]
    mudda_periods:  Tuple[MuddaPeriod, ...]
    pancha_vargiya: Tuple[PanchaVargiyaBala, ...]
    tri_pataki:     TriPatakiChakra


def compute_annual_timing(natal_chart: NatalChart, target_year: int, *,
                          ephemeris=None, houses=None,
                          config: Optional[EngineConfig] = None) -> AnnualTiming:
    """
    Complete Varshphal for target_year.

    Args:
        natal_chart: birth moment, place and natal longitudes
        target_year: Gregorian year of the solar return
        ephemeris:   ephemeris oracle; defaults to MeeusEphemeris
        houses:      house-system collaborator; defaults to HouseSystem
        config:      EngineConfig; defaults to DEFAULT_CONFIG

    Raises InvalidYearError before any ephemeris query if target_year is
    earlier than the birth year.
    """
    cfg = config or DEFAULT_CONFIG
    birth_year = natal_chart.birth_year
    if target_year < birth_year:
        raise InvalidYearError(target_year, birth_year)

    adapter = ephemeris if isinstance(ephemeris, EphemerisAdapter) \
        else EphemerisAdapter(ephemeris, ayanamsa=cfg.ayanamsa)
    if houses is None:
        houses = HouseSystem(cfg.house_system, cfg.ayanamsa)
    location = natal_chart.location

    # 1. Solar return
    sr = SolarReturnSolver(adapter, cfg).solve(natal_chart.sun_longitude, target_year,
                                               natal_chart.birth, location,
                                               natal_chart.utc_offset_hours)

    # 2. Annual chart
    chart = AnnualChartBuilder(adapter, houses).build(
        sr, location, target_year, utc_offset_hours=natal_chart.utc_offset_hours)

    # 3. Muntha
    muntha = advance_muntha(sign_index(natal_chart.ascendant), target_year - birth_year,
                            chart.ascendant_sign_index,
                            natal_degree_in_sign=degree_in_sign(natal_chart.ascendant))

    # 4. Year lord
    year_lord = select_year_lord(score_year_lord_candidates(chart, muntha))

    # 5-6. Sahams and Tajika aspects
    sahams = compute_sahams(chart)
    aspects = find_tajika_aspects(chart, cfg.applying_step_days)

    # 7. Mudda Dasha from the annual Moon's nakshatra lord
    owner = nakshatra_owner(chart.position("Moon").longitude)
    mudda: List[MuddaPeriod] = partition_mudda(chart.local_datetime.date(), owner)

    # 8-9. Pancha-Vargiya Bala and Tri-Pataki Chakra
    balas = compute_pancha_vargiya(chart)
    tri_pataki = compute_tri_pataki(chart)

    log.info("Annual timing %d: solar return %s, lagna %.2f, muntha H%d, "
             "year lord %s, Mudda from %s",
             target_year, sr, chart.ascendant, muntha.house, year_lord.planet, owner)

    return AnnualTiming(annual_chart=chart, muntha=muntha, year_lord=year_lord,
                        sahams=tuple(sahams), aspects=tuple(aspects),
                        mudda_periods=tuple(mudda), pancha_vargiya=tuple(balas),
                        tri_pataki=tri_pataki)
