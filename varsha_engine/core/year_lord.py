"""
year_lord.py
============
Varshesh (year lord) selection.

Candidates, in priority order:
  1. weekday ruler of the solar return (local civil weekday at birth offset)
  2. ruler of the annual ascendant sign
  3. ruler of the Muntha sign

Each is scored on its annual-chart placement (see dignity.py). The highest
score wins; ties go to the earlier candidate.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .annual_chart import AnnualChart
from .dignity import WEEKDAY_LORDS, dignity_score, sign_lord
from .muntha import Muntha

ROLES = ("weekday", "ascendant", "muntha")


@dataclass(frozen=True)
class YearLordCandidate:
    planet: str
    role:   str
    score:  int


@dataclass(frozen=True)
class YearLord:
    planet:     str
    role:       str
    score:      int
    candidates: Tuple[YearLordCandidate, ...]


def weekday_lord(chart: AnnualChart) -> str:
    # datetime.weekday(): Monday = 0; WEEKDAY_LORDS starts on Sunday
    return WEEKDAY_LORDS[(chart.local_datetime.weekday() + 1) % 7]


def score_year_lord_candidates(chart: AnnualChart, muntha: Muntha) -> List[YearLordCandidate]:
    planets = (weekday_lord(chart), sign_lord(chart.ascendant_sign_index), muntha.lord)
    candidates = []
    for planet, role in zip(planets, ROLES):
        pos = chart.position(planet)
        candidates.append(YearLordCandidate(planet=planet, role=role,
                                            score=dignity_score(planet, pos.sign_index,
                                                                pos.house)))
    return candidates


def select_year_lord(candidates: List[YearLordCandidate]) -> YearLord:
    if not candidates:
        raise ValueError("no year lord candidates")
    best = candidates[0]
    for cand in candidates[1:]:
        # strictly greater: an equal score never displaces an earlier candidate
        if cand.score > best.score:
            best = cand
    return YearLord(planet=best.planet, role=best.role, score=best.score,
                    candidates=tuple(candidates))
