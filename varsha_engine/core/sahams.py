"""
sahams.py
=========
Tajika Sahams (Arabic Parts): sensitive points of the form

    Saham = Asc + A - B   (mod 360)

In a night chart A and B swap places.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .angles import normalize, sign_index
from .annual_chart import AnnualChart

# (name, added planet, subtracted planet) for a day chart
SAHAM_CATALOG: Tuple[Tuple[str, str, str], ...] = (
    ("Punya",       "Moon",    "Sun"),
    ("Vidya",       "Mercury", "Sun"),
    ("Yashas",      "Jupiter", "Sun"),
    ("Mitra",       "Moon",    "Mercury"),
    ("Dhana",       "Jupiter", "Moon"),
    ("Karma",       "Saturn",  "Sun"),
    ("Vivaha",      "Venus",   "Saturn"),
    ("Putra",       "Jupiter", "Moon"),
    ("Pitri",       "Saturn",  "Sun"),
    ("Matri",       "Moon",    "Venus"),
    ("Samartha",    "Mars",    "Saturn"),
    ("Asha",        "Saturn",  "Venus"),
    ("Roga",        "Saturn",  "Mars"),
    ("Raja",        "Sun",     "Saturn"),
    ("Mrityu",      "Saturn",  "Moon"),
    ("Bhratri",     "Jupiter", "Saturn"),
    ("Mahatmya",    "Jupiter", "Moon"),
    ("Karyasiddhi", "Saturn",  "Sun"),
)


@dataclass(frozen=True)
class Saham:
    name:       str
    longitude:  float
    sign_index: int
    house:      int
    formula:    str


def compute_sahams(chart: AnnualChart) -> List[Saham]:
    asc = chart.ascendant
    day = chart.is_day_chart
    sahams = []
    for name, plus, minus in SAHAM_CATALOG:
        if not day:
            plus, minus = minus, plus
        lon = normalize(asc + chart.position(plus).longitude
                        - chart.position(minus).longitude)
        sahams.append(Saham(name=name, longitude=lon, sign_index=sign_index(lon),
                            house=chart.house_of(lon),
                            formula=f"Asc + {plus} - {minus}"))
    return sahams
