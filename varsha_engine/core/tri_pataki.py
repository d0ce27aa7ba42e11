"""
tri_pataki.py
=============
Tri-Pataki Chakra: planets of the annual chart grouped into the three
trines counted from the Varsha Lagna sign.

  dharma  1st, 5th, 9th signs
  artha   2nd, 6th, 10th signs
  kama    3rd, 7th, 11th signs

Placement is by sign, whatever the house system. The dominant sector is the
one holding the most planets; ties go to the earlier sector in the order
above.
"""

from dataclasses import dataclass
from typing import Tuple

from .annual_chart import AnnualChart

SECTOR_OFFSETS = (
    ("dharma", (0, 4, 8)),
    ("artha",  (1, 5, 9)),
    ("kama",   (2, 6, 10)),
)


@dataclass(frozen=True)
class TriPatakiSector:
    name:    str
    signs:   Tuple[int, ...]
    planets: Tuple[str, ...]


@dataclass(frozen=True)
class TriPatakiChakra:
    rising_sign: int
    sectors:     Tuple[TriPatakiSector, ...]

    @property
    def dominant(self) -> TriPatakiSector:
        return max(self.sectors, key=lambda s: len(s.planets))

    def sector(self, name: str) -> TriPatakiSector:
        for s in self.sectors:
            if s.name == name:
                return s
        raise KeyError(name)


def compute_tri_pataki(chart: AnnualChart) -> TriPatakiChakra:
    rising = chart.ascendant_sign_index
    sectors = []
    for name, offsets in SECTOR_OFFSETS:
        signs = tuple((rising + k) % 12 for k in offsets)
        planets = tuple(p.planet for p in chart.positions if p.sign_index in signs)
        sectors.append(TriPatakiSector(name=name, signs=signs, planets=planets))
    return TriPatakiChakra(rising_sign=rising, sectors=tuple(sectors))
