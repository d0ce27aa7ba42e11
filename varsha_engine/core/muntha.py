"""
muntha.py
=========
Muntha: the natal ascendant progressed one sign per completed year.
"""

from dataclasses import dataclass

from .angles import SIGNS
from .dignity import sign_lord


@dataclass(frozen=True)
class Muntha:
    sign_index: int
    house:      int      # counted from the annual ascendant sign, 1-12
    lord:       str
    longitude:  float

    @property
    def sign(self) -> str:
        return SIGNS[self.sign_index]


def advance_muntha(natal_asc_sign_index: int, elapsed_years: int,
                   annual_asc_sign_index: int,
                   natal_degree_in_sign: float = 0.0) -> Muntha:
    """
    Muntha = natal Lagna progressed 1 sign per completed year.
    The degree within the sign is carried over from the natal Lagna.
    """
    if elapsed_years < 0:
        raise ValueError(f"elapsed_years must be >= 0, got {elapsed_years}")
    sign = (natal_asc_sign_index + elapsed_years) % 12
    house = ((sign - annual_asc_sign_index + 12) % 12) + 1
    return Muntha(sign_index=sign, house=house, lord=sign_lord(sign),
                  longitude=sign * 30.0 + natal_degree_in_sign % 30.0)
