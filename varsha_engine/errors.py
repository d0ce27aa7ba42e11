"""
errors.py
=========
Exceptions raised by the annual timing engine.

Every failure is surfaced to the caller of ``compute_annual_timing``; the
engine never substitutes a default value for a missing position or root.
"""


class VarshaError(Exception):
    """Base class for annual-chart computation failures."""


class RootNotBracketedError(VarshaError):
    """The solar-return search window contains no crossing of the natal Sun."""

    def __init__(self, target_year: int, natal_sun: float, half_window_days: float):
        self.target_year = target_year
        self.natal_sun = natal_sun
        self.half_window_days = half_window_days
        super().__init__(
            f"No solar return bracketed for {target_year}: natal Sun "
            f"{natal_sun:.4f}° not crossed within ±{half_window_days:g} days "
            f"of the birthday"
        )


class MissingPositionError(VarshaError):
    """The ephemeris could not supply a position for a required planet."""

    def __init__(self, planet: str, reason: str = ""):
        self.planet = planet
        msg = f"No ephemeris position for {planet}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class InvalidYearError(VarshaError):
    """Target year precedes the birth year."""

    def __init__(self, target_year: int, birth_year: int):
        self.target_year = target_year
        self.birth_year = birth_year
        super().__init__(
            f"Target year {target_year} precedes birth year {birth_year}"
        )
