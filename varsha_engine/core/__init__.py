# Varsha Engine - Core modules
from .ephemeris import EphemerisAdapter, GeoLocation, MeeusEphemeris, RawPosition
from .houses import HouseFrame, HouseSystem, house_of
from .timebase import Instant
from .varshphal import AnnualTiming, NatalChart, compute_annual_timing

__all__ = [
    "EphemerisAdapter", "GeoLocation", "MeeusEphemeris", "RawPosition",
    "HouseFrame", "HouseSystem", "house_of",
    "Instant",
    "AnnualTiming", "NatalChart", "compute_annual_timing",
]
