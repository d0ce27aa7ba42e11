"""
Varsha Engine
=============
Vedic annual chart (Varshaphala) timing engine.

Quick start:
    from varsha_engine import get_varshphal

    report = get_varshphal(
        year=1990, month=6, day=15,
        hour=10, minute=30, second=0,
        timezone_offset=5.5,
        latitude=28.6139,
        longitude=77.2090,
        target_year=2025,
    )
"""

from .core.varshphal import AnnualTiming, NatalChart, compute_annual_timing
from .tools.natal import build_natal_chart
from .tools.varshphal_tool import get_varshphal

__version__ = "1.0.0"
__all__ = [
    "AnnualTiming", "NatalChart", "compute_annual_timing",
    "build_natal_chart", "get_varshphal",
]
