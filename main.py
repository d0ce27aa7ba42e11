"""
Varsha Engine — FastAPI Backend v1.0
====================================
Endpoints:
  POST /api/varshphal        — Annual Solar Return (Varshphal / Tajika)
  GET  /api/health           — Health check
"""

import logging
import os
from datetime import date, datetime
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from varsha_engine import __version__, get_varshphal
from varsha_engine.config import AYANAMSA_PATTERN, HOUSE_SYSTEM_PATTERN, EngineConfig
from varsha_engine.errors import InvalidYearError, VarshaError

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
log = logging.getLogger(__name__)

app = FastAPI(
    title="Varsha Engine API",
    version=__version__,
    description="Vedic annual chart engine: solar return, Muntha, year lord, "
                "Sahams, Tajika aspects, Mudda Dasha",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

ENGINE_CONFIG = EngineConfig.from_env()


# ── Request Models ─────────────────────────────────────────────

class VarshphalRequest(BaseModel):
    year:            int   = Field(..., ge=1800, le=2100)
    month:           int   = Field(..., ge=1,    le=12)
    day:             int   = Field(..., ge=1,    le=31)
    hour:            int   = Field(12,  ge=0,    le=23)
    minute:          int   = Field(0,   ge=0,    le=59)
    second:          int   = Field(0,   ge=0,    le=59)
    timezone_offset: float = Field(0.0, ge=-12,  le=14)
    latitude:        float = Field(..., ge=-90,  le=90)
    longitude:       float = Field(..., ge=-180, le=180)
    ayanamsa:        Optional[str] = Field(None, pattern=AYANAMSA_PATTERN)
    house_system:    Optional[str] = Field(None, pattern=HOUSE_SYSTEM_PATTERN)
    target_year:     int   = Field(..., ge=1800, le=2100)
    today_date:      Optional[str] = Field(None,
                          description="Current date YYYY-MM-DD for Mudda Dasha")


# ── Utilities ──────────────────────────────────────────────────

def _parse_date(date_str: Optional[str]) -> date:
    if date_str:
        try:
            return datetime.strptime(date_str, "%Y-%m-%d").date()
        except ValueError:
            raise HTTPException(status_code=400,
                                detail=f"today_date must be YYYY-MM-DD, got '{date_str}'")
    return date.today()


# ── Endpoints ──────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "service": "Varsha Engine API",
        "version": __version__,
        "ayanamsa": ENGINE_CONFIG.ayanamsa,
        "house_system": ENGINE_CONFIG.house_system,
        "endpoints": [
            "POST /api/varshphal",
        ],
    }


@app.post("/api/varshphal")
def varshphal_endpoint(data: VarshphalRequest):
    """
    Generate a complete Varshphal (Solar Return / Annual Chart).

    Returns:
    • Solar return exact moment (bisection on the Sun's sidereal longitude)
    • Annual chart — all 9 planets in annual houses
    • Muntha — progressed ascendant and its annual house
    • Varshesh — year lord with candidate scores
    • Tajika aspects — orb and applying / separating
    • 18 Sahams (Arabic sensitive points)
    • Mudda Dasha — 360-day periods with sub-periods, and the current period
    """
    today = _parse_date(data.today_date)
    try:
        result = get_varshphal(
            year=data.year, month=data.month, day=data.day,
            hour=data.hour, minute=data.minute, second=data.second,
            timezone_offset=data.timezone_offset,
            latitude=data.latitude, longitude=data.longitude,
            target_year=data.target_year,
            ayanamsa=data.ayanamsa,
            house_system=data.house_system,
            today=today,
            config=ENGINE_CONFIG,
        )
    except InvalidYearError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (VarshaError, ValueError) as e:
        log.warning("Varshphal request failed: %s", e)
        raise HTTPException(status_code=400, detail=f"Varshphal error: {e}")

    return {"success": True, **result}
