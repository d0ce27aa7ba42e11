"""
test_ephemeris.py
=================
Meeus reference values for the default oracle, and the adapter's
error mapping.
"""

import pytest

from varsha_engine.core.angles import separation
from varsha_engine.core.ephemeris import (
    AU_KM, EphemerisAdapter, GeoLocation, MeeusEphemeris, RawPosition, get_ayanamsa,
    moon_position, nutation_and_obliquity, sun_longitude, tropical_position,
)
from varsha_engine.core.nakshatra import (
    NAKSHATRA_LORDS, nakshatra_index, nakshatra_name, nakshatra_owner, nakshatra_pada,
)
from varsha_engine.core.timebase import Instant, julian_centuries
from varsha_engine.errors import MissingPositionError

AYANAMSA_TOLERANCE = 0.1


def test_ayanamsa_values():
    # Lahiri near 24.1° around 2020 (T = 0.2)
    assert get_ayanamsa(0.2, "lahiri") == pytest.approx(24.13, abs=AYANAMSA_TOLERANCE)
    assert get_ayanamsa(0.0, "raman") < get_ayanamsa(0.0, "lahiri") < get_ayanamsa(0.0, "fagan")
    with pytest.raises(ValueError):
        get_ayanamsa(0.0, "tropical")


def test_sun_meeus_example_25a():
    # 1992 Oct 13.0 TD: apparent longitude 199°.90895 (low accuracy method)
    T = julian_centuries(2448908.5)
    dpsi, _, _ = nutation_and_obliquity(T)
    lon, R = sun_longitude(T, dpsi)
    assert lon == pytest.approx(199.90895, abs=0.01)
    assert R == pytest.approx(0.99766, abs=1e-4)


def test_moon_meeus_example_47a():
    # 1992 Apr 12.0 TD: λ = 133°.162655, β = -3°.229126, Δ = 368409.7 km
    T = julian_centuries(2448724.5)
    dpsi, _, _ = nutation_and_obliquity(T)
    lon, lat, dist = moon_position(T, dpsi)
    assert lon == pytest.approx(133.162655, abs=0.005)
    assert lat == pytest.approx(-3.229126, abs=0.02)
    assert dist == pytest.approx(368409.7, abs=5.0)


def test_nodes_are_opposite():
    jd = 2451545.0
    rahu, _, _ = tropical_position("Rahu", jd)
    ketu, _, _ = tropical_position("Ketu", jd)
    assert separation(rahu, ketu) == pytest.approx(180.0)


def test_planet_distances_plausible():
    jd = 2451545.0
    assert 0.5 < tropical_position("Mercury", jd)[2] < 1.5
    assert 3.9 < tropical_position("Jupiter", jd)[2] < 6.5
    moon_au = tropical_position("Moon", jd)[2]
    assert 356000 / AU_KM < moon_au < 407000 / AU_KM


def test_meeus_oracle_speeds():
    oracle = MeeusEphemeris("lahiri")
    t = Instant.from_calendar(2024, 3, 1, 0.0)
    sun = oracle.position("Sun", t)
    moon = oracle.position("Moon", t)
    assert isinstance(sun, RawPosition)
    assert 0.95 < sun.speed < 1.03
    assert 11.5 < moon.speed < 15.5
    assert oracle.position("Rahu", t).speed < 0
    assert 0.0 <= sun.longitude < 360.0


def test_meeus_oracle_rejects_unknown_planet():
    with pytest.raises(MissingPositionError) as exc:
        MeeusEphemeris().position("Pluto", Instant(2451545.0))
    assert exc.value.planet == "Pluto"


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------

def test_adapter_wraps_oracle_failure(linear_oracle):
    adapter = EphemerisAdapter(linear_oracle(2451545.0, {}, fail={"Mars"}))
    with pytest.raises(MissingPositionError) as exc:
        adapter.position("Mars", Instant(2451545.0), GeoLocation(0.0, 0.0))
    assert exc.value.planet == "Mars"
    assert isinstance(exc.value.__cause__, RuntimeError)


def test_adapter_rejects_empty_and_malformed_answers(linear_oracle):
    adapter = EphemerisAdapter(linear_oracle(2451545.0, {}, none_for={"Venus"}))
    with pytest.raises(MissingPositionError):
        adapter.position("Venus", Instant(2451545.0))

    class Broken:
        def position(self, planet, instant, lat, lon):
            return {"latitude": 0.0}

    with pytest.raises(MissingPositionError):
        EphemerisAdapter(Broken()).position("Sun", Instant(2451545.0))


def test_adapter_normalizes_mapping_answers(linear_oracle):
    adapter = EphemerisAdapter(linear_oracle(2451545.0, {"Sun": 359.0}))
    pos = adapter.position("Sun", Instant(2451547.0))
    assert pos.longitude == pytest.approx(359.0 + 2 * 360.0 / 365.2422 - 360.0)
    assert adapter.speed("Sun", Instant(2451547.0)) > 0


# ---------------------------------------------------------------------------
# Nakshatra
# ---------------------------------------------------------------------------

def test_nakshatra_calculation():
    assert nakshatra_index(0.0) == 0
    assert nakshatra_name(0.0) == "Ashwini"
    assert nakshatra_owner(0.0) == "Ketu"
    # 3rd nakshatra (Krittika) is Sun-ruled
    assert nakshatra_owner(30.0) == "Sun"
    assert nakshatra_name(359.99) == "Revati"
    assert nakshatra_owner(359.99) == "Mercury"
    assert nakshatra_pada(13.0) == 4
    assert len(NAKSHATRA_LORDS) == 27
