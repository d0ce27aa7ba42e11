"""
test_solar_return.py
====================
Solar return root finder against linear-motion and Meeus ephemerides.
"""

import logging
from datetime import datetime, timezone

import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from varsha_engine.config import EngineConfig
from varsha_engine.core.angles import signed_normalize
from varsha_engine.core.ephemeris import EphemerisAdapter, MeeusEphemeris
from varsha_engine.core.solar_return import SolarReturnSolver, anniversary, solve_solar_return
from varsha_engine.core.timebase import Instant
from varsha_engine.errors import RootNotBracketedError

ROOT_TOLERANCE_DEG = 0.0001
SUN_RATE = 360.0 / 365.2422

BIRTH = Instant.from_datetime(datetime(1990, 4, 14, 6, 0, tzinfo=timezone.utc))

# 00:30 on 1 January at UTC+5:30 is still 31 December in UT
NEW_YEAR_BIRTH = Instant.from_datetime(datetime(1989, 12, 31, 19, 0, tzinfo=timezone.utc))
IST = 5.5

longitudes = st.floats(min_value=0.0, max_value=360.0, exclude_max=True,
                       allow_nan=False, allow_infinity=False)


def _solver(oracle, **cfg):
    return SolarReturnSolver(EphemerisAdapter(oracle), EngineConfig(**cfg))


def test_solar_return_fifteen_aries_thirty_years_on(linear_oracle):
    oracle = linear_oracle(BIRTH.jd, {"Sun": 15.0})
    adapter = EphemerisAdapter(oracle)
    t = SolarReturnSolver(adapter).solve(15.0, 2020, BIRTH)

    residual = signed_normalize(adapter.longitude("Sun", t) - 15.0)
    assert abs(residual) < ROOT_TOLERANCE_DEG
    # 10958 calendar days hold 30 years plus ~0.73 day of solar motion
    assert t - anniversary(BIRTH, 2020) == pytest.approx(-0.73, abs=0.02)


def test_solver_widens_window_once(linear_oracle, caplog):
    natal = 100.0
    center = anniversary(BIRTH, 2030)
    # crossing 4 days after the anniversary: outside ±2, inside ±6
    oracle = linear_oracle(center.jd + 4.0, {"Sun": natal})
    with caplog.at_level(logging.WARNING, logger="varsha_engine.core.solar_return"):
        t = _solver(oracle).solve(natal, 2030, BIRTH)
    assert t - center == pytest.approx(4.0, abs=1e-6)
    assert any("widening" in r.getMessage() for r in caplog.records)


def test_solver_raises_when_root_outside_widened_window(linear_oracle):
    center = anniversary(BIRTH, 2030)
    oracle = linear_oracle(center.jd + 7.0, {"Sun": 100.0})
    with pytest.raises(RootNotBracketedError) as exc:
        _solver(oracle).solve(100.0, 2030, BIRTH)
    assert exc.value.target_year == 2030
    assert exc.value.half_window_days == 6.0


def test_stationary_sun_is_never_bracketed(linear_oracle):
    oracle = linear_oracle(BIRTH.jd, {"Sun": 190.0}, speeds={"Sun": 0.0})
    with pytest.raises(RootNotBracketedError):
        _solver(oracle).solve(10.0, 2000, BIRTH)


def test_solver_validates_natal_longitude(linear_oracle):
    with pytest.raises(ValueError):
        _solver(linear_oracle(BIRTH.jd, {})).solve(360.0, 2000, BIRTH)


def test_iteration_count_is_configurable(linear_oracle):
    oracle = linear_oracle(BIRTH.jd, {"Sun": 15.0})
    coarse = _solver(oracle, bisection_iterations=10).solve(15.0, 2020, BIRTH)
    fine = _solver(oracle, bisection_iterations=60).solve(15.0, 2020, BIRTH)
    # 10 halvings of a 4-day bracket leave ~0.004 day
    assert abs(coarse - fine) < 4.0 / 2 ** 10
    assert abs(signed_normalize(EphemerisAdapter(oracle).longitude("Sun", fine) - 15.0)) < 1e-7


def test_leap_day_birthday_falls_back_to_feb_28():
    leap_birth = Instant.from_datetime(datetime(2000, 2, 29, 12, 0, tzinfo=timezone.utc))
    a = anniversary(leap_birth, 2021).to_datetime()
    expected = datetime(2021, 2, 28, 12, 0, tzinfo=timezone.utc)
    assert abs((a - expected).total_seconds()) < 0.01
    b = anniversary(leap_birth, 2024).to_datetime()
    assert (b.month, b.day) == (2, 29)


def test_solar_return_with_meeus_ephemeris():
    oracle = MeeusEphemeris("lahiri")
    birth = Instant.from_datetime(datetime(1990, 6, 15, 5, 0, tzinfo=timezone.utc))
    natal_sun = oracle.position("Sun", birth).longitude

    t = solve_solar_return(natal_sun, 2025, birth)
    assert abs(signed_normalize(oracle.position("Sun", t).longitude - natal_sun)) < ROOT_TOLERANCE_DEG
    assert abs(t - anniversary(birth, 2025)) < 2.0


def test_anniversary_follows_local_civil_birthday():
    a = anniversary(NEW_YEAR_BIRTH, 2020, IST)
    assert abs((a.shifted_datetime(IST) - datetime(2020, 1, 1, 0, 30)).total_seconds()) < 0.01
    assert a.to_datetime().date().isoformat() == "2019-12-31"
    # the birth year's own anniversary is the birth moment
    assert abs(anniversary(NEW_YEAR_BIRTH, 1990, IST) - NEW_YEAR_BIRTH) < 1e-6


def test_new_year_birth_east_of_greenwich(linear_oracle):
    oracle = linear_oracle(NEW_YEAR_BIRTH.jd, {"Sun": 256.5})
    solver = _solver(oracle)

    age_zero = solver.solve(256.5, 1990, NEW_YEAR_BIRTH, utc_offset_hours=IST)
    assert abs(age_zero - NEW_YEAR_BIRTH) < 1e-6

    t = solver.solve(256.5, 2020, NEW_YEAR_BIRTH, utc_offset_hours=IST)
    assert t.shifted_datetime(IST).year == 2020
    # 10957 calendar days hold 30 years less ~0.27 day of solar motion
    assert t - anniversary(NEW_YEAR_BIRTH, 2020, IST) == pytest.approx(0.27, abs=0.02)


def test_leap_day_birthday_read_in_local_time():
    # 29 Feb 03:00 at UTC+5:30 is 28 Feb in UT
    birth = Instant.from_datetime(datetime(2000, 2, 28, 21, 30, tzinfo=timezone.utc))
    a = anniversary(birth, 2021, IST).shifted_datetime(IST)
    assert abs((a - datetime(2021, 2, 28, 3, 0)).total_seconds()) < 0.01
    b = anniversary(birth, 2024, IST).shifted_datetime(IST)
    assert abs((b - datetime(2024, 2, 29, 3, 0)).total_seconds()) < 0.01


@pytest.mark.parametrize("natal", [0.0, 359.99])
def test_natal_sun_at_the_aries_seam(linear_oracle, natal):
    oracle = linear_oracle(BIRTH.jd, {"Sun": natal})
    t = _solver(oracle).solve(natal, 2020, BIRTH)
    residual = signed_normalize(EphemerisAdapter(oracle).longitude("Sun", t) - natal)
    assert abs(residual) < ROOT_TOLERANCE_DEG


def test_opposite_sun_is_not_a_crossing(linear_oracle):
    natal = 100.0
    center = anniversary(BIRTH, 2030)
    # offset sits near ±180° all across both windows and flips sign at the centre
    oracle = linear_oracle(center.jd, {"Sun": natal + 180.0})
    solver = _solver(oracle)
    assert solver._bracket(natal, center, 2.0, None) is None
    with pytest.raises(RootNotBracketedError):
        solver.solve(natal, 2030, BIRTH)


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(natal=longitudes,
       shift=st.floats(min_value=-1.5, max_value=1.5),
       year=st.integers(min_value=1990, max_value=2100))
def test_root_lands_on_natal_longitude(linear_oracle, natal, shift, year):
    # crossing placed `shift` days away from the birth moment's phase
    oracle = linear_oracle(BIRTH.jd + shift, {"Sun": natal})
    adapter = EphemerisAdapter(oracle)
    t = SolarReturnSolver(adapter).solve(natal, year, BIRTH)
    assert abs(signed_normalize(adapter.longitude("Sun", t) - natal)) < ROOT_TOLERANCE_DEG
    assert abs(t - anniversary(BIRTH, year)) <= 6.0
