"""
test_angles.py
==============
Angle arithmetic and the Instant day-count.
"""

import math
from datetime import datetime, timezone

import pytest
from hypothesis import given, strategies as st

from varsha_engine.core.angles import (
    degree_in_sign, dms, normalize, orb_distance, separation, sign_index,
    sign_name, signed_normalize,
)
from varsha_engine.core.timebase import Instant, gregorian_to_jd, jd_to_gregorian

finite = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
longitudes = st.floats(min_value=0.0, max_value=360.0, exclude_max=True,
                       allow_nan=False, allow_infinity=False)


@given(finite)
def test_normalize_range_and_idempotence(x):
    n = normalize(x)
    assert 0.0 <= n < 360.0
    assert normalize(n) == n


@given(finite)
def test_signed_normalize_range(x):
    s = signed_normalize(x)
    assert -180.0 < s <= 180.0
    assert math.isclose(normalize(s), normalize(x), abs_tol=1e-6) or \
        math.isclose(abs(normalize(s) - normalize(x)), 360.0, abs_tol=1e-6)


@given(longitudes, longitudes)
def test_separation_is_symmetric_and_bounded(a, b):
    assert separation(a, b) == pytest.approx(separation(b, a))
    assert 0.0 <= separation(a, b) <= 180.0


def test_normalize_edges():
    assert normalize(360.0) == 0.0
    assert normalize(-30.0) == 330.0
    assert normalize(-1e-18) == 0.0
    assert signed_normalize(180.0) == 180.0
    assert signed_normalize(190.0) == -170.0


def test_orb_distance_both_ways_round():
    # a 300° gap is a 60° sextile the other way round
    assert orb_distance(0.0, 300.0, 60) == pytest.approx(0.0)
    assert orb_distance(10.0, 200.0, 180) == pytest.approx(10.0)
    assert orb_distance(355.0, 5.0, 0) == pytest.approx(10.0)


def test_sign_helpers():
    assert sign_index(29.999) == 0
    assert sign_index(30.0) == 1
    assert sign_index(-1.0) == 11
    assert sign_name(125.0) == "Leo"
    assert degree_in_sign(365.5) == pytest.approx(5.5)
    assert dms(12.5) == "12°30'0.0\""


# ---------------------------------------------------------------------------
# Instant
# ---------------------------------------------------------------------------

def test_julian_day_conversion():
    # Meeus Example 7.a: 1957 Oct 4.81
    assert gregorian_to_jd(1957, 10, 4, 0.81 * 24) == pytest.approx(2436116.31, abs=1e-6)
    assert gregorian_to_jd(2000, 1, 1, 12.0) == 2451545.0
    y, m, d = jd_to_gregorian(2436116.31)
    assert (y, m) == (1957, 10)
    assert d == pytest.approx(4.81, abs=1e-6)


def test_instant_datetime_round_trip_and_arithmetic():
    dt = datetime(2021, 3, 20, 9, 37, 12, tzinfo=timezone.utc)
    t = Instant.from_datetime(dt)
    assert abs((t.to_datetime() - dt).total_seconds()) < 1e-3
    assert Instant.from_datetime(dt.replace(tzinfo=None)) == t

    later = t + 1.5
    assert later - t == pytest.approx(1.5)
    assert (later - 1.5).jd == pytest.approx(t.jd)
    assert t < later
    assert max(t, later) is later


def test_shifted_datetime_crosses_midnight():
    t = Instant.from_datetime(datetime(2024, 1, 6, 20, 0, tzinfo=timezone.utc))
    local = t.shifted_datetime(5.5)
    assert local.tzinfo is None
    assert abs((local - datetime(2024, 1, 7, 1, 30)).total_seconds()) < 0.01
