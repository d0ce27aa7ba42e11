"""
test_sahams_tajika.py
=====================
Sahams (day/night formulae) and Tajika aspects with orbs.
"""

import pytest

from varsha_engine.core.sahams import SAHAM_CATALOG, compute_sahams
from varsha_engine.core.tajika import (
    ASPECT_PLANETS, find_tajika_aspects, is_applying, match_aspect,
)


# ---------------------------------------------------------------------------
# Sahams
# ---------------------------------------------------------------------------

def _by_name(sahams):
    return {s.name: s for s in sahams}


def test_full_saham_catalog(make_chart):
    sahams = compute_sahams(make_chart({"Sun": 250.0, "Moon": 100.0}))
    assert len(sahams) == len(SAHAM_CATALOG) == 18
    assert len({s.name for s in sahams}) == 18
    assert all(0.0 <= s.longitude < 360.0 for s in sahams)
    assert all(1 <= s.house <= 12 for s in sahams)


def test_day_chart_punya(make_chart):
    chart = make_chart({"Sun": 250.0, "Moon": 100.0}, ascendant=10.0)
    assert chart.is_day_chart
    punya = _by_name(compute_sahams(chart))["Punya"]
    assert punya.longitude == pytest.approx(220.0)      # 10 + 100 - 250
    assert punya.sign_index == 7
    assert punya.house == 8
    assert punya.formula == "Asc + Moon - Sun"


def test_night_chart_swaps_terms(make_chart):
    chart = make_chart({"Sun": 70.0, "Moon": 100.0}, ascendant=10.0)
    assert not chart.is_day_chart
    punya = _by_name(compute_sahams(chart))["Punya"]
    assert punya.longitude == pytest.approx(340.0)      # 10 + 70 - 100
    assert punya.formula == "Asc + Sun - Moon"
    assert punya.house == 12


def test_saham_uses_exact_ascendant_degree(make_chart):
    chart = make_chart({"Sun": 250.0, "Jupiter": 255.5}, ascendant=29.5)
    yashas = _by_name(compute_sahams(chart))["Yashas"]
    assert yashas.longitude == pytest.approx(35.0)
    assert yashas.sign_index == 1
    assert yashas.house == 2


# ---------------------------------------------------------------------------
# Tajika aspects
# ---------------------------------------------------------------------------

def test_conjunction_orb_boundary_is_inclusive():
    assert match_aspect(0.0, 12.0) == (0, pytest.approx(12.0))
    assert match_aspect(0.0, 12.0001) is None


def test_aspect_orbs_per_angle():
    assert match_aspect(0.0, 66.0) == (60, pytest.approx(6.0))
    assert match_aspect(0.0, 67.0) is None
    assert match_aspect(0.0, 97.0) == (90, pytest.approx(7.0))
    assert match_aspect(10.0, 138.0) == (120, pytest.approx(8.0))
    assert match_aspect(0.0, 189.0) == (180, pytest.approx(9.0))


def test_aspect_found_either_way_round():
    assert match_aspect(0.0, 300.0) == (60, pytest.approx(0.0))
    assert match_aspect(350.0, 5.0) is None
    assert match_aspect(355.0, 5.0) == (0, pytest.approx(10.0))


def test_applying_and_separating(make_chart):
    applying = make_chart({"Sun": 0.0, "Moon": 350.0, "Mars": 200.0,
                           "Mercury": 150.0, "Jupiter": 230.0, "Venus": 40.0,
                           "Saturn": 270.0})
    rec = [a for a in find_tajika_aspects(applying) if (a.planet_a, a.planet_b) == ("Sun", "Moon")]
    assert len(rec) == 1
    assert rec[0].name == "conjunction"
    assert rec[0].orb == pytest.approx(10.0)
    assert rec[0].applying

    sep = make_chart({"Sun": 0.0, "Moon": 10.0})
    assert not is_applying(sep.position("Sun"), sep.position("Moon"), 0, 0.01)


def test_retrograde_planet_can_apply(make_chart):
    # Mars behind Saturn, Saturn retrograding back towards it
    chart = make_chart({"Mars": 100.0, "Saturn": 105.0},
                       speeds={"Mars": 0.5, "Saturn": -0.1})
    assert is_applying(chart.position("Mars"), chart.position("Saturn"), 0, 0.01)


def test_one_record_per_pair(make_chart):
    # everything at 0° Aries: 21 exact conjunctions, all separating
    aspects = find_tajika_aspects(make_chart({}))
    n = len(ASPECT_PLANETS)
    assert len(aspects) == n * (n - 1) // 2
    assert len({(a.planet_a, a.planet_b) for a in aspects}) == len(aspects)
    assert all(a.angle == 0 and a.orb == 0.0 for a in aspects)
    assert not any(a.applying for a in aspects)
    assert all(a.planet_a not in ("Rahu", "Ketu") and a.planet_b not in ("Rahu", "Ketu")
               for a in aspects)


def test_step_must_be_positive(make_chart):
    with pytest.raises(ValueError):
        find_tajika_aspects(make_chart({}), step_days=0.0)
