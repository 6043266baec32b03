from __future__ import annotations

import math

import pytest

from relocation_api.scoring.normalize import normalize, round_half_up, weather_severity_penalty


def test_normalize_endpoints_and_midpoint():
    assert normalize(0, 0, 300) == 0
    assert normalize(300, 0, 300) == 100
    assert normalize(150, 0, 300) == 50
    assert normalize(0, 0, 300, higher_is_better=False) == 100
    assert normalize(300, 0, 300, higher_is_better=False) == 0


def test_normalize_clamps_out_of_range_values():
    assert normalize(-20, 0, 40) == 0
    assert normalize(500, 0, 40) == 100
    assert normalize(0.2, 1, 5, higher_is_better=False) == 100


@pytest.mark.parametrize("missing", [None, float("nan"), math.nan])
def test_missing_values_return_default(missing):
    assert normalize(missing, 0, 100) == 50
    assert normalize(missing, 0, 100, higher_is_better=False, default=17) == 17


def test_equal_bounds_are_rejected():
    with pytest.raises(ValueError):
        normalize(5, 3, 3)


@pytest.mark.parametrize("lo,hi", [(0, 300), (1, 5), (45, 90), (0, 55), (1, 15)])
def test_direct_and_inverted_scores_are_complementary(lo, hi):
    step = (hi - lo) / 37
    v = lo - 3 * step
    while v <= hi + 3 * step:
        up = normalize(v, lo, hi, True)
        down = normalize(v, lo, hi, False)
        assert isinstance(up, int) and isinstance(down, int)
        assert 0 <= up <= 100 and 0 <= down <= 100
        assert abs(up + down - 100) <= 1
        v += step


def test_normalize_is_monotone_for_higher_is_better():
    values = [40 + i * 0.37 for i in range(160)]
    scores = [normalize(v, 45, 90) for v in values]
    assert scores == sorted(scores)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(57.5) == 58
    assert round_half_up(0.49) == 0


@pytest.mark.parametrize("code,penalty", [
    (211, 70), (302, 20), (501, 40), (601, 60), (741, 50),
    (800, 0), (801, 10), (804, 10), (810, 0), (900, 0), (None, 0), (0, 0),
])
def test_weather_severity_penalty(code, penalty):
    assert weather_severity_penalty(code) == penalty
