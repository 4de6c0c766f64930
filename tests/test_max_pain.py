"""Tests for max pain and open-interest aggregates."""

import numpy as np
import pytest
from greeksengine.max_pain import (
    pain_curve, max_pain, put_call_ratio, estimate_max_pain,
)

STRIKES = [100, 110, 120]
CALL_OI = [10, 20, 30]
PUT_OI = [30, 20, 10]


class TestPainCurve:
    def test_hand_computed(self):
        np.testing.assert_allclose(pain_curve(STRIKES, CALL_OI, PUT_OI),
                                   [400.0, 200.0, 400.0])

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            pain_curve(STRIKES, [1, 2], PUT_OI)

    def test_empty(self):
        with pytest.raises(ValueError):
            pain_curve([], [], [])

    def test_negative_oi(self):
        with pytest.raises(ValueError):
            pain_curve(STRIKES, [1, -2, 3], PUT_OI)


class TestMaxPain:
    def test_hand_computed(self):
        assert max_pain(STRIKES, CALL_OI, PUT_OI) == 110.0

    def test_unsorted_input(self):
        assert max_pain([120, 100, 110], [30, 10, 20], [10, 30, 20]) == 110.0

    def test_tie_goes_to_lowest_strike(self):
        assert max_pain([110, 100], [0, 1], [1, 0]) == 100.0

    def test_put_heavy_strike_pulls_max_pain_up(self):
        strikes = np.arange(24500, 25601, 100)
        call_oi = np.full(strikes.shape, 1000.0)
        put_oi = np.full(strikes.shape, 1000.0)
        put_oi[-2] = 50_000.0
        assert max_pain(strikes, call_oi, put_oi) == 25500.0


class TestRatios:
    def test_pcr(self):
        assert put_call_ratio(CALL_OI, PUT_OI) == pytest.approx(1.0)
        assert put_call_ratio([100], [75]) == pytest.approx(0.75)

    def test_pcr_no_call_oi(self):
        with pytest.raises(ValueError):
            put_call_ratio([0, 0], [10, 20])

    def test_estimate(self):
        assert estimate_max_pain(52_800_000, 45_200_000, 25142.3) == 25135

    def test_estimate_put_heavy(self):
        assert estimate_max_pain(1_000_000, 4_000_000, 19500) == 19503
