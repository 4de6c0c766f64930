"""Tests for the scalar Greeks engine."""

import math

import pytest
from greeksengine import (
    OptionQuote, GreeksResult, InvalidParameters, CALL, PUT,
    compute_greeks, greeks, bs_price, implied_vol,
)

VALID_INPUTS = [
    (25142, 25100, 7, 15, 6.5),
    (25142, 25142, 30, 20, 6.5),
    (81200, 78000, 45, 13.5, 6.5),
    (100, 100, 365, 20, 5.0),
    (100, 140, 2, 60, 0.0),
    (19500, 19000, 1, 11, -0.5),
]


def test_bs_known_values():
    res = compute_greeks(100, 100, 365, 20, 5.0)
    assert res.call_price == 10.45
    assert res.put_price == 5.57
    assert res.delta == 0.6368
    assert res.gamma == pytest.approx(0.018762, abs=2e-6)
    assert res.vega == pytest.approx(37.52, abs=0.011)
    assert res.theta == -0.02
    assert res.rho == pytest.approx(53.2325, abs=2e-3)


class TestScenarios:
    def test_itm_weekly(self):
        res = compute_greeks(25142, 25100, 7, 15, 6.5)
        assert 0.5 < res.delta < 1.0
        assert res.gamma > 0
        assert res.call_price > res.put_price
        assert round(res.call_price, 2) == res.call_price
        assert round(res.put_price, 2) == res.put_price

    def test_atm_monthly_default_rate(self):
        res = compute_greeks(25142, 25142, 30, 20)
        assert 0.5 < res.delta < 0.6

    def test_default_rate_is_6_5(self):
        assert compute_greeks(25142, 25142, 30, 20) == compute_greeks(25142, 25142, 30, 20, 6.5)

    def test_negative_days_invalid(self):
        with pytest.raises(InvalidParameters) as ei:
            compute_greeks(25142, 25100, -1, 15)
        assert ei.value.parameter == "days_to_expiry"

    def test_result_type_and_wire_keys(self):
        res = compute_greeks(25142, 25100, 7, 15)
        assert isinstance(res, GreeksResult)
        assert set(res.to_dict()) == {
            "callPrice", "putPrice", "delta", "gamma", "theta", "vega", "rho",
        }
        assert res.to_dict()["callPrice"] == res.call_price


class TestProperties:
    @pytest.mark.parametrize("args", VALID_INPUTS)
    def test_put_call_parity(self, args):
        S, K, days, vol, rate = args
        g = greeks(OptionQuote(S, K, days, vol, rate))
        forward = S - K * math.exp(-rate / 100 * days / 365)
        assert g["call_price"] - g["put_price"] == pytest.approx(forward, rel=1e-6, abs=1e-8)

    @pytest.mark.parametrize("args", VALID_INPUTS)
    def test_rounded_parity(self, args):
        S, K, days, vol, rate = args
        res = compute_greeks(*args)
        forward = S - K * math.exp(-rate / 100 * days / 365)
        assert abs((res.call_price - res.put_price) - forward) <= 0.0101

    @pytest.mark.parametrize("args", VALID_INPUTS)
    def test_bounds(self, args):
        res = compute_greeks(*args)
        assert 0.0 <= res.delta <= 1.0
        assert res.gamma >= 0.0
        assert res.vega >= 0.0
        assert res.call_price >= 0.0
        assert res.put_price >= 0.0

    def test_prices_increase_with_vol(self):
        prices = [compute_greeks(25142, 25100, 7, v) for v in (10, 15, 20, 30)]
        calls = [p.call_price for p in prices]
        puts = [p.put_price for p in prices]
        assert all(a < b for a, b in zip(calls, calls[1:]))
        assert all(a < b for a, b in zip(puts, puts[1:]))

    def test_atm_zero_rate_symmetry(self):
        q = OptionQuote(25000, 25000, 21, 17, 0.0)
        assert bs_price(q, CALL) == pytest.approx(bs_price(q, PUT), abs=1e-8)
        res = compute_greeks(25000, 25000, 21, 17, 0.0)
        assert abs(res.call_price - res.put_price) <= 0.01

    def test_theta_negative_for_long_call(self):
        assert compute_greeks(25142, 25142, 30, 20).theta < 0

    def test_deterministic(self):
        assert compute_greeks(25142, 25100, 7, 15) == compute_greeks(25142, 25100, 7, 15)


class TestExtremes:
    def test_huge_ratio_saturates(self):
        res = compute_greeks(1e9, 1.0, 1, 1)
        assert res.delta == 1.0
        assert res.gamma == 0.0
        assert res.put_price == 0.0
        assert math.isfinite(res.call_price)

    def test_tiny_ratio_saturates(self):
        res = compute_greeks(1.0, 1e9, 1, 1)
        assert res.delta == 0.0
        assert res.call_price == 0.0
        assert math.isfinite(res.put_price)

    def test_ratio_underflow_saturates(self):
        res = compute_greeks(1e-200, 1e200, 7, 15)
        assert res.delta == 0.0
        assert res.gamma == 0.0
        assert res.call_price == 0.0
        assert math.isfinite(res.put_price)

    def test_ratio_overflow_saturates(self):
        res = compute_greeks(1e200, 1e-200, 7, 15)
        assert res.delta == 1.0
        assert res.put_price == 0.0
        assert math.isfinite(res.call_price)

    def test_atm_finite(self):
        g = greeks(OptionQuote(25142, 25142, 1, 0.5))
        assert all(math.isfinite(v) for v in g.values())


class TestValidation:
    @pytest.mark.parametrize("kwargs, parameter", [
        (dict(days_to_expiry=0), "days_to_expiry"),
        (dict(days_to_expiry=-1), "days_to_expiry"),
        (dict(volatility=0), "volatility"),
        (dict(volatility=-15), "volatility"),
        (dict(spot=0), "spot"),
        (dict(spot=-25142), "spot"),
        (dict(strike=0), "strike"),
        (dict(spot=float("nan")), "spot"),
        (dict(strike=float("inf")), "strike"),
        (dict(risk_free_rate=float("nan")), "risk_free_rate"),
        (dict(volatility="15"), "volatility"),
        (dict(spot=None), "spot"),
        (dict(days_to_expiry=True), "days_to_expiry"),
    ])
    def test_invalid(self, kwargs, parameter):
        base = dict(spot=25142, strike=25100, days_to_expiry=7, volatility=15,
                    risk_free_rate=6.5)
        base.update(kwargs)
        with pytest.raises(InvalidParameters) as ei:
            compute_greeks(**base)
        assert ei.value.parameter == parameter

    @pytest.mark.parametrize("args, parameter", [
        ((25142, 25100, 5e-324, 15), "days_to_expiry"),
        ((25142, 25100, 7, 1e-323), "volatility"),
        ((5e-324, 25100, 1e-300, 1e-300), "volatility"),
        ((5e-324, 25100, 7, 1e-20), "spot"),
    ])
    def test_positive_inputs_underflowing_after_conversion(self, args, parameter):
        with pytest.raises(InvalidParameters) as ei:
            compute_greeks(*args)
        assert ei.value.parameter == parameter

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            compute_greeks(25142, 25100, 0, 15)

    def test_bad_kind(self):
        with pytest.raises(InvalidParameters):
            bs_price(OptionQuote(100, 100, 30, 20), "straddle")


class TestImpliedVol:
    @pytest.mark.parametrize("kind", [CALL, PUT])
    def test_recovers_vol(self, kind):
        q = OptionQuote(25142, 25300, 14, 18.5, 6.5)
        px = bs_price(q, kind)
        iv = implied_vol(25142, 25300, 14, px, kind, 6.5)
        assert iv == pytest.approx(18.5, abs=1e-4)

    def test_premium_above_spot_invalid(self):
        with pytest.raises(InvalidParameters) as ei:
            implied_vol(100, 100, 30, 150.0)
        assert ei.value.parameter == "premium"

    def test_premium_below_intrinsic_invalid(self):
        with pytest.raises(InvalidParameters):
            implied_vol(120, 100, 30, 5.0)

    def test_bad_inputs_invalid(self):
        with pytest.raises(InvalidParameters):
            implied_vol(100, 100, 0, 5.0)
