"""Black-Scholes Greeks engine for European options (no dividends).

Inputs follow desk conventions: time in calendar days, volatility and
risk-free rate in percent.  Every consumer (CLI, chain evaluator, batch
scripts) prices through this module.
"""

from __future__ import annotations

from math import log, sqrt, exp
from typing import Literal

from .core import (
    OptionQuote, GreeksResult, InvalidParameters,
    CALL, PUT, DEFAULT_RISK_FREE_RATE, DAYS_PER_YEAR, _finite,
)
from .normal import norm_cdf as _N, norm_pdf as _n

__all__ = ["compute_greeks", "greeks", "price", "implied_vol"]

_IV_BRACKET = (0.01, 500.0)   # percent


def _d1_d2(q: OptionQuote) -> tuple[float, float]:
    T, r, sigma = q.T, q.r, q.sigma
    rt = sigma * sqrt(T)
    # log difference, not log of the ratio: S/K can underflow or overflow
    d1 = (log(q.spot) - log(q.strike) + (r + 0.5 * sigma * sigma) * T) / rt
    d2 = d1 - rt
    return d1, d2


def _kind(kind: str) -> str:
    if kind not in (CALL, PUT):
        raise InvalidParameters("kind", kind, "must be 'call' or 'put'")
    return kind


def price(quote: OptionQuote, kind: Literal["call", "put"] = CALL) -> float:
    """Unrounded theoretical premium."""
    kind = _kind(kind)
    q = quote.validated()
    d1, d2 = _d1_d2(q)
    disc_r = exp(-q.r * q.T)
    if kind == CALL:
        return q.spot * _N(d1) - q.strike * disc_r * _N(d2)
    return q.strike * disc_r * _N(-d2) - q.spot * _N(-d1)


def greeks(quote: OptionQuote) -> dict[str, float]:
    """Full-precision prices and call Greeks.

    Theta is per calendar day; vega is dPrice/dSigma with sigma in decimal
    units (not per 1%).
    """
    q = quote.validated()
    S, K, T, r, sigma = q.spot, q.strike, q.T, q.r, q.sigma
    d1, d2 = _d1_d2(q)
    n_d1   = _n(d1)
    N_d1   = _N(d1)
    N_d2   = _N(d2)
    disc_r = exp(-r * T)
    sqrt_T = sqrt(T)

    call = S * N_d1 - K * disc_r * N_d2
    put  = K * disc_r * _N(-d2) - S * _N(-d1)

    theta_annual = -(S * n_d1 * sigma) / (2 * sqrt_T) - r * K * disc_r * N_d2

    return {
        "call_price": call,
        "put_price": put,
        "delta": N_d1,
        "gamma": n_d1 / (S * (sigma * sqrt_T)),
        "theta": theta_annual / DAYS_PER_YEAR,
        "vega": S * n_d1 * sqrt_T,
        "rho": K * T * disc_r * N_d2,
    }


def _premium(x: float) -> float:
    # round() can leave -0.0 or tiny negatives from cancellation deep OTM
    return max(round(x, 2), 0.0)


def compute_greeks(
    spot: float,
    strike: float,
    days_to_expiry: float,
    volatility: float,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
) -> GreeksResult:
    """Price a European option and its Greeks, rounded for presentation.

    Raises
    ------
    InvalidParameters
        When ``days_to_expiry``, ``volatility``, ``spot`` or ``strike`` is
        not positive, or any input is not a finite real number.
    """
    g = greeks(OptionQuote(spot, strike, days_to_expiry, volatility, risk_free_rate))
    return GreeksResult(
        call_price=_premium(g["call_price"]),
        put_price=_premium(g["put_price"]),
        delta=round(g["delta"], 4),
        gamma=round(g["gamma"], 6),
        theta=round(g["theta"], 2),
        vega=round(g["vega"], 2),
        rho=round(g["rho"], 4),
    )


def implied_vol(
    spot: float,
    strike: float,
    days_to_expiry: float,
    premium: float,
    kind: Literal["call", "put"] = CALL,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
    *,
    tol: float = 1e-8,
    maxiter: int = 100,
) -> float:
    """Brent root find on volatility.  Returns percent."""
    from scipy.optimize import brentq

    kind = _kind(kind)
    base = OptionQuote(spot, strike, days_to_expiry, 20.0, risk_free_rate).validated()
    premium = _finite("premium", premium)

    pv_strike = base.strike * exp(-base.r * base.T)
    if kind == CALL:
        lower, upper = max(base.spot - pv_strike, 0.0), base.spot
    else:
        lower, upper = max(pv_strike - base.spot, 0.0), pv_strike
    if not lower < premium < upper:
        raise InvalidParameters(
            "premium", premium,
            f"outside no-arbitrage bounds ({lower:.4f}, {upper:.4f})",
        )

    def f(vol):
        return price(OptionQuote(base.spot, base.strike, base.days_to_expiry,
                                 vol, base.risk_free_rate), kind) - premium

    a, b = _IV_BRACKET
    if f(a) * f(b) > 0:
        raise InvalidParameters(
            "premium", premium,
            f"no volatility in [{a}, {b}]% reproduces it",
        )
    return float(brentq(f, a, b, xtol=tol, maxiter=maxiter))
