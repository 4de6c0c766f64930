"""Bump-and-reprice checks, scenario grids and book-level Greeks.

Everything here prices through the scalar engine, so units follow it:
days to expiry, volatility and rate in percent, theta per calendar day,
vega and rho per 1.0 of the decimal parameter.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from math import exp

import numpy as np

from .black_scholes import greeks, price
from .core import OptionQuote, CALL, PUT, DEFAULT_RISK_FREE_RATE, DAYS_PER_YEAR

__all__ = [
    "numerical_greeks",
    "scenario_grid",
    "option_greeks",
    "portfolio_greeks",
]

_GREEK_KEYS = ("delta", "gamma", "theta", "vega", "rho")


# ---------------------------------------------------------------------------
# Numerical Greeks
# ---------------------------------------------------------------------------

def numerical_greeks(
    spot: float,
    strike: float,
    days_to_expiry: float,
    volatility: float,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
    kind: str = CALL,
    *,
    bump_pct: float = 0.01,
) -> dict[str, float]:
    """Greeks via central finite differences on the unrounded engine price.

    Parameters
    ----------
    bump_pct : float
        Relative bump for spot and vol; the rate is bumped by
        ``bump_pct * 100`` percentage points.

    Returns
    -------
    dict[str, float]
        Keys: ``delta``, ``gamma``, ``theta``, ``vega``, ``rho``.
    """
    def px(S=spot, D=days_to_expiry, V=volatility, R=risk_free_rate):
        return price(OptionQuote(S, strike, D, V, R), kind)

    P0 = px()

    # --- Delta & Gamma (spot bump) ---
    eps_S = bump_pct * spot
    P_up = px(S=spot + eps_S)
    P_dn = px(S=spot - eps_S)
    delta = (P_up - P_dn) / (2.0 * eps_S)
    gamma = (P_up - 2.0 * P0 + P_dn) / (eps_S ** 2)

    # --- Vega (vol bump, percent points) ---
    eps_v = max(bump_pct * volatility, 1e-2)
    vol_up = volatility + eps_v
    vol_dn = max(volatility - eps_v, 1e-4)
    P_vup = px(V=vol_up)
    P_vdn = px(V=vol_dn)
    vega = (P_vup - P_vdn) / ((vol_up - vol_dn) / 100.0)

    # --- Theta (one calendar day forward) ---
    if days_to_expiry > 1.0:
        theta = px(D=days_to_expiry - 1.0) - P0
    else:
        theta = 0.0

    # --- Rho (rate bump, percent points) ---
    eps_r = bump_pct * 100.0
    P_rup = px(R=risk_free_rate + eps_r)
    P_rdn = px(R=risk_free_rate - eps_r)
    rho = (P_rup - P_rdn) / (2.0 * eps_r / 100.0)

    return {
        "delta": float(delta),
        "gamma": float(gamma),
        "theta": float(theta),
        "vega": float(vega),
        "rho": float(rho),
    }


# ---------------------------------------------------------------------------
# Scenario grid
# ---------------------------------------------------------------------------

def scenario_grid(
    spot: float,
    strike: float,
    days_to_expiry: float,
    volatility: float,
    risk_free_rate: float,
    kind: str,
    spot_range: np.ndarray,
    vol_range: np.ndarray,
) -> dict:
    """Reprice across a 2-D (spot × vol) grid.

    ``spot`` and ``volatility`` are the base point and are replaced by each
    grid value; they are accepted so the signature matches
    :func:`numerical_greeks`.

    Returns
    -------
    dict
        ``"spot_values"``, ``"vol_values"``, ``"prices"`` (shape n_spot×n_vol).
    """
    spot_range = np.asarray(spot_range, dtype=float)
    vol_range = np.asarray(vol_range, dtype=float)
    prices = np.empty((len(spot_range), len(vol_range)))

    for i, s in enumerate(spot_range):
        for j, v in enumerate(vol_range):
            q = OptionQuote(float(s), strike, days_to_expiry, float(v), risk_free_rate)
            prices[i, j] = price(q, kind)

    return {
        "spot_values": spot_range.copy(),
        "vol_values": vol_range.copy(),
        "prices": prices,
    }


# ---------------------------------------------------------------------------
# Book-level Greeks
# ---------------------------------------------------------------------------

def option_greeks(quote: OptionQuote, kind: str = CALL) -> dict[str, float]:
    """Unrounded price and Greeks for one side of the quote.

    Put Greeks are derived from the call ones through put-call parity:
    gamma and vega are shared, delta shifts by -1, theta and rho by the
    discounted-strike terms.
    """
    g = greeks(quote)
    if kind == CALL:
        return {"price": g["call_price"], **{k: g[k] for k in _GREEK_KEYS}}
    if kind != PUT:
        raise ValueError(f"kind must be 'call' or 'put', got {kind!r}")

    q = quote.validated()
    pv_strike = q.strike * exp(-q.r * q.T)
    return {
        "price": g["put_price"],
        "delta": g["delta"] - 1.0,
        "gamma": g["gamma"],
        "theta": g["theta"] + q.r * pv_strike / DAYS_PER_YEAR,
        "vega": g["vega"],
        "rho": g["rho"] - q.T * pv_strike,
    }


def portfolio_greeks(positions: Iterable[Mapping]) -> dict:
    """Aggregate quantity-weighted value and Greeks for a book.

    Parameters
    ----------
    positions : iterable of mapping
        Each must have ``spot``, ``strike``, ``days_to_expiry``,
        ``volatility``, ``kind``, ``quantity`` (signed, negative for short);
        ``risk_free_rate`` is optional.

    Returns
    -------
    dict
        ``"total_value"``, ``"total_delta"``, ``"total_gamma"``,
        ``"total_theta"``, ``"total_vega"``, ``"total_rho"``,
        ``"positions"`` (list of per-position scaled dicts).
    """
    totals = {k: 0.0 for k in _GREEK_KEYS}
    total_value = 0.0
    rows = []

    for pos in positions:
        qty = pos["quantity"]
        quote = OptionQuote(
            pos["spot"], pos["strike"], pos["days_to_expiry"], pos["volatility"],
            pos.get("risk_free_rate", DEFAULT_RISK_FREE_RATE),
        )
        g = option_greeks(quote, pos["kind"])
        scaled = {k: qty * v for k, v in g.items()}
        for k in totals:
            totals[k] += scaled[k]
        total_value += scaled["price"]
        rows.append(scaled)

    return {
        "total_value": total_value,
        **{f"total_{k}": v for k, v in totals.items()},
        "positions": rows,
    }
