# black_scholes_vec.py
# Vectorised Black-Scholes prices and Greeks for whole option chains.
# All public functions accept scalars *or* NumPy arrays and broadcast.
# Units match the scalar engine: days, percent vol, percent rate.

from __future__ import annotations
import numpy as np

from .core import DEFAULT_RISK_FREE_RATE, DAYS_PER_YEAR
from .normal import norm_cdf_vec as _N, norm_pdf_vec as _n

__all__ = ["bs_greeks_vec", "bs_price_vec"]

_KEYS = ("call_price", "put_price", "delta", "gamma", "theta", "vega", "rho")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------
def _prepare(spot, strike, days, vol, rate):
    """Broadcast inputs and mask rows that fail the engine preconditions.

    Invalid rows are replaced by a harmless placeholder so the arithmetic
    below never warns; callers overwrite them with NaN.
    """
    S, K, D, V, R = np.broadcast_arrays(
        *(np.asarray(x, dtype=float) for x in (spot, strike, days, vol, rate))
    )
    valid = (
        np.isfinite(S) & np.isfinite(K) & np.isfinite(D)
        & np.isfinite(V) & np.isfinite(R)
        & (S > 0) & (K > 0) & (D > 0) & (V > 0)
    )
    S, K, D, V, R = (np.where(valid, x, 1.0) for x in (S, K, D, V, R))
    T, sigma = D / DAYS_PER_YEAR, V / 100.0
    # positive inputs can still underflow to a zero scale after conversion
    sig_sqrt_T = sigma * np.sqrt(T)
    valid = valid & (T > 0) & (sig_sqrt_T > 0) & (S * sig_sqrt_T > 0)
    S, K, T, R, sigma = (np.where(valid, x, 1.0) for x in (S, K, T, R, sigma))
    return S, K, T, R / 100.0, sigma, valid


def _d1_d2(S, K, T, r, sigma):
    sig_sqrt_T = sigma * np.sqrt(T)
    d1 = (np.log(S) - np.log(K) + (r + 0.5 * sigma * sigma) * T) / sig_sqrt_T
    d2 = d1 - sig_sqrt_T
    return d1, d2


# ---------------------------------------------------------------------------
# Vectorised Greeks
# ---------------------------------------------------------------------------
def bs_greeks_vec(
    spot, strike, days_to_expiry, volatility,
    risk_free_rate=DEFAULT_RISK_FREE_RATE,
) -> dict[str, np.ndarray]:
    """Vectorised prices and call Greeks, unrounded.

    Returns dict with keys: call_price, put_price, delta, gamma, theta,
    vega, rho.  Theta is per calendar day.  Rows with a non-positive spot,
    strike, days or vol (or any non-finite input) are NaN in every key.
    """
    S, K, T, r, sigma, valid = _prepare(
        spot, strike, days_to_expiry, volatility, risk_free_rate
    )
    d1, d2 = _d1_d2(S, K, T, r, sigma)
    disc_r = np.exp(-r * T)
    sqrt_T = np.sqrt(T)
    n_d1 = _n(d1)
    N_d1 = _N(d1)
    N_d2 = _N(d2)

    out = {
        "call_price": S * N_d1 - K * disc_r * N_d2,
        "put_price":  K * disc_r * _N(-d2) - S * _N(-d1),
        "delta":      N_d1,
        "gamma":      n_d1 / (S * (sigma * sqrt_T)),
        "theta":      (-(S * n_d1 * sigma) / (2 * sqrt_T)
                       - r * K * disc_r * N_d2) / DAYS_PER_YEAR,
        "vega":       S * n_d1 * sqrt_T,
        "rho":        K * T * disc_r * N_d2,
    }
    return {k: np.where(valid, out[k], np.nan) for k in _KEYS}


def bs_price_vec(
    spot, strike, days_to_expiry, volatility,
    risk_free_rate=DEFAULT_RISK_FREE_RATE, kind="call",
) -> np.ndarray:
    """Vectorised call or put premium (NaN for invalid rows)."""
    if kind not in ("call", "put"):
        raise ValueError(f"kind must be 'call' or 'put', got {kind!r}")
    g = bs_greeks_vec(spot, strike, days_to_expiry, volatility, risk_free_rate)
    return g[f"{kind}_price"]
