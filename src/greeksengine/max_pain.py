"""Max-pain and open-interest aggregates for a single expiry.

Max pain is the settlement price at which option writers pay out the least
in aggregate, evaluated over the listed strikes.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "pain_curve",
    "max_pain",
    "put_call_ratio",
    "estimate_max_pain",
]


def _oi_arrays(strikes, call_oi, put_oi):
    strikes = np.asarray(strikes, dtype=float)
    call_oi = np.asarray(call_oi, dtype=float)
    put_oi = np.asarray(put_oi, dtype=float)
    if strikes.ndim != 1 or strikes.size == 0:
        raise ValueError("strikes must be a non-empty 1-D sequence")
    if call_oi.shape != strikes.shape or put_oi.shape != strikes.shape:
        raise ValueError(
            f"open interest shapes {call_oi.shape}/{put_oi.shape} "
            f"do not match strikes {strikes.shape}"
        )
    if np.any(call_oi < 0) or np.any(put_oi < 0):
        raise ValueError("open interest must be non-negative")
    return strikes, call_oi, put_oi


def pain_curve(strikes, call_oi, put_oi) -> np.ndarray:
    """Total writer payout if the underlying settles at each listed strike.

    Returns
    -------
    np.ndarray, shape (n_strikes,)
        ``payout[i] = sum_k call_oi[k] * max(strikes[i] - k, 0)
        + put_oi[k] * max(k - strikes[i], 0)``.
    """
    strikes, call_oi, put_oi = _oi_arrays(strikes, call_oi, put_oi)
    settle = strikes[:, None]
    call_pay = np.maximum(settle - strikes[None, :], 0.0) @ call_oi
    put_pay = np.maximum(strikes[None, :] - settle, 0.0) @ put_oi
    return call_pay + put_pay


def max_pain(strikes, call_oi, put_oi) -> float:
    """Strike minimising writer payout; ties go to the lowest strike."""
    strikes, call_oi, put_oi = _oi_arrays(strikes, call_oi, put_oi)
    order = np.argsort(strikes, kind="stable")
    pain = pain_curve(strikes[order], call_oi[order], put_oi[order])
    return float(strikes[order][int(np.argmin(pain))])


def put_call_ratio(call_oi, put_oi) -> float:
    """Aggregate put OI divided by aggregate call OI."""
    total_call = float(np.sum(np.asarray(call_oi, dtype=float)))
    total_put = float(np.sum(np.asarray(put_oi, dtype=float)))
    if total_call <= 0:
        raise ValueError("total call open interest must be positive")
    return total_put / total_call


def estimate_max_pain(total_call_oi: float, total_put_oi: float, spot: float) -> int:
    """Rough max-pain estimate from chain-wide OI totals only.

    Shifts spot up when put OI dominates and down when call OI dominates,
    one point per million contracts of imbalance.  Use :func:`max_pain`
    when per-strike OI is available.
    """
    if total_call_oi < 0 or total_put_oi < 0:
        raise ValueError("open interest must be non-negative")
    return int(round(spot + (total_put_oi - total_call_oi) / 1_000_000))
