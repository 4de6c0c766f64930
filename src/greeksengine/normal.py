# normal.py
# Standard-normal CDF / PDF built on the Abramowitz & Stegun 7.1.26
# error-function approximation (max abs error ~1.5e-7).
# Scalar functions use ``math``; ``*_vec`` variants accept NumPy arrays.

from __future__ import annotations
import math
import numpy as np

__all__ = [
    "erf", "norm_cdf", "norm_pdf",
    "erf_vec", "norm_cdf_vec", "norm_pdf_vec",
]

_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P  = 0.3275911

_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)


# ---------------------------------------------------------------------------
# Scalar
# ---------------------------------------------------------------------------
def erf(x: float) -> float:
    """Polynomial erf approximation, odd-symmetric.

    Saturates to exactly +/-1 as ``|x| -> inf``: ``t`` goes to 0 and
    ``exp(-x*x)`` underflows to 0, so no NaN is produced.
    """
    sign = -1.0 if x < 0 else 1.0
    x = abs(x)
    t = 1.0 / (1.0 + _P * x)
    poly = ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t
    return sign * (1.0 - poly * math.exp(-x * x))


def norm_cdf(x: float) -> float:
    return 0.5 * (1.0 + erf(x / _SQRT_2))


def norm_pdf(x: float) -> float:
    return math.exp(-0.5 * x * x) / _SQRT_2PI


# ---------------------------------------------------------------------------
# Vectorised
# ---------------------------------------------------------------------------
def erf_vec(x) -> np.ndarray:
    """Array form of :func:`erf`; NaN propagates."""
    x = np.asarray(x, dtype=float)
    sign = np.where(x < 0, -1.0, 1.0)
    ax = np.abs(x)
    t = 1.0 / (1.0 + _P * ax)
    poly = ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t
    return sign * (1.0 - poly * np.exp(-ax * ax))


def norm_cdf_vec(x) -> np.ndarray:
    return 0.5 * (1.0 + erf_vec(np.asarray(x, dtype=float) / _SQRT_2))


def norm_pdf_vec(x) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    return np.exp(-0.5 * x * x) / _SQRT_2PI
