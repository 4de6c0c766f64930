from __future__ import annotations
from dataclasses import dataclass

from .core import _finite

__all__ = ["PriceChange", "price_change"]


@dataclass(frozen=True)
class PriceChange:
    change: float       # absolute, price units
    change_pct: float   # percent of previous close


def price_change(price: float, previous_close: float) -> PriceChange:
    """Change of ``price`` against an explicitly supplied previous close.

    The caller owns the previous close; nothing is remembered between calls.
    """
    price = _finite("price", price)
    previous_close = _finite("previous_close", previous_close)
    if previous_close <= 0:
        raise ValueError(f"previous_close must be positive, got {previous_close}")
    diff = price - previous_close
    return PriceChange(
        change=round(diff, 2),
        change_pct=round(diff / previous_close * 100.0, 2),
    )
