"""Option-chain evaluation.

Prices each strike independently through :func:`compute_greeks`.  A strike
that fails validation does not abort the chain; its row carries the
``InvalidParameters`` instead of a result.
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, Union

from .black_scholes import compute_greeks
from .core import GreeksResult, InvalidParameters, DEFAULT_RISK_FREE_RATE

__all__ = ["ChainRow", "price_chain"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainRow:
    strike: float
    result: Optional[GreeksResult] = None
    error: Optional[InvalidParameters] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def price_chain(
    spot: float,
    strikes: Sequence[float],
    days_to_expiry: float,
    volatilities: Union[float, Sequence[float]],
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
) -> list[ChainRow]:
    """Evaluate Greeks for every strike of a single expiry.

    Parameters
    ----------
    volatilities : float or sequence of float
        Flat vol for the whole chain, or one vol (percent) per strike.

    Returns
    -------
    list[ChainRow]
        One row per strike, in input order.
    """
    strikes = list(strikes)
    if isinstance(volatilities, numbers.Real):
        vols = [volatilities] * len(strikes)
    else:
        vols = list(volatilities)
        if len(vols) != len(strikes):
            raise ValueError(
                f"got {len(vols)} volatilities for {len(strikes)} strikes"
            )

    rows = []
    for strike, vol in zip(strikes, vols):
        try:
            res = compute_greeks(spot, strike, days_to_expiry, vol, risk_free_rate)
        except InvalidParameters as e:
            logger.debug("strike %r rejected: %s", strike, e)
            rows.append(ChainRow(strike=strike, error=e))
        else:
            rows.append(ChainRow(strike=strike, result=res))

    n_bad = sum(1 for row in rows if not row.ok)
    if n_bad:
        logger.warning("%d of %d strikes could not be priced", n_bad, len(rows))
    return rows
