from __future__ import annotations
import math
import numbers
from dataclasses import dataclass, asdict


DEFAULT_RISK_FREE_RATE = 6.5   # percent, annualised
DAYS_PER_YEAR = 365.0

CALL = "call"
PUT  = "put"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class InvalidParameters(ValueError):
    """An engine input failed a precondition.

    Permanent for the given input: retrying with the same arguments always
    fails the same way.  ``parameter`` names the offending input.
    """

    def __init__(self, parameter: str, value, reason: str):
        self.parameter = parameter
        self.value = value
        self.reason = reason
        super().__init__(f"{parameter}={value!r}: {reason}")


def _finite(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameters(name, value, "must be a real number")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameters(name, value, "must be finite")
    return value


def _positive(name: str, value) -> float:
    value = _finite(name, value)
    if value <= 0:
        raise InvalidParameters(name, value, "must be positive")
    return value


# ---------------------------------------------------------------------------
# Option quote request
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OptionQuote:
    """Inputs for one Greeks computation.

    Parameters
    ----------
    spot : float
        Underlying price.
    strike : float
        Strike price.
    days_to_expiry : float
        Calendar days remaining.
    volatility : float
        Annualised implied volatility in percent (``18.5`` means 18.5%).
    risk_free_rate : float
        Annualised risk-free rate in percent.
    """
    spot: float
    strike: float
    days_to_expiry: float
    volatility: float
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE

    def validated(self) -> OptionQuote:
        """Return a float-normalised copy, raising ``InvalidParameters``.

        Positivity is also checked after unit conversion: a positive input
        can still underflow to a zero ``T``, ``sigma * sqrt(T)`` or gamma
        denominator.
        """
        q = OptionQuote(
            spot=_positive("spot", self.spot),
            strike=_positive("strike", self.strike),
            days_to_expiry=_positive("days_to_expiry", self.days_to_expiry),
            volatility=_positive("volatility", self.volatility),
            risk_free_rate=_finite("risk_free_rate", self.risk_free_rate),
        )
        if q.T <= 0:
            raise InvalidParameters("days_to_expiry", q.days_to_expiry,
                                    "underflows to zero time to expiry")
        sig_sqrt_T = q.sigma * math.sqrt(q.T)
        if sig_sqrt_T <= 0:
            raise InvalidParameters("volatility", q.volatility,
                                    "sigma * sqrt(T) underflows to zero")
        if q.spot * sig_sqrt_T <= 0:
            raise InvalidParameters("spot", q.spot,
                                    "spot * sigma * sqrt(T) underflows to zero")
        return q

    @property
    def T(self) -> float:
        """Time to expiry as a year fraction."""
        return self.days_to_expiry / DAYS_PER_YEAR

    @property
    def r(self) -> float:
        return self.risk_free_rate / 100.0

    @property
    def sigma(self) -> float:
        return self.volatility / 100.0


# ---------------------------------------------------------------------------
# Greeks result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GreeksResult:
    """Rounded prices and call sensitivities for one quote.

    Theta is per calendar day.  Vega is per 1.0 of decimal sigma.
    """
    call_price: float
    put_price: float
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    def to_dict(self) -> dict[str, float]:
        """Wire representation with camelCase keys."""
        d = asdict(self)
        return {
            "callPrice": d["call_price"],
            "putPrice": d["put_price"],
            "delta": d["delta"],
            "gamma": d["gamma"],
            "theta": d["theta"],
            "vega": d["vega"],
            "rho": d["rho"],
        }
