# greeksengine: Black-Scholes Greeks and option-chain analytics
# Public API

# Data model
from .core import (
    OptionQuote, GreeksResult, InvalidParameters,
    CALL, PUT, DEFAULT_RISK_FREE_RATE,
)

# Scalar engine
from .black_scholes import compute_greeks, greeks, price as bs_price, implied_vol

# Vectorised engine
from .black_scholes_vec import bs_greeks_vec, bs_price_vec

# Option chain
from .chain import ChainRow, price_chain

# Open interest
from .max_pain import pain_curve, max_pain, put_call_ratio, estimate_max_pain

# Quotes
from .quotes import PriceChange, price_change

# Risk
from .risk import numerical_greeks, scenario_grid, option_greeks, portfolio_greeks

__all__ = [
    # Data model
    "OptionQuote", "GreeksResult", "InvalidParameters",
    "CALL", "PUT", "DEFAULT_RISK_FREE_RATE",
    # Scalar
    "compute_greeks", "greeks", "bs_price", "implied_vol",
    # Vectorised
    "bs_greeks_vec", "bs_price_vec",
    # Chain
    "ChainRow", "price_chain",
    # Open interest
    "pain_curve", "max_pain", "put_call_ratio", "estimate_max_pain",
    # Quotes
    "PriceChange", "price_change",
    # Risk
    "numerical_greeks", "scenario_grid", "option_greeks", "portfolio_greeks",
]

__version__ = "0.1.0"
