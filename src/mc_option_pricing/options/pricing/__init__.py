"""
Analytical option pricing.

Provides:
- Black-Scholes closed-form prices for European calls and puts
- Standard normal CDF
"""

from mc_option_pricing.options.pricing.black_scholes import (
    BSResult,
    black_scholes_call,
    black_scholes_price,
    black_scholes_put,
    call_price_bounds,
    price_european_call_analytic,
    put_call_parity_check,
)
from mc_option_pricing.options.pricing.normal import normal_cdf

__all__ = [
    "BSResult",
    "black_scholes_call",
    "black_scholes_price",
    "black_scholes_put",
    "call_price_bounds",
    "normal_cdf",
    "price_european_call_analytic",
    "put_call_parity_check",
]
