"""
European option payoffs.
"""

from mc_option_pricing.options.payoffs.base import (
    OptionType,
    PayoffFunction,
    call_payoff,
    get_payoff,
    put_payoff,
)

__all__ = [
    "OptionType",
    "PayoffFunction",
    "call_payoff",
    "get_payoff",
    "put_payoff",
]
