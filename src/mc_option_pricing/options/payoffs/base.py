"""
Terminal payoffs for European options.

[T1] Call payoff: max(S - K, 0)
[T1] Put payoff: max(K - S, 0)
[T1] Payoff parity: call(S, K) - put(S, K) = S - K
"""

from enum import Enum
from typing import Callable


class OptionType(Enum):
    """Option type enumeration."""

    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, value: "str | OptionType") -> "OptionType":
        """Accept an OptionType or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"CRITICAL: option_type must be 'call' or 'put', got {value!r}"
            ) from None


def call_payoff(spot: float, strike: float) -> float:
    """European call payoff at expiry, always >= 0."""
    return spot - strike if spot > strike else 0.0


def put_payoff(spot: float, strike: float) -> float:
    """European put payoff at expiry, always >= 0."""
    return strike - spot if strike > spot else 0.0


PayoffFunction = Callable[[float, float], float]

_PAYOFFS: dict[OptionType, PayoffFunction] = {
    OptionType.CALL: call_payoff,
    OptionType.PUT: put_payoff,
}


def get_payoff(option_type: "str | OptionType") -> PayoffFunction:
    """
    Look up the payoff function for an option type.

    Parameters
    ----------
    option_type : str or OptionType
        "call" or "put"

    Returns
    -------
    Callable[[float, float], float]
        Function(terminal_price, strike) -> payoff
    """
    return _PAYOFFS[OptionType.parse(option_type)]
