"""
Black-Scholes analytical pricing for European options.

Used as the exact reference against which Monte Carlo estimates are checked.

References
----------
[T1] Black, F., & Scholes, M. (1973). The pricing of options and corporate liabilities.
[T1] Hull, J. C. (2018). Options, Futures, and Other Derivatives (10th ed.).
"""

import math
from dataclasses import dataclass

from mc_option_pricing.config.tolerances import PUT_CALL_PARITY_TOLERANCE
from mc_option_pricing.options.payoffs.base import OptionType
from mc_option_pricing.options.pricing.normal import normal_cdf


@dataclass(frozen=True)
class BSResult:
    """
    Immutable Black-Scholes pricing result.

    Attributes
    ----------
    price : float
        Option price
    d1 : float
        d1 parameter
    d2 : float
        d2 parameter
    option_type : OptionType
        Call or put
    """

    price: float
    d1: float
    d2: float
    option_type: OptionType


def _validate_inputs(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
) -> None:
    """Validate Black-Scholes inputs."""
    for name, value in (
        ("spot", spot),
        ("strike", strike),
        ("rate", rate),
        ("volatility", volatility),
        ("time_to_expiry", time_to_expiry),
    ):
        if not math.isfinite(value):
            raise ValueError(f"CRITICAL: {name} must be finite, got {value}")
    if spot <= 0:
        raise ValueError(f"CRITICAL: spot must be > 0, got {spot}")
    if strike <= 0:
        raise ValueError(f"CRITICAL: strike must be > 0, got {strike}")
    if volatility <= 0:
        raise ValueError(f"CRITICAL: volatility must be > 0, got {volatility}")
    if time_to_expiry <= 0:
        raise ValueError(f"CRITICAL: time_to_expiry must be > 0, got {time_to_expiry}")


def _calculate_d1_d2(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
) -> tuple[float, float]:
    """
    Calculate d1 and d2 parameters.

    [T1] d1 = (ln(S/K) + (r + σ²/2)T) / (σ√T)
    [T1] d2 = d1 - σ√T
    """
    vol_sqrt_t = volatility * math.sqrt(time_to_expiry)

    d1 = (
        math.log(spot / strike) + (rate + 0.5 * volatility * volatility) * time_to_expiry
    ) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t

    return d1, d2


def black_scholes_call(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
) -> float:
    """
    Price European call option using Black-Scholes.

    [T1] C = S*N(d1) - K*e^(-rT)*N(d2)

    Parameters
    ----------
    spot : float
        Current spot price
    strike : float
        Strike price
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Volatility (decimal), > 0
    time_to_expiry : float
        Time to expiry (years), > 0

    Returns
    -------
    float
        Call option price

    Raises
    ------
    ValueError
        If volatility or time_to_expiry is not positive (the formula divides
        by σ√T), or any input is outside its domain

    Examples
    --------
    >>> round(black_scholes_call(100, 100, 0.05, 0.20, 1.0), 4)
    10.4506
    """
    _validate_inputs(spot, strike, rate, volatility, time_to_expiry)

    d1, d2 = _calculate_d1_d2(spot, strike, rate, volatility, time_to_expiry)

    call_price = (
        spot * normal_cdf(d1)
        - strike * math.exp(-rate * time_to_expiry) * normal_cdf(d2)
    )

    # Cancellation can leave a tiny negative for deep OTM calls
    return max(float(call_price), 0.0)


def black_scholes_put(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
) -> float:
    """
    Price European put option using Black-Scholes.

    [T1] P = K*e^(-rT)*N(-d2) - S*N(-d1)

    Parameters
    ----------
    spot : float
        Current spot price
    strike : float
        Strike price
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Volatility (decimal), > 0
    time_to_expiry : float
        Time to expiry (years), > 0

    Returns
    -------
    float
        Put option price
    """
    _validate_inputs(spot, strike, rate, volatility, time_to_expiry)

    d1, d2 = _calculate_d1_d2(spot, strike, rate, volatility, time_to_expiry)

    put_price = (
        strike * math.exp(-rate * time_to_expiry) * normal_cdf(-d2)
        - spot * normal_cdf(-d1)
    )

    return max(float(put_price), 0.0)


def black_scholes_price(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    option_type: "OptionType | str" = OptionType.CALL,
) -> BSResult:
    """
    Price a European option and return d1/d2 alongside the price.

    Parameters
    ----------
    spot, strike, rate, volatility, time_to_expiry : float
        As for :func:`black_scholes_call`
    option_type : OptionType or str, default CALL
        Call or put

    Returns
    -------
    BSResult
        Price with d1 and d2
    """
    option_type = OptionType.parse(option_type)
    if option_type == OptionType.CALL:
        price = black_scholes_call(spot, strike, rate, volatility, time_to_expiry)
    else:
        price = black_scholes_put(spot, strike, rate, volatility, time_to_expiry)

    d1, d2 = _calculate_d1_d2(spot, strike, rate, volatility, time_to_expiry)
    return BSResult(price=price, d1=d1, d2=d2, option_type=option_type)


def price_european_call_analytic(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
) -> float:
    """Analytic call price entry point; see :func:`black_scholes_call`."""
    return black_scholes_call(spot, strike, rate, volatility, time_to_expiry)


def call_price_bounds(
    spot: float,
    strike: float,
    rate: float,
    time_to_expiry: float,
) -> tuple[float, float]:
    """
    No-arbitrage bounds for a European call.

    [T1] max(S - K*e^(-rT), 0) <= C <= S

    Returns
    -------
    tuple[float, float]
        (lower, upper)
    """
    lower = max(spot - strike * math.exp(-rate * time_to_expiry), 0.0)
    return lower, spot


def put_call_parity_check(
    call_price: float,
    put_price: float,
    spot: float,
    strike: float,
    rate: float,
    time_to_expiry: float,
    tolerance: float = PUT_CALL_PARITY_TOLERANCE,
) -> tuple[bool, float]:
    """
    Verify put-call parity holds.

    [T1] Put-Call Parity: C - P = S - K*e^(-rT)

    Returns
    -------
    tuple[bool, float]
        (parity_holds, absolute error)
    """
    expected = spot - strike * math.exp(-rate * time_to_expiry)
    error = abs((call_price - put_price) - expected)
    return error <= tolerance * max(1.0, spot, strike), error
