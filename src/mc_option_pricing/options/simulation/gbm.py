"""
Geometric Brownian Motion (GBM) terminal price sampling.

[T1] GBM SDE under the risk-neutral measure: dS = rS dt + σS dW
[T1] Exact terminal solution: S(T) = S(0) * exp((r - σ²/2)T + σ√T * Z)

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

import math
from dataclasses import dataclass

import numpy as np

from mc_option_pricing.options.simulation.rng import Xorshift32


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ValueError(f"CRITICAL: {name} must be finite, got {value}")


@dataclass(frozen=True)
class GBMParams:
    """
    Parameters for GBM simulation.

    Attributes
    ----------
    spot : float
        Initial spot price (S0)
    rate : float
        Risk-free rate (annualized, decimal)
    volatility : float
        Volatility (annualized, decimal)
    time_to_expiry : float
        Time to expiry in years
    """

    spot: float
    rate: float
    volatility: float
    time_to_expiry: float

    def __post_init__(self) -> None:
        """Validate parameters."""
        _validate_gbm_inputs(self.spot, self.rate, self.volatility, self.time_to_expiry)

    @property
    def drift(self) -> float:
        """Risk-neutral log drift per year: r - σ²/2."""
        return self.rate - 0.5 * self.volatility * self.volatility

    @property
    def forward(self) -> float:
        """Forward price: S * exp(rT)."""
        return self.spot * math.exp(self.rate * self.time_to_expiry)

    @property
    def discount_factor(self) -> float:
        """Discount factor: exp(-rT)."""
        return math.exp(-self.rate * self.time_to_expiry)


def _validate_gbm_inputs(
    spot: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
) -> None:
    _require_finite(
        spot=spot, rate=rate, volatility=volatility, time_to_expiry=time_to_expiry
    )
    if spot <= 0:
        raise ValueError(f"CRITICAL: spot must be > 0, got {spot}")
    if volatility < 0:
        raise ValueError(f"CRITICAL: volatility must be >= 0, got {volatility}")
    if time_to_expiry < 0:
        raise ValueError(f"CRITICAL: time_to_expiry must be >= 0, got {time_to_expiry}")


def simulate_terminal_price(
    spot: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    rng: Xorshift32,
) -> float:
    """
    Draw one terminal stock price.

    [T1] S(T) = S0 * exp((r - σ²/2)T + σ√T * Z), Z ~ N(0, 1)

    Consumes exactly one normal draw (two uniforms) from ``rng``.

    Parameters
    ----------
    spot : float
        Initial spot price, > 0
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Volatility (decimal), >= 0
    time_to_expiry : float
        Time to expiry in years, >= 0
    rng : Xorshift32
        Generator owned by the caller

    Returns
    -------
    float
        Simulated terminal price

    Raises
    ------
    ValueError
        If an input is outside its domain (notably time_to_expiry < 0)
    """
    _validate_gbm_inputs(spot, rate, volatility, time_to_expiry)

    z = rng.next_standard_normal()
    drift = (rate - 0.5 * volatility * volatility) * time_to_expiry
    diffusion = volatility * math.sqrt(time_to_expiry)
    return spot * math.exp(drift + diffusion * z)


def validate_gbm_simulation(
    params: GBMParams,
    n_paths: int = 100_000,
    seed: int = 42,
) -> dict:
    """
    Validate GBM simulation against theoretical moments.

    [T1] Under the risk-neutral measure:
    - E[S(T)] = S(0) * exp(rT) (forward price)
    - Var[log(S(T)/S(0))] = σ²T

    Parameters
    ----------
    params : GBMParams
        GBM parameters
    n_paths : int, default 100000
        Number of terminal draws
    seed : int, default 42
        Generator seed

    Returns
    -------
    dict
        Validation results with theoretical vs simulated values
    """
    if n_paths <= 1:
        raise ValueError(f"CRITICAL: n_paths must be > 1, got {n_paths}")

    rng = Xorshift32(seed)
    terminal = np.fromiter(
        (
            simulate_terminal_price(
                params.spot, params.rate, params.volatility, params.time_to_expiry, rng
            )
            for _ in range(n_paths)
        ),
        dtype=float,
        count=n_paths,
    )

    expected_mean = params.forward
    expected_log_var = params.volatility**2 * params.time_to_expiry

    simulated_mean = terminal.mean()
    simulated_log_var = np.log(terminal / params.spot).var(ddof=1)
    se_mean = terminal.std(ddof=1) / np.sqrt(n_paths)

    return {
        "n_paths": n_paths,
        "theoretical_mean": expected_mean,
        "simulated_mean": float(simulated_mean),
        "mean_error_pct": float(abs(simulated_mean - expected_mean) / expected_mean * 100),
        "mean_se": float(se_mean),
        "mean_z_score": float((simulated_mean - expected_mean) / se_mean) if se_mean > 0 else 0.0,
        "theoretical_log_variance": expected_log_var,
        "simulated_log_variance": float(simulated_log_var),
        "validation_passed": abs(simulated_mean - expected_mean) / expected_mean < 0.01,
    }
