"""
Monte Carlo option pricing engine.

Drives independent GBM terminal draws through a payoff, averages, and
discounts to present value:

    price = exp(-rT) * (1/N) * Σ payoff(S_i(T), K)

[T1] The estimator is unbiased; its standard error falls as 1/√N.

Each engine owns its generator. Parallel pricing gives every worker its own
independently seeded generator; a generator is never shared between workers.

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

import logging
import math
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from mc_option_pricing.config.settings import SETTINGS
from mc_option_pricing.options.payoffs.base import OptionType, get_payoff
from mc_option_pricing.options.simulation.gbm import GBMParams
from mc_option_pricing.options.simulation.rng import Xorshift32, spawn_seeds

logger = logging.getLogger(__name__)

#: Two-sided 95% normal quantile
_Z_95 = 1.96


@dataclass(frozen=True)
class MCResult:
    """
    Monte Carlo pricing result.

    Attributes
    ----------
    price : float
        Option price (discounted mean payoff)
    standard_error : float
        Standard error of the price; inf when n_paths == 1
    confidence_interval : tuple[float, float]
        95% confidence interval
    n_paths : int
        Number of paths used
    discount_factor : float
        Discount factor used
    """

    price: float
    standard_error: float
    confidence_interval: tuple[float, float]
    n_paths: int
    discount_factor: float

    @property
    def relative_error(self) -> float:
        """Relative standard error (SE / price)."""
        if abs(self.price) < 1e-10:
            return float("inf")
        return self.standard_error / abs(self.price)

    @property
    def ci_width(self) -> float:
        """Width of 95% confidence interval."""
        return self.confidence_interval[1] - self.confidence_interval[0]


@dataclass(frozen=True)
class _PayoffSums:
    """Running payoff totals for one batch of paths."""

    payoff_sum: float
    payoff_sq_sum: float
    n_paths: int


def _validate_n_paths(n_paths: int) -> None:
    if isinstance(n_paths, bool) or not isinstance(n_paths, (int, np.integer)):
        raise ValueError(f"CRITICAL: n_paths must be an integer, got {n_paths!r}")
    if n_paths <= 0:
        raise ValueError(f"CRITICAL: n_paths must be > 0, got {n_paths}")


def _validate_strike(strike: float) -> None:
    if not math.isfinite(strike) or strike <= 0:
        raise ValueError(f"CRITICAL: strike must be > 0, got {strike}")


def _accumulate_payoffs(
    params: GBMParams,
    strike: float,
    n_paths: int,
    rng: Xorshift32,
    option_type: OptionType,
) -> _PayoffSums:
    """
    Hot loop: draw ``n_paths`` terminal prices and total their payoffs.

    Uses the same arithmetic as ``simulate_terminal_price`` with the drift and
    diffusion terms hoisted out of the loop.
    """
    payoff = get_payoff(option_type)
    spot = params.spot
    drift = (params.rate - 0.5 * params.volatility * params.volatility) * params.time_to_expiry
    diffusion = params.volatility * math.sqrt(params.time_to_expiry)
    next_normal = rng.next_standard_normal
    exp = math.exp

    payoff_sum = 0.0
    payoff_sq_sum = 0.0
    for _ in range(n_paths):
        terminal = spot * exp(drift + diffusion * next_normal())
        value = payoff(terminal, strike)
        payoff_sum += value
        payoff_sq_sum += value * value

    return _PayoffSums(payoff_sum=payoff_sum, payoff_sq_sum=payoff_sq_sum, n_paths=n_paths)


def _compute_result(params: GBMParams, sums: _PayoffSums) -> MCResult:
    """
    Compute MC result from accumulated payoffs.

    Parameters
    ----------
    params : GBMParams
        GBM parameters (for discounting)
    sums : _PayoffSums
        Undiscounted payoff totals

    Returns
    -------
    MCResult
        Complete MC result with statistics
    """
    n = sums.n_paths
    df = params.discount_factor

    mean_payoff = sums.payoff_sum / n
    price = df * mean_payoff

    if n > 1:
        variance = (sums.payoff_sq_sum - n * mean_payoff * mean_payoff) / (n - 1)
        se_price = df * math.sqrt(max(variance, 0.0) / n)
    else:
        se_price = float("inf")

    return MCResult(
        price=price,
        standard_error=se_price,
        confidence_interval=(price - _Z_95 * se_price, price + _Z_95 * se_price),
        n_paths=n,
        discount_factor=df,
    )


class MonteCarloEngine:
    """
    Monte Carlo pricing engine.

    Parameters
    ----------
    n_paths : int, default SETTINGS.simulation.mc_paths
        Number of simulation paths
    seed : int, optional
        Seed for a fresh generator. Defaults to SETTINGS.simulation.demo_seed.
    rng : Xorshift32, optional
        Generator to draw from; successive pricing calls continue the same
        stream. Mutually exclusive with ``seed``.

    Raises
    ------
    ValueError
        If both ``seed`` and ``rng`` are given, or n_paths is not a positive
        integer

    Examples
    --------
    >>> engine = MonteCarloEngine(n_paths=100_000, seed=123456)
    >>> params = GBMParams(spot=100, rate=0.05, volatility=0.20, time_to_expiry=1.0)
    >>> result = engine.price_european_call(params, strike=100)
    >>> print(f"Price: {result.price:.4f} ± {result.standard_error:.4f}")
    """

    def __init__(
        self,
        n_paths: int = SETTINGS.simulation.mc_paths,
        seed: Optional[int] = None,
        rng: Optional[Xorshift32] = None,
    ):
        _validate_n_paths(n_paths)

        if rng is not None and seed is not None:
            raise ValueError("CRITICAL: pass either seed or rng, not both")

        self.n_paths = int(n_paths)
        if rng is None:
            rng = Xorshift32(SETTINGS.simulation.demo_seed if seed is None else seed)
        self.rng = rng

    def reseed(self, seed: int) -> None:
        """Restart the engine's stream from ``seed``."""
        self.rng.seed(seed)

    def price_european_call(self, params: GBMParams, strike: float) -> MCResult:
        """
        Price European call option.

        [T1] Call payoff: max(S(T) - K, 0)

        Parameters
        ----------
        params : GBMParams
            GBM parameters
        strike : float
            Strike price

        Returns
        -------
        MCResult
            Monte Carlo pricing result
        """
        _validate_strike(strike)
        sums = _accumulate_payoffs(params, strike, self.n_paths, self.rng, OptionType.CALL)
        return _compute_result(params, sums)

    def price_european_put(self, params: GBMParams, strike: float) -> MCResult:
        """
        Price European put option.

        [T1] Put payoff: max(K - S(T), 0)
        """
        _validate_strike(strike)
        sums = _accumulate_payoffs(params, strike, self.n_paths, self.rng, OptionType.PUT)
        return _compute_result(params, sums)


def price_european_call_mc(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    n_paths: int = SETTINGS.simulation.mc_paths,
    rng: Optional[Xorshift32] = None,
    seed: Optional[int] = None,
) -> float:
    """
    Price a European call via Monte Carlo and return only the price.

    Parameters
    ----------
    spot : float
        Current spot price
    strike : float
        Strike price
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Volatility (decimal)
    time_to_expiry : float
        Time to expiry in years
    n_paths : int, default SETTINGS.simulation.mc_paths
        Number of paths, >= 1
    rng : Xorshift32, optional
        Generator to draw from (advanced by 2 * n_paths uniforms)
    seed : int, optional
        Seed for a fresh generator; mutually exclusive with ``rng``

    Returns
    -------
    float
        Discounted mean call payoff, >= 0

    Examples
    --------
    >>> price = price_european_call_mc(100, 100, 0.05, 0.20, 1.0, n_paths=10_000, seed=1)
    """
    params = GBMParams(
        spot=spot, rate=rate, volatility=volatility, time_to_expiry=time_to_expiry
    )
    engine = MonteCarloEngine(n_paths=n_paths, seed=seed, rng=rng)
    return engine.price_european_call(params, strike).price


def _price_chunk(
    spot: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    strike: float,
    n_paths: int,
    seed: int,
) -> tuple[float, float, int]:
    """Worker entry point: price one chunk with its own generator."""
    params = GBMParams(
        spot=spot, rate=rate, volatility=volatility, time_to_expiry=time_to_expiry
    )
    sums = _accumulate_payoffs(params, strike, n_paths, Xorshift32(seed), OptionType.CALL)
    return sums.payoff_sum, sums.payoff_sq_sum, sums.n_paths


def _split_paths(n_paths: int, n_chunks: int) -> list[int]:
    """Split n_paths into n_chunks contiguous sizes differing by at most one."""
    base, extra = divmod(n_paths, n_chunks)
    return [base + (1 if i < extra else 0) for i in range(n_chunks)]


def price_european_call_parallel(
    params: GBMParams,
    strike: float,
    n_paths: int = SETTINGS.simulation.mc_paths,
    seed: int = SETTINGS.simulation.demo_seed,
    n_workers: int = 4,
) -> MCResult:
    """
    Price a European call across worker processes.

    Each worker owns a generator seeded from ``spawn_seeds(seed, n_workers)``.
    Partial sums are combined in chunk order, so the result is reproducible
    for a fixed ``(seed, n_workers)``. It differs from the single-stream
    estimate for the same seed.

    Parameters
    ----------
    params : GBMParams
        GBM parameters
    strike : float
        Strike price
    n_paths : int
        Total number of paths, >= n_workers
    seed : int
        Base seed for deriving worker seeds
    n_workers : int, default 4
        Number of worker processes

    Returns
    -------
    MCResult
        Monte Carlo pricing result over all paths
    """
    _validate_n_paths(n_paths)
    _validate_strike(strike)
    if n_workers <= 0:
        raise ValueError(f"CRITICAL: n_workers must be > 0, got {n_workers}")
    if n_paths < n_workers:
        raise ValueError(
            f"CRITICAL: n_paths must be >= n_workers, got {n_paths} < {n_workers}"
        )

    chunks = _split_paths(int(n_paths), n_workers)
    seeds = spawn_seeds(seed, n_workers)
    logger.debug(f"Pricing {n_paths} paths on {n_workers} workers (seed={seed})")

    with ProcessPoolExecutor(max_workers=n_workers) as executor:
        partials = list(
            executor.map(
                _price_chunk,
                [params.spot] * n_workers,
                [params.rate] * n_workers,
                [params.volatility] * n_workers,
                [params.time_to_expiry] * n_workers,
                [strike] * n_workers,
                chunks,
                seeds,
            )
        )

    payoff_sum = 0.0
    payoff_sq_sum = 0.0
    for chunk_sum, chunk_sq_sum, _ in partials:
        payoff_sum += chunk_sum
        payoff_sq_sum += chunk_sq_sum

    return _compute_result(
        params,
        _PayoffSums(payoff_sum=payoff_sum, payoff_sq_sum=payoff_sq_sum, n_paths=int(n_paths)),
    )


def repeated_estimates(
    params: GBMParams,
    strike: float,
    n_paths: int,
    seeds: Sequence[int],
) -> np.ndarray:
    """
    Call price estimates for the same parameters under several seeds.

    The spread of the returned array measures sampling noise at ``n_paths``.
    """
    estimates = np.empty(len(seeds))
    for i, seed in enumerate(seeds):
        engine = MonteCarloEngine(n_paths=n_paths, seed=seed)
        estimates[i] = engine.price_european_call(params, strike).price
    return estimates


def convergence_analysis(
    params: GBMParams,
    strike: float,
    analytical_price: float,
    path_counts: Sequence[int] = (1_000, 10_000, 100_000),
    seed: int = SETTINGS.simulation.demo_seed,
) -> dict:
    """
    Track a call estimate against its Black-Scholes price as paths are added.

    A seeded Xorshift32 stream is walked once up to the largest count, and the
    running estimate is read off at every checkpoint. The estimate at N paths
    therefore uses the same draws as ``price_european_call_mc(..., n_paths=N,
    seed=seed)``, up to summation rounding.

    The default sweep stops at 100,000 paths because every path is a scalar
    Python draw; pass larger counts explicitly for a longer run.

    [T1] The standard error falls as 1/√N, so both fitted log-log slopes
    should sit near -0.5. The slope on standard errors is stable; the slope on
    absolute errors is noisy for a single stream.

    Parameters
    ----------
    params : GBMParams
        GBM parameters
    strike : float
        Strike price
    analytical_price : float
        Black-Scholes price to compare against
    path_counts : Sequence[int]
        Checkpoints, visited in increasing order; duplicates are dropped
    seed : int
        Seed of the single stream

    Returns
    -------
    dict
        ``results`` (one row per checkpoint), ``convergence_rate`` (slope of
        log absolute error) and ``standard_error_rate`` (slope of log SE)
    """
    checkpoints = sorted(set(int(n) for n in path_counts))
    if not checkpoints:
        raise ValueError("CRITICAL: path_counts must not be empty")
    _validate_n_paths(checkpoints[0])
    _validate_strike(strike)

    rng = Xorshift32(seed)
    payoff_sum = 0.0
    payoff_sq_sum = 0.0
    done = 0
    results = []

    for n in checkpoints:
        step = _accumulate_payoffs(params, strike, n - done, rng, OptionType.CALL)
        payoff_sum += step.payoff_sum
        payoff_sq_sum += step.payoff_sq_sum
        done = n

        mc_result = _compute_result(
            params, _PayoffSums(payoff_sum=payoff_sum, payoff_sq_sum=payoff_sq_sum, n_paths=n)
        )
        error = abs(mc_result.price - analytical_price)
        low, high = mc_result.confidence_interval

        results.append(
            {
                "n_paths": n,
                "mc_price": mc_result.price,
                "analytical_price": analytical_price,
                "absolute_error": error,
                "relative_error": error / analytical_price if analytical_price > 0 else float("inf"),
                "standard_error": mc_result.standard_error,
                "within_ci": low <= analytical_price <= high,
            }
        )

    return {
        "results": results,
        "convergence_rate": _log_log_slope(results, "absolute_error"),
        "standard_error_rate": _log_log_slope(results, "standard_error"),
    }


def _log_log_slope(results: list[dict], key: str) -> float:
    """Slope of log(results[key]) against log(n_paths); nan below two points."""
    if len(results) < 2:
        return float("nan")

    log_n = np.log([r["n_paths"] for r in results])
    # Floor keeps an exact hit from sending log to -inf
    log_value = np.log([r[key] + 1e-10 for r in results])

    slope, _ = np.polyfit(log_n, log_value, 1)
    return float(slope)
