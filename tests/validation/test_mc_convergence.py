"""
Monte Carlo convergence tests.

[T1] MC must converge to Black-Scholes for vanilla calls.
This validates the entire simulation pipeline (generator, sampler, GBM,
payoff, discounting).

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering"
"""

import math

import numpy as np
import pytest

from mc_option_pricing.config.tolerances import BS_MC_CONVERGENCE_TOLERANCE
from mc_option_pricing.options.pricing.black_scholes import black_scholes_call
from mc_option_pricing.options.simulation.gbm import GBMParams
from mc_option_pricing.options.simulation.monte_carlo import (
    MonteCarloEngine,
    price_european_call_mc,
    repeated_estimates,
)
from mc_option_pricing.options.simulation.rng import spawn_seeds


class TestMCConvergesToBS:
    """
    Tests that MC converges to analytical Black-Scholes prices.

    [T1] This is the definitive validation that the MC pricer is correct.
    """

    @pytest.mark.slow
    def test_reference_run_within_one_percent(self, textbook_case):
        """
        [T1] 1,000,000 paths with seed 123456 land within 1% of 10.4506.
        """
        mc_price = price_european_call_mc(*textbook_case.args(), n_paths=1_000_000, seed=123456)
        bs_price = black_scholes_call(*textbook_case.args())

        rel_error = abs(mc_price - bs_price) / bs_price
        assert rel_error < BS_MC_CONVERGENCE_TOLERANCE, (
            f"MC {mc_price:.4f} vs BS {bs_price:.4f}: {rel_error:.2%}"
        )

    @pytest.mark.parametrize(
        "spot,strike,volatility,days",
        [
            (190.5, 185.0, 0.24, 30),  # ITM
            (410.2, 410.0, 0.22, 45),  # ATM
            (175.8, 200.0, 0.55, 21),  # OTM, high vol
        ],
    )
    def test_within_standard_errors(self, spot, strike, volatility, days):
        """MC lies within 4 standard errors of BS at 100k paths."""
        time_to_expiry = days / 365
        params = GBMParams(spot=spot, rate=0.053, volatility=volatility, time_to_expiry=time_to_expiry)
        result = MonteCarloEngine(n_paths=100_000, seed=42).price_european_call(params, strike)
        bs_price = black_scholes_call(spot, strike, 0.053, volatility, time_to_expiry)

        assert abs(result.price - bs_price) < 4 * result.standard_error

    def test_near_zero_volatility(self):
        """σ → 0 collapses MC to S - K e^(-rT) ≈ 4.877."""
        mc_price = price_european_call_mc(100.0, 100.0, 0.05, 0.0001, 1.0, n_paths=10_000, seed=1)
        assert mc_price == pytest.approx(100.0 - 100.0 * math.exp(-0.05), abs=0.01)

    def test_deep_itm_close_to_intrinsic_forward(self):
        mc_price = price_european_call_mc(200.0, 50.0, 0.05, 0.2, 0.25, n_paths=20_000, seed=7)
        expected = 200.0 - 50.0 * math.exp(-0.05 * 0.25)
        assert mc_price == pytest.approx(expected, rel=0.005)

    def test_deep_otm_close_to_zero(self):
        mc_price = price_european_call_mc(50.0, 200.0, 0.05, 0.2, 0.25, n_paths=20_000, seed=7)
        assert mc_price < 1e-6


class TestStandardErrorScaling:
    """[T1] Standard deviation of the estimator falls as 1/√N."""

    @pytest.mark.slow
    def test_four_times_paths_halves_spread(self, standard_params):
        seeds = spawn_seeds(2024, 60)

        small = repeated_estimates(standard_params, 100.0, n_paths=2000, seeds=seeds)
        large = repeated_estimates(standard_params, 100.0, n_paths=8000, seeds=seeds)

        ratio = np.std(large, ddof=1) / np.std(small, ddof=1)
        assert 0.3 < ratio < 0.8, f"Spread ratio {ratio:.3f}, expected ≈ 0.5"

    def test_reported_standard_error_scaling(self, standard_params):
        se_small = MonteCarloEngine(n_paths=10_000, seed=3).price_european_call(standard_params, 100.0)
        se_large = MonteCarloEngine(n_paths=40_000, seed=3).price_european_call(standard_params, 100.0)

        ratio = se_large.standard_error / se_small.standard_error
        assert ratio == pytest.approx(0.5, rel=0.1)

    def test_multi_seed_mean_unbiased(self, standard_params):
        seeds = spawn_seeds(77, 40)
        estimates = repeated_estimates(standard_params, 100.0, n_paths=2500, seeds=seeds)
        bs_price = black_scholes_call(100.0, 100.0, 0.05, 0.20, 1.0)

        # SE of the mean of 40 estimates ≈ 14.7 / sqrt(100_000) ≈ 0.047
        assert abs(estimates.mean() - bs_price) < 0.25
