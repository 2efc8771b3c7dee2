"""
Monte Carlo simulation for option pricing.

Provides:
- Xorshift32 uniform stream and Box-Muller normal sampler
- GBM terminal price sampling
- Monte Carlo pricing engine
- Convergence analysis tools
"""

from mc_option_pricing.options.simulation.gbm import (
    GBMParams,
    simulate_terminal_price,
    validate_gbm_simulation,
)
from mc_option_pricing.options.simulation.monte_carlo import (
    MCResult,
    MonteCarloEngine,
    convergence_analysis,
    price_european_call_mc,
    price_european_call_parallel,
    repeated_estimates,
)
from mc_option_pricing.options.simulation.rng import (
    UINT32_MAX,
    Xorshift32,
    box_muller,
    spawn_seeds,
)

__all__ = [
    # RNG
    "UINT32_MAX",
    "Xorshift32",
    "box_muller",
    "spawn_seeds",
    # GBM
    "GBMParams",
    "simulate_terminal_price",
    "validate_gbm_simulation",
    # Monte Carlo
    "MCResult",
    "MonteCarloEngine",
    "convergence_analysis",
    "price_european_call_mc",
    "price_european_call_parallel",
    "repeated_estimates",
]
