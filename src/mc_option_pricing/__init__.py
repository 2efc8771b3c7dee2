"""
mc-option-pricing: Monte Carlo pricing of European options with a
Black-Scholes reference.

Quick Start
-----------
>>> from mc_option_pricing import price_european_call_mc, price_european_call_analytic
>>> price_european_call_mc(100.0, 100.0, 0.05, 0.20, 1.0, n_paths=100_000, seed=123456)
>>> round(price_european_call_analytic(100.0, 100.0, 0.05, 0.20, 1.0), 4)
10.4506

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Simulation
# =============================================================================
from mc_option_pricing.options.simulation import (
    GBMParams,
    MCResult,
    MonteCarloEngine,
    Xorshift32,
    box_muller,
    convergence_analysis,
    price_european_call_mc,
    price_european_call_parallel,
    repeated_estimates,
    simulate_terminal_price,
    spawn_seeds,
)

# =============================================================================
# Payoffs and Analytical Pricing
# =============================================================================
from mc_option_pricing.options.payoffs import OptionType, call_payoff, put_payoff
from mc_option_pricing.options.pricing import (
    BSResult,
    black_scholes_call,
    black_scholes_price,
    black_scholes_put,
    normal_cdf,
    price_european_call_analytic,
    put_call_parity_check,
)

# =============================================================================
# Records and Batch Comparison
# =============================================================================
from mc_option_pricing.data import DataLoadError, OptionRecord, load_option_records
from mc_option_pricing.batch import (
    BatchConfig,
    BatchReporter,
    BatchResult,
    BatchRunner,
    SeedPolicy,
)

# =============================================================================
# Configuration
# =============================================================================
from mc_option_pricing.config import SETTINGS

__all__ = [
    "__version__",
    # Simulation
    "GBMParams",
    "MCResult",
    "MonteCarloEngine",
    "Xorshift32",
    "box_muller",
    "convergence_analysis",
    "price_european_call_mc",
    "price_european_call_parallel",
    "repeated_estimates",
    "simulate_terminal_price",
    "spawn_seeds",
    # Payoffs and analytical pricing
    "OptionType",
    "call_payoff",
    "put_payoff",
    "BSResult",
    "black_scholes_call",
    "black_scholes_price",
    "black_scholes_put",
    "normal_cdf",
    "price_european_call_analytic",
    "put_call_parity_check",
    # Records and batch
    "DataLoadError",
    "OptionRecord",
    "load_option_records",
    "BatchConfig",
    "BatchReporter",
    "BatchResult",
    "BatchRunner",
    "SeedPolicy",
    # Configuration
    "SETTINGS",
]
