"""
Batch comparison of Monte Carlo and Black-Scholes prices over record files.
"""

from mc_option_pricing.batch.reporting import BatchReporter
from mc_option_pricing.batch.runner import (
    BatchConfig,
    BatchResult,
    BatchRunner,
    BatchSummary,
    Moneyness,
    PricingFailure,
    PricingOutcome,
    classify_moneyness,
    create_summary,
)
from mc_option_pricing.batch.seeding import SeedPolicy

__all__ = [
    "BatchConfig",
    "BatchReporter",
    "BatchResult",
    "BatchRunner",
    "BatchSummary",
    "Moneyness",
    "PricingFailure",
    "PricingOutcome",
    "SeedPolicy",
    "classify_moneyness",
    "create_summary",
]
