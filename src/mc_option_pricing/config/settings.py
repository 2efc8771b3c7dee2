"""
Frozen configuration settings for option pricing runs.

All configuration is immutable (frozen dataclasses) so that a run can be
reproduced from its settings alone.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from mc_option_pricing.config.tolerances import BS_MC_CONVERGENCE_TOLERANCE


# =============================================================================
# Record File Configuration
# =============================================================================

def _resolve_records_path() -> Path:
    """
    Resolve the option record file with environment variable override.

    Priority:
    1. MC_PRICING_RECORDS_PATH environment variable (if set)
    2. Default: tests/real_stocks.csv relative to the working directory

    Returns
    -------
    Path
        Resolved path to the record CSV file
    """
    env_path = os.environ.get("MC_PRICING_RECORDS_PATH")
    if env_path:
        return Path(env_path)
    return Path("tests") / "real_stocks.csv"


@dataclass(frozen=True)
class RecordConfig:
    """
    Immutable option record file configuration.

    Attributes
    ----------
    records_path : Path
        Default record file. Override with MC_PRICING_RECORDS_PATH.
    field_count : int
        Number of comma-separated fields in a valid row
    max_ticker_length : int
        Longest accepted ticker symbol
    comment_prefix : str
        Rows starting with this prefix are ignored
    """

    records_path: Path = None  # type: ignore[assignment]  # Set in __post_init__
    field_count: int = 7
    max_ticker_length: int = 9
    comment_prefix: str = "#"

    def __post_init__(self) -> None:
        """Initialize records_path using resolver function."""
        if self.records_path is None:
            object.__setattr__(self, "records_path", _resolve_records_path())


# =============================================================================
# Simulation Configuration
# =============================================================================

@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable Monte Carlo configuration.

    Attributes
    ----------
    mc_paths : int
        Paths for a single pricing run
    batch_paths : int
        Paths per record in batch comparisons
    demo_seed : int
        Fixed seed for single pricing runs
    batch_seed : int
        Base seed for batch comparisons
    days_per_year : float
        Day count used to convert days-to-expiry into years
    """

    mc_paths: int = 1_000_000
    batch_paths: int = 500_000
    demo_seed: int = 123456
    batch_seed: int = 42
    days_per_year: float = 365.0  # Calendar days


# =============================================================================
# Report Configuration
# =============================================================================

@dataclass(frozen=True)
class ReportConfig:
    """
    Immutable batch report configuration.

    Attributes
    ----------
    accuracy_threshold_pct : float
        MC price within this percentage of BS counts as accurate
    min_market_price : float
        Market prices at or below this are treated as unavailable
    itm_ratio : float
        S0/K above this is in the money
    otm_ratio : float
        S0/K below this is out of the money
    min_reference_price : float
        BS prices below this make the relative error undefined
    """

    accuracy_threshold_pct: float = BS_MC_CONVERGENCE_TOLERANCE * 100
    min_market_price: float = 0.01
    itm_ratio: float = 1.02
    otm_ratio: float = 0.98
    min_reference_price: float = 1e-12


# =============================================================================
# Master Configuration
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """
    Master frozen configuration combining all sub-configs.

    Usage
    -----
    >>> from mc_option_pricing.config.settings import SETTINGS
    >>> SETTINGS.simulation.mc_paths
    1000000
    """

    records: RecordConfig = RecordConfig()
    simulation: SimulationConfig = SimulationConfig()
    report: ReportConfig = ReportConfig()


# Singleton instance - import this
SETTINGS = Settings()
