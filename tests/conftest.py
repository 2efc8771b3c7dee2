"""
Centralized pytest fixtures for the mc-option-pricing test suite.

Fixture Categories:
1. Tolerance Tiers - Analytical vs stochastic comparison tolerances
2. Market Parameters - Standard option inputs
3. Record Files - Sample CSV records for loader and batch tests
"""

from dataclasses import dataclass
from pathlib import Path

import pytest

from mc_option_pricing.data.schemas import OptionRecord
from mc_option_pricing.options.simulation.gbm import GBMParams

# =============================================================================
# FIXTURE PATHS
# =============================================================================

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_RECORDS_PATH = FIXTURES_DIR / "real_stocks.csv"


# =============================================================================
# TOLERANCE TIERS
# =============================================================================

@dataclass(frozen=True)
class ToleranceTiers:
    """
    Tiered tolerances for different test types.

    Analytical checks are deterministic; Monte Carlo checks scale with
    the standard error of the estimate.
    """

    # Deterministic identities (bounds, parity, symmetry)
    anti_pattern: float = 1e-10

    # Closed-form vs published values
    validation: float = 1e-4

    # Monte Carlo vs analytical
    mc_100k_paths: float = 0.02  # 2%
    mc_1m_paths: float = 0.01  # 1%


TOLERANCES = ToleranceTiers()


@pytest.fixture(scope="session")
def tolerances() -> ToleranceTiers:
    """Provide tiered tolerance settings for all tests."""
    return TOLERANCES


# =============================================================================
# MARKET PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class MarketCase:
    """Inputs for one European call."""

    spot: float
    strike: float
    rate: float
    volatility: float
    time_to_expiry: float

    def gbm(self) -> GBMParams:
        return GBMParams(
            spot=self.spot,
            rate=self.rate,
            volatility=self.volatility,
            time_to_expiry=self.time_to_expiry,
        )

    def args(self) -> tuple[float, float, float, float, float]:
        return (self.spot, self.strike, self.rate, self.volatility, self.time_to_expiry)


@pytest.fixture
def textbook_case() -> MarketCase:
    """S=K=100, r=5%, σ=20%, T=1 (BS call = 10.4506)."""
    return MarketCase(spot=100.0, strike=100.0, rate=0.05, volatility=0.20, time_to_expiry=1.0)


@pytest.fixture
def standard_params(textbook_case: MarketCase) -> GBMParams:
    """GBM parameters of the textbook case."""
    return textbook_case.gbm()


# =============================================================================
# RECORD FILES
# =============================================================================

@pytest.fixture
def sample_records_path() -> Path:
    """Sample record file with comments, a blank row and a malformed row."""
    return SAMPLE_RECORDS_PATH


@pytest.fixture
def write_records(tmp_path: Path):
    """Write record rows to a temporary CSV and return its path."""

    def _write(*rows: str, name: str = "records.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(rows) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def atm_record() -> OptionRecord:
    """At-the-money record with a market quote."""
    return OptionRecord(
        ticker="MSFT",
        spot=410.20,
        strike=410.00,
        rate=0.053,
        volatility=0.22,
        days_to_expiry=45,
        market_price=15.40,
    )
