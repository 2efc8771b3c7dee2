"""
Batch comparison of Monte Carlo and Black-Scholes prices over option records.

For every record the runner re-seeds one generator with the record's seed,
prices the call both ways, and measures the Monte Carlo error against the
analytical price (and against the market price when one is quoted).
A record whose values violate a pricing domain rule is reported as a failure
and the batch carries on.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

import pandas as pd

from mc_option_pricing.config.settings import SETTINGS
from mc_option_pricing.data.loader import RecordLoadResult, load_option_records
from mc_option_pricing.data.schemas import OptionRecord
from mc_option_pricing.options.pricing.black_scholes import black_scholes_call
from mc_option_pricing.options.simulation.monte_carlo import MonteCarloEngine
from mc_option_pricing.options.simulation.rng import Xorshift32
from mc_option_pricing.batch.seeding import SeedPolicy

logger = logging.getLogger(__name__)


class Moneyness(Enum):
    """Moneyness class of a call by S0/K."""

    ITM = "ITM"
    ATM = "ATM"
    OTM = "OTM"


def classify_moneyness(spot: float, strike: float) -> Moneyness:
    """
    Classify a call by S0/K.

    ITM above ``itm_ratio`` (1.02), OTM below ``otm_ratio`` (0.98), else ATM.
    """
    ratio = spot / strike
    if ratio > SETTINGS.report.itm_ratio:
        return Moneyness.ITM
    if ratio < SETTINGS.report.otm_ratio:
        return Moneyness.OTM
    return Moneyness.ATM


@dataclass(frozen=True)
class BatchConfig:
    """
    Configuration for a batch comparison.

    Attributes
    ----------
    n_paths : int
        Monte Carlo paths per record
    seed_policy : SeedPolicy
        Base seed; record i uses ``seed_policy.seed_for(i)``
    accuracy_threshold_pct : float
        |MC - BS| / BS below this percentage counts as accurate
    verbose : bool
        Log progress during execution
    """

    n_paths: int = SETTINGS.simulation.batch_paths
    seed_policy: SeedPolicy = field(
        default_factory=lambda: SeedPolicy.fixed(SETTINGS.simulation.batch_seed)
    )
    accuracy_threshold_pct: float = SETTINGS.report.accuracy_threshold_pct
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.n_paths <= 0:
            raise ValueError(f"CRITICAL: n_paths must be > 0, got {self.n_paths}")


@dataclass(frozen=True)
class PricingOutcome:
    """
    Prices and errors for one record.

    Attributes
    ----------
    record : OptionRecord
        Input record
    seed : int
        Generator seed used for this record
    mc_price : float
        Monte Carlo price
    mc_standard_error : float
        Standard error of the Monte Carlo price
    bs_price : float
        Black-Scholes price
    mc_bs_error_pct : float or None
        (MC - BS) / BS in percent; None when BS is too small to divide by
    market_error_pct : float or None
        (MC - market) / market in percent; None without a market price
    moneyness : Moneyness
        ITM / ATM / OTM
    """

    record: OptionRecord
    seed: int
    mc_price: float
    mc_standard_error: float
    bs_price: float
    mc_bs_error_pct: Optional[float]
    market_error_pct: Optional[float]
    moneyness: Moneyness

    def within(self, threshold_pct: float) -> bool:
        """Whether the MC-BS error is defined and below the threshold."""
        return self.mc_bs_error_pct is not None and abs(self.mc_bs_error_pct) < threshold_pct


@dataclass(frozen=True)
class PricingFailure:
    """A record that could not be priced, and why."""

    record: OptionRecord
    message: str


@dataclass(frozen=True)
class BatchSummary:
    """
    Aggregate statistics of a batch.

    Attributes
    ----------
    n_priced : int
        Records priced
    n_within_threshold : int
        Records whose MC price is within the accuracy threshold of BS
    mean_abs_error_pct : float
        Mean |MC - BS| / BS in percent over records where it is defined
    n_failed : int
        Records rejected by a pricing domain rule
    n_skipped_rows : int
        Malformed rows skipped while loading
    threshold_pct : float
        Accuracy threshold used
    """

    n_priced: int
    n_within_threshold: int
    mean_abs_error_pct: float
    n_failed: int = 0
    n_skipped_rows: int = 0
    threshold_pct: float = SETTINGS.report.accuracy_threshold_pct

    @property
    def fraction_within(self) -> float:
        """Share of priced records within the threshold."""
        if self.n_priced == 0:
            return 0.0
        return self.n_within_threshold / self.n_priced


@dataclass
class BatchResult:
    """
    Complete batch result.

    Attributes
    ----------
    outcomes : list[PricingOutcome]
        Per-record results, in record order
    failures : list[PricingFailure]
        Records that could not be priced
    summary : BatchSummary
        Aggregate statistics
    config : BatchConfig
        Configuration used
    execution_time_sec : float
        Wall-clock duration
    source : str
        Where the records came from
    """

    outcomes: list[PricingOutcome]
    failures: list[PricingFailure]
    summary: BatchSummary
    config: BatchConfig
    execution_time_sec: float
    source: str = "<memory>"

    def to_frame(self) -> pd.DataFrame:
        """One row per priced record."""
        rows = [
            {
                "ticker": o.record.ticker,
                "moneyness": o.moneyness.value,
                "spot": o.record.spot,
                "strike": o.record.strike,
                "volatility": o.record.volatility,
                "days_to_expiry": o.record.days_to_expiry,
                "seed": o.seed,
                "mc_price": o.mc_price,
                "mc_standard_error": o.mc_standard_error,
                "bs_price": o.bs_price,
                "mc_bs_error_pct": o.mc_bs_error_pct,
                "market_price": o.record.market_price if o.record.has_market_price else None,
                "market_error_pct": o.market_error_pct,
            }
            for o in self.outcomes
        ]
        return pd.DataFrame(rows)


def create_summary(
    outcomes: list[PricingOutcome],
    threshold_pct: float,
    n_failed: int = 0,
    n_skipped_rows: int = 0,
) -> BatchSummary:
    """Aggregate per-record outcomes into a BatchSummary."""
    errors = [abs(o.mc_bs_error_pct) for o in outcomes if o.mc_bs_error_pct is not None]
    mean_abs_error = sum(errors) / len(errors) if errors else 0.0

    return BatchSummary(
        n_priced=len(outcomes),
        n_within_threshold=sum(1 for o in outcomes if o.within(threshold_pct)),
        mean_abs_error_pct=mean_abs_error,
        n_failed=n_failed,
        n_skipped_rows=n_skipped_rows,
        threshold_pct=threshold_pct,
    )


class BatchRunner:
    """
    Prices option records with Monte Carlo and Black-Scholes side by side.

    Parameters
    ----------
    config : BatchConfig, optional
        Batch configuration. If None, uses defaults.

    Examples
    --------
    >>> runner = BatchRunner(BatchConfig(n_paths=10_000))
    >>> result = runner.run_file("tests/fixtures/real_stocks.csv")
    >>> print(f"{result.summary.n_within_threshold}/{result.summary.n_priced} within 1%")
    """

    def __init__(self, config: Optional[BatchConfig] = None):
        self.config = config or BatchConfig()
        self._engine = MonteCarloEngine(n_paths=self.config.n_paths, rng=Xorshift32())

    def price_record(self, record: OptionRecord, seed: int) -> PricingOutcome:
        """
        Price one record with a freshly seeded stream.

        Raises
        ------
        ValueError
            If the record's values are outside a pricer's domain
        """
        params = record.to_gbm_params()
        bs_price = black_scholes_call(
            record.spot, record.strike, record.rate, record.volatility, record.time_to_expiry
        )

        self._engine.reseed(seed)
        mc_result = self._engine.price_european_call(params, record.strike)
        mc_price = mc_result.price

        mc_bs_error_pct = None
        if bs_price > SETTINGS.report.min_reference_price:
            mc_bs_error_pct = (mc_price - bs_price) / bs_price * 100.0

        market_error_pct = None
        if record.has_market_price:
            market_error_pct = (mc_price - record.market_price) / record.market_price * 100.0

        return PricingOutcome(
            record=record,
            seed=seed,
            mc_price=mc_price,
            mc_standard_error=mc_result.standard_error,
            bs_price=bs_price,
            mc_bs_error_pct=mc_bs_error_pct,
            market_error_pct=market_error_pct,
            moneyness=classify_moneyness(record.spot, record.strike),
        )

    def run(
        self,
        records: Iterable[OptionRecord],
        n_skipped_rows: int = 0,
        source: str = "<memory>",
    ) -> BatchResult:
        """
        Price every record.

        Parameters
        ----------
        records : Iterable[OptionRecord]
            Records to price, in order; record i uses seed_policy.seed_for(i)
        n_skipped_rows : int
            Malformed rows skipped upstream, carried into the summary
        source : str
            Label for the result

        Returns
        -------
        BatchResult
            Per-record outcomes, failures, and summary
        """
        start_time = time.time()
        config = self.config
        records = list(records)

        if config.verbose:
            logger.info(
                f"Pricing {len(records)} records from {source} "
                f"({config.n_paths:,} paths, seed {config.seed_policy.label})"
            )

        outcomes: list[PricingOutcome] = []
        failures: list[PricingFailure] = []

        for i, record in enumerate(records):
            try:
                outcome = self.price_record(record, config.seed_policy.seed_for(i))
            except ValueError as e:
                logger.warning(f"  FAILED: {record.ticker} K={record.strike}: {e}")
                failures.append(PricingFailure(record=record, message=str(e)))
                continue

            outcomes.append(outcome)
            if config.verbose:
                logger.info(f"  [{i + 1}/{len(records)}] {record.ticker} K={record.strike}")

        summary = create_summary(
            outcomes,
            threshold_pct=config.accuracy_threshold_pct,
            n_failed=len(failures),
            n_skipped_rows=n_skipped_rows,
        )

        execution_time = time.time() - start_time
        if config.verbose:
            logger.info(
                f"Completed in {execution_time:.2f}s: "
                f"{summary.n_within_threshold}/{summary.n_priced} within "
                f"{config.accuracy_threshold_pct:g}%"
            )

        return BatchResult(
            outcomes=outcomes,
            failures=failures,
            summary=summary,
            config=config,
            execution_time_sec=execution_time,
            source=source,
        )

    def run_loaded(self, loaded: RecordLoadResult) -> BatchResult:
        """Price the records of a RecordLoadResult."""
        return self.run(loaded.records, n_skipped_rows=loaded.n_skipped, source=loaded.source)

    def run_file(self, path: Optional[Union[str, Path]] = None) -> BatchResult:
        """
        Load a record file and price it.

        Raises
        ------
        DataLoadError
            If the file cannot be read
        """
        return self.run_loaded(load_option_records(path))
