"""
Option test record schema.

One row of a record file: a quoted European call on a listed stock, with the
inputs the pricers need and the observed market price for comparison.
"""

from dataclasses import asdict, dataclass

from mc_option_pricing.config.settings import SETTINGS
from mc_option_pricing.options.simulation.gbm import GBMParams

#: Column order of a record row
RECORD_FIELDS: tuple[str, ...] = (
    "ticker",
    "spot",
    "strike",
    "rate",
    "volatility",
    "days_to_expiry",
    "market_price",
)


@dataclass(frozen=True)
class OptionRecord:
    """
    Immutable option test record.

    Attributes
    ----------
    ticker : str
        Underlying ticker symbol
    spot : float
        Current stock price (S0)
    strike : float
        Strike price (K)
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Annualized volatility (decimal)
    days_to_expiry : int
        Calendar days until expiry
    market_price : float
        Observed option price; <= 0.01 means unavailable

    Examples
    --------
    >>> record = OptionRecord("AAPL", 190.0, 185.0, 0.05, 0.25, 30, 8.10)
    >>> round(record.time_to_expiry, 4)
    0.0822
    """

    ticker: str
    spot: float
    strike: float
    rate: float
    volatility: float
    days_to_expiry: int
    market_price: float

    @property
    def time_to_expiry(self) -> float:
        """Time to expiry in years (calendar-day count)."""
        return self.days_to_expiry / SETTINGS.simulation.days_per_year

    @property
    def moneyness_ratio(self) -> float:
        """Spot over strike, S0/K."""
        return self.spot / self.strike

    @property
    def has_market_price(self) -> bool:
        """Whether the market price is usable for comparison."""
        return self.market_price > SETTINGS.report.min_market_price

    def to_gbm_params(self) -> GBMParams:
        """GBM parameters for simulating this record's underlying."""
        return GBMParams(
            spot=self.spot,
            rate=self.rate,
            volatility=self.volatility,
            time_to_expiry=self.time_to_expiry,
        )

    def to_dict(self) -> dict:
        """Plain dict in record column order."""
        return asdict(self)
