"""
Option record file loader.

Record files are plain comma-separated text, one option per row:

    ticker,S0,K,r,sigma,days_to_expiry,market_price

Rows starting with ``#`` and blank rows are ignored. A row is accepted only
if all seven fields parse; anything else is skipped and counted, never fatal.
A missing or unreadable file is an error.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

import pandas as pd

from mc_option_pricing.config.settings import SETTINGS
from mc_option_pricing.data.schemas import RECORD_FIELDS, OptionRecord

logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """Raised when a record file cannot be read."""

    pass


@dataclass(frozen=True)
class RecordLoadResult:
    """
    Outcome of loading a record file.

    Attributes
    ----------
    records : tuple[OptionRecord, ...]
        Accepted records, in file order
    n_ignored : int
        Comment and blank rows
    skipped_lines : tuple[int, ...]
        1-based line numbers of malformed rows
    source : str
        Where the rows came from
    """

    records: tuple[OptionRecord, ...]
    n_ignored: int = 0
    skipped_lines: tuple[int, ...] = ()
    source: str = "<memory>"

    @property
    def n_accepted(self) -> int:
        """Number of accepted records."""
        return len(self.records)

    @property
    def n_skipped(self) -> int:
        """Number of malformed rows."""
        return len(self.skipped_lines)

    def to_frame(self) -> pd.DataFrame:
        """Accepted records as a DataFrame."""
        return records_to_frame(self.records)


def _is_ignored(line: str) -> bool:
    stripped = line.strip()
    return not stripped or line.startswith(SETTINGS.records.comment_prefix)


def _parse_float(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


def parse_record_line(line: str) -> Optional[OptionRecord]:
    """
    Parse one record row.

    Parameters
    ----------
    line : str
        Raw row, with or without trailing newline

    Returns
    -------
    OptionRecord or None
        None for comment, blank, or malformed rows

    Examples
    --------
    >>> parse_record_line("MSFT,410.5,420,0.05,0.22,45,6.35").ticker
    'MSFT'
    >>> parse_record_line("# ticker,S0,K,r,sigma,days,price") is None
    True
    """
    if _is_ignored(line):
        return None

    fields = [f.strip() for f in line.strip().split(",")]
    if len(fields) != SETTINGS.records.field_count:
        return None

    ticker = fields[0]
    if not ticker or len(ticker) > SETTINGS.records.max_ticker_length:
        return None

    spot, strike, rate, volatility = (_parse_float(f) for f in fields[1:5])
    days = _parse_int(fields[5])
    market_price = _parse_float(fields[6])

    parsed = (spot, strike, rate, volatility, days, market_price)
    if any(value is None for value in parsed):
        return None

    return OptionRecord(
        ticker=ticker,
        spot=spot,
        strike=strike,
        rate=rate,
        volatility=volatility,
        days_to_expiry=days,
        market_price=market_price,
    )


def parse_records(lines: Iterable[str], source: str = "<memory>") -> RecordLoadResult:
    """
    Parse an iterable of rows, counting ignored and skipped rows.

    Parameters
    ----------
    lines : Iterable[str]
        Raw rows
    source : str
        Label used in log messages and the result

    Returns
    -------
    RecordLoadResult
        Accepted records with ignored/skipped counts
    """
    records = []
    skipped = []
    n_ignored = 0

    for line_number, line in enumerate(lines, start=1):
        if _is_ignored(line):
            n_ignored += 1
            continue

        record = parse_record_line(line)
        if record is None:
            logger.debug(f"Skipping malformed row {source}:{line_number}: {line.rstrip()!r}")
            skipped.append(line_number)
            continue

        records.append(record)

    if skipped:
        logger.info(f"{source}: accepted {len(records)} rows, skipped {len(skipped)} malformed")

    return RecordLoadResult(
        records=tuple(records),
        n_ignored=n_ignored,
        skipped_lines=tuple(skipped),
        source=source,
    )


def load_option_records(path: Optional[Union[str, Path]] = None) -> RecordLoadResult:
    """
    Load option records from a file.

    Parameters
    ----------
    path : str or Path, optional
        Record file. Defaults to SETTINGS.records.records_path

    Returns
    -------
    RecordLoadResult
        Accepted records with ignored/skipped counts

    Raises
    ------
    DataLoadError
        If the file does not exist or cannot be read
    """
    file_path = Path(path) if path is not None else SETTINGS.records.records_path

    if not file_path.exists():
        raise DataLoadError(
            f"CRITICAL: record file not found at {file_path}. "
            f"Pass a path or set MC_PRICING_RECORDS_PATH."
        )

    try:
        with open(file_path, encoding="utf-8") as f:
            return parse_records(f, source=str(file_path))
    except (OSError, UnicodeDecodeError) as e:
        raise DataLoadError(
            f"CRITICAL: Failed to read record file {file_path}. Error: {e}"
        ) from e


def records_to_frame(records: Iterable[OptionRecord]) -> pd.DataFrame:
    """
    Convert records to a DataFrame with one column per record field.

    Adds ``time_to_expiry`` (years) and ``moneyness_ratio`` (S0/K).
    """
    df = pd.DataFrame([r.to_dict() for r in records], columns=list(RECORD_FIELDS))
    df["time_to_expiry"] = df["days_to_expiry"] / SETTINGS.simulation.days_per_year
    df["moneyness_ratio"] = df["spot"] / df["strike"]
    return df
