"""
Batch pricing reports.

Generates a fixed-width boxed table (human-readable) and JSON
(machine-readable) for a BatchResult.
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional

from mc_option_pricing.batch.runner import BatchResult, BatchSummary, PricingOutcome


# =============================================================================
# Table Layout
# =============================================================================

_HEADER_FORMAT = "| {:<5} | {:<3} | {:>8} | {:>8} | {:>6} | {:>4} | {:>8} | {:>8} | {:>7} | {:<18} |"
_ROW_FORMAT = (
    "| {ticker:<5} | {moneyness:>3} | ${spot:7.2f} | ${strike:7.2f} | {vol:5.1f}% "
    "| {days:3d}d | ${mc:7.2f} | ${bs:7.2f} | {err:>7} | {market:<18} |"
)
_RULE = "|-------|-----|----------|----------|--------|------|----------|----------|---------|--------------------|"
_WIDTH = len(_RULE)


def _boxed(text: str) -> str:
    """Pad text into a double-line box row."""
    return "║ " + text.ljust(_WIDTH - 4) + " ║"


def _format_error(error_pct: Optional[float]) -> str:
    if error_pct is None:
        return "N/A"
    return f"{error_pct:+6.2f}%"


def _format_market(outcome: PricingOutcome) -> str:
    if outcome.market_error_pct is None:
        return "N/A"
    return f"${outcome.record.market_price:.2f} ({outcome.market_error_pct:+.1f}%)"


class BatchReporter:
    """
    Renders batch results as a table or JSON.

    Examples
    --------
    >>> result = BatchRunner(BatchConfig(n_paths=10_000)).run_file(path)
    >>> print(BatchReporter().to_table(result))
    """

    def __init__(self, title: str = "OPTION PRICING BATCH: MONTE CARLO VS BLACK-SCHOLES"):
        self.title = title

    def format_row(self, outcome: PricingOutcome) -> str:
        """One table row for a priced record."""
        record = outcome.record
        return _ROW_FORMAT.format(
            ticker=record.ticker,
            moneyness=outcome.moneyness.value,
            spot=record.spot,
            strike=record.strike,
            vol=record.volatility * 100,
            days=record.days_to_expiry,
            mc=outcome.mc_price,
            bs=outcome.bs_price,
            err=_format_error(outcome.mc_bs_error_pct),
            market=_format_market(outcome),
        )

    def format_summary(self, summary: BatchSummary) -> str:
        """Summary line for the table footer."""
        return (
            f"SUMMARY: {summary.n_priced} options tested | "
            f"MC within {summary.threshold_pct:g}% of BS: "
            f"{summary.n_within_threshold}/{summary.n_priced} "
            f"({summary.fraction_within * 100:.1f}%) | "
            f"Avg MC-BS error: {summary.mean_abs_error_pct:.2f}%"
        )

    def to_table(self, result: BatchResult) -> str:
        """
        Generate the boxed comparison table.

        Parameters
        ----------
        result : BatchResult
            Batch results

        Returns
        -------
        str
            Multi-line table
        """
        lines = [
            "╔" + "═" * (_WIDTH - 2) + "╗",
            "║" + self.title.center(_WIDTH - 2) + "║",
            "╠" + "═" * (_WIDTH - 2) + "╣",
            _HEADER_FORMAT.format(
                "Stock", "M", "Price", "Strike", "Vol", "Exp", "MC", "BS", "MC-BS", "Market (error)"
            ),
            _RULE,
        ]
        lines.extend(self.format_row(outcome) for outcome in result.outcomes)
        lines.append("╠" + "═" * (_WIDTH - 2) + "╣")
        lines.append(_boxed(self.format_summary(result.summary)))

        if result.failures or result.summary.n_skipped_rows:
            lines.append(
                _boxed(
                    f"Failed: {result.summary.n_failed} | "
                    f"Malformed rows skipped: {result.summary.n_skipped_rows}"
                )
            )

        lines.append("╚" + "═" * (_WIDTH - 2) + "╝")
        return "\n".join(lines)

    def _outcome_to_dict(self, outcome: PricingOutcome) -> Dict[str, Any]:
        return {
            **outcome.record.to_dict(),
            "time_to_expiry": outcome.record.time_to_expiry,
            "moneyness": outcome.moneyness.value,
            "seed": outcome.seed,
            "mc_price": outcome.mc_price,
            "mc_standard_error": outcome.mc_standard_error,
            "bs_price": outcome.bs_price,
            "mc_bs_error_pct": outcome.mc_bs_error_pct,
            "market_error_pct": outcome.market_error_pct,
        }

    def _summary_to_dict(self, summary: BatchSummary) -> Dict[str, Any]:
        return {
            "n_priced": summary.n_priced,
            "n_within_threshold": summary.n_within_threshold,
            "fraction_within": summary.fraction_within,
            "mean_abs_error_pct": summary.mean_abs_error_pct,
            "threshold_pct": summary.threshold_pct,
            "n_failed": summary.n_failed,
            "n_skipped_rows": summary.n_skipped_rows,
        }

    def to_json(self, result: BatchResult, indent: int = 2) -> str:
        """
        Generate JSON report.

        Parameters
        ----------
        result : BatchResult
            Batch results
        indent : int
            JSON indentation (0 for compact)

        Returns
        -------
        str
            JSON string
        """
        report = {
            "metadata": {
                "timestamp": datetime.now().isoformat(),
                "source": result.source,
                "n_paths": result.config.n_paths,
                "seed": result.config.seed_policy.seed,
                "random_seed": result.config.seed_policy.is_random,
                "execution_time_sec": result.execution_time_sec,
            },
            "summary": self._summary_to_dict(result.summary),
            "options": [self._outcome_to_dict(o) for o in result.outcomes],
            "failures": [
                {"ticker": f.record.ticker, "strike": f.record.strike, "message": f.message}
                for f in result.failures
            ],
        }
        return json.dumps(report, indent=indent if indent > 0 else None)

    def to_dict(self, result: BatchResult) -> Dict[str, Any]:
        """Generate report as Python dict."""
        return json.loads(self.to_json(result))
