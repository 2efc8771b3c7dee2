"""
Command-line interface.

Usage
-----
    mc-option-pricing price [--spot 100 --strike 100 --rate 0.05 ...]
    mc-option-pricing batch [csv_file] [n_paths] [--random | --seed N] [--json]
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from mc_option_pricing.batch import BatchConfig, BatchReporter, BatchRunner, SeedPolicy
from mc_option_pricing.config.settings import SETTINGS
from mc_option_pricing.data.loader import DataLoadError, load_option_records
from mc_option_pricing.options.pricing.black_scholes import black_scholes_call
from mc_option_pricing.options.simulation.gbm import GBMParams
from mc_option_pricing.options.simulation.monte_carlo import MonteCarloEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with ``price`` and ``batch`` subcommands."""
    sim = SETTINGS.simulation
    parser = argparse.ArgumentParser(
        prog="mc-option-pricing",
        description="Monte Carlo pricing of European call options, checked against Black-Scholes",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    price = subparsers.add_parser("price", help="Price one call both ways and compare")
    price.add_argument("--spot", type=float, default=100.0, help="Initial stock price (default: 100)")
    price.add_argument("--strike", type=float, default=100.0, help="Strike price (default: 100)")
    price.add_argument("--rate", type=float, default=0.05, help="Risk-free rate (default: 0.05)")
    price.add_argument("--volatility", type=float, default=0.2, help="Volatility (default: 0.2)")
    price.add_argument("--time", type=float, default=1.0, help="Years to expiry (default: 1)")
    price.add_argument("--paths", type=int, default=sim.mc_paths, help=f"Simulations (default: {sim.mc_paths})")
    price.add_argument("--seed", type=int, default=sim.demo_seed, help=f"Generator seed (default: {sim.demo_seed})")
    price.add_argument("-v", "--verbose", action="store_true", help="Log progress at INFO")

    batch = subparsers.add_parser("batch", help="Price every record of a CSV file")
    batch.add_argument(
        "csv_file",
        nargs="?",
        default=None,
        help=f"Record file (default: {SETTINGS.records.records_path})",
    )
    batch.add_argument(
        "n_paths",
        nargs="?",
        type=int,
        default=sim.batch_paths,
        help=f"Simulations per option (default: {sim.batch_paths})",
    )
    seed_group = batch.add_mutually_exclusive_group()
    seed_group.add_argument(
        "-r", "--random", action="store_true",
        help="Use time-based random seed (different results each run)",
    )
    seed_group.add_argument(
        "-s", "--seed", type=int, default=sim.batch_seed,
        help=f"Use specific seed N (default: {sim.batch_seed})",
    )
    batch.add_argument("--json", action="store_true", help="Emit JSON instead of the table")
    batch.add_argument("-v", "--verbose", action="store_true", help="Log progress at INFO")

    return parser


def run_price(args: argparse.Namespace) -> int:
    """Price the demo call with Monte Carlo and Black-Scholes."""
    params = GBMParams(
        spot=args.spot, rate=args.rate, volatility=args.volatility, time_to_expiry=args.time
    )
    engine = MonteCarloEngine(n_paths=args.paths, seed=args.seed)
    mc_result = engine.price_european_call(params, args.strike)
    bs_price = black_scholes_call(args.spot, args.strike, args.rate, args.volatility, args.time)

    error = mc_result.price - bs_price
    error_pct = None
    if bs_price > SETTINGS.report.min_reference_price:
        error_pct = error / bs_price * 100.0
    threshold = SETTINGS.report.accuracy_threshold_pct

    print("=== European Call Option Pricing ===")
    print("Parameters:")
    print(f"  S0 (Initial Price):  ${args.spot:.2f}")
    print(f"  K  (Strike Price):   ${args.strike:.2f}")
    print(f"  r  (Risk-free Rate): {args.rate * 100:.2f}%")
    print(f"  σ  (Volatility):     {args.volatility * 100:.2f}%")
    print(f"  T  (Time to Expiry): {args.time:.2f} years")
    print(f"  Simulations:         {args.paths}")
    print(f"  Seed:                {args.seed}")
    print()
    print("Results:")
    print(f"  Monte Carlo Price:   ${mc_result.price:.4f} (SE {mc_result.standard_error:.4f})")
    print(f"  Black-Scholes Price: ${bs_price:.4f}")
    if error_pct is None:
        print(f"  Error:               ${error:.4f} (N/A)")
        print()
        print("Black-Scholes price is too small for a relative comparison")
        return 0

    print(f"  Error:               ${error:.4f} ({error_pct:.2f}%)")
    print()
    if abs(error_pct) < threshold:
        print(f"Monte Carlo result is within {threshold:g}% of Black-Scholes")
    else:
        print("WARNING: Large discrepancy detected! Check for bugs.")
    return 0


def run_batch(args: argparse.Namespace) -> int:
    """Price a record file and print the table or JSON report."""
    policy = SeedPolicy.from_time() if args.random else SeedPolicy.fixed(args.seed)
    config = BatchConfig(n_paths=args.n_paths, seed_policy=policy, verbose=args.verbose)

    loaded = load_option_records(args.csv_file)
    reporter = BatchReporter()

    if not args.json:
        print(f"Loading options from: {loaded.source}")
        print(f"Simulations per option: {config.n_paths}")
        print(f"Seed: {policy.label}")

    result = BatchRunner(config).run_loaded(loaded)

    if args.json:
        print(reporter.to_json(result))
    elif result.summary.n_priced == 0 and not result.failures:
        print("No valid option data found in file.")
    else:
        print(reporter.to_table(result))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Entry point for the ``mc-option-pricing`` console script.

    Returns
    -------
    int
        0 on success, 1 when records cannot be loaded or an input is outside
        a pricer's domain. argparse exits with 2 on usage errors.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {"price": run_price, "batch": run_batch}
    try:
        return handlers[args.command](args)
    except (DataLoadError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
