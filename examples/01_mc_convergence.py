#!/usr/bin/env python3
"""
Monte Carlo Convergence Demo.

This example prices the textbook European call (S=K=100, r=5%, σ=20%, T=1)
with an increasing number of paths and shows the Monte Carlo estimate
closing in on the Black-Scholes price:

    "How many paths do I need for a price within 1% of the exact value?"

Key Concepts:
- Standard error: the MC estimate's noise, falling as 1/√N
- Convergence rate: slope of log(error) vs log(N), about -0.5
- Seed spread: estimates under independent seeds scatter by one SE

Usage:
    python examples/01_mc_convergence.py
    python examples/01_mc_convergence.py --seeds 40
"""

import argparse

import numpy as np

from mc_option_pricing import GBMParams, black_scholes_call, spawn_seeds
from mc_option_pricing.options.simulation import convergence_analysis, repeated_estimates


def print_convergence_table(analysis: dict) -> None:
    """Print one row per path count."""
    print(f"\n{'Paths':>10} | {'MC Price':>9} | {'Std Err':>8} | {'Rel Err':>8} | In 95% CI")
    print("-" * 56)
    for row in analysis["results"]:
        ci = "yes" if row["within_ci"] else "no"
        print(
            f"{row['n_paths']:>10,} | {row['mc_price']:>9.4f} | {row['standard_error']:>8.4f} "
            f"| {row['relative_error']:>7.2%} | {ci}"
        )
    print(f"\nFitted convergence rate: {analysis['convergence_rate']:.2f} (theory: -0.50)")
    print(f"Standard error rate:     {analysis['standard_error_rate']:.2f}")


def seed_spread(params: GBMParams, strike: float, n_seeds: int) -> None:
    """Show how estimates scatter across independent seeds."""
    seeds = spawn_seeds(2024, n_seeds)
    print(f"\nSpread across {n_seeds} independent seeds:")
    for n_paths in (1_000, 4_000, 16_000):
        estimates = repeated_estimates(params, strike, n_paths=n_paths, seeds=seeds)
        print(f"  {n_paths:>6,} paths: mean {estimates.mean():.4f}, std {np.std(estimates, ddof=1):.4f}")


def main():
    parser = argparse.ArgumentParser(description="Monte Carlo convergence demo")
    parser.add_argument("--seeds", type=int, default=20, help="Seeds for the spread table")
    args = parser.parse_args()

    params = GBMParams(spot=100.0, rate=0.05, volatility=0.20, time_to_expiry=1.0)
    strike = 100.0
    bs_price = black_scholes_call(100.0, strike, 0.05, 0.20, 1.0)

    print("\n" + "=" * 60)
    print("MONTE CARLO CONVERGENCE DEMO")
    print("=" * 60)
    print(f"\nBlack-Scholes price: {bs_price:.4f}")

    analysis = convergence_analysis(
        params, strike, bs_price, path_counts=(1_000, 10_000, 100_000, 1_000_000)
    )
    print_convergence_table(analysis)
    seed_spread(params, strike, args.seeds)

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
