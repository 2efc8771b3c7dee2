"""
Configuration for Monte Carlo option pricing.

Frozen settings live in :mod:`mc_option_pricing.config.settings`;
numeric tolerances in :mod:`mc_option_pricing.config.tolerances`.
"""

from mc_option_pricing.config.settings import SETTINGS, Settings

__all__ = ["SETTINGS", "Settings"]
