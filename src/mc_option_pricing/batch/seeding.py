"""
Seeding strategy for batch runs.

The choice between a fixed seed (reproducible) and a clock-derived seed
(different every run) belongs to the caller; the pricing core only ever
receives a concrete seed.
"""

import time
from dataclasses import dataclass
from typing import Callable

from mc_option_pricing.options.simulation.rng import UINT32_MAX


@dataclass(frozen=True)
class SeedPolicy:
    """
    Base seed plus how it was chosen.

    Attributes
    ----------
    seed : int
        Base seed in [0, 2^32 - 1]
    is_random : bool
        True when derived from the clock

    Examples
    --------
    >>> SeedPolicy.fixed(42).seed_for(3)
    45
    """

    seed: int
    is_random: bool = False

    def __post_init__(self) -> None:
        if self.seed < 0 or self.seed > UINT32_MAX:
            raise ValueError(f"CRITICAL: seed must be in [0, {UINT32_MAX}], got {self.seed}")

    @classmethod
    def fixed(cls, seed: int) -> "SeedPolicy":
        """Reproducible policy. Seeds wrap to 32 bits like an unsigned cast."""
        return cls(seed=int(seed) & UINT32_MAX, is_random=False)

    @classmethod
    def from_time(cls, clock: Callable[[], float] = time.time) -> "SeedPolicy":
        """Policy seeded from the current Unix time in seconds."""
        return cls(seed=int(clock()) & UINT32_MAX, is_random=True)

    def seed_for(self, index: int) -> int:
        """Seed for the ``index``-th record: base + index, modulo 2^32."""
        return (self.seed + index) & UINT32_MAX

    @property
    def label(self) -> str:
        """Human-readable description, e.g. ``42 (fixed)``."""
        return f"{self.seed} ({'random' if self.is_random else 'fixed'})"
