"""
Xorshift32 uniform generator and Box-Muller normal sampler.

[T1] Marsaglia (2003) "Xorshift RNGs": x ^= x << 13; x ^= x >> 17; x ^= x << 5
on a 32-bit word has period 2^32 - 1 over all non-zero states.
[T1] Box & Muller (1958): Z = sqrt(-2 ln U1) * cos(2π U2) is N(0, 1).

The generator is an explicit value: each simulation context owns its own
instance, so independent streams never share state. It is deterministic and
NOT cryptographically secure.

See: Glasserman (2003) "Monte Carlo Methods in Financial Engineering" Ch. 2
"""

import math

import numpy as np

#: Largest 32-bit unsigned word, also the uniform scaling divisor
UINT32_MAX = 0xFFFFFFFF

_TWO_PI = 2.0 * math.pi


class Xorshift32:
    """
    Xorshift32 pseudo-random stream over a single non-zero 32-bit state.

    Parameters
    ----------
    seed : int, default 1
        Initial seed in [0, 2^32 - 1]. Zero is replaced by 1, since zero is
        an absorbing state of the recurrence.

    Examples
    --------
    >>> rng = Xorshift32(1)
    >>> rng.next_u32()
    270369
    >>> rng.next_u32()
    67634689
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int = 1):
        self._state = 1
        self.seed(seed)

    def seed(self, value: int) -> None:
        """
        Reset the stream to a seed.

        Raises
        ------
        ValueError
            If value is not an integer in [0, 2^32 - 1]
        """
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"CRITICAL: seed must be an integer, got {value!r}")
        value = int(value)
        if value < 0 or value > UINT32_MAX:
            raise ValueError(f"CRITICAL: seed must be in [0, {UINT32_MAX}], got {value}")
        self._state = value if value != 0 else 1

    @property
    def state(self) -> int:
        """Current 32-bit state (never zero)."""
        return self._state

    def next_u32(self) -> int:
        """Advance the recurrence and return the new 32-bit state."""
        x = self._state
        x ^= (x << 13) & UINT32_MAX
        x ^= x >> 17
        x ^= (x << 5) & UINT32_MAX
        self._state = x
        return x

    def next_uniform(self) -> float:
        """
        Next uniform draw in (0, 1], as ``next_u32() / (2^32 - 1)``.

        A non-zero state keeps the result strictly positive. The top word
        0xFFFFFFFF maps to exactly 1.0, so the interval is closed at 1 rather
        than the half-open [0, 1) usually assumed for uniforms.
        """
        return self.next_u32() / UINT32_MAX

    def next_standard_normal(self) -> float:
        """
        Next standard normal variate from exactly two uniform draws.

        Only the cosine branch of Box-Muller is returned; the sine sample is
        discarded so the output sequence matches the reference stream.
        ``u1`` is re-drawn while it is not strictly positive, because
        ``ln(0)`` is undefined.
        """
        u1 = self.next_uniform()
        while u1 <= 0.0:
            u1 = self.next_uniform()
        u2 = self.next_uniform()
        return box_muller(u1, u2)

    def __repr__(self) -> str:
        return f"Xorshift32(state={self._state})"


def box_muller(u1: float, u2: float) -> float:
    """
    Map two uniforms to one standard normal (cosine branch).

    [T1] Z = sqrt(-2 ln u1) * cos(2π u2)

    Parameters
    ----------
    u1 : float
        Radius uniform, must be in (0, 1]
    u2 : float
        Angle uniform

    Returns
    -------
    float
        Standard normal variate
    """
    if not u1 > 0.0:
        raise ValueError(f"CRITICAL: u1 must be > 0, got {u1}")
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(_TWO_PI * u2)


def spawn_seeds(seed: int, n_streams: int) -> list[int]:
    """
    Derive independent 32-bit seeds for parallel streams.

    Consecutive Xorshift32 seeds give strongly related early outputs (seed 2
    starts at twice seed 1's first word), so worker seeds are hashed through
    NumPy's SeedSequence instead of being offset from the base.

    Parameters
    ----------
    seed : int
        Base seed (any non-negative integer)
    n_streams : int
        Number of seeds to derive

    Returns
    -------
    list[int]
        ``n_streams`` seeds in [0, 2^32 - 1]; deterministic in ``seed``
    """
    if n_streams <= 0:
        raise ValueError(f"CRITICAL: n_streams must be > 0, got {n_streams}")
    if seed < 0:
        raise ValueError(f"CRITICAL: seed must be >= 0, got {seed}")
    state = np.random.SeedSequence(int(seed)).generate_state(n_streams, dtype=np.uint32)
    return [int(s) for s in state]
