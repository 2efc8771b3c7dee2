"""
Property-based tests for the standard normal CDF.

Properties tested:
1. Range: 0 <= N(x) <= 1
2. Symmetry: N(-x) = 1 - N(x)
3. Monotonicity: x < y implies N(x) <= N(y)
"""

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from mc_option_pricing.options.pricing.normal import normal_cdf

x_strategy = st.floats(min_value=-40.0, max_value=40.0, allow_nan=False, allow_infinity=False)


class TestNormalCDFProperties:
    @given(x=x_strategy)
    @settings(max_examples=300)
    def test_range(self, x: float) -> None:
        assert 0.0 <= normal_cdf(x) <= 1.0

    @given(x=x_strategy)
    @settings(max_examples=300)
    def test_symmetry(self, x: float) -> None:
        """[T1] N(-x) = 1 - N(x), to double precision."""
        assert abs(normal_cdf(-x) - (1.0 - normal_cdf(x))) < 1e-15

    @given(x=x_strategy, y=x_strategy)
    @settings(max_examples=300)
    def test_monotone(self, x: float, y: float) -> None:
        assume(x < y)
        assert normal_cdf(x) <= normal_cdf(y)
