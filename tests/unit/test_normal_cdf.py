"""
Tests for the erf-based standard normal CDF.

[T1] N(x) = (1 + erf(x / √2)) / 2
"""

import math

import numpy as np
import pytest
from scipy import stats

from mc_option_pricing.config.tolerances import CDF_SYMMETRY_TOLERANCE
from mc_option_pricing.options.pricing.normal import normal_cdf


class TestNormalCDF:
    """Tests for normal_cdf."""

    def test_zero_is_half(self):
        assert normal_cdf(0.0) == 0.5

    @pytest.mark.parametrize(
        "x,expected",
        [
            (1.0, 0.8413447460685429),
            (-1.0, 0.15865525393145707),
            (1.96, 0.9750021048517795),
            (3.0, 0.9986501019683699),
        ],
    )
    def test_known_values(self, x, expected):
        assert normal_cdf(x) == pytest.approx(expected, abs=1e-12)

    def test_matches_scipy(self):
        x = np.linspace(-8.0, 8.0, 161)
        np.testing.assert_allclose(normal_cdf(x), stats.norm.cdf(x), atol=1e-14)

    def test_infinities(self):
        assert normal_cdf(-math.inf) == 0.0
        assert normal_cdf(math.inf) == 1.0

    def test_symmetry(self):
        """N(-x) = 1 - N(x)."""
        for x in (0.1, 0.5, 1.0, 2.5):
            assert abs(normal_cdf(-x) - (1.0 - normal_cdf(x))) < 10 * CDF_SYMMETRY_TOLERANCE

    def test_scalar_returns_float(self):
        assert isinstance(normal_cdf(0.3), float)

    def test_array_returns_array(self):
        result = normal_cdf([0.0, 1.0])
        assert isinstance(result, np.ndarray)
        assert result.shape == (2,)
