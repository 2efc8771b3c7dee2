"""
Tests for Black-Scholes analytical pricing.

[T1] C = S*N(d1) - K*e^(-rT)*N(d2)
[T1] Hull (2018) Example 15.6: S=42, K=40, r=10%, σ=20%, T=0.5 -> C=4.76, P=0.81
"""

import math

import pytest

from mc_option_pricing.options.payoffs.base import OptionType
from mc_option_pricing.options.pricing.black_scholes import (
    black_scholes_call,
    black_scholes_price,
    black_scholes_put,
    call_price_bounds,
    price_european_call_analytic,
    put_call_parity_check,
)


class TestBlackScholesCall:
    """Tests for the analytical call price."""

    def test_textbook_value(self, textbook_case):
        """S=K=100, r=5%, σ=20%, T=1 gives 10.4506."""
        assert black_scholes_call(*textbook_case.args()) == pytest.approx(10.4506, abs=1e-4)

    def test_hull_example(self):
        assert black_scholes_call(42.0, 40.0, 0.10, 0.20, 0.5) == pytest.approx(4.76, abs=0.005)

    def test_analytic_entry_point(self, textbook_case):
        assert price_european_call_analytic(*textbook_case.args()) == black_scholes_call(
            *textbook_case.args()
        )

    def test_near_zero_volatility_is_intrinsic_forward(self):
        """σ → 0 approaches max(S - K e^(-rT), 0) = 100 - 95.1229 = 4.877."""
        price = black_scholes_call(100.0, 100.0, 0.05, 0.0001, 1.0)
        assert price == pytest.approx(100.0 - 100.0 * math.exp(-0.05), abs=1e-6)

    def test_deep_otm_near_zero(self):
        price = black_scholes_call(50.0, 200.0, 0.05, 0.2, 0.25)
        assert 0.0 <= price < 1e-10

    def test_deep_itm_near_intrinsic(self):
        price = black_scholes_call(200.0, 50.0, 0.05, 0.2, 0.25)
        assert price == pytest.approx(200.0 - 50.0 * math.exp(-0.05 * 0.25), rel=1e-10)

    @pytest.mark.parametrize("volatility", [0.0, -0.2])
    def test_non_positive_volatility_raises(self, volatility):
        with pytest.raises(ValueError, match="volatility must be > 0"):
            black_scholes_call(100.0, 100.0, 0.05, volatility, 1.0)

    @pytest.mark.parametrize("time_to_expiry", [0.0, -1.0])
    def test_non_positive_time_raises(self, time_to_expiry):
        with pytest.raises(ValueError, match="time_to_expiry must be > 0"):
            black_scholes_call(100.0, 100.0, 0.05, 0.2, time_to_expiry)

    def test_non_positive_strike_raises(self):
        with pytest.raises(ValueError, match="strike must be > 0"):
            black_scholes_call(100.0, 0.0, 0.05, 0.2, 1.0)

    def test_nan_raises(self):
        with pytest.raises(ValueError, match="spot must be finite"):
            black_scholes_call(float("nan"), 100.0, 0.05, 0.2, 1.0)


class TestBlackScholesPut:
    """Tests for the analytical put price."""

    def test_hull_example(self):
        assert black_scholes_put(42.0, 40.0, 0.10, 0.20, 0.5) == pytest.approx(0.81, abs=0.005)

    def test_put_call_parity(self, textbook_case):
        """[T1] C - P = S - K*e^(-rT)."""
        call = black_scholes_call(*textbook_case.args())
        put = black_scholes_put(*textbook_case.args())

        holds, error = put_call_parity_check(
            call, put, textbook_case.spot, textbook_case.strike,
            textbook_case.rate, textbook_case.time_to_expiry,
        )
        assert holds, f"Parity error {error}"

    def test_parity_detects_violation(self, textbook_case):
        holds, error = put_call_parity_check(
            10.45, 1.0, textbook_case.spot, textbook_case.strike,
            textbook_case.rate, textbook_case.time_to_expiry,
        )
        assert not holds
        assert error > 1.0


class TestBlackScholesPrice:
    """Tests for the BSResult wrapper."""

    def test_call_result(self, textbook_case):
        result = black_scholes_price(*textbook_case.args())
        assert result.option_type == OptionType.CALL
        assert result.price == pytest.approx(10.4506, abs=1e-4)
        assert result.d1 - result.d2 == pytest.approx(0.2)

    def test_put_by_name(self, textbook_case):
        result = black_scholes_price(*textbook_case.args(), option_type="put")
        assert result.option_type == OptionType.PUT
        assert result.price == black_scholes_put(*textbook_case.args())

    def test_textbook_d1(self, textbook_case):
        """d1 = (0 + (0.05 + 0.02) * 1) / 0.2 = 0.35."""
        result = black_scholes_price(*textbook_case.args())
        assert result.d1 == pytest.approx(0.35)


class TestCallPriceBounds:
    """Tests for no-arbitrage bounds."""

    def test_bounds_contain_price(self, textbook_case):
        lower, upper = call_price_bounds(
            textbook_case.spot, textbook_case.strike,
            textbook_case.rate, textbook_case.time_to_expiry,
        )
        price = black_scholes_call(*textbook_case.args())
        assert lower <= price <= upper

    def test_lower_bound_floored_at_zero(self):
        lower, upper = call_price_bounds(50.0, 100.0, 0.05, 1.0)
        assert lower == 0.0
        assert upper == 50.0
