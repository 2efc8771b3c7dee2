"""
Tests for European terminal payoffs.
"""

import pytest

from mc_option_pricing.options.payoffs.base import (
    OptionType,
    call_payoff,
    get_payoff,
    put_payoff,
)


class TestCallPayoff:
    """[T1] max(S - K, 0)."""

    @pytest.mark.parametrize(
        "spot,strike,expected",
        [
            (120.0, 100.0, 20.0),
            (100.0, 100.0, 0.0),
            (80.0, 100.0, 0.0),
            (100.0001, 100.0, pytest.approx(0.0001)),
        ],
    )
    def test_values(self, spot, strike, expected):
        assert call_payoff(spot, strike) == expected

    def test_never_negative(self):
        assert call_payoff(1.0, 1e9) == 0.0


class TestPutPayoff:
    """[T1] max(K - S, 0)."""

    @pytest.mark.parametrize(
        "spot,strike,expected",
        [(80.0, 100.0, 20.0), (100.0, 100.0, 0.0), (120.0, 100.0, 0.0)],
    )
    def test_values(self, spot, strike, expected):
        assert put_payoff(spot, strike) == expected


class TestPayoffLookup:
    """Tests for OptionType parsing and payoff lookup."""

    def test_lookup_by_enum(self):
        assert get_payoff(OptionType.CALL) is call_payoff
        assert get_payoff(OptionType.PUT) is put_payoff

    @pytest.mark.parametrize("name", ["call", "CALL", "Call"])
    def test_lookup_by_name(self, name):
        assert get_payoff(name) is call_payoff

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="option_type must be 'call' or 'put'"):
            OptionType.parse("straddle")
