"""Tests for covsummary.utils.rounding."""

from __future__ import annotations

import math

import pytest

from covsummary.utils.rounding import round_half_even


class TestRoundHalfEven:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (2.25, 2.2),
            (0.25, 0.2),
            (0.75, 0.8),
            (14.75, 14.8),
            (-2.25, -2.2),
        ],
    )
    def test_exact_ties_go_to_even(self, value: float, expected: float) -> None:
        assert round_half_even(value) == expected

    def test_uses_exact_binary_value(self) -> None:
        # 2.35 is stored slightly above the tie, 2.65 slightly below
        assert round_half_even(2.35) == 2.4
        assert round_half_even(2.65) == 2.6

    def test_non_ties(self) -> None:
        assert round_half_even(33.333333) == 33.3
        assert round_half_even(66.666666) == 66.7
        assert round_half_even(50.0) == 50.0

    def test_custom_places(self) -> None:
        assert round_half_even(0.125, 2) == 0.12
        assert round_half_even(12.345678, 3) == 12.346
        assert round_half_even(125.0, 0) == 125.0

    def test_large_values(self) -> None:
        assert round_half_even(1e30) == 1e30

    def test_non_finite_passthrough(self) -> None:
        assert round_half_even(math.inf) == math.inf
        assert math.isnan(round_half_even(math.nan))
