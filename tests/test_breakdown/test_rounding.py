"""Tests for the rounding and sum-preserving adjustment primitives."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from courtstats.breakdown.rounding import (
    adjust_for_rounding,
    adjust_values_to_total,
    round_half_away,
)


class TestRoundHalfAway:
    @pytest.mark.parametrize(
        ("value", "places", "expected"),
        [
            (0.25, 1, 0.3),
            (-0.25, 1, -0.3),
            (0.75, 1, 0.8),
            (2.5, 0, 3.0),
            (-2.5, 0, -3.0),
            (1.125, 2, 1.13),
            (7.0, 1, 7.0),
        ],
    )
    def test_half_away_from_zero(
        self, value: float, places: int, expected: float
    ) -> None:
        """Exact halves move away from zero at any precision."""
        assert round_half_away(value, places) == pytest.approx(expected)

    def test_no_negative_zero(self) -> None:
        """Small negatives round to a positive zero."""
        result = round_half_away(-0.04, 1)
        assert result == 0.0
        assert str(result) == "0.0"

    def test_returns_plain_float(self) -> None:
        """The result is a builtin float, not a numpy scalar."""
        assert type(round_half_away(1.26)) is float


class TestAdjustValuesToTotal:
    """The residual lands on the single element closest to its original."""

    def test_already_consistent(self) -> None:
        """Values that already add up are only rounded."""
        assert adjust_values_to_total([3.04, 4.06], 7.0) == (3.0, 4.0)

    def test_thirds(self) -> None:
        """Three equal thirds of ten give the extra tenth to the first."""
        result = adjust_values_to_total([10 / 3] * 3, 10.0)
        assert result == pytest.approx((3.4, 3.3, 3.3))
        assert sum(result) == pytest.approx(10.0)

    def test_negative_values(self) -> None:
        """Negative values are adjusted like positive ones."""
        result = adjust_values_to_total([-1.04, -2.06], -3.0)
        assert result == pytest.approx((-1.0, -2.0))

    def test_whole_units(self) -> None:
        """Zero decimal places adjust in whole units."""
        result = adjust_values_to_total([1.4, 1.4, 1.2], 4, decimal_places=0)
        assert result == (2.0, 1.0, 1.0)

    def test_only_one_element_changes(self) -> None:
        """At most one element differs from plain rounding."""
        values = [2.34, 1.26, 4.44, 0.97]
        plain = [round_half_away(v) for v in values]
        result = adjust_values_to_total(values, 9.2)
        changed = [i for i, (a, b) in enumerate(zip(plain, result)) if a != b]
        assert len(changed) <= 1
        assert sum(result) == pytest.approx(9.2)

    def test_preserves_order_and_length(self) -> None:
        """Output lines up index for index with the input."""
        result = adjust_values_to_total([5.0, 0.0, 2.0], 7.0)
        assert result == (5.0, 0.0, 2.0)

    def test_empty_with_zero_total(self, caplog: pytest.LogCaptureFixture) -> None:
        """Nothing to distribute and nothing owed is silent."""
        with caplog.at_level(logging.WARNING):
            assert adjust_values_to_total([], 0.0) == ()
        assert not caplog.records

    def test_empty_with_nonzero_total_warns(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A non-zero total with no values is logged and dropped."""
        with caplog.at_level(logging.WARNING, logger="courtstats.breakdown.rounding"):
            assert adjust_values_to_total([], 5.0) == ()
        assert "empty set of values" in caplog.text

    def test_random_values_always_sum_exactly(self) -> None:
        """Random value sets always land on the rounded total."""
        rng = np.random.default_rng(seed=7)
        for _ in range(200):
            values = rng.uniform(0, 15, size=rng.integers(1, 8))
            total = float(values.sum())
            result = adjust_values_to_total(values.tolist(), total)
            assert round_half_away(sum(result)) == round_half_away(total)


class TestAdjustForRounding:
    """Two-value adjustment with a tolerance window."""

    def test_larger_absorbs_on_tie_first(self) -> None:
        """Equal values push the residual onto the first."""
        assert adjust_for_rounding([3.3, 3.3], 6.7) == pytest.approx((3.4, 3.3))

    def test_larger_value_absorbs(self) -> None:
        """The larger of the two values takes the residual."""
        assert adjust_for_rounding([2.0, 5.2], 7.1) == pytest.approx((2.0, 5.1))

    def test_wide_residual_left_alone(self) -> None:
        """Residuals at or beyond the tolerance are not absorbed."""
        assert adjust_for_rounding([1.0, 1.0], 3.0) == (1.0, 1.0)

    def test_custom_tolerance(self) -> None:
        """A wider tolerance absorbs a wider residual."""
        result = adjust_for_rounding([1.0, 1.0], 2.5, tolerance=0.6)
        assert result == pytest.approx((1.5, 1.0))

    def test_inputs_are_rounded_first(self) -> None:
        """Unrounded inputs are rounded before the residual is taken."""
        assert adjust_for_rounding([1.04, 2.96], 4.0) == pytest.approx((1.0, 3.0))

    def test_consistent_pair_unchanged(self) -> None:
        """A pair that already adds up is returned as is."""
        assert adjust_for_rounding([4.2, 3.8], 8.0) == pytest.approx((4.2, 3.8))

    def test_fractional_target_is_rounded(self) -> None:
        """A target between two tenths is compared after rounding.

        19.25 rounds to 19.3, which the pair already adds up to, so
        neither value moves.
        """
        assert adjust_for_rounding([4.0, 15.3], 19.25) == pytest.approx((4.0, 15.3))

    def test_fractional_target_residual(self) -> None:
        """The residual is measured against the rounded target."""
        first, second = adjust_for_rounding([3.9, 15.3], 19.25)
        assert (first, second) == pytest.approx((3.9, 15.4))
        assert round_half_away(first + second) == round_half_away(19.25)

    def test_random_fractional_targets(self) -> None:
        """Pairs split from fractional totals always reach the rounded total."""
        rng = np.random.default_rng(seed=3)
        for _ in range(500):
            total = int(rng.integers(0, 800)) / 20
            share = float(rng.uniform(0, 1))
            first, second = adjust_for_rounding(
                [round_half_away(total * share), round_half_away(total * (1 - share))],
                total,
            )
            assert round_half_away(first + second) == round_half_away(total)
