"""Rounding and sum-preserving adjustment primitives.

Every figure the engine displays is rounded to a fixed precision.
Rounding parts independently lets their sum drift away from the rounded
whole by a unit or so; the functions here round a set of values and then
push the residual into a single element so the parts still add up
exactly.

Rounding is half away from zero at every precision, so ``0.25`` becomes
``0.3`` and ``-0.25`` becomes ``-0.3``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def _round_array(values: np.ndarray, decimal_places: int) -> np.ndarray:
    factor = 10.0**decimal_places
    # Adding 0.0 turns -0.0 into 0.0.
    return np.sign(values) * np.floor(np.abs(values) * factor + 0.5) / factor + 0.0


def round_half_away(value: float, decimal_places: int = 1) -> float:
    """Round *value* half away from zero.

    Args:
        value: Number to round.
        decimal_places: Precision to round to.

    Returns:
        The rounded value as a plain ``float``.
    """
    return float(_round_array(np.asarray(value, dtype=float), decimal_places))


def adjust_values_to_total(
    values: Sequence[float],
    total: float,
    decimal_places: int = 1,
) -> tuple[float, ...]:
    """Round *values* so that they sum exactly to the rounded *total*.

    Each value is rounded independently. If the rounded values do not
    add up to the rounded total, the whole residual is applied to the
    single element whose adjusted value stays closest to its original,
    unrounded value. Ties go to the earliest index.

    Args:
        values: Raw, unrounded values. Negative values are accepted.
        total: Target the rounded values must sum to.
        decimal_places: Precision to round to.

    Returns:
        Tuple of rounded values, in input order, whose sum equals
        ``round_half_away(total, decimal_places)``. Empty input yields an
        empty tuple.

    Example::

        >>> adjust_values_to_total([3.04, 4.06], 7.0)
        (3.0, 4.0)
    """
    target = round_half_away(total, decimal_places)
    original = np.asarray(values, dtype=float)

    if original.size == 0:
        if target != 0.0:
            logger.warning(
                "Cannot distribute total %s over an empty set of values", target
            )
        return ()

    rounded = _round_array(original, decimal_places)
    diff = round_half_away(target - float(rounded.sum()), decimal_places)

    half_unit = 0.5 * 10.0**-decimal_places
    if abs(diff) < half_unit:
        return tuple(float(v) for v in rounded)

    candidates = _round_array(rounded + diff, decimal_places)
    index = int(np.argmin(np.abs(candidates - original)))
    logger.debug(
        "Absorbing residual %s at index %d (%s -> %s)",
        diff,
        index,
        rounded[index],
        candidates[index],
    )
    rounded[index] = candidates[index]
    return tuple(float(v) for v in rounded)


def adjust_for_rounding(
    values: Sequence[float],
    target_sum: float,
    decimal_places: int = 1,
    tolerance: float = 0.11,
) -> tuple[float, float]:
    """Reconcile exactly two rounded values with their target sum.

    The residual between the rounded *target_sum* and the rounded sum
    of the pair is added to the larger of the two values (the first on
    a tie). Only residuals strictly smaller than *tolerance* are
    absorbed; anything wider is a genuine disagreement and the values
    are returned unchanged.

    Args:
        values: The two values, e.g. ``(gs, ga)``.
        target_sum: Total the pair must add up to.
        decimal_places: Precision to round to.
        tolerance: Largest residual (exclusive) that is absorbed.

    Returns:
        The reconciled ``(first, second)`` pair.
    """
    target = round_half_away(target_sum, decimal_places)
    first, second = (round_half_away(v, decimal_places) for v in values)
    pair_sum = round_half_away(first + second, decimal_places)
    diff = round_half_away(target - pair_sum, decimal_places)

    if diff != 0.0 and abs(diff) < tolerance:
        if first >= second:
            first = round_half_away(first + diff, decimal_places)
        else:
            second = round_half_away(second + diff, decimal_places)
    return first, second
