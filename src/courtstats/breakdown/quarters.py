"""Per-quarter position breakdown calculator.

Splits each quarter's official goals for and against across the four
scoring positions (GS/GA for attack, GK/GD for defence) in proportion
to the position statistics recorded for that quarter. Quarters without
any recorded position data fall back to a season-wide (or caller
supplied) split and are flagged so the display can mark them as
estimates.

Partial-season data is the normal case, so nothing here raises: gaps
are filled from the fallback and zero denominators fall back to an
even split.

Public API
----------
.. function:: calculate_quarter_position_breakdowns

    Reconciled per-quarter breakdown plus data-quality counts.

.. function:: season_fallback_percentages

    Attack/defence split summed over every game and quarter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from courtstats.adapters.records import merge_official_scores
from courtstats.adapters.schemas import PositionPercentages
from courtstats.breakdown.rounding import adjust_for_rounding, round_half_away
from courtstats.config import FallbackPolicy, ReconcileConfig

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from courtstats.adapters.schemas import (
        GameWithPositionStats,
        OfficialQuarterScore,
        PositionQuarterStats,
    )
    from courtstats.config import RoundingConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QuarterPositions:
    """Goals allocated to each scoring position in one quarter.

    Attributes:
        quarter: Quarter label.
        gs: Goal Shooter share of goals for.
        ga: Goal Attack share of goals for.
        gk: Goal Keeper share of goals against.
        gd: Goal Defence share of goals against.
    """

    quarter: str
    gs: float
    ga: float
    gk: float
    gd: float


@dataclass(frozen=True, slots=True)
class QuarterBreakdown:
    """One quarter's reconciled, displayable breakdown.

    ``gs + ga`` equals ``goals_for`` and ``gk + gd`` equals
    ``goals_against`` once rounded to the configured precision.

    Attributes:
        quarter: Quarter label.
        gs: Goal Shooter share of goals for.
        ga: Goal Attack share of goals for.
        gk: Goal Keeper share of goals against.
        gd: Goal Defence share of goals against.
        goals_for: Official goals for being subdivided.
        goals_against: Official goals against being subdivided.
        data_quality: Number of games contributing position data.
        used_fallback: ``True`` if no game had data for this quarter.
    """

    quarter: str
    gs: float
    ga: float
    gk: float
    gd: float
    goals_for: float
    goals_against: float
    data_quality: int
    used_fallback: bool


@dataclass(frozen=True, slots=True)
class DataQuality:
    """How much position data backed a breakdown.

    Attributes:
        games_with_stats: Sum of the per-quarter counts. A game with
            data in all four quarters is counted four times.
        per_quarter: Contributing game count per quarter, in breakdown
            order.
    """

    games_with_stats: int
    per_quarter: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class QuarterBreakdownResult:
    """Output of :func:`calculate_quarter_position_breakdowns`."""

    breakdowns: tuple[QuarterBreakdown, ...]
    data_quality: DataQuality


def sum_position_stats(
    stats: Iterable[PositionQuarterStats],
) -> tuple[float, float, float, float]:
    """Sum GS/GA/GK/GD across a collection of quarter stats."""
    gs = ga = gk = gd = 0.0
    for item in stats:
        gs += item.gs
        ga += item.ga
        gk += item.gk
        gd += item.gd
    return gs, ga, gk, gd


def season_fallback_percentages(
    games: Sequence[GameWithPositionStats],
) -> PositionPercentages:
    """Attack/defence split summed over every game and every quarter.

    Args:
        games: Games with position stats.

    Returns:
        The season-wide split; 50/50 for a pair with no goals.
    """
    totals = sum_position_stats(
        stats for game in games for stats in game.quarter_stats.values()
    )
    return PositionPercentages.from_totals(*totals)


def quarter_percentages(
    games: Sequence[GameWithPositionStats],
    quarter: str,
    fallback: PositionPercentages,
) -> tuple[PositionPercentages, int]:
    """Split for one quarter from the games that recorded it.

    Args:
        games: Games with position stats.
        quarter: Quarter label.
        fallback: Split used when no game recorded the quarter, and for
            a pair whose total is zero.

    Returns:
        ``(percentages, contributing_games)``.
    """
    recorded = [
        game.quarter_stats[quarter] for game in games if game.has_quarter(quarter)
    ]
    if not recorded:
        return fallback, 0
    totals = sum_position_stats(recorded)
    return PositionPercentages.from_totals(*totals, default=fallback), len(recorded)


def allocate_quarter(
    quarter: str,
    percentages: PositionPercentages,
    goals_for: float,
    goals_against: float,
    rounding: RoundingConfig,
) -> tuple[QuarterPositions, QuarterPositions]:
    """Apply *percentages* to a quarter's totals and reconcile each pair.

    Args:
        quarter: Quarter label.
        percentages: Position split to apply.
        goals_for: Goals for to subdivide between GS and GA.
        goals_against: Goals against to subdivide between GK and GD.
        rounding: Precision settings.

    Returns:
        ``(raw, reconciled)``: the rounded allocations before and after
        the pairwise adjustment.
    """
    places = rounding.decimal_places
    raw = QuarterPositions(
        quarter=quarter,
        gs=round_half_away(goals_for * percentages.gs, places),
        ga=round_half_away(goals_for * percentages.ga, places),
        gk=round_half_away(goals_against * percentages.gk, places),
        gd=round_half_away(goals_against * percentages.gd, places),
    )
    gs, ga = adjust_for_rounding(
        (raw.gs, raw.ga), goals_for, places, rounding.pair_tolerance
    )
    gk, gd = adjust_for_rounding(
        (raw.gk, raw.gd), goals_against, places, rounding.pair_tolerance
    )
    return raw, QuarterPositions(quarter=quarter, gs=gs, ga=ga, gk=gk, gd=gd)


def resolve_fallback(
    games: Sequence[GameWithPositionStats],
    policy: FallbackPolicy,
) -> PositionPercentages:
    """Return the fallback split for *policy*."""
    if policy is FallbackPolicy.EVEN:
        return PositionPercentages.even()
    return season_fallback_percentages(games)


def calculate_quarter_position_breakdowns(
    games: Sequence[GameWithPositionStats],
    official_scores: Sequence[OfficialQuarterScore],
    fallback_percentages: PositionPercentages | None = None,
    *,
    config: ReconcileConfig | None = None,
) -> QuarterBreakdownResult:
    """Split each quarter's official score across the scoring positions.

    Quarters are processed in the order their labels first appear in
    *official_scores*. Several entries for the same label (one per
    game) are summed into one season total for that quarter.

    Args:
        games: Games with position-level stats. Games lacking a quarter
            simply do not contribute to it.
        official_scores: Authoritative quarter scores.
        fallback_percentages: Split for quarters without data. When
            ``None`` it is derived once according to
            ``config.breakdown.quarter_fallback``.
        config: Reconciliation settings; defaults when ``None``.

    Returns:
        A :class:`QuarterBreakdownResult` with one breakdown per quarter.
    """
    config = config or ReconcileConfig()

    if fallback_percentages is None:
        fallback = resolve_fallback(games, config.breakdown.quarter_fallback)
    else:
        fallback = fallback_percentages

    breakdowns: list[QuarterBreakdown] = []
    per_quarter: list[int] = []

    for score in merge_official_scores(official_scores):
        percentages, contributing = quarter_percentages(games, score.quarter, fallback)
        used_fallback = contributing == 0
        if used_fallback:
            logger.debug(
                "No position data for %s; using fallback split %s",
                score.quarter,
                fallback,
            )

        _, positions = allocate_quarter(
            score.quarter,
            percentages,
            score.goals_for,
            score.goals_against,
            config.rounding,
        )
        breakdowns.append(
            QuarterBreakdown(
                quarter=score.quarter,
                gs=positions.gs,
                ga=positions.ga,
                gk=positions.gk,
                gd=positions.gd,
                goals_for=score.goals_for,
                goals_against=score.goals_against,
                data_quality=contributing,
                used_fallback=used_fallback,
            )
        )
        per_quarter.append(contributing)

    return QuarterBreakdownResult(
        breakdowns=tuple(breakdowns),
        data_quality=DataQuality(
            games_with_stats=sum(per_quarter),
            per_quarter=tuple(per_quarter),
        ),
    )
