"""Season-level consistency facade over the per-quarter breakdown.

Per-quarter cards, season-total cards and position-total cards are
each rounded on their own, and independently rounded figures drift
apart by a unit or so. :func:`get_consistent_stats_breakdown` derives
all of them from a single pass that allocates downward (season average
to quarters, quarters to positions), re-sums upward and adjusts again at
every level that is displayed. As a result the four quarter figures
always add up to the season figure.

All figures are per-game averages: official quarter totals are
divided by the number of games with position stats.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from courtstats.adapters.records import merge_official_scores
from courtstats.breakdown.quarters import (
    QuarterBreakdown,
    QuarterPositions,
    allocate_quarter,
    quarter_percentages,
    resolve_fallback,
)
from courtstats.breakdown.rounding import (
    adjust_for_rounding,
    adjust_values_to_total,
    round_half_away,
)
from courtstats.config import ReconcileConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

    from courtstats.adapters.schemas import (
        GameWithPositionStats,
        OfficialQuarterScore,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConsistentBreakdown:
    """Mutually consistent per-quarter and season views.

    Attributes:
        quarter_for: Per-game average goals for in each quarter; sums
            to ``total_for``.
        quarter_against: Per-game average goals against in each
            quarter; sums to ``total_against``.
        raw_quarter_positions: Per-quarter position allocations before
            the pairwise adjustment.
        total_for: Season per-game average goals for.
        total_against: Season per-game average goals against.
        gs: Goal Shooter share of ``total_for``.
        ga: Goal Attack share of ``total_for``.
        gk: Goal Keeper share of ``total_against``.
        gd: Goal Defence share of ``total_against``.
        per_quarter: Reconciled per-quarter breakdowns. Their
            ``goals_for`` and ``goals_against`` are the adjusted
            per-game averages.
    """

    quarter_for: tuple[float, ...]
    quarter_against: tuple[float, ...]
    raw_quarter_positions: tuple[QuarterPositions, ...]
    total_for: float
    total_against: float
    gs: float
    ga: float
    gk: float
    gd: float
    per_quarter: tuple[QuarterBreakdown, ...]


def get_consistent_stats_breakdown(
    games: Sequence[GameWithPositionStats],
    official_scores: Sequence[OfficialQuarterScore],
    *,
    config: ReconcileConfig | None = None,
) -> ConsistentBreakdown:
    """Build season and per-quarter figures that reconcile at every level.

    Steps:

    1. Divide each quarter's official totals by the number of games
       (at least one).
    2. Adjust those per-quarter averages so they sum exactly to the
       season per-game totals.
    3. Split each adjusted quarter across positions using that
       quarter's own position data, falling back according to
       ``config.breakdown.aggregate_fallback`` (50/50 by default).
    4. Sum the quarters per position and adjust the pairs against the
       season totals.

    Args:
        games: Games with position-level stats.
        official_scores: Authoritative quarter scores, per game or
            already summed per quarter.
        config: Reconciliation settings; defaults when ``None``.

    Returns:
        A :class:`ConsistentBreakdown`.
    """
    config = config or ReconcileConfig()
    rounding = config.rounding
    places = rounding.decimal_places

    scores = merge_official_scores(official_scores)
    num_games = len(games) or 1

    total_for = round_half_away(
        sum(score.goals_for for score in scores) / num_games, places
    )
    total_against = round_half_away(
        sum(score.goals_against for score in scores) / num_games, places
    )
    quarter_for = adjust_values_to_total(
        [score.goals_for / num_games for score in scores], total_for, places
    )
    quarter_against = adjust_values_to_total(
        [score.goals_against / num_games for score in scores], total_against, places
    )

    fallback = resolve_fallback(games, config.breakdown.aggregate_fallback)

    raw_positions: list[QuarterPositions] = []
    per_quarter: list[QuarterBreakdown] = []
    for score, avg_for, avg_against in zip(scores, quarter_for, quarter_against):
        percentages, contributing = quarter_percentages(games, score.quarter, fallback)
        raw, positions = allocate_quarter(
            score.quarter, percentages, avg_for, avg_against, rounding
        )
        raw_positions.append(raw)
        per_quarter.append(
            QuarterBreakdown(
                quarter=score.quarter,
                gs=positions.gs,
                ga=positions.ga,
                gk=positions.gk,
                gd=positions.gd,
                goals_for=avg_for,
                goals_against=avg_against,
                data_quality=contributing,
                used_fallback=contributing == 0,
            )
        )

    gs, ga = adjust_for_rounding(
        (
            sum(item.gs for item in per_quarter),
            sum(item.ga for item in per_quarter),
        ),
        total_for,
        places,
        rounding.pair_tolerance,
    )
    gk, gd = adjust_for_rounding(
        (
            sum(item.gk for item in per_quarter),
            sum(item.gd for item in per_quarter),
        ),
        total_against,
        places,
        rounding.pair_tolerance,
    )
    logger.debug(
        "Season per-game totals for=%s against=%s over %d games",
        total_for,
        total_against,
        num_games,
    )

    return ConsistentBreakdown(
        quarter_for=quarter_for,
        quarter_against=quarter_against,
        raw_quarter_positions=tuple(raw_positions),
        total_for=total_for,
        total_against=total_against,
        gs=gs,
        ga=ga,
        gk=gk,
        gd=gd,
        per_quarter=tuple(per_quarter),
    )
