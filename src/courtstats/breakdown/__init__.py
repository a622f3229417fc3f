"""Quarter breakdown framework for the court statistics reconciliation engine.

Public API
----------
.. function:: adjust_values_to_total

    Round N values so they sum exactly to a rounded total.

.. function:: adjust_for_rounding

    Two-value variant used for GS/GA and GK/GD pairs.

.. function:: calculate_quarter_position_breakdowns

    Per-quarter split of official scores across scoring positions.

.. function:: get_consistent_stats_breakdown

    Per-game season and quarter figures reconciled at every level.

.. function:: calculate_position_averages

    Per-game averages per scoring position.

.. function:: reconcile_teams

    Batch pipeline: stats source -> breakdowns -> polars DataFrame.
"""

from courtstats.breakdown.averages import PositionAverages, calculate_position_averages
from courtstats.breakdown.consistent import (
    ConsistentBreakdown,
    get_consistent_stats_breakdown,
)
from courtstats.breakdown.pipeline import reconcile_teams
from courtstats.breakdown.quarters import (
    DataQuality,
    QuarterBreakdown,
    QuarterBreakdownResult,
    QuarterPositions,
    calculate_quarter_position_breakdowns,
    season_fallback_percentages,
)
from courtstats.breakdown.rounding import (
    adjust_for_rounding,
    adjust_values_to_total,
    round_half_away,
)

__all__ = [
    "ConsistentBreakdown",
    "DataQuality",
    "PositionAverages",
    "QuarterBreakdown",
    "QuarterBreakdownResult",
    "QuarterPositions",
    "adjust_for_rounding",
    "adjust_values_to_total",
    "calculate_position_averages",
    "calculate_quarter_position_breakdowns",
    "get_consistent_stats_breakdown",
    "reconcile_teams",
    "round_half_away",
    "season_fallback_percentages",
]
