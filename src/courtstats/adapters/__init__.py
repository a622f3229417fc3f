"""Data adapter layer for the court statistics reconciliation engine.

Re-exports the canonical schemas, the source protocol, the record
builders and the polars adapters so that downstream code can import
everything from :mod:`courtstats.adapters`.
"""

from courtstats.adapters.base import StatsSource
from courtstats.adapters.frames import (
    FrameStatsSource,
    breakdowns_to_frame,
    consistent_to_frame,
    score_entries_from_frame,
    stat_records_from_frame,
)
from courtstats.adapters.records import (
    build_games_with_position_stats,
    build_official_quarter_scores,
    final_score,
    game_result,
    merge_official_scores,
)
from courtstats.adapters.schemas import (
    ATTACK_POSITIONS,
    COURT_POSITIONS,
    DEFENCE_POSITIONS,
    QUARTER_LABELS,
    SCORING_POSITIONS,
    GameScoreEntry,
    GameStatRecord,
    GameWithPositionStats,
    OfficialQuarterScore,
    PositionPercentages,
    PositionQuarterStats,
    quarter_label,
)

__all__ = [
    "ATTACK_POSITIONS",
    "COURT_POSITIONS",
    "DEFENCE_POSITIONS",
    "QUARTER_LABELS",
    "SCORING_POSITIONS",
    "FrameStatsSource",
    "GameScoreEntry",
    "GameStatRecord",
    "GameWithPositionStats",
    "OfficialQuarterScore",
    "PositionPercentages",
    "PositionQuarterStats",
    "StatsSource",
    "breakdowns_to_frame",
    "build_games_with_position_stats",
    "build_official_quarter_scores",
    "consistent_to_frame",
    "final_score",
    "game_result",
    "merge_official_scores",
    "quarter_label",
    "score_entries_from_frame",
    "stat_records_from_frame",
]
