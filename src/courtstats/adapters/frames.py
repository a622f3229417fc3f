"""Tabular (polars) adapters for stat and score rows.

Loads persisted rows from :class:`polars.DataFrame` objects into the
canonical schemas, provides :class:`FrameStatsSource` as an in-memory
implementation of :class:`~courtstats.adapters.base.StatsSource`, and
flattens reconciled breakdowns back into DataFrames for export.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

import polars as pl

from courtstats.adapters.records import (
    build_games_with_position_stats,
    build_official_quarter_scores,
)
from courtstats.adapters.schemas import GameScoreEntry, GameStatRecord
from courtstats.exceptions import RecordError

if TYPE_CHECKING:
    from collections.abc import Collection

    from courtstats.adapters.schemas import (
        GameWithPositionStats,
        OfficialQuarterScore,
    )
    from courtstats.breakdown.consistent import ConsistentBreakdown
    from courtstats.breakdown.quarters import QuarterBreakdownResult

logger = logging.getLogger(__name__)

STAT_COLUMNS: tuple[str, ...] = (
    "game_id",
    "team_id",
    "position",
    "quarter",
    "goals_for",
    "goals_against",
)
SCORE_COLUMNS: tuple[str, ...] = ("game_id", "team_id", "quarter", "score")

_STAT_COUNT_COLUMNS: tuple[str, ...] = ("goals_for", "goals_against")


def _require_columns(df: pl.DataFrame, required: tuple[str, ...], kind: str) -> None:
    missing = [c for c in required if c not in df.columns]
    if missing:
        msg = f"{kind} frame is missing required columns {missing}"
        raise RecordError(msg)


def _require_quarters(df: pl.DataFrame, kind: str) -> None:
    nulls = df["quarter"].null_count()
    if nulls:
        msg = f"{kind} frame has {nulls} row(s) without a quarter"
        raise RecordError(msg)


def stat_records_from_frame(df: pl.DataFrame) -> list[GameStatRecord]:
    """Convert a stats DataFrame into :class:`GameStatRecord` rows.

    Missing or null ``goals_for``/``goals_against`` values count as zero.

    Args:
        df: Frame with at least ``game_id``, ``team_id``, ``position``
            and ``quarter`` columns.

    Returns:
        One record per row, in frame order.

    Raises:
        RecordError: If a required column is missing or a row violates
            a record invariant.
    """
    _require_columns(df, STAT_COLUMNS[:4], "stats")
    _require_quarters(df, "stats")

    counts = [
        pl.col(c).fill_null(0).cast(pl.Int64)
        if c in df.columns
        else pl.lit(0, dtype=pl.Int64).alias(c)
        for c in _STAT_COUNT_COLUMNS
    ]
    filled = df.with_columns(counts).with_columns(pl.col("quarter").cast(pl.Int64))

    records: list[GameStatRecord] = []
    for row in filled.select(STAT_COLUMNS).iter_rows(named=True):
        try:
            records.append(GameStatRecord(**row))
        except ValueError as exc:
            msg = f"Invalid stat row {row!r}: {exc}"
            raise RecordError(msg) from exc
    logger.debug("Loaded %d stat records", len(records))
    return records


def score_entries_from_frame(df: pl.DataFrame) -> list[GameScoreEntry]:
    """Convert a scores DataFrame into :class:`GameScoreEntry` rows.

    Args:
        df: Frame with ``game_id``, ``team_id``, ``quarter`` and
            ``score`` columns.

    Returns:
        One entry per row, in frame order.

    Raises:
        RecordError: If a required column is missing or a row violates
            an entry invariant.
    """
    _require_columns(df, SCORE_COLUMNS, "scores")
    _require_quarters(df, "scores")

    filled = df.with_columns(
        pl.col("score").fill_null(0).cast(pl.Int64),
        pl.col("quarter").cast(pl.Int64),
    )

    entries: list[GameScoreEntry] = []
    for row in filled.select(SCORE_COLUMNS).iter_rows(named=True):
        try:
            entries.append(GameScoreEntry(**row))
        except ValueError as exc:
            msg = f"Invalid score row {row!r}: {exc}"
            raise RecordError(msg) from exc
    logger.debug("Loaded %d score entries", len(entries))
    return entries


class FrameStatsSource:
    """In-memory :class:`~courtstats.adapters.base.StatsSource` over DataFrames.

    Example::

        source = FrameStatsSource(
            stats=pl.read_csv("game_stats.csv"),
            scores=pl.read_csv("game_scores.csv"),
        )
        games = source.load_position_stats(team_id=7)
    """

    __slots__ = ("_entries", "_records")

    def __init__(self, stats: pl.DataFrame, scores: pl.DataFrame) -> None:
        """Load and validate both frames up front.

        Args:
            stats: Per-position, per-quarter stat rows.
            scores: Per-team, per-quarter official score rows.

        Raises:
            RecordError: If either frame is malformed.
        """
        self._records = stat_records_from_frame(stats)
        self._entries = score_entries_from_frame(scores)

    def list_team_ids(self) -> list[int | str]:
        """Return team IDs in order of first appearance across both frames."""
        seen = dict.fromkeys(r.team_id for r in self._records)
        seen.update(dict.fromkeys(e.team_id for e in self._entries))
        return list(seen)

    def load_position_stats(self, team_id: int | str) -> list[GameWithPositionStats]:
        """Build position stats from *team_id*'s stat rows."""
        return build_games_with_position_stats(self._records, team_id=team_id)

    def load_official_scores(
        self,
        team_id: int | str,
        game_ids: Collection[int | str] | None = None,
    ) -> list[OfficialQuarterScore]:
        """Build official scores for every game *team_id* has a score row in.

        Args:
            team_id: Team whose perspective the scores are built from.
            game_ids: When given, games outside this collection are
                left out.
        """
        played = {e.game_id for e in self._entries if e.team_id == team_id}
        if game_ids is not None:
            played.intersection_update(game_ids)
        return build_official_quarter_scores(
            (e for e in self._entries if e.game_id in played), team_id
        )


def breakdowns_to_frame(result: QuarterBreakdownResult) -> pl.DataFrame:
    """Flatten a per-quarter breakdown into one row per quarter."""
    return pl.DataFrame([asdict(b) for b in result.breakdowns])


def consistent_to_frame(result: ConsistentBreakdown) -> pl.DataFrame:
    """Flatten a consistent breakdown into one row per quarter.

    Reconciled figures keep their names; the unadjusted allocations are
    added with a ``raw_`` prefix.
    """
    rows: list[dict[str, object]] = []
    for breakdown, raw in zip(result.per_quarter, result.raw_quarter_positions):
        row: dict[str, object] = asdict(breakdown)
        row.update(
            {
                "raw_gs": raw.gs,
                "raw_ga": raw.ga,
                "raw_gk": raw.gk,
                "raw_gd": raw.gd,
            }
        )
        rows.append(row)
    return pl.DataFrame(rows)
