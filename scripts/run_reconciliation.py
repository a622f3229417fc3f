"""Reconcile quarter position breakdowns for every team in an export.

Loads ``game_stats.csv`` (one row per game, team, position and quarter)
and ``game_scores.csv`` (one row per game, team and quarter) from the
input directory, then:

1. Runs the per-quarter calculator and the consistency facade for each
   team.
2. Writes the combined per-quarter table to
   ``quarter_breakdowns.parquet``.
3. Writes a per-team JSON summary of season per-game totals to
   ``season_summary.json``.

Usage::

    python scripts/run_reconciliation.py [INPUT_DIR] [OUTPUT_DIR]
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import orjson
import polars as pl

# ---------------------------------------------------------------------------
# Ensure the src package is importable when running as a standalone script.
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT / "src"))

from courtstats.adapters import FrameStatsSource  # noqa: E402
from courtstats.breakdown import (  # noqa: E402
    ConsistentBreakdown,
    get_consistent_stats_breakdown,
    reconcile_teams,
)
from courtstats.config import ReconcileConfig  # noqa: E402
from courtstats.exceptions import CourtStatsError  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

STATS_FILE = "game_stats.csv"
SCORES_FILE = "game_scores.csv"


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _summary_payload(team_id: int | str, result: ConsistentBreakdown) -> dict:
    """Build the JSON-serialisable summary for one team.

    Args:
        team_id: Team the summary belongs to.
        result: The team's consistent breakdown.

    Returns:
        Dictionary of season per-game totals and quarter averages.
    """
    return {
        "team_id": team_id,
        "total_for": result.total_for,
        "total_against": result.total_against,
        "positions": {
            "GS": result.gs,
            "GA": result.ga,
            "GK": result.gk,
            "GD": result.gd,
        },
        "quarters": [
            {
                "quarter": q.quarter,
                "for": q.goals_for,
                "against": q.goals_against,
                "estimated": q.used_fallback,
            }
            for q in result.per_quarter
        ],
    }


# ------------------------------------------------------------------
# Main
# ------------------------------------------------------------------


def main(argv: list[str]) -> int:
    """Reconcile every team found in the input directory."""
    config = ReconcileConfig(
        data_dir=Path(argv[0]) if argv else _PROJECT_ROOT / "data" / "input",
        output_dir=(
            Path(argv[1]) if len(argv) > 1 else _PROJECT_ROOT / "data" / "output"
        ),
    )

    stats_path = config.data_dir / STATS_FILE
    scores_path = config.data_dir / SCORES_FILE
    for path in (stats_path, scores_path):
        if not path.exists():
            logger.error("Input file not found at %s", path)
            return 1

    logger.info("Loading stats from %s", stats_path)
    stats = pl.read_csv(stats_path)
    logger.info("Loading scores from %s", scores_path)
    scores = pl.read_csv(scores_path)
    logger.info("  Stat rows: %d  |  Score rows: %d", stats.height, scores.height)

    try:
        source = FrameStatsSource(stats=stats, scores=scores)
        table = reconcile_teams(source, config=config)
    except CourtStatsError:
        logger.exception("Reconciliation failed")
        return 1

    config.output_dir.mkdir(parents=True, exist_ok=True)
    table_path = config.output_dir / "quarter_breakdowns.parquet"
    table.write_parquet(table_path)
    logger.info("Wrote %d rows to %s", table.height, table_path)

    summaries = []
    for team_id in table["team_id"].unique(maintain_order=True).to_list():
        games = source.load_position_stats(team_id)
        result = get_consistent_stats_breakdown(
            games,
            source.load_official_scores(
                team_id, game_ids=[game.game_id for game in games]
            ),
            config=config,
        )
        summaries.append(_summary_payload(team_id, result))
        estimated = sum(q.used_fallback for q in result.per_quarter)
        logger.info(
            "  team=%s  for=%.1f  against=%.1f  estimated_quarters=%d",
            team_id,
            result.total_for,
            result.total_against,
            estimated,
        )

    summary_path = config.output_dir / "season_summary.json"
    summary_path.write_bytes(orjson.dumps(summaries, option=orjson.OPT_INDENT_2))
    logger.info("Wrote summary for %d teams to %s", len(summaries), summary_path)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
