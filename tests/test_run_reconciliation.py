"""End-to-end test of the reconciliation script on CSV exports."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import orjson
import polars as pl
import pytest

_SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "run_reconciliation.py"


@pytest.fixture()
def script() -> ModuleType:
    spec = importlib.util.spec_from_file_location("run_reconciliation", _SCRIPT)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture()
def input_dir(
    tmp_path: Path, stats_frame: pl.DataFrame, scores_frame: pl.DataFrame
) -> Path:
    directory = tmp_path / "input"
    directory.mkdir()
    stats_frame.write_csv(directory / "game_stats.csv")
    scores_frame.write_csv(directory / "game_scores.csv")
    return directory


class TestRunReconciliation:
    def test_writes_outputs(
        self, script: ModuleType, input_dir: Path, tmp_path: Path
    ) -> None:
        """The parquet table and JSON summary are written."""
        output_dir = tmp_path / "output"
        assert script.main([str(input_dir), str(output_dir)]) == 0

        table = pl.read_parquet(output_dir / "quarter_breakdowns.parquet")
        assert table.height == 12

        summary = orjson.loads((output_dir / "season_summary.json").read_bytes())
        assert [team["team_id"] for team in summary] == [7, 9, 12]
        team7 = summary[0]
        assert team7["total_for"] == pytest.approx(26.0)
        assert team7["positions"]["GS"] + team7["positions"]["GA"] == pytest.approx(
            team7["total_for"]
        )
        assert len(team7["quarters"]) == 4
        # Team 12 has scores but no position stats to average over.
        assert summary[2]["quarters"] == []
        assert summary[2]["total_for"] == 0.0

    def test_missing_input(self, script: ModuleType, tmp_path: Path) -> None:
        """A missing input directory fails with exit code 1."""
        assert script.main([str(tmp_path / "nowhere"), str(tmp_path / "out")]) == 1

    def test_malformed_input(
        self, script: ModuleType, input_dir: Path, tmp_path: Path
    ) -> None:
        """A malformed stats file fails with exit code 1."""
        pl.DataFrame({"game_id": [1]}).write_csv(input_dir / "game_stats.csv")
        assert script.main([str(input_dir), str(tmp_path / "out")]) == 1
