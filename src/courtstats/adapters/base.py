"""Abstract source protocol for stat and score providers.

Defines the :class:`StatsSource` structural interface that every
concrete provider must satisfy. A source is responsible for:

* **Position stats** -- turning persisted per-position, per-quarter
  rows into :class:`~courtstats.adapters.schemas.GameWithPositionStats`.
* **Official scores** -- turning scoreboard rows into
  :class:`~courtstats.adapters.schemas.OfficialQuarterScore` entries
  from one team's perspective.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection

    from courtstats.adapters.schemas import (
        GameWithPositionStats,
        OfficialQuarterScore,
    )


@runtime_checkable
class StatsSource(Protocol):
    """Structural interface for stat and score providers.

    Any class that implements the three methods below is a valid
    ``StatsSource`` without needing to inherit from this class.
    """

    def list_team_ids(self) -> list[int | str]:
        """Return every team the source holds data for."""
        ...

    def load_position_stats(self, team_id: int | str) -> list[GameWithPositionStats]:
        """Load position stats for every game *team_id* has recorded.

        Args:
            team_id: Team whose stats are requested.

        Returns:
            One entry per game with at least partial position stats.
        """
        ...

    def load_official_scores(
        self,
        team_id: int | str,
        game_ids: Collection[int | str] | None = None,
    ) -> list[OfficialQuarterScore]:
        """Load official quarter scores from *team_id*'s perspective.

        Args:
            team_id: Team whose scores are requested.
            game_ids: When given, only these games are returned.

        Returns:
            One entry per quarter per game.
        """
        ...
