"""Per-game totals and career statistics of players."""

import asyncio
from typing import Optional

import structlog

from scorekeeper.core.exceptions import PersistenceError
from scorekeeper.core.models import CareerStats, PlayerWithStats
from scorekeeper.core.shared_types import GameId, PlayerId, PlayerTotals
from scorekeeper.db.repository import ScoreboardRepository
from scorekeeper.scoring.tally import sum_points_by_player


class PlayerStatsAggregator:
    def __init__(
        self,
        repository: ScoreboardRepository,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ) -> None:
        self.repo = repository
        self.log = logger or structlog.get_logger(__name__)

    async def compute_totals(self, game_id: GameId) -> PlayerTotals:
        """Points per player in a game. Players without score lines are left out."""
        scores = await self.repo.list_scores(game_id)
        return sum_points_by_player(scores)

    async def compute_player_career_stats(self, player_id: PlayerId) -> CareerStats:
        """Games played, games won and win rate over all finalized games.

        A failing statistics query (PersistenceError, which covers every driver and ORM failure the SQL
        repository translates) does not raise: the player gets zero-valued stats marked as degraded, so that
        one failure cannot break a whole player listing. Any other exception is a bug and propagates.
        """
        try:
            statistics = await self.repo.get_player_statistics(player_id)
        except PersistenceError as exc:
            self.log.warning(
                "player statistics unavailable", player_id=player_id, error=str(exc)
            )
            return CareerStats.unavailable()
        return CareerStats.from_statistics(statistics)

    async def list_players_with_stats(self) -> list[PlayerWithStats]:
        """All players (by name) with their career stats, fetched concurrently."""
        players = await self.repo.list_players()
        # gather returns results in argument order, whatever order the queries finish in
        stats = await asyncio.gather(
            *(self.compute_player_career_stats(player.id) for player in players)
        )
        return [PlayerWithStats(player, player_stats) for player, player_stats in zip(players, stats)]
