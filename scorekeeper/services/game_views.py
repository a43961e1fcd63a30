"""Read-only views of finalized games for the game history."""

import asyncio
from typing import Optional

import structlog

from scorekeeper.core.models import Game, GameView, ParticipantView
from scorekeeper.db.repository import ScoreboardRepository
from scorekeeper.scoring.tally import total_for
from scorekeeper.services.player_stats import PlayerStatsAggregator


class GameViewAssembler:
    def __init__(
        self,
        repository: ScoreboardRepository,
        aggregator: PlayerStatsAggregator,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ) -> None:
        self.repo = repository
        self.aggregator = aggregator
        self.log = logger or structlog.get_logger(__name__)

    async def compose_game_views(self) -> list[GameView]:
        """Finalized games, most recent first, each with its participants' names, totals and winner flag."""
        games = await self.repo.list_games(finalized=True)
        views = await asyncio.gather(*(self._compose_view(game) for game in games))
        self.log.debug("game views composed", count=len(views))
        return list(views)

    async def _compose_view(self, game: Game) -> GameView:
        participants, totals = await asyncio.gather(
            self.repo.list_participants(game.id),
            self.aggregator.compute_totals(game.id),
        )
        return GameView(
            game=game,
            participants=[
                ParticipantView(
                    game_id=game.id,
                    player_id=participant.player_id,
                    player_name=participant.player_name,
                    total_points=total_for(totals, participant.player_id),
                    is_winner=participant.winner,
                )
                for participant in participants
            ],
        )
