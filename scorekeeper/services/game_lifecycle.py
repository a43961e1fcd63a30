"""Game lifecycle: open -> finalized.

A game is created open, gets its participants, collects scores and is finalized once. Finalizing picks the
winner from the score totals; there is no way back to open.
"""

import asyncio
from typing import Optional

import structlog

from scorekeeper.core.exceptions import GameStateError, NotFoundError, ValidationError
from scorekeeper.core.models import Game, GameResult, Participant
from scorekeeper.core.shared_types import GameId, GameState, PlayerId
from scorekeeper.db.repository import ScoreboardRepository
from scorekeeper.scoring.tally import pick_winner
from scorekeeper.services.player_stats import PlayerStatsAggregator


class GameLifecycleManager:
    def __init__(
        self,
        repository: ScoreboardRepository,
        aggregator: PlayerStatsAggregator,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ) -> None:
        self.repo = repository
        self.aggregator = aggregator
        self.log = logger or structlog.get_logger(__name__)

    async def create_game(self) -> Game:
        """Store a new open game (played now, not finalized)."""
        game = await self.repo.create_game()
        self.log.info("game created", game_id=game.id)
        return game

    async def add_participants(
        self, game_id: GameId, player_ids: list[PlayerId]
    ) -> list[Participant]:
        """Register the players of a game, none of them winner yet.

        Request validation happens before the store is touched at all.
        """
        self._validate_game_id(game_id)
        if not player_ids:
            raise ValidationError("No players selected.")
        if len(set(player_ids)) != len(player_ids):
            raise ValidationError(f"Duplicate player IDs in {player_ids}.")

        await self._fetch_open_game(game_id)

        participants = [
            Participant(game_id=game_id, player_id=player_id, winner=False)
            for player_id in player_ids
        ]
        stored = await self.repo.add_participants(participants)
        self.log.info("participants added", game_id=game_id, player_ids=player_ids)
        return stored

    async def finalize_game(self, game_id: GameId) -> GameResult:
        """Close the game and declare the winner.

        The winner is the participant with the strictly greatest positive total; a tie at the top means no
        winner. Score lines of players without a participant row are ignored, since there is no row to flag.
        The game is finalized either way. Winner flag and finalized flag are written in one repository call.
        """
        self._validate_game_id(game_id)
        await self._fetch_open_game(game_id)

        all_totals, participants = await asyncio.gather(
            self.aggregator.compute_totals(game_id),
            self.repo.list_participants(game_id),
        )
        participant_ids = {participant.player_id for participant in participants}
        totals = {
            player_id: total
            for player_id, total in all_totals.items()
            if player_id in participant_ids
        }
        if len(totals) != len(all_totals):
            self.log.warning(
                "ignoring scores of non-participants",
                game_id=game_id,
                player_ids=sorted(set(all_totals) - participant_ids),
            )
        winner_id = pick_winner(totals)
        if winner_id is None:
            self.log.info("no winner", game_id=game_id, totals=totals)
        else:
            self.log.info(
                "winner selected", game_id=game_id, winner_id=winner_id, points=totals[winner_id]
            )

        game = await self.repo.finalize_game(game_id, winner_id)
        if game is None:
            raise NotFoundError(f"Game with {game_id=} not found.")
        self.log.info("game finalized", game_id=game_id, state=game.state)
        return GameResult(game=game, winner_id=winner_id, totals=totals)

    # -- Internal helpers --
    def _validate_game_id(self, game_id: GameId) -> None:
        if not game_id:
            raise ValidationError(f"Invalid game ID: {game_id!r}.")

    async def _fetch_open_game(self, game_id: GameId) -> Game:
        """Find the game and make sure it still accepts changes."""
        game = await self.repo.get_game(game_id)
        if game is None:
            raise NotFoundError(f"Game with {game_id=} not found.")
        if game.state is not GameState.OPEN:
            raise GameStateError(f"Game {game_id} is already {game.state}.")
        return game
