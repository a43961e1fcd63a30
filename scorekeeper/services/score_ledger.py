"""Recording points: one score line per (game, player, category)."""

from typing import Optional

import structlog

from scorekeeper.core.exceptions import GameStateError, NotFoundError, ValidationError
from scorekeeper.core.models import Score, ScoreEntry
from scorekeeper.core.shared_types import CategoryId, GameId, PlayerId
from scorekeeper.db.repository import ScoreboardRepository


class ScoreLedger:
    """Writes score lines with upsert semantics."""

    def __init__(
        self,
        repository: ScoreboardRepository,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ) -> None:
        self.repo = repository
        self.log = logger or structlog.get_logger(__name__)

    async def upsert_score(
        self,
        game_id: GameId,
        player_id: PlayerId,
        category_id: CategoryId,
        points: int,
    ) -> Score:
        """Set the points of a player in one category of a game.

        An existing line for the same triple gets its points replaced (not incremented), otherwise a new line
        is inserted. Calling it again with the same arguments leaves a single line holding `points`.
        Only participants of an open game can score.
        Store errors are not caught or retried.
        """
        if not game_id:
            raise ValidationError(f"Invalid game ID: {game_id!r}.")

        game = await self.repo.get_game(game_id)
        if game is None:
            raise NotFoundError(f"Game with {game_id=} not found.")
        if game.finalized:
            raise GameStateError(f"Game {game_id} is finalized; scores can no longer change.")

        participants = await self.repo.list_participants(game_id)
        if all(participant.player_id != player_id for participant in participants):
            raise ValidationError(f"Player {player_id} does not take part in game {game_id}.")

        existing = await self.repo.find_score(game_id, player_id, category_id)
        if existing is not None:
            updated = await self.repo.update_score_points(existing.id, points)
            if updated is None:
                raise NotFoundError(f"Score line {existing.id} disappeared during update.")
            self.log.debug(
                "score updated",
                game_id=game_id,
                player_id=player_id,
                category_id=category_id,
                points=points,
            )
            return updated

        inserted = await self.repo.insert_score(
            ScoreEntry(game_id, player_id, category_id, points)
        )
        self.log.debug(
            "score inserted",
            game_id=game_id,
            player_id=player_id,
            category_id=category_id,
            points=points,
        )
        return inserted
