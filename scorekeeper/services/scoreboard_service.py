"""Orchestration of communication from the application layer to the scoring logic and persistence layers (and back)."""

from typing import Optional

import structlog

from scorekeeper.api.models import (
    AddParticipantsRequest,
    AddPlayerRequest,
    CategoryResponse,
    FinalizeGameRequest,
    FinalizeGameResponse,
    GameDetailResponse,
    GameResponse,
    ListCategoriesRequest,
    ParticipantResponse,
    PlayerResponse,
    PlayerStatsResponse,
    RemovePlayerRequest,
    ScoreRequest,
    ScoreResponse,
)
from scorekeeper.core.models import Category, Game, Player, PlayerWithStats
from scorekeeper.db.repository import ScoreboardRepository
from scorekeeper.services.game_lifecycle import GameLifecycleManager
from scorekeeper.services.game_views import GameViewAssembler
from scorekeeper.services.player_stats import PlayerStatsAggregator
from scorekeeper.services.score_ledger import ScoreLedger


class ScoreboardService:
    """Library entrypoint: one method per operation offered to the application."""

    def __init__(
        self,
        repository: ScoreboardRepository,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ) -> None:
        self.repo = repository
        self.log = logger or structlog.get_logger(__name__)
        self.stats = PlayerStatsAggregator(repository, logger)
        self.ledger = ScoreLedger(repository, logger)
        self.lifecycle = GameLifecycleManager(repository, self.stats, logger)
        self.views = GameViewAssembler(repository, self.stats, logger)

    # -- Players --
    async def list_players(self) -> list[PlayerStatsResponse]:
        players = await self.stats.list_players_with_stats()
        return [self._create_player_stats_response(entry) for entry in players]

    async def add_player(self, request: AddPlayerRequest) -> PlayerResponse:
        player = await self.repo.add_player(request.name)
        self.log.info("player added", player_id=player.id)
        return self._create_player_response(player)

    async def remove_player(self, request: RemovePlayerRequest) -> None:
        removed = await self.repo.delete_player(request.player_id)
        if removed is None:
            self.log.warning("player to remove not found", player_id=request.player_id)
        else:
            self.log.info("player removed", player_id=request.player_id)

    # -- Categories --
    async def list_categories(
        self, request: Optional[ListCategoriesRequest] = None
    ) -> list[CategoryResponse]:
        section = request.section if request else None
        categories = await self.repo.list_categories(section)
        return [self._create_category_response(category) for category in categories]

    # -- Games --
    async def create_game(self) -> GameResponse:
        game = await self.lifecycle.create_game()
        return self._create_game_response(game)

    async def add_participants(self, request: AddParticipantsRequest) -> None:
        await self.lifecycle.add_participants(request.game_id, request.player_ids)

    async def save_score(self, request: ScoreRequest) -> ScoreResponse:
        score = await self.ledger.upsert_score(
            request.game_id, request.player_id, request.category_id, request.points
        )
        return ScoreResponse(
            game_id=score.game_id,
            player_id=score.player_id,
            category_id=score.category_id,
            points=score.points,
        )

    async def finalize_game(self, request: FinalizeGameRequest) -> FinalizeGameResponse:
        result = await self.lifecycle.finalize_game(request.game_id)
        return FinalizeGameResponse(
            game_id=result.game.id,
            finalized=result.game.finalized,
            winner_id=result.winner_id,
            totals=result.totals,
        )

    async def list_games(self) -> list[GameDetailResponse]:
        """Finalized games only, most recent first."""
        views = await self.views.compose_game_views()
        return [
            GameDetailResponse(
                game=self._create_game_response(view.game),
                participants=[
                    ParticipantResponse(
                        player_id=participant.player_id,
                        player_name=participant.player_name,
                        total_points=participant.total_points,
                        winner=participant.is_winner,
                    )
                    for participant in view.participants
                ],
            )
            for view in views
        ]

    # -- Internal helpers --
    def _create_player_response(self, player: Player) -> PlayerResponse:
        return PlayerResponse(
            player_id=player.id, name=player.name, created_at=player.created_at
        )

    def _create_player_stats_response(self, entry: PlayerWithStats) -> PlayerStatsResponse:
        return PlayerStatsResponse(
            player_id=entry.player.id,
            name=entry.player.name,
            games_played=entry.stats.games_played,
            games_won=entry.stats.games_won,
            win_rate=entry.stats.win_rate,
            stats_available=not entry.stats.degraded,
        )

    def _create_category_response(self, category: Category) -> CategoryResponse:
        return CategoryResponse(
            category_id=category.id,
            name=category.name,
            code=category.code,
            section=category.section,
            order=category.order,
            description=category.description,
        )

    def _create_game_response(self, game: Game) -> GameResponse:
        return GameResponse(
            game_id=game.id, played_at=game.played_at, finalized=game.finalized
        )
