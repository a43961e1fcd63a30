"""In-memory stand-in for the ScoreboardRepository, shared by the service tests."""

import asyncio
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from scorekeeper.core.exceptions import NotFoundError, PersistenceError
from scorekeeper.core.models import (
    Category,
    Game,
    NewCategory,
    Participant,
    ParticipantWithName,
    Player,
    PlayerStatistics,
    Score,
    ScoreEntry,
)
from scorekeeper.core.shared_types import CategoryId, GameId, PlayerId, Section

MOCK_NOW = datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc)


class MockRepository:
    """Mock the ScoreboardRepository using dictionaries of records.

    `writes` logs the name of every mutating call so tests can assert that nothing was written.
    """

    def __init__(self) -> None:
        self.players: dict[PlayerId, Player] = {}
        self.categories: dict[CategoryId, Category] = {}
        self.games: dict[GameId, Game] = {}
        self.participants: list[Participant] = []
        self.scores: dict[int, Score] = {}
        self.writes: list[str] = []
        # knobs for failure / timing scenarios
        self.failing_statistics: set[PlayerId] = set()
        self.statistics_delays: dict[PlayerId, float] = {}
        self.fail_finalize = False
        self._next_id = 1

    # --- seeding helpers (not part of the protocol) ---
    def seed_player(self, name: str) -> Player:
        player = Player(self._new_id(), name, MOCK_NOW, MOCK_NOW)
        self.players[player.id] = player
        return player

    def seed_game(self, finalized: bool = False, played_at: Optional[datetime] = None) -> Game:
        when = played_at or MOCK_NOW
        game = Game(self._new_id(), when, finalized, when, when)
        self.games[game.id] = game
        return game

    def seed_participant(self, game_id: GameId, player_id: PlayerId, winner: bool = False) -> None:
        self.participants.append(Participant(game_id, player_id, winner))

    def seed_score(self, game_id: GameId, player_id: PlayerId, category_id: CategoryId, points: int) -> Score:
        score = Score(self._new_id(), game_id, player_id, category_id, points)
        self.scores[score.id] = score
        return score

    def winners(self, game_id: GameId) -> list[PlayerId]:
        return [p.player_id for p in self.participants if p.game_id == game_id and p.winner]

    # --- players ---
    async def list_players(self) -> list[Player]:
        return sorted(self.players.values(), key=lambda player: player.name)

    async def add_player(self, name: str) -> Player:
        self.writes.append("add_player")
        return self.seed_player(name)

    async def delete_player(self, player_id: PlayerId) -> Optional[Player]:
        self.writes.append("delete_player")
        return self.players.pop(player_id, None)

    # --- categories ---
    async def list_categories(self, section: Optional[Section] = None) -> list[Category]:
        categories = sorted(self.categories.values(), key=lambda category: category.order)
        if section is None:
            return categories
        return [category for category in categories if category.section == section]

    async def add_categories(self, categories: list[NewCategory]) -> list[Category]:
        self.writes.append("add_categories")
        created = []
        for new in categories:
            category = Category(
                self._new_id(), new.name, new.code, new.section, new.order, new.description
            )
            self.categories[category.id] = category
            created.append(category)
        return created

    # --- games ---
    async def create_game(self) -> Game:
        self.writes.append("create_game")
        return self.seed_game(played_at=MOCK_NOW + timedelta(minutes=len(self.games)))

    async def get_game(self, game_id: GameId) -> Optional[Game]:
        return self.games.get(game_id)

    async def list_games(self, finalized: bool) -> list[Game]:
        games = [game for game in self.games.values() if game.finalized == finalized]
        return sorted(games, key=lambda game: game.played_at, reverse=True)

    async def finalize_game(self, game_id: GameId, winner_id: Optional[PlayerId]) -> Optional[Game]:
        self.writes.append("finalize_game")
        if self.fail_finalize:
            raise PersistenceError("connection lost")
        game = self.games.get(game_id)
        if game is None:
            return None
        if winner_id is not None:
            matching = [
                p for p in self.participants if p.game_id == game_id and p.player_id == winner_id
            ]
            if not matching:
                raise NotFoundError(f"Player {winner_id} does not take part in game {game_id}.")
            for participant in matching:
                participant.winner = True
        self.games[game_id] = replace(game, finalized=True)
        return self.games[game_id]

    # --- participants ---
    async def add_participants(self, participants: list[Participant]) -> list[Participant]:
        self.writes.append("add_participants")
        self.participants.extend(participants)
        return participants

    async def list_participants(self, game_id: GameId) -> list[ParticipantWithName]:
        return [
            ParticipantWithName(p.game_id, p.player_id, self.players[p.player_id].name, p.winner)
            for p in self.participants
            if p.game_id == game_id
        ]

    # --- scores ---
    async def find_score(
        self, game_id: GameId, player_id: PlayerId, category_id: CategoryId
    ) -> Optional[Score]:
        return next(
            (
                score
                for score in self.scores.values()
                if (score.game_id, score.player_id, score.category_id)
                == (game_id, player_id, category_id)
            ),
            None,
        )

    async def insert_score(self, entry: ScoreEntry) -> Score:
        self.writes.append("insert_score")
        return self.seed_score(entry.game_id, entry.player_id, entry.category_id, entry.points)

    async def update_score_points(self, score_id: int, points: int) -> Optional[Score]:
        self.writes.append("update_score_points")
        if score_id not in self.scores:
            return None
        self.scores[score_id] = replace(self.scores[score_id], points=points)
        return self.scores[score_id]

    async def list_scores(self, game_id: GameId) -> list[Score]:
        return [score for score in self.scores.values() if score.game_id == game_id]

    # --- aggregate query ---
    async def get_player_statistics(self, player_id: PlayerId) -> PlayerStatistics:
        await asyncio.sleep(self.statistics_delays.get(player_id, 0))
        if player_id in self.failing_statistics:
            raise PersistenceError("statistics function failed")
        finalized = {game_id for game_id, game in self.games.items() if game.finalized}
        played = [p for p in self.participants if p.player_id == player_id and p.game_id in finalized]
        return PlayerStatistics(
            total_games=len(played), total_wins=sum(1 for p in played if p.winner)
        )

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self.players.clear()
        self.categories.clear()
        self.games.clear()
        self.participants.clear()
        self.scores.clear()
        self.writes.clear()

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id
