"""Protocol repository: everything the services need from the store."""

from typing import Optional, Protocol

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


class ScoreboardRepository(Protocol):
    """Persistence layer orchestration.

    Implementations raise PersistenceError (or a subclass) for any failure of the store.
    """

    # --- players ---
    async def list_players(self) -> list[Player]:
        """All players, ordered by name."""
        ...

    async def add_player(self, name: str) -> Player:
        """Store a new player and return the stored record."""
        ...

    async def delete_player(self, player_id: PlayerId) -> Optional[Player]:
        """Remove a player's record, if it exists."""
        ...

    # --- categories ---
    async def list_categories(self, section: Optional[Section] = None) -> list[Category]:
        """Categories ordered by display order, optionally limited to one section."""
        ...

    async def add_categories(self, categories: list[NewCategory]) -> list[Category]:
        """Store reference categories (bootstrap only)."""
        ...

    # --- games ---
    async def create_game(self) -> Game:
        """Store a new, open game with default values."""
        ...

    async def get_game(self, game_id: GameId) -> Optional[Game]:
        """Get game by ID, if record exists."""
        ...

    async def list_games(self, finalized: bool) -> list[Game]:
        """Games with the given finalized flag, most recently played first."""
        ...

    async def finalize_game(
        self, game_id: GameId, winner_id: Optional[PlayerId]
    ) -> Optional[Game]:
        """Mark the winner's participation (if any) and close the game, as a single transaction.

        Raises NotFoundError, and changes nothing, when `winner_id` has no participant row in the game.
        """
        ...

    # --- participants ---
    async def add_participants(self, participants: list[Participant]) -> list[Participant]:
        """Store the participants of a game."""
        ...

    async def list_participants(self, game_id: GameId) -> list[ParticipantWithName]:
        """Participants of a game joined with their player's name."""
        ...

    # --- scores ---
    async def find_score(
        self, game_id: GameId, player_id: PlayerId, category_id: CategoryId
    ) -> Optional[Score]:
        """The score line for a (game, player, category) triple, if any."""
        ...

    async def insert_score(self, entry: ScoreEntry) -> Score:
        """Store a new score line."""
        ...

    async def update_score_points(self, score_id: int, points: int) -> Optional[Score]:
        """Replace the points of an existing score line."""
        ...

    async def list_scores(self, game_id: GameId) -> list[Score]:
        """All score lines of a game."""
        ...

    # --- aggregate query ---
    async def get_player_statistics(self, player_id: PlayerId) -> PlayerStatistics:
        """Finalized games played and won by the player."""
        ...
