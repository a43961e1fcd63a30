"""
Boundary layer data model(s).

These objects are exchanged between the Services and the repository (persistence) layer.
The API layer converts them into its own request/response models, so neither side depends on the other's representation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Self

from scorekeeper.core.shared_types import (
    CategoryId,
    GameId,
    GameState,
    PlayerId,
    PlayerTotals,
    Section,
)


# --- Stored records ---
@dataclass
class Player:
    id: PlayerId
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass
class Category:
    """Score card line. Reference data: never modified by the services."""

    id: CategoryId
    name: str
    code: str
    section: Section
    order: int
    description: Optional[str] = None


@dataclass
class NewCategory:
    """Category payload before the store assigns an ID."""

    name: str
    code: str
    section: Section
    order: int
    description: Optional[str] = None


@dataclass
class Game:
    id: GameId
    played_at: datetime
    finalized: bool
    created_at: datetime
    updated_at: datetime

    @property
    def state(self) -> GameState:
        return GameState.FINALIZED if self.finalized else GameState.OPEN


@dataclass
class Participant:
    game_id: GameId
    player_id: PlayerId
    winner: bool = False


@dataclass
class ParticipantWithName:
    """Participant joined with the name of its player."""

    game_id: GameId
    player_id: PlayerId
    player_name: str
    winner: bool


@dataclass
class ScoreEntry:
    """Points scored by a player in one category of one game (not yet stored)."""

    game_id: GameId
    player_id: PlayerId
    category_id: CategoryId
    points: int


@dataclass
class Score:
    id: int
    game_id: GameId
    player_id: PlayerId
    category_id: CategoryId
    points: int


# --- Statistics ---
@dataclass
class PlayerStatistics:
    """Raw output of the store's aggregate statistics query."""

    total_games: int
    total_wins: int


@dataclass(frozen=True)
class CareerStats:
    """Lifetime figures of a player over all finalized games.

    `degraded` is only set when the numbers are a zero-valued stand-in for a failed statistics query,
    so that "no games played" and "statistics unavailable" can be told apart.
    """

    games_played: int
    games_won: int
    win_rate: float
    degraded: bool = False

    @classmethod
    def from_statistics(cls, statistics: PlayerStatistics) -> Self:
        games_played = statistics.total_games
        games_won = statistics.total_wins
        win_rate = games_won / games_played if games_played > 0 else 0.0
        return cls(games_played, games_won, win_rate)

    @classmethod
    def unavailable(cls) -> Self:
        return cls(0, 0, 0.0, degraded=True)


@dataclass
class PlayerWithStats:
    player: Player
    stats: CareerStats


# --- Composite results ---
@dataclass
class GameResult:
    """Outcome of closing a game."""

    game: Game
    winner_id: Optional[PlayerId]
    totals: PlayerTotals = field(default_factory=dict)


@dataclass
class ParticipantView:
    game_id: GameId
    player_id: PlayerId
    player_name: str
    total_points: int
    is_winner: bool


@dataclass
class GameView:
    """Read-only view of a finalized game, as shown in the game history."""

    game: Game
    participants: list[ParticipantView]
