"""Requests and Response models"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from scorekeeper.core.exceptions import ValidationError
from scorekeeper.core.shared_types import Section


# --- REQUEST MODELS ---
class AddPlayerRequest(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValidationError("Player name cannot be blank.")
        return name


class RemovePlayerRequest(BaseModel):
    player_id: int


class ListCategoriesRequest(BaseModel):
    section: Optional[Section] = None


class AddParticipantsRequest(BaseModel):
    # ids are checked by the GameLifecycleManager, before anything gets written
    game_id: int
    player_ids: list[int]


class ScoreRequest(BaseModel):
    game_id: int
    player_id: int
    category_id: int
    points: int


class FinalizeGameRequest(BaseModel):
    game_id: int


# --- RESPONSE MODELS ---
class PlayerResponse(BaseModel):
    player_id: int
    name: str
    created_at: datetime


class PlayerStatsResponse(BaseModel):
    player_id: int
    name: str
    games_played: int
    games_won: int
    win_rate: float
    stats_available: bool


class CategoryResponse(BaseModel):
    category_id: int
    name: str
    code: str
    section: Section
    order: int
    description: Optional[str]


class GameResponse(BaseModel):
    game_id: int
    played_at: datetime
    finalized: bool


class ScoreResponse(BaseModel):
    game_id: int
    player_id: int
    category_id: int
    points: int


class FinalizeGameResponse(BaseModel):
    game_id: int
    finalized: bool
    winner_id: Optional[int]
    totals: dict[int, int]


class ParticipantResponse(BaseModel):
    player_id: int
    player_name: str
    total_points: int
    winner: bool


class GameDetailResponse(BaseModel):
    game: GameResponse
    participants: list[ParticipantResponse]
