"""
Type definitions used across layers
"""

from enum import StrEnum

# Type aliases
PlayerId = int
GameId = int
CategoryId = int
PlayerTotals = dict[PlayerId, int]


class Section(StrEnum):
    """The two halves of the score card. Values are the ones stored in the categories table."""

    UPPER = "superior"
    LOWER = "inferior"


class GameState(StrEnum):
    OPEN = "open"
    FINALIZED = "finalized"
