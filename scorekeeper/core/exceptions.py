"""Exceptions raised across layers.

Services never catch PersistenceError themselves: whatever the repository raises reaches the caller.
The one exception is the career statistics fallback in PlayerStatsAggregator.
"""


class ScorekeeperError(Exception):
    """Top-level exception of the library."""


# --- Validation (raised before anything is written) ---
class ValidationError(ScorekeeperError):
    """Request is malformed: missing game id, empty participant list, blank name..."""


class GameStateError(ValidationError):
    """Operation is not allowed in the current state of the game (e.g. scoring a finalized game)."""


# --- Persistence ---
class PersistenceError(ScorekeeperError):
    """Any failure coming from the store."""


class NotFoundError(PersistenceError):
    """A record that the operation requires does not exist."""
