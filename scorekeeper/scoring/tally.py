"""Score card arithmetic: totals per player and who won.

Pure functions on records already fetched from the store, so the services and the game history views
count points the same way.
"""

from typing import Iterable, Mapping, Optional

from scorekeeper.core.models import Score
from scorekeeper.core.shared_types import PlayerId, PlayerTotals


def sum_points_by_player(scores: Iterable[Score]) -> PlayerTotals:
    """Sum the points of every score line, grouped by player.

    Players without any score line do not appear in the result (callers read them as 0).
    """
    totals: PlayerTotals = {}
    for score in scores:
        totals[score.player_id] = totals.get(score.player_id, 0) + score.points
    return totals


def pick_winner(totals: Mapping[PlayerId, int]) -> Optional[PlayerId]:
    """The player with the strictly greatest total, if there is one.

    No winner when:
    * nobody scored (empty totals),
    * the best total is not positive,
    * two or more players share the best total.
    """
    if not totals:
        return None

    best_total = max(totals.values())
    if best_total <= 0:
        return None

    leaders = [player_id for player_id, total in totals.items() if total == best_total]
    if len(leaders) > 1:
        return None
    return leaders[0]


def total_for(totals: Mapping[PlayerId, int], player_id: PlayerId) -> int:
    return totals.get(player_id, 0)
