"""Unit tests for scorekeeper/scoring/tally.py"""

import pytest

from scorekeeper.core.models import Score
from scorekeeper.scoring.tally import pick_winner, sum_points_by_player, total_for


def make_scores(*rows: tuple[int, int]) -> list[Score]:
    """(player_id, points) rows of one game, one category each."""
    return [
        Score(id=index, game_id=1, player_id=player_id, category_id=index, points=points)
        for index, (player_id, points) in enumerate(rows, start=1)
    ]


# --- sum_points_by_player ---
def test_sum_per_player() -> None:
    scores = make_scores((1, 3), (2, 10), (1, 8), (2, 0), (1, 25))
    assert sum_points_by_player(scores) == {1: 36, 2: 10}


def test_sum_of_nothing() -> None:
    assert sum_points_by_player([]) == {}


def test_negative_points_are_summed_too() -> None:
    assert sum_points_by_player(make_scores((1, 5), (1, -2))) == {1: 3}


def test_total_for_absent_player_is_zero() -> None:
    assert total_for({1: 12}, 1) == 12
    assert total_for({1: 12}, 2) == 0


# --- pick_winner ---
@pytest.mark.parametrize(
    "totals, expected",
    [
        ({1: 10, 2: 7}, 1),
        ({1: 7, 2: 10}, 2),
        ({1: 1}, 1),
        ({1: 3, 2: 50, 3: 49}, 2),
    ],
)
def test_strict_maximum_wins(totals: dict[int, int], expected: int) -> None:
    assert pick_winner(totals) == expected


@pytest.mark.parametrize(
    "totals",
    [
        {},  # nobody scored
        {1: 5, 2: 5},  # tie
        {1: 9, 2: 9, 3: 1},  # tie at the top
        {1: 0, 2: 0},  # zero scores
        {1: -3, 2: -5},  # nothing positive
    ],
)
def test_no_winner(totals: dict[int, int]) -> None:
    assert pick_winner(totals) is None


def test_winner_does_not_depend_on_insertion_order() -> None:
    assert pick_winner({2: 7, 1: 10}) == pick_winner({1: 10, 2: 7}) == 1
    assert pick_winner({2: 5, 1: 5}) is pick_winner({1: 5, 2: 5}) is None
