"""Default score card categories, written once into an empty store."""

import structlog

from scorekeeper.core.models import Category, NewCategory
from scorekeeper.core.shared_types import Section
from scorekeeper.db.repository import ScoreboardRepository

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES: list[NewCategory] = [
    # upper section: sum of the dice showing that number
    NewCategory("Ones", "ones", Section.UPPER, 1, "Sum of all ones"),
    NewCategory("Twos", "twos", Section.UPPER, 2, "Sum of all twos"),
    NewCategory("Threes", "threes", Section.UPPER, 3, "Sum of all threes"),
    NewCategory("Fours", "fours", Section.UPPER, 4, "Sum of all fours"),
    NewCategory("Fives", "fives", Section.UPPER, 5, "Sum of all fives"),
    NewCategory("Sixes", "sixes", Section.UPPER, 6, "Sum of all sixes"),
    # lower section: combinations
    NewCategory("Three of a kind", "three_of_a_kind", Section.LOWER, 7, "Sum of all dice"),
    NewCategory("Four of a kind", "four_of_a_kind", Section.LOWER, 8, "Sum of all dice"),
    NewCategory("Full house", "full_house", Section.LOWER, 9),
    NewCategory("Small straight", "small_straight", Section.LOWER, 10),
    NewCategory("Large straight", "large_straight", Section.LOWER, 11),
    NewCategory("Five of a kind", "five_of_a_kind", Section.LOWER, 12),
    NewCategory("Chance", "chance", Section.LOWER, 13, "Sum of all dice"),
]


async def seed_categories(repository: ScoreboardRepository) -> list[Category]:
    """Store DEFAULT_CATEGORIES unless the store already has categories."""
    existing = await repository.list_categories()
    if existing:
        logger.debug("categories already present, skipping seed", count=len(existing))
        return existing

    created = await repository.add_categories(DEFAULT_CATEGORIES)
    logger.info("seeded default categories", count=len(created))
    return created
