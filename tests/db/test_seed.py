"""Unit tests for scorekeeper/db/seed.py"""

from scorekeeper.core.shared_types import Section
from scorekeeper.db.seed import DEFAULT_CATEGORIES, seed_categories
from scorekeeper.db.sql_repository import SQLScoreboardRepository


async def test_seed_empty_store(sql_repo: SQLScoreboardRepository) -> None:
    created = await seed_categories(sql_repo)

    stored = await sql_repo.list_categories()
    assert len(created) == len(DEFAULT_CATEGORIES)
    assert [category.code for category in stored] == [c.code for c in DEFAULT_CATEGORIES]
    assert len(await sql_repo.list_categories(Section.UPPER)) == 6
    assert len(await sql_repo.list_categories(Section.LOWER)) == 7


async def test_seed_is_skipped_when_categories_exist(sql_repo: SQLScoreboardRepository) -> None:
    await seed_categories(sql_repo)
    again = await seed_categories(sql_repo)

    assert len(again) == len(DEFAULT_CATEGORIES)
    assert len(await sql_repo.list_categories()) == len(DEFAULT_CATEGORIES)


def test_default_display_order_is_unique() -> None:
    orders = [category.order for category in DEFAULT_CATEGORIES]
    assert len(set(orders)) == len(orders)
    assert len({category.code for category in DEFAULT_CATEGORIES}) == len(DEFAULT_CATEGORIES)
