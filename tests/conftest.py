"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import logging
from pathlib import Path
from typing import AsyncIterator, Iterator

import pytest
import structlog

from scorekeeper.db.database import Database
from scorekeeper.db.sql_repository import SQLScoreboardRepository

# Route structlog through stdlib logging so caplog sees the events emitted by the services.
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)


@pytest.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    """Fresh SQLite file per test. Each session gets its own connection, as with a real database file."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'scorekeeper.db'}")
    await db.create_tables()
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture
def sql_repo(database: Database) -> SQLScoreboardRepository:
    return SQLScoreboardRepository(database)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """setup_logging reconfigures structlog and the root logger globally; put the test setup back afterwards."""
    root = logging.getLogger()
    saved_level = root.level
    saved_config = structlog.get_config()
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(saved_level)
    structlog.configure(**saved_config)
