"""Start-up wiring: settings -> logging -> database -> repository -> service."""

from typing import Optional

import structlog

from scorekeeper.core.logging import setup_logging
from scorekeeper.core.settings import ScorekeeperSettings
from scorekeeper.db.database import Database
from scorekeeper.db.seed import seed_categories
from scorekeeper.db.sql_repository import SQLScoreboardRepository
from scorekeeper.services.scoreboard_service import ScoreboardService

logger = structlog.get_logger(__name__)


async def open_scoreboard(
    settings: Optional[ScorekeeperSettings] = None,
    configure_logging: bool = True,
) -> tuple[ScoreboardService, Database]:
    """Build the store handle and the service on top of it.

    Logging is set up from `settings` first (stdout, plus a file when `log_dir` is set). Pass
    `configure_logging=False` when the host application owns the logging configuration.
    The caller owns the returned Database and should `await database.dispose()` when done.
    """
    settings = settings or ScorekeeperSettings()
    if configure_logging:
        log_path = setup_logging(settings)
        if log_path is not None:
            logger.info("logging to file", path=str(log_path))

    database = Database(settings.database_url, echo=settings.echo_sql)
    await database.create_tables()

    repository = SQLScoreboardRepository(database)
    if settings.seed_categories:
        await seed_categories(repository)

    logger.info("scoreboard ready", database_url=database.engine.url.render_as_string())
    return ScoreboardService(repository), database
