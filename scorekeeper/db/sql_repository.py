"""Implementation of ScoreboardRepository using SQLAlchemy (asyncio)"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import case, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from scorekeeper.core.exceptions import NotFoundError, PersistenceError
from scorekeeper.core.models import (
    Category,
    Game,
    NewCategory,
    Participant,
    ParticipantWithName,
    Player,
    PlayerStatistics,
    Score,
    ScoreEntry,
)
from scorekeeper.core.shared_types import CategoryId, GameId, PlayerId, Section
from scorekeeper.db.database import Database
from scorekeeper.db.schema import DBCategory, DBGame, DBParticipant, DBPlayer, DBScore


class SQLScoreboardRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy's asyncio extension.

    A fresh session is opened per call, so independent calls may run concurrently.
    """

    def __init__(self, database: Database) -> None:
        self.db = database

    # --- players ---
    async def list_players(self) -> list[Player]:
        async with self._session() as session:
            rows = await session.scalars(select(DBPlayer).order_by(DBPlayer.name))
            return [self._to_player(row) for row in rows]

    async def add_player(self, name: str) -> Player:
        async with self._session() as session:
            player_db = DBPlayer(name=name)
            session.add(player_db)
            await session.commit()
            await session.refresh(player_db)
            return self._to_player(player_db)

    async def delete_player(self, player_id: PlayerId) -> Optional[Player]:
        """Remove a player's record. Participations and score lines go with it (ON DELETE CASCADE)."""
        async with self._session() as session:
            player_db = await session.get(DBPlayer, player_id)
            if not player_db:
                return None
            player = self._to_player(player_db)
            await session.delete(player_db)
            await session.commit()
            return player

    # --- categories ---
    async def list_categories(self, section: Optional[Section] = None) -> list[Category]:
        query = select(DBCategory).order_by(DBCategory.order)
        if section is not None:
            query = query.where(DBCategory.section == section.value)
        async with self._session() as session:
            rows = await session.scalars(query)
            return [self._to_category(row) for row in rows]

    async def add_categories(self, categories: list[NewCategory]) -> list[Category]:
        async with self._session() as session:
            rows = [
                DBCategory(
                    name=category.name,
                    code=category.code,
                    section=category.section.value,
                    order=category.order,
                    description=category.description,
                )
                for category in categories
            ]
            session.add_all(rows)
            await session.commit()
            return [self._to_category(row) for row in rows]

    # --- games ---
    async def create_game(self) -> Game:
        async with self._session() as session:
            game_db = DBGame()
            session.add(game_db)
            await session.commit()
            await session.refresh(game_db)
            return self._to_game(game_db)

    async def get_game(self, game_id: GameId) -> Optional[Game]:
        async with self._session() as session:
            game_db = await session.get(DBGame, game_id)
            if game_db:
                return self._to_game(game_db)
            return None

    async def list_games(self, finalized: bool) -> list[Game]:
        query = (
            select(DBGame)
            .where(DBGame.finalized.is_(finalized))
            .order_by(DBGame.played_at.desc(), DBGame.id.desc())
        )
        async with self._session() as session:
            rows = await session.scalars(query)
            return [self._to_game(row) for row in rows]

    async def finalize_game(
        self, game_id: GameId, winner_id: Optional[PlayerId]
    ) -> Optional[Game]:
        """Both writes are committed together or not at all."""
        async with self._session() as session:
            async with session.begin():
                game_db = await session.get(DBGame, game_id)
                if not game_db:
                    return None
                if winner_id is not None:
                    result = await session.execute(
                        update(DBParticipant)
                        .where(
                            DBParticipant.game_id == game_id,
                            DBParticipant.player_id == winner_id,
                        )
                        .values(winner=True)
                    )
                    if result.rowcount == 0:
                        # leaving the block with an error rolls the transaction back
                        raise NotFoundError(
                            f"Player {winner_id} does not take part in game {game_id}."
                        )
                game_db.finalized = True
            await session.refresh(game_db)
            return self._to_game(game_db)

    # --- participants ---
    async def add_participants(self, participants: list[Participant]) -> list[Participant]:
        async with self._session() as session:
            session.add_all(
                DBParticipant(
                    game_id=participant.game_id,
                    player_id=participant.player_id,
                    winner=participant.winner,
                )
                for participant in participants
            )
            await session.commit()
            return participants

    async def list_participants(self, game_id: GameId) -> list[ParticipantWithName]:
        query = (
            select(DBParticipant)
            .options(joinedload(DBParticipant.player))
            .where(DBParticipant.game_id == game_id)
            .order_by(DBParticipant.id)
        )
        async with self._session() as session:
            rows = await session.scalars(query)
            return [
                ParticipantWithName(
                    game_id=row.game_id,
                    player_id=row.player_id,
                    player_name=row.player.name,
                    winner=row.winner,
                )
                for row in rows
            ]

    # --- scores ---
    async def find_score(
        self, game_id: GameId, player_id: PlayerId, category_id: CategoryId
    ) -> Optional[Score]:
        query = select(DBScore).where(
            DBScore.game_id == game_id,
            DBScore.player_id == player_id,
            DBScore.category_id == category_id,
        )
        async with self._session() as session:
            score_db = await session.scalar(query)
            if score_db:
                return self._to_score(score_db)
            return None

    async def insert_score(self, entry: ScoreEntry) -> Score:
        async with self._session() as session:
            score_db = DBScore(
                game_id=entry.game_id,
                player_id=entry.player_id,
                category_id=entry.category_id,
                points=entry.points,
            )
            session.add(score_db)
            await session.commit()
            await session.refresh(score_db)
            return self._to_score(score_db)

    async def update_score_points(self, score_id: int, points: int) -> Optional[Score]:
        async with self._session() as session:
            score_db = await session.get(DBScore, score_id)
            if not score_db:
                return None
            score_db.points = points
            await session.commit()
            return self._to_score(score_db)

    async def list_scores(self, game_id: GameId) -> list[Score]:
        query = select(DBScore).where(DBScore.game_id == game_id).order_by(DBScore.id)
        async with self._session() as session:
            rows = await session.scalars(query)
            return [self._to_score(row) for row in rows]

    # --- aggregate query ---
    async def get_player_statistics(self, player_id: PlayerId) -> PlayerStatistics:
        """Count the finalized games the player took part in, and how many of those were won."""
        wins = func.coalesce(
            func.sum(case((DBParticipant.winner.is_(True), 1), else_=0)), 0
        )
        query = (
            select(func.count(DBParticipant.id), wins)
            .join(DBGame, DBGame.id == DBParticipant.game_id)
            .where(DBParticipant.player_id == player_id, DBGame.finalized.is_(True))
        )
        async with self._session() as session:
            total_games, total_wins = (await session.execute(query)).one()
            return PlayerStatistics(total_games=total_games, total_wins=total_wins)

    # --- Internal helpers ---
    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """Open a session and translate driver/ORM failures into PersistenceError."""
        try:
            async with self.db.sessions() as session:
                yield session
        except SQLAlchemyError as exc:
            raise PersistenceError(str(exc)) from exc

    def _to_player(self, player_db: DBPlayer) -> Player:
        return Player(
            id=player_db.id,
            name=player_db.name,
            created_at=player_db.created_at,
            updated_at=player_db.updated_at,
        )

    def _to_category(self, category_db: DBCategory) -> Category:
        return Category(
            id=category_db.id,
            name=category_db.name,
            code=category_db.code,
            section=Section(category_db.section),
            order=category_db.order,
            description=category_db.description,
        )

    def _to_game(self, game_db: DBGame) -> Game:
        return Game(
            id=game_db.id,
            played_at=game_db.played_at,
            finalized=game_db.finalized,
            created_at=game_db.created_at,
            updated_at=game_db.updated_at,
        )

    def _to_score(self, score_db: DBScore) -> Score:
        return Score(
            id=score_db.id,
            game_id=score_db.game_id,
            player_id=score_db.player_id,
            category_id=score_db.category_id,
            points=score_db.points,
        )
