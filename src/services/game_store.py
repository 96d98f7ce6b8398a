"""Persistence store for games and administrators.

- Routers should not touch DB sessions directly; they call a ``GameStore``.
- ``SqliteGameStore`` owns session/transaction boundaries and uses the CRUD
  helpers, which do not commit on their own.
- ``MemoryGameStore`` keeps everything in a list and needs no database.

Creates on the SQLite store are serialised so ids stay unique. Concurrent writers
on the same id are last-writer-wins: each operation is one
transaction, and an update or delete that arrives after a delete sees the row
as missing.
"""

import abc
import asyncio
import copy
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.crud import CreateData, DeleteData, ReadData, UpdateData
from src.db import build_session_factory
from src.domain.inventory_rules import (
    DEFAULT_GAMES,
    DEFAULT_USERS,
    credentials_match,
    max_game_id,
    next_game_id,
)
from src.exceptions import GameNotFoundError, StoreError
from src.models.schema_models import GameSchema, UserSchema


class GameStore(abc.ABC):
    @abc.abstractmethod
    async def initialize(self) -> None:
        """Prepare the backing storage and seed default rows when empty."""

    @abc.abstractmethod
    async def list_games(self) -> List[GameSchema]: ...

    @abc.abstractmethod
    async def get_game(self, game_id: int) -> GameSchema: ...

    @abc.abstractmethod
    async def create_game(self, title: str, genre: Optional[str]) -> GameSchema: ...

    @abc.abstractmethod
    async def update_game(self, game_id: int, title: str, genre: Optional[str]) -> GameSchema: ...

    @abc.abstractmethod
    async def delete_game(self, game_id: int) -> GameSchema: ...

    @abc.abstractmethod
    async def find_user(self, username: str, password: str) -> Optional[UserSchema]:
        """Return the administrator whose username and password both match."""

    async def close(self) -> None:
        pass


class SqliteGameStore(GameStore):
    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ):
        self.engine = engine
        self.Session = session_factory or build_session_factory(engine)
        self.create_lock = asyncio.Lock()

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self.Session() as session:
                async with session.begin():
                    yield session
        except SQLAlchemyError as e:
            # connection or commit failures that happen outside the CRUD helpers
            logging.error(f"Storage failure: {e}")
            raise StoreError("Storage failure") from e

    async def initialize(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await CreateData.create_table(conn)
        except SQLAlchemyError as e:
            logging.error(f"Failed to open database: {e}")
            raise StoreError("Failed to open database") from e
        async with self._transaction() as session:
            await CreateData.create_default_data(DEFAULT_GAMES, DEFAULT_USERS, session)
        logging.info(f"Database ready: {self.engine.url}")

    async def list_games(self) -> List[GameSchema]:
        async with self._transaction() as session:
            return await ReadData.read_game_list(session)

    async def get_game(self, game_id: int) -> GameSchema:
        async with self._transaction() as session:
            game = await ReadData.read_game_data(game_id, session)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    async def create_game(self, title: str, genre: Optional[str]) -> GameSchema:
        # creates run one at a time, otherwise two of them read the same max(id)
        async with self.create_lock:
            async with self._transaction() as session:
                game = await CreateData.create_game_data(title, genre, session)
        logging.info(f"Created game {game.id}")
        return game

    async def update_game(self, game_id: int, title: str, genre: Optional[str]) -> GameSchema:
        async with self._transaction() as session:
            game = await UpdateData.update_game_data(game_id, title, genre, session)
        if game is None:
            raise GameNotFoundError(game_id)
        logging.info(f"Updated game {game_id}")
        return game

    async def delete_game(self, game_id: int) -> GameSchema:
        async with self._transaction() as session:
            game = await DeleteData.delete_game_data(game_id, session)
        if game is None:
            raise GameNotFoundError(game_id)
        logging.info(f"Deleted game {game_id}")
        return game

    async def find_user(self, username: str, password: str) -> Optional[UserSchema]:
        async with self._transaction() as session:
            user = await ReadData.read_user_data(username, session)
            if user is None or not credentials_match(user.password, password):
                return None
            return UserSchema.model_validate(user)

    async def store_user(self, username: str, password: str) -> UserSchema:
        async with self._transaction() as session:
            return await CreateData.create_user_data(username, password, session)

    async def close(self) -> None:
        await self.engine.dispose()


class MemoryGameStore(GameStore):
    """Array-backed store. Records are copied on the way in and out."""

    def __init__(self, games: Optional[List[GameSchema]] = None, users: Optional[List[tuple]] = None):
        self.games: List[GameSchema] = list(games) if games is not None else []
        self.users: List[tuple] = list(users) if users is not None else []

    async def initialize(self) -> None:
        if not self.games:
            self.games = [
                GameSchema(id=game_id, title=title, genre=genre)
                for game_id, title, genre in DEFAULT_GAMES
            ]
        if not self.users:
            self.users = list(DEFAULT_USERS)

    def _index_of(self, game_id: int) -> int:
        for i, game in enumerate(self.games):
            if game.id == game_id:
                return i
        raise GameNotFoundError(game_id)

    async def list_games(self) -> List[GameSchema]:
        return [copy.copy(game) for game in self.games]

    async def get_game(self, game_id: int) -> GameSchema:
        return copy.copy(self.games[self._index_of(game_id)])

    async def create_game(self, title: str, genre: Optional[str]) -> GameSchema:
        game = GameSchema(
            id=next_game_id(max_game_id(game.id for game in self.games)),
            title=title,
            genre=genre,
        )
        self.games.append(game)
        return copy.copy(game)

    async def update_game(self, game_id: int, title: str, genre: Optional[str]) -> GameSchema:
        i = self._index_of(game_id)
        self.games[i] = GameSchema(id=game_id, title=title, genre=genre)
        return copy.copy(self.games[i])

    async def delete_game(self, game_id: int) -> GameSchema:
        return self.games.pop(self._index_of(game_id))

    async def find_user(self, username: str, password: str) -> Optional[UserSchema]:
        for user_id, (stored_username, stored_password) in enumerate(self.users, start=1):
            if stored_username == username and credentials_match(stored_password, password):
                return UserSchema(id=user_id, username=username)
        return None
