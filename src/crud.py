"""CRUD helpers for the games and users tables.

These helpers never commit: the caller owns the transaction
(``async with session.begin()``). Every SQLAlchemy failure is logged and
re-raised as ``StoreError``.
"""
import logging
from typing import List

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncSession

from src.domain.inventory_rules import next_game_id
from src.exceptions import StoreError
from src.models.schema_models import GameSchema, UserSchema
from src.models.schemas import Base, Game, User


class CreateData:
    @staticmethod
    async def create_table(conn: AsyncConnection) -> None:
        """Create games and users tables if not exists"""
        try:
            await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logging.error(f"Failed to create tables: {e}")
            raise StoreError("Failed to create tables") from e

    @staticmethod
    async def create_game_data(title: str, genre: str | None, session: AsyncSession) -> GameSchema:
        """Insert a game with the next free id

        Args:
            title (str): Title of the game
            genre (str | None): Genre, may be absent
            session (AsyncSession): AsyncSession inside an open transaction

        Returns:
            GameSchema: The stored game including its assigned id
        """
        try:
            result = await session.execute(select(func.max(Game.id)))
            new_game = Game(
                id=next_game_id(result.scalar()),
                title=title,
                genre=genre,
            )
            session.add(new_game)
            await session.flush()
            return GameSchema.model_validate(new_game)
        except SQLAlchemyError as e:
            logging.error(f"Failed to create game data: {e}")
            raise StoreError("Failed to create game data") from e

    @staticmethod
    async def create_user_data(username: str, password: str, session: AsyncSession) -> UserSchema:
        """Create or replace the administrator with the given username"""
        try:
            result = await session.execute(select(User).where(User.username == username))
            user = result.scalars().first()
            if user is None:
                user = User(username=username, password=password)
                session.add(user)
            else:
                user.password = password
            await session.flush()
            return UserSchema.model_validate(user)
        except SQLAlchemyError as e:
            logging.error(f"Failed to create user data: {e}")
            raise StoreError("Failed to create user data") from e

    @staticmethod
    async def create_default_data(
        games: List[tuple], users: List[tuple], session: AsyncSession
    ) -> None:
        """Seed the games and users tables, each only when it is empty

        Args:
            games (List[tuple]): (id, title, genre) rows
            users (List[tuple]): (username, password) rows
        """
        try:
            game_count = (await session.execute(select(func.count(Game.id)))).scalar()
            if not game_count:
                session.add_all(
                    [Game(id=game_id, title=title, genre=genre) for game_id, title, genre in games]
                )
                logging.info(f"Seeded {len(games)} games")

            user_count = (await session.execute(select(func.count(User.id)))).scalar()
            if not user_count:
                session.add_all(
                    [User(username=username, password=password) for username, password in users]
                )
                logging.info(f"Seeded {len(users)} users")
            await session.flush()
        except SQLAlchemyError as e:
            logging.error(f"Failed to create default data: {e}")
            raise StoreError("Failed to create default data") from e


class ReadData:
    @staticmethod
    async def read_game_list(session: AsyncSession) -> List[GameSchema]:
        """Read every game in primary key order"""
        try:
            result = await session.execute(select(Game).order_by(Game.id))
            return [GameSchema.model_validate(game) for game in result.scalars().all()]
        except SQLAlchemyError as e:
            logging.error(f"Failed to read game list: {e}")
            raise StoreError("Failed to read game list") from e

    @staticmethod
    async def read_game_data(game_id: int, session: AsyncSession) -> GameSchema | None:
        try:
            game = await session.get(Game, game_id)
            if game is None:
                return None
            return GameSchema.model_validate(game)
        except SQLAlchemyError as e:
            logging.error(f"Failed to read game data: {e}")
            raise StoreError("Failed to read game data") from e

    @staticmethod
    async def read_user_data(username: str, session: AsyncSession) -> User | None:
        """Read the user row, password included, for a credential check

        Args:
            username (str): username of the administrator

        Returns:
            User | None: the row, or None when the username is unknown
        """
        try:
            result = await session.execute(select(User).where(User.username == username))
            return result.scalars().first()
        except SQLAlchemyError as e:
            logging.error(f"Failed to read user data: {e}")
            raise StoreError("Failed to read user data") from e


class UpdateData:
    @staticmethod
    async def update_game_data(
        game_id: int, title: str, genre: str | None, session: AsyncSession
    ) -> GameSchema | None:
        """Replace title and genre of the game

        Returns:
            GameSchema | None: The updated game, None if the id does not exist
        """
        try:
            game = await session.get(Game, game_id)
            if game is None:
                return None
            game.title = title
            game.genre = genre
            await session.flush()
            return GameSchema.model_validate(game)
        except SQLAlchemyError as e:
            logging.error(f"Failed to update game data: {e}")
            raise StoreError("Failed to update game data") from e


class DeleteData:
    @staticmethod
    async def delete_game_data(game_id: int, session: AsyncSession) -> GameSchema | None:
        """Delete the game and return the removed record

        Returns:
            GameSchema | None: The deleted game, None if the id does not exist
        """
        try:
            game = await session.get(Game, game_id)
            if game is None:
                return None
            deleted_game = GameSchema.model_validate(game)
            await session.delete(game)
            await session.flush()
            return deleted_game
        except SQLAlchemyError as e:
            logging.error(f"Failed to delete game data: {e}")
            raise StoreError("Failed to delete game data") from e
