import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from src.authentication.session_authentication import SessionAuthentication
from src.dependencies import get_game_store
from src.exceptions import GameNotFoundError, StoreError
from src.models.dc_models import GameModel
from src.models.schema_models import GameSchema
from src.services.game_store import GameStore

session_auth = SessionAuthentication()
# every /games route sits behind the session gate
games_router = APIRouter(
    prefix="/games",
    tags=["games"],
    dependencies=[Depends(session_auth.check_session)],
    responses={401: {"description": "Not logged in"}},
)


def not_found(e: GameNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


class GameAPI:
    @staticmethod
    @games_router.get("", response_model=List[GameSchema])
    async def list_games(game_store: GameStore = Depends(get_game_store)):
        """Return every game in primary key order."""
        try:
            return await game_store.list_games()
        except StoreError:
            raise internal_error()

    @staticmethod
    @games_router.get(
        "/{game_id}",
        response_model=GameSchema,
        responses={404: {"description": "Game not found"}},
    )
    async def get_game(game_id: int, game_store: GameStore = Depends(get_game_store)):
        try:
            return await game_store.get_game(game_id)
        except GameNotFoundError as e:
            raise not_found(e)
        except StoreError:
            raise internal_error()

    @staticmethod
    @games_router.post("", response_model=GameSchema, status_code=status.HTTP_201_CREATED)
    async def create_game(game: GameModel, game_store: GameStore = Depends(get_game_store)):
        """Store a new game. The id is assigned by the store."""
        try:
            return await game_store.create_game(game.title, game.genre)
        except StoreError:
            raise internal_error()

    @staticmethod
    @games_router.put(
        "/{game_id}",
        response_model=GameSchema,
        responses={404: {"description": "Game not found"}},
    )
    async def update_game(
        game_id: int, game: GameModel, game_store: GameStore = Depends(get_game_store)
    ):
        """Replace title and genre of an existing game."""
        try:
            return await game_store.update_game(game_id, game.title, game.genre)
        except GameNotFoundError as e:
            raise not_found(e)
        except StoreError:
            raise internal_error()

    @staticmethod
    @games_router.delete(
        "/{game_id}",
        response_model=GameSchema,
        responses={404: {"description": "Game not found"}},
    )
    async def delete_game(game_id: int, game_store: GameStore = Depends(get_game_store)):
        """Delete a game and return the removed record."""
        try:
            return await game_store.delete_game(game_id)
        except GameNotFoundError as e:
            logging.info(f"Delete of missing game {game_id}")
            raise not_found(e)
        except StoreError:
            raise internal_error()
