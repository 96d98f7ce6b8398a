from fastapi import Request

from src.authentication.session_store import SessionStore
from src.services.game_store import GameStore


def get_game_store(request: Request) -> GameStore:
    return request.app.state.game_store


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store
