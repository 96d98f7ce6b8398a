from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from src.authentication.session_authentication import SessionAuthentication
from src.authentication.session_store import SessionStore
from src.dependencies import get_game_store, get_session_store
from src.exceptions import SessionError
from src.models.dc_models import LoginModel, MessageModel
from src.services.game_store import GameStore

auth_router = APIRouter(tags=["auth"])
session_auth = SessionAuthentication()


class AuthAPI:
    @staticmethod
    @auth_router.post(
        "/login",
        response_model=MessageModel,
        responses={401: {"description": "Invalid credentials"}},
    )
    async def login(
        credentials: LoginModel,
        request: Request,
        response: Response,
        game_store: GameStore = Depends(get_game_store),
        session_store: SessionStore = Depends(get_session_store),
    ) -> MessageModel:
        """Open a session and set the session cookie"""
        await session_auth.login(credentials, request, response, game_store, session_store)
        return MessageModel(message="Login successful")

    @staticmethod
    @auth_router.post(
        "/logout",
        response_model=MessageModel,
        responses={500: {"description": "Session could not be destroyed"}},
    )
    async def logout(
        request: Request,
        response: Response,
        session_store: SessionStore = Depends(get_session_store),
    ) -> MessageModel:
        """Destroy the current session. Succeeds even when there is none."""
        try:
            await session_auth.logout(request, response, session_store)
        except SessionError:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not log out",
            )
        return MessageModel(message="Logout successful")
