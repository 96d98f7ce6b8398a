import logging

from fastapi import Depends, HTTPException, Request, Response, status

from src.authentication.session_store import SessionStore
from src.dependencies import get_session_store
from src.exceptions import SessionError, StoreError
from src.load_secrets import session_cookie_name, session_cookie_secure
from src.models.dc_models import LoginModel
from src.models.session_models import SessionModel
from src.services.game_store import GameStore


class SessionAuthentication:
    def __init__(self, cookie_name: str = session_cookie_name, cookie_secure: bool = session_cookie_secure):
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure

    async def check_session(
        self,
        request: Request,
        session_store: SessionStore = Depends(get_session_store),
    ) -> str:
        """Gate for protected routes. Runs before the route body, so a rejected request never touches the store.

        Raises:
            HTTPException: No cookie, unknown token or expired session

        Returns:
            str: username bound to the session
        """
        session = await session_store.get_session(request.cookies.get(self.cookie_name))
        if session is None or not session.username:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unauthorized",
            )
        return session.username

    async def login(
        self,
        credentials: LoginModel,
        request: Request,
        response: Response,
        game_store: GameStore,
        session_store: SessionStore,
    ) -> SessionModel:
        """Check the credentials against the store and open a session

        Args:
            credentials (LoginModel): username and password from the request body
            response (Response): the session cookie is set on it

        Raises:
            HTTPException: 401 when username or password does not match, 500 on a storage failure

        Returns:
            SessionModel: The new session
        """
        try:
            user = await game_store.find_user(credentials.username, credentials.password)
        except StoreError:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Internal server error",
            )
        if user is None:
            logging.info(f"Login failed for {credentials.username!r}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )

        # a fresh token on every login, the old one stops working
        await session_store.destroy_session(request.cookies.get(self.cookie_name))
        session = await session_store.create_session(user.username)
        response.set_cookie(
            key=self.cookie_name,
            value=session.session_id,
            max_age=session_store.ttl_seconds,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.cookie_secure,
        )
        logging.info(f"Login succeeded for {user.username!r}")
        return session

    async def logout(self, request: Request, response: Response, session_store: SessionStore) -> None:
        try:
            await session_store.destroy_session(request.cookies.get(self.cookie_name))
        except Exception as e:
            logging.error(f"Failed to destroy session: {e}")
            raise SessionError("Could not log out") from e
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.cookie_secure,
        )
        logging.info("Logout succeeded")
