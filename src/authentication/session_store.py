import logging
import secrets
from asyncio import Lock
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from src.domain.inventory_rules import is_expired, session_expiry
from src.models.session_models import SessionModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    def __init__(self, ttl_seconds: int, clock: Callable[[], datetime] = utc_now):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.sessions: Dict[str, SessionModel] = {}  # session_idごとにSessionModelを管理
        self.lock = Lock()  # sessionsへのアクセスを保護

    async def create_session(self, username: str) -> SessionModel:
        """Create a session bound to the username

        Args:
            username (str): Authenticated administrator

        Returns:
            SessionModel: New session, its session_id goes into the cookie
        """
        now = self.clock()
        session = SessionModel(
            session_id=secrets.token_urlsafe(32),
            username=username,
            created_at=now,
            expires_at=session_expiry(now, self.ttl_seconds),
        )
        async with self.lock:
            self.sessions[session.session_id] = session
        return session

    async def get_session(self, session_id: Optional[str]) -> Optional[SessionModel]:
        """Get the live session for the token. Expired sessions are dropped and reported as absent."""
        if not session_id:
            return None
        async with self.lock:
            session = self.sessions.get(session_id)
            if session is None:
                return None
            if is_expired(session.expires_at, self.clock()):
                del self.sessions[session_id]
                return None
            return session

    async def destroy_session(self, session_id: Optional[str]) -> bool:
        """Remove the session. Returns False when there was nothing to remove."""
        if not session_id:
            return False
        async with self.lock:
            return self.sessions.pop(session_id, None) is not None

    async def delete_expired_sessions(self) -> int:
        now = self.clock()
        async with self.lock:
            expired = [
                session_id
                for session_id, session in self.sessions.items()
                if is_expired(session.expires_at, now)
            ]
            for session_id in expired:
                del self.sessions[session_id]
        if expired:
            logging.info(f"Deleted {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self.sessions)
