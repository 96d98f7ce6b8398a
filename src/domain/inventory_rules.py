"""Inventory and session rules that are independent from HTTP and DB.

Rule of thumb:
- OK: id assignment, credential comparison, expiry arithmetic.
- Not OK: touching DB sessions, FastAPI, datetime.now(), etc.
"""

import secrets
from datetime import datetime, timedelta
from typing import Iterable, Optional

DEFAULT_GAMES = [
    (1, "The Legend of Zelda", "Action-Adventure"),
    (2, "Super Mario Bros.", "Platformer"),
]

DEFAULT_USERS = [
    ("admin", "password123"),
    ("manager", "retro2024"),
]


def next_game_id(current_max: Optional[int]) -> int:
    """Return the id for a new game: one greater than the current maximum, 1 when empty."""
    if current_max is None:
        return 1
    return current_max + 1


def max_game_id(ids: Iterable[int]) -> Optional[int]:
    return max(ids, default=None)


def credentials_match(stored_password: str, given_password: str) -> bool:
    """Plain string equality, compared in constant time."""
    return secrets.compare_digest(stored_password.encode(), given_password.encode())


def session_expiry(created_at: datetime, ttl_seconds: int) -> datetime:
    return created_at + timedelta(seconds=ttl_seconds)


def is_expired(expires_at: datetime, now: datetime) -> bool:
    return now >= expires_at
