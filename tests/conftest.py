from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from src.authentication.session_store import SessionStore
from src.main import create_app
from src.create_sqlite_engine import build_engine
from src.services.game_store import GameStore, MemoryGameStore, SqliteGameStore


class FakeClock:
    """Stand-in for datetime.now that tests can move forward."""

    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(params=["memory", "sqlite"])
def game_store(request, tmp_path) -> GameStore:
    """Run every HTTP test against both backends. The app lifespan seeds and closes the store."""
    if request.param == "sqlite":
        return SqliteGameStore(build_engine(str(tmp_path / "games.sqlite3")))
    return MemoryGameStore()


@pytest.fixture
def seeded_games() -> list:
    return [
        {"id": 1, "title": "The Legend of Zelda", "genre": "Action-Adventure"},
        {"id": 2, "title": "Super Mario Bros.", "genre": "Platformer"},
    ]


@pytest.fixture
def session_store(clock: FakeClock) -> SessionStore:
    return SessionStore(ttl_seconds=3600, clock=clock)


@pytest.fixture
def client(game_store, session_store):
    app = create_app(game_store=game_store, session_store=session_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    response = client.post("/login", json={"username": "admin", "password": "password123"})
    assert response.status_code == 200
    return client
