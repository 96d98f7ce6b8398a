import pytest
from fastapi.testclient import TestClient

from src.exceptions import StoreError
from src.main import create_app
from src.services.game_store import MemoryGameStore


class BrokenGameStore(MemoryGameStore):
    """Logs in fine, every game operation fails like an unavailable database."""

    async def list_games(self):
        raise StoreError("database is locked")

    async def get_game(self, game_id):
        raise StoreError("database is locked")

    async def create_game(self, title, genre):
        raise StoreError("database is locked")

    async def update_game(self, game_id, title, genre):
        raise StoreError("database is locked")

    async def delete_game(self, game_id):
        raise StoreError("database is locked")


class NoUserTableStore(MemoryGameStore):
    async def find_user(self, username, password):
        raise StoreError("no such table: users")


@pytest.fixture
def broken_client(session_store):
    app = create_app(game_store=BrokenGameStore(), session_store=session_store)
    with TestClient(app) as test_client:
        test_client.post("/login", json={"username": "admin", "password": "password123"})
        yield test_client


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("GET", "/games", None),
        ("GET", "/games/1", None),
        ("POST", "/games", {"title": "X", "genre": "Y"}),
        ("PUT", "/games/1", {"title": "X", "genre": "Y"}),
        ("DELETE", "/games/1", None),
    ],
)
def test_store_failure_becomes_500(broken_client, method, path, body) -> None:
    response = broken_client.request(method, path, json=body)
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_login_store_failure_becomes_500(session_store) -> None:
    app = create_app(game_store=NoUserTableStore(), session_store=session_store)
    with TestClient(app) as client:
        response = client.post("/login", json={"username": "admin", "password": "password123"})
    assert response.status_code == 500
    assert len(session_store) == 0
