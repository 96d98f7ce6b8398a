"""SqliteGameStore against a temporary database file."""

import asyncio

import pytest
from sqlalchemy import text

from src.create_sqlite_engine import build_engine
from src.exceptions import GameNotFoundError, StoreError
from src.services.game_store import MemoryGameStore, SqliteGameStore


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def sqlite_store(tmp_path):
    store = SqliteGameStore(build_engine(str(tmp_path / "games.sqlite3")))
    await store.initialize()
    yield store
    await store.close()


@pytest.mark.anyio
async def test_initialize_seeds_two_games(sqlite_store) -> None:
    games = await sqlite_store.list_games()
    assert [(game.id, game.title, game.genre) for game in games] == [
        (1, "The Legend of Zelda", "Action-Adventure"),
        (2, "Super Mario Bros.", "Platformer"),
    ]


@pytest.mark.anyio
async def test_initialize_does_not_reseed(tmp_path) -> None:
    path = str(tmp_path / "games.sqlite3")
    store = SqliteGameStore(build_engine(path))
    await store.initialize()
    await store.delete_game(1)
    await store.close()

    reopened = SqliteGameStore(build_engine(path))
    await reopened.initialize()
    assert [game.id for game in await reopened.list_games()] == [2]
    await reopened.close()


@pytest.mark.anyio
async def test_create_update_delete(sqlite_store) -> None:
    created = await sqlite_store.create_game("Doom", "Shooter")
    assert created.id == 3

    updated = await sqlite_store.update_game(created.id, "Doom II", None)
    assert (updated.id, updated.title, updated.genre) == (3, "Doom II", None)
    assert await sqlite_store.get_game(3) == updated

    deleted = await sqlite_store.delete_game(3)
    assert deleted == updated
    with pytest.raises(GameNotFoundError):
        await sqlite_store.get_game(3)


@pytest.mark.anyio
async def test_missing_ids_raise_not_found(sqlite_store) -> None:
    with pytest.raises(GameNotFoundError):
        await sqlite_store.update_game(9999, "X", "Y")
    with pytest.raises(GameNotFoundError):
        await sqlite_store.delete_game(9999)
    assert len(await sqlite_store.list_games()) == 2


@pytest.mark.anyio
async def test_find_user_checks_both_fields(sqlite_store) -> None:
    user = await sqlite_store.find_user("admin", "password123")
    assert user is not None
    assert user.username == "admin"
    assert await sqlite_store.find_user("admin", "wrong") is None
    assert await sqlite_store.find_user("ghost", "password123") is None


@pytest.mark.anyio
async def test_store_user_replaces_password(sqlite_store) -> None:
    await sqlite_store.store_user("admin", "new-secret")
    assert await sqlite_store.find_user("admin", "password123") is None
    assert await sqlite_store.find_user("admin", "new-secret") is not None


@pytest.mark.anyio
async def test_broken_table_raises_store_error(sqlite_store) -> None:
    async with sqlite_store.engine.begin() as conn:
        await conn.execute(text("DROP TABLE games"))
    with pytest.raises(StoreError):
        await sqlite_store.list_games()
    with pytest.raises(StoreError):
        await sqlite_store.create_game("X", "Y")


@pytest.mark.anyio
async def test_unopenable_database_raises_store_error(tmp_path) -> None:
    store = SqliteGameStore(build_engine(str(tmp_path / "missing" / "games.sqlite3")))
    with pytest.raises(StoreError):
        await store.initialize()
    await store.close()


@pytest.mark.anyio
async def test_memory_store_keeps_records_isolated() -> None:
    store = MemoryGameStore()
    await store.initialize()
    game = await store.get_game(1)
    game.title = "changed outside"
    assert (await store.get_game(1)).title == "The Legend of Zelda"

    empty = MemoryGameStore(users=[("admin", "password123")])
    assert (await empty.create_game("First", None)).id == 1


@pytest.mark.anyio
async def test_concurrent_creates_get_consecutive_ids(sqlite_store) -> None:
    games = await asyncio.gather(
        *[sqlite_store.create_game(f"Title {i}", "Arcade") for i in range(8)]
    )
    assert sorted(game.id for game in games) == list(range(3, 11))
    stored = await sqlite_store.list_games()
    assert [game.id for game in stored] == list(range(1, 11))
