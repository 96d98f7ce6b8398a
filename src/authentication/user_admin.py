import argparse
import asyncio
import logging

from src.create_sqlite_engine import build_engine
from src.load_secrets import sqlite_path
from src.models.schema_models import UserSchema
from src.services.game_store import SqliteGameStore


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create or replace an administrator")
    parser.add_argument("--username", type=str, help="Username", required=True)
    parser.add_argument("--password", type=str, help="Password", required=True)
    parser.add_argument("--database", type=str, help="SQLite file", default=sqlite_path)
    return parser


async def store_user_data(database: str, user_name: str, password: str) -> UserSchema:
    game_store = SqliteGameStore(build_engine(database))
    try:
        await game_store.initialize()
        return await game_store.store_user(user_name, password)
    finally:
        await game_store.close()


def main(argv=None) -> None:
    args = get_parser().parse_args(argv)
    user = asyncio.run(store_user_data(args.database, args.username, args.password))
    logging.info(f"Stored user {user.username!r} in {args.database}")
    print(user.id, user.username)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
