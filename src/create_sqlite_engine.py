from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.load_secrets import sqlite_path


def sqlite_url(path: str) -> str:
    return f"sqlite+aiosqlite:///{path}"


def build_engine(path: str) -> AsyncEngine:
    return create_async_engine(url=sqlite_url(path), echo=False)


engine = build_engine(sqlite_path)
