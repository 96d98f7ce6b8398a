import logging
import pathlib
from contextlib import asynccontextmanager

import uvicorn
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from src.authentication.session_store import SessionStore
from src.create_sqlite_engine import engine
from src.load_secrets import (
    cors_origins,
    host,
    log_level,
    port,
    session_sweep_minutes,
    session_ttl_seconds,
)
from src.routers import auth, games
from src.services.game_store import GameStore, SqliteGameStore

FRONTEND_DIR = pathlib.Path(__file__).parent / "frontend"

logging.basicConfig(level=log_level)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create and seed the tables, then sweep expired sessions in the background.
    This function is called to start the server.
    """
    await app.state.game_store.initialize()

    scheduler = AsyncIOScheduler()
    # If the session is expired, delete the session
    scheduler.add_job(
        app.state.session_store.delete_expired_sessions,
        "interval",
        minutes=session_sweep_minutes,
        id="delete_expired_sessions",
        replace_existing=True,
    )
    scheduler.start()
    logging.info("Start Server")
    try:
        yield
    finally:
        scheduler.shutdown(wait=False)
        await app.state.game_store.close()
        logging.info("Stop Server")


def create_app(game_store: GameStore = None, session_store: SessionStore = None) -> FastAPI:
    app = FastAPI(
        title="Retro Game Inventory API",
        version="1.0.0",
        description="Retro Game Inventory API documented with Swagger",
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.game_store = game_store if game_store is not None else SqliteGameStore(engine)
    app.state.session_store = (
        session_store if session_store is not None else SessionStore(session_ttl_seconds)
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(games.games_router)
    app.include_router(auth.auth_router)

    @app.get("/hello", response_class=PlainTextResponse, tags=["health"])
    def hello() -> str:
        """A simple endpoint to verify the API is working."""
        return "Hello World"

    if FRONTEND_DIR.is_dir():
        app.mount("/admin", StaticFiles(directory=FRONTEND_DIR, html=True), name="admin")

    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
