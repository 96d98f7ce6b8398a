import logging
import os
import pathlib

from dotenv import load_dotenv

load_dotenv()


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logging.warning(f"{name}={value!r} is not an integer, using {default}")
        return default


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


sqlite_path = os.getenv(
    "SQLITE_PATH",
    str(pathlib.Path(__file__).parent / "game_inventory.sqlite3"),
)
session_cookie_name = os.getenv("SESSION_COOKIE_NAME", "connect.sid")
session_ttl_seconds = _get_int("SESSION_TTL_SECONDS", 3600)
session_sweep_minutes = _get_int("SESSION_SWEEP_MINUTES", 10)
session_cookie_secure = _get_bool("SESSION_COOKIE_SECURE", False)
cors_origins = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS", "http://localhost:5500,http://127.0.0.1:5500"
    ).split(",")
    if origin.strip()
]
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
host = os.getenv("HOST", "0.0.0.0")
port = _get_int("PORT", 3000)

if __name__ == "__main__":
    print(sqlite_path, session_cookie_name, session_ttl_seconds, cors_origins, host, port)
