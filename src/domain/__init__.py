"""Domain layer (pure logic).

- Keep inventory and session rules here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Prefer deterministic functions (time passed in as an argument).
"""
