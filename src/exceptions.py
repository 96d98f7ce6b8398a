class StoreError(Exception):
    """The backing store failed (unavailable file, broken query, ...)."""


class GameNotFoundError(LookupError):
    def __init__(self, game_id: int):
        super().__init__(f"Game {game_id} not found")
        self.game_id = game_id


class SessionError(Exception):
    """A session record could not be created or destroyed."""
