"""Exceptions raised by the arcade core."""


class ArcadeError(Exception):
    """Base class for all arcade core errors."""


class PersistenceError(ArcadeError):
    """A score store could not read or write its backing storage."""

    def __init__(self, game_key: str, message: str):
        super().__init__(f"{game_key}: {message}")
        self.game_key = game_key
