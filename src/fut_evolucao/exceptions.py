"""Exceptions raised at the persistence and HTTP boundaries."""


class InvalidGameStateError(ValueError):
    """A game state document failed validation."""


class RoomNotFoundError(KeyError):
    """No room exists with the requested id."""

    def __init__(self, room_id: str):
        super().__init__(room_id)
        self.room_id = room_id

    def __str__(self) -> str:
        return f"Room not found: {self.room_id}"
