"""Load/save adapters for a single GameState.

A controller only needs ``load()`` and ``save()``. Two implementations:

- ``JsonFileStateStore``: the single-user mode, one JSON document on disk.
- ``RoomStateStore``: one room in the room repository.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import duckdb

from fut_evolucao.exceptions import InvalidGameStateError, RoomNotFoundError
from fut_evolucao.models.documents import dump_game_state, parse_game_state
from fut_evolucao.models.game_state import GameState

if TYPE_CHECKING:
    from fut_evolucao.repositories.room_repository import RoomRepository

logger = logging.getLogger(__name__)


class GameStateStore(Protocol):
    """Persistence interface consumed by GameStateController."""

    def load(self) -> GameState | None:
        """Return the stored state, or None if nothing usable is stored."""
        ...

    def save(self, state: GameState) -> bool:
        """Persist the state. Returns False on failure instead of raising."""
        ...


class JsonFileStateStore:
    """Keeps the game state in a JSON file (single-user mode)."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> GameState | None:
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return parse_game_state(data)
        except (OSError, json.JSONDecodeError, InvalidGameStateError):
            logger.exception("Error loading game state from %s", self.path)
            return None

    def save(self, state: GameState) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(dump_game_state(state), f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError:
            logger.exception("Error saving game state to %s", self.path)
            return False
        return True

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError:
            logger.exception("Error clearing game state at %s", self.path)


class RoomStateStore:
    """Adapter binding one room id to the room repository."""

    def __init__(self, repository: "RoomRepository", room_id: str):
        self._repository = repository
        self.room_id = room_id

    def load(self) -> GameState | None:
        room = self._repository.get_room(self.room_id)
        return room.game_state if room else None

    def save(self, state: GameState) -> bool:
        try:
            self._repository.update_game_state(self.room_id, state)
        except RoomNotFoundError:
            logger.error("Room %s disappeared before save", self.room_id)
            return False
        except duckdb.Error:
            logger.exception("Error saving room %s", self.room_id)
            return False
        return True
