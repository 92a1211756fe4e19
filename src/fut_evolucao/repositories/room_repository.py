"""DuckDB-backed storage for rooms."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import duckdb

from fut_evolucao.exceptions import RoomNotFoundError
from fut_evolucao.models.documents import dump_game_state, parse_game_state
from fut_evolucao.models.game_state import GameState
from fut_evolucao.models.room import Room

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, owner_token, game_state, created_at, updated_at"


class RoomRepository:
    """Data access layer for rooms: one row per room, game state as a JSON document.

    A connection is opened per call. Writes are last-write-wins; nothing here
    detects two owners saving the same room concurrently.
    """

    def __init__(self, database_path: str | Path):
        """Initialize with path to the DuckDB file, creating the table if needed.

        Args:
            database_path: Path to rooms.duckdb (created on first use)
        """
        self._db_path = Path(database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_table()
        logger.info("RoomRepository: Using %s", self._db_path)

    def _connect(self) -> duckdb.DuckDBPyConnection:
        return duckdb.connect(str(self._db_path))

    def _ensure_table(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS rooms (
                    id VARCHAR PRIMARY KEY,
                    name VARCHAR NOT NULL,
                    owner_token VARCHAR NOT NULL,
                    game_state VARCHAR NOT NULL,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                )
                """
            )

    @staticmethod
    def _to_domain(row: tuple) -> Room:
        return Room(
            id=row[0],
            name=row[1],
            owner_token=row[2],
            game_state=parse_game_state(json.loads(row[3])),
            created_at=row[4],
            updated_at=row[5],
        )

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)

    def create_room(self, room_id: str, name: str, owner_token: str) -> Room:
        """Insert a room with an empty game state."""
        now = self._now()
        state = GameState()
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO rooms ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                [room_id, name, owner_token, json.dumps(dump_game_state(state)), now, now],
            )
        return Room(
            id=room_id,
            name=name,
            owner_token=owner_token,
            created_at=now,
            updated_at=now,
            game_state=state,
        )

    def get_room(self, room_id: str) -> Room | None:
        """Return the room, or None if it does not exist.

        Raises:
            InvalidGameStateError: If the stored document no longer validates
        """
        with self._connect() as conn:
            row = conn.execute(f"SELECT {_COLUMNS} FROM rooms WHERE id = ?", [room_id]).fetchone()
        if not row:
            return None
        return self._to_domain(row)

    def update_game_state(self, room_id: str, state: GameState) -> datetime:
        """Overwrite a room's game state and return the new ``updated_at``.

        Raises:
            RoomNotFoundError: If the room does not exist
        """
        now = self._now()
        document = json.dumps(dump_game_state(state))
        with self._connect() as conn:
            row = conn.execute(
                "UPDATE rooms SET game_state = ?, updated_at = ? WHERE id = ? RETURNING id",
                [document, now, room_id],
            ).fetchone()
        if not row:
            raise RoomNotFoundError(room_id)
        return now
