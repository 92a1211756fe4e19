"""Rooms: creation, owner-token checks and serialized writes."""

import logging
import secrets
import threading
import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from fut_evolucao.exceptions import RoomNotFoundError
from fut_evolucao.models.room import Room
from fut_evolucao.repositories.room_repository import RoomRepository
from fut_evolucao.repositories.state_store import RoomStateStore
from fut_evolucao.services.game_state_controller import GameStateController
from fut_evolucao.utils.id_generator import generate_id, now_ms
from fut_evolucao.utils.shuffler import Shuffler

logger = logging.getLogger(__name__)

DEFAULT_OWNER_TOKEN_BYTES = 24


class RoomService:
    """Creates rooms and hands out controllers bound to them.

    Writes to one room are serialized with a per-room lock inside this
    process. Across processes the last save wins.
    """

    def __init__(
        self,
        repository: RoomRepository,
        *,
        shuffler: Shuffler | None = None,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], int] = now_ms,
        owner_token_bytes: int = DEFAULT_OWNER_TOKEN_BYTES,
    ):
        self.repository = repository
        self._shuffler = shuffler or Shuffler()
        self._id_factory = id_factory
        self._clock = clock
        self._owner_token_bytes = owner_token_bytes
        # Locks exist only while someone holds or waits on them
        self._room_locks: dict[str, threading.Lock] = {}
        self._room_lock_users: dict[str, int] = {}
        self._room_locks_lock = threading.Lock()

    def _acquire_lock_ref(self, room_id: str) -> threading.Lock:
        with self._room_locks_lock:
            lock = self._room_locks.get(room_id)
            if lock is None:
                lock = threading.Lock()
                self._room_locks[room_id] = lock
            self._room_lock_users[room_id] = self._room_lock_users.get(room_id, 0) + 1
            return lock

    def _release_lock_ref(self, room_id: str) -> None:
        with self._room_locks_lock:
            remaining = self._room_lock_users[room_id] - 1
            if remaining:
                self._room_lock_users[room_id] = remaining
            else:
                del self._room_lock_users[room_id]
                del self._room_locks[room_id]

    @staticmethod
    def is_owner(room: Room, owner_token: str | None) -> bool:
        """Constant-time check of a presented token against the room's."""
        if not owner_token:
            return False
        return secrets.compare_digest(owner_token.encode(), room.owner_token.encode())

    def create_room(self, name: str) -> Room:
        """Create an empty room owned by a freshly generated token.

        Raises:
            ValueError: If the name is blank
        """
        name = name.strip()
        if not name:
            raise ValueError("Room name is required")
        room_id = uuid.uuid4().hex[:12]
        owner_token = secrets.token_urlsafe(self._owner_token_bytes)
        room = self.repository.create_room(room_id, name, owner_token)
        logger.info("Created room %s (%s)", room_id, name)
        return room

    def get_room(self, room_id: str, owner_token: str | None = None) -> tuple[Room, bool]:
        """Return the room and whether the caller owns it.

        Raises:
            RoomNotFoundError: If the room does not exist
        """
        room = self.repository.get_room(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room, self.is_owner(room, owner_token)

    @contextmanager
    def open_controller(
        self,
        room_id: str,
        owner_token: str | None,
    ) -> Iterator[GameStateController]:
        """Yield a controller over the room's latest state, holding the room lock.

        The controller refuses every mutation unless ``owner_token`` matches.

        Raises:
            RoomNotFoundError: If the room does not exist
        """
        # Unknown ids fail here, before any lock is created for them
        self.get_room(room_id)

        lock = self._acquire_lock_ref(room_id)
        try:
            with lock:
                room, owner = self.get_room(room_id, owner_token)
                yield GameStateController(
                    room.game_state,
                    store=RoomStateStore(self.repository, room_id),
                    can_mutate=owner,
                    shuffler=self._shuffler,
                    id_factory=self._id_factory,
                    clock=self._clock,
                )
        finally:
            self._release_lock_ref(room_id)
