"""Tests for room creation, ownership and controller access."""

import threading

import pytest

from fut_evolucao.exceptions import RoomNotFoundError
from fut_evolucao.repositories.room_repository import RoomRepository
from fut_evolucao.services.game_state_controller import OperationStatus
from fut_evolucao.services.room_service import RoomService


@pytest.fixture
def service(tmp_path, shuffler, id_factory, clock):
    repository = RoomRepository(tmp_path / "rooms.duckdb")
    return RoomService(repository, shuffler=shuffler, id_factory=id_factory, clock=clock)


class TestCreateRoom:
    def test_creates_empty_room_with_token(self, service):
        room = service.create_room("  Sunday Game ")
        assert room.name == "Sunday Game"
        assert len(room.owner_token) >= 24
        assert room.game_state.players == []

    def test_tokens_differ_between_rooms(self, service):
        assert service.create_room("A").owner_token != service.create_room("B").owner_token

    def test_blank_name_rejected(self, service):
        with pytest.raises(ValueError):
            service.create_room("   ")


class TestOwnership:
    def test_owner_and_viewer(self, service):
        created = service.create_room("Sunday")

        _, is_owner = service.get_room(created.id, created.owner_token)
        _, is_viewer_owner = service.get_room(created.id, None)
        _, wrong = service.get_room(created.id, "not-the-token")

        assert is_owner is True
        assert is_viewer_owner is False
        assert wrong is False

    def test_unknown_room(self, service):
        with pytest.raises(RoomNotFoundError):
            service.get_room("missing")


class TestOpenController:
    def test_owner_changes_are_persisted(self, service):
        room = service.create_room("Sunday")
        with service.open_controller(room.id, room.owner_token) as controller:
            for i in range(10):
                controller.add_player(f"Player{i}")
            result = controller.shuffle_and_split(5)

        assert result.success
        stored, _ = service.get_room(room.id)
        assert len(stored.game_state.players) == 10
        assert stored.game_state.current_match is not None

    def test_viewer_is_refused(self, service):
        room = service.create_room("Sunday")
        with service.open_controller(room.id, "guess") as controller:
            result = controller.add_player("Intruder")

        assert result.status == OperationStatus.UNAUTHORIZED
        stored, _ = service.get_room(room.id)
        assert stored.game_state.players == []

    def test_missing_room(self, service):
        with pytest.raises(RoomNotFoundError):
            with service.open_controller("missing", "token"):
                pass

    def test_rooms_are_independent(self, service):
        first = service.create_room("One")
        second = service.create_room("Two")
        with service.open_controller(first.id, first.owner_token) as controller:
            controller.add_player("Only in one")

        stored, _ = service.get_room(second.id)
        assert stored.game_state.players == []


class TestRoomLocks:
    def test_unknown_rooms_leave_no_locks(self, service):
        for i in range(50):
            with pytest.raises(RoomNotFoundError):
                with service.open_controller(f"nope-{i}", "token"):
                    pass

        assert service._room_locks == {}
        assert service._room_lock_users == {}

    def test_lock_is_dropped_after_use(self, service):
        room = service.create_room("Sunday")
        with service.open_controller(room.id, room.owner_token):
            assert room.id in service._room_locks

        assert service._room_locks == {}
        assert service._room_lock_users == {}

    def test_lock_is_dropped_when_operation_raises(self, service):
        room = service.create_room("Sunday")
        with pytest.raises(RuntimeError):
            with service.open_controller(room.id, room.owner_token):
                raise RuntimeError("boom")

        assert service._room_locks == {}

    def test_concurrent_writers_are_serialized(self, service):
        room = service.create_room("Sunday")
        entered = threading.Event()
        release = threading.Event()

        def slow_writer():
            with service.open_controller(room.id, room.owner_token) as controller:
                entered.set()
                release.wait(timeout=5)
                controller.add_player("First")

        thread = threading.Thread(target=slow_writer)
        thread.start()
        assert entered.wait(timeout=5)
        assert service._room_lock_users[room.id] == 1

        result: list = []
        second = threading.Thread(
            target=lambda: result.append(_add_player(service, room, "Second"))
        )
        second.start()
        release.set()
        thread.join(timeout=5)
        second.join(timeout=5)

        stored, _ = service.get_room(room.id)
        assert [p.name for p in stored.game_state.players] == ["First", "Second"]
        assert result[0].success
        assert service._room_locks == {}


def _add_player(service, room, name):
    with service.open_controller(room.id, room.owner_token) as controller:
        return controller.add_player(name)
