"""REST endpoints for shared rooms."""

import logging
from collections.abc import Callable
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Header, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from fut_evolucao.config import settings
from fut_evolucao.exceptions import InvalidGameStateError, RoomNotFoundError
from fut_evolucao.models.documents import dump_game_state, parse_game_state
from fut_evolucao.models.room import Room
from fut_evolucao.services.game_state_controller import (
    GameStateController,
    OperationResult,
    OperationStatus,
)
from fut_evolucao.services.room_service import RoomService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rooms", tags=["rooms"])

OwnerToken = Annotated[str | None, Header(alias="x-owner-token")]


class _RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateRoomRequest(_RequestModel):
    name: str


class UpdateRoomRequest(_RequestModel):
    game_state: dict[str, Any] = Field(alias="gameState")
    owner_token: str | None = Field(default=None, alias="ownerToken")


class AddPlayerRequest(_RequestModel):
    name: str
    rating: int | float | None = None


class EditPlayerRequest(_RequestModel):
    name: str


class SplitRequest(_RequestModel):
    players_per_team: int | None = Field(default=None, alias="playersPerTeam")


class PickWinnerRequest(_RequestModel):
    winner: Literal["A", "B"]


def _get_service(request: Request) -> RoomService:
    return request.app.state.room_service


def _serialize_room(room: Room) -> dict:
    """Serialize a Room for readers. The owner token is never included."""
    return {
        "id": room.id,
        "name": room.name,
        "createdAt": room.created_at.isoformat(),
        "updatedAt": room.updated_at.isoformat(),
        "gameState": dump_game_state(room.game_state),
    }


def _raise_for_result(result: OperationResult, owner_token: str | None) -> None:
    if result.status == OperationStatus.OK:
        return
    if result.status == OperationStatus.UNAUTHORIZED:
        if not owner_token:
            raise HTTPException(status_code=401, detail="Owner token is required")
        raise HTTPException(status_code=403, detail="Unauthorized: Only the room owner can edit")
    if result.status == OperationStatus.PERSISTENCE_FAILED:
        raise HTTPException(status_code=500, detail=result.error_message or "Failed to save room")
    raise HTTPException(status_code=400, detail=result.error_message or "Operation not allowed")


def _run(
    request: Request,
    room_id: str,
    owner_token: str | None,
    operation: Callable[[GameStateController], OperationResult],
) -> dict:
    """Apply one controller operation to a room and build the response."""
    service = _get_service(request)
    try:
        with service.open_controller(room_id, owner_token) as controller:
            result = operation(controller)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")
    except InvalidGameStateError:
        logger.exception("Stored game state for room %s is invalid", room_id)
        raise HTTPException(status_code=500, detail="Stored game state is invalid")

    _raise_for_result(result, owner_token)
    return {"success": True, "gameState": dump_game_state(result.state)}


@router.post("", status_code=201)
def create_room(request: Request, body: CreateRoomRequest):
    """Create a room. The owner token is returned only here."""
    service = _get_service(request)
    try:
        room = service.create_room(body.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"roomId": room.id, "ownerToken": room.owner_token}


@router.get("/{room_id}")
def get_room(request: Request, room_id: str, x_owner_token: OwnerToken = None):
    """Read a room; anyone with the id may view it."""
    service = _get_service(request)
    try:
        room, is_owner = service.get_room(room_id, x_owner_token)
    except RoomNotFoundError:
        raise HTTPException(status_code=404, detail="Room not found")
    except InvalidGameStateError:
        logger.exception("Stored game state for room %s is invalid", room_id)
        raise HTTPException(status_code=500, detail="Stored game state is invalid")
    return {"room": _serialize_room(room), "isOwner": is_owner}


@router.put("/{room_id}")
def replace_room_state(request: Request, room_id: str, body: UpdateRoomRequest):
    """Replace the whole game state document (owner only)."""
    if not body.owner_token:
        raise HTTPException(status_code=401, detail="Owner token is required")
    try:
        state = parse_game_state(body.game_state)
    except InvalidGameStateError as e:
        raise HTTPException(status_code=400, detail=f"Invalid game state: {e}")

    _run(request, room_id, body.owner_token, lambda c: c.replace_state(state))
    return {"success": True}


@router.post("/{room_id}/players", status_code=201)
def add_player(request: Request, room_id: str, body: AddPlayerRequest, x_owner_token: OwnerToken = None):
    """Add a player; joins the bench if a match exists."""
    return _run(request, room_id, x_owner_token, lambda c: c.add_player(body.name, body.rating))


@router.patch("/{room_id}/players/{player_id}")
def edit_player(
    request: Request,
    room_id: str,
    player_id: str,
    body: EditPlayerRequest,
    x_owner_token: OwnerToken = None,
):
    """Rename a player."""
    return _run(request, room_id, x_owner_token, lambda c: c.edit_player(player_id, body.name))


@router.delete("/{room_id}/players/{player_id}")
def remove_player(request: Request, room_id: str, player_id: str, x_owner_token: OwnerToken = None):
    """Remove a player, rebalancing the teams if needed."""
    return _run(request, room_id, x_owner_token, lambda c: c.remove_player(player_id))


@router.post("/{room_id}/split")
def shuffle_and_split(
    request: Request,
    room_id: str,
    body: SplitRequest | None = None,
    x_owner_token: OwnerToken = None,
):
    """Shuffle the pool into two teams and a bench, starting a new match."""
    players_per_team = settings.default_players_per_team
    if body is not None and body.players_per_team is not None:
        players_per_team = body.players_per_team
    return _run(request, room_id, x_owner_token, lambda c: c.shuffle_and_split(players_per_team))


@router.post("/{room_id}/winner")
def pick_winner(request: Request, room_id: str, body: PickWinnerRequest, x_owner_token: OwnerToken = None):
    """Record the winner of the current match."""
    return _run(request, room_id, x_owner_token, lambda c: c.pick_winner(body.winner))


@router.post("/{room_id}/next-match")
def start_next_match(request: Request, room_id: str, x_owner_token: OwnerToken = None):
    """Rotate the bench in against the losers and start the next match."""
    return _run(request, room_id, x_owner_token, lambda c: c.start_next_match())


@router.post("/{room_id}/reset")
def reset_game(request: Request, room_id: str, x_owner_token: OwnerToken = None):
    """Clear teams, matches and history, keeping the players."""
    return _run(request, room_id, x_owner_token, lambda c: c.reset_game())


@router.post("/{room_id}/clear")
def clear_all_data(request: Request, room_id: str, x_owner_token: OwnerToken = None):
    """Clear everything, players included."""
    return _run(request, room_id, x_owner_token, lambda c: c.clear_all_data())
