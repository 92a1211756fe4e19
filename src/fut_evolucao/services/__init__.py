"""Team formation, rotation and game state services."""

from fut_evolucao.services.team_formation import split_into_teams
from fut_evolucao.services.match_factory import create_match
from fut_evolucao.services.rotation_engine import rotate_teams
from fut_evolucao.services.game_state_controller import (
    GameStateController,
    OperationResult,
    OperationStatus,
)
from fut_evolucao.services.room_service import RoomService

__all__ = [
    "split_into_teams",
    "create_match",
    "rotate_teams",
    "GameStateController",
    "OperationResult",
    "OperationStatus",
    "RoomService",
]
