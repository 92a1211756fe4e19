"""Room models for the shared (multi-viewer) variant."""

from dataclasses import dataclass, field
from datetime import datetime

from fut_evolucao.models.game_state import GameState


@dataclass
class Room:
    """A persisted, independently addressable game state with one owner."""

    id: str
    name: str
    owner_token: str
    created_at: datetime
    updated_at: datetime
    game_state: GameState = field(default_factory=GameState)
