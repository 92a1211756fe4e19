"""Data models for rosters, matches and rooms."""

from fut_evolucao.models.team import TEAM_A_ID, TEAM_B_ID, Lineup, Player, Team
from fut_evolucao.models.match import SIDES, Match, Side
from fut_evolucao.models.game_state import GameState
from fut_evolucao.models.room import Room
from fut_evolucao.models.documents import (
    GameStateDocument,
    MatchDocument,
    PlayerDocument,
    TeamDocument,
    dump_game_state,
    parse_game_state,
)

__all__ = [
    "TEAM_A_ID",
    "TEAM_B_ID",
    "Lineup",
    "Player",
    "Team",
    "SIDES",
    "Match",
    "Side",
    "GameState",
    "Room",
    "GameStateDocument",
    "MatchDocument",
    "PlayerDocument",
    "TeamDocument",
    "dump_game_state",
    "parse_game_state",
]
