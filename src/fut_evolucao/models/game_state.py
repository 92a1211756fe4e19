"""Root game state aggregate."""

import copy
from dataclasses import dataclass, field

from fut_evolucao.models.match import Match
from fut_evolucao.models.team import Player


@dataclass
class GameState:
    """Everything a room (or the local session) knows about its games."""

    players: list[Player] = field(default_factory=list)
    team_a: list[Player] = field(default_factory=list)
    team_b: list[Player] = field(default_factory=list)
    bench: list[Player] = field(default_factory=list)
    current_match: Match | None = None
    match_history: list[Match] = field(default_factory=list)

    @property
    def match_in_progress(self) -> bool:
        """True while a match exists and has no winner yet."""
        return self.current_match is not None and self.current_match.winner is None

    @property
    def awaiting_next_match(self) -> bool:
        """True once the current match is decided but not yet replaced."""
        return self.current_match is not None and self.current_match.winner is not None

    def copy(self) -> "GameState":
        """Deep copy so callers never share lists or records with the owner."""
        return copy.deepcopy(self)
