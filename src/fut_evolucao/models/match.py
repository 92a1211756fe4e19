"""Match models."""

from dataclasses import dataclass
from typing import Literal

from fut_evolucao.models.team import Team

Side = Literal["A", "B"]
SIDES: tuple[Side, ...] = ("A", "B")


@dataclass
class Match:
    """A match between two team snapshots.

    ``winner`` is None while the match is being played. Once set, the match
    is a historical record and is never mutated again.
    """

    id: str
    team_a: Team
    team_b: Team
    winner: Side | None = None
    timestamp: int = 0  # epoch milliseconds

    @property
    def is_decided(self) -> bool:
        return self.winner is not None
