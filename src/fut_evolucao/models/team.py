"""Player and team snapshot models."""

from dataclasses import dataclass, field

TEAM_A_ID = "team-a"
TEAM_B_ID = "team-b"


@dataclass
class Player:
    """A player in the pool."""

    id: str
    name: str
    rating: float | None = None  # Informational only, not used for balancing


@dataclass
class Team:
    """Snapshot of a side's lineup embedded in a match."""

    id: str  # "team-a" or "team-b"
    name: str
    players: list[Player] = field(default_factory=list)


@dataclass
class Lineup:
    """The two active sides plus the bench."""

    team_a: list[Player]
    team_b: list[Player]
    bench: list[Player]

    @property
    def total(self) -> int:
        return len(self.team_a) + len(self.team_b) + len(self.bench)
