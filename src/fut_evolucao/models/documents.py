"""Validated JSON documents for GameState.

The document shape (camelCase keys, nesting) is the storage and wire format
shared by the local file store, the room table and the HTTP API. Documents
are validated on the way in; anything malformed is rejected instead of
being loaded into a controller.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from fut_evolucao.exceptions import InvalidGameStateError
from fut_evolucao.models.game_state import GameState
from fut_evolucao.models.match import Match
from fut_evolucao.models.team import TEAM_A_ID, TEAM_B_ID, Player, Team


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class PlayerDocument(_Document):
    id: str = Field(min_length=1)
    name: str
    rating: int | float | None = None

    @classmethod
    def from_domain(cls, player: Player) -> "PlayerDocument":
        return cls(id=player.id, name=player.name, rating=player.rating)

    def to_domain(self) -> Player:
        return Player(id=self.id, name=self.name, rating=self.rating)


class TeamDocument(_Document):
    id: Literal["team-a", "team-b"]
    name: str
    players: list[PlayerDocument] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, team: Team) -> "TeamDocument":
        return cls(
            id=team.id,
            name=team.name,
            players=[PlayerDocument.from_domain(p) for p in team.players],
        )

    def to_domain(self) -> Team:
        return Team(id=self.id, name=self.name, players=[p.to_domain() for p in self.players])


class MatchDocument(_Document):
    id: str = Field(min_length=1)
    team_a: TeamDocument = Field(alias="teamA")
    team_b: TeamDocument = Field(alias="teamB")
    winner: Literal["A", "B"] | None = None
    timestamp: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_sides(self) -> "MatchDocument":
        if self.team_a.id != TEAM_A_ID or self.team_b.id != TEAM_B_ID:
            raise ValueError("match teams must be 'team-a' and 'team-b' in that order")
        return self

    @classmethod
    def from_domain(cls, match: Match) -> "MatchDocument":
        return cls(
            id=match.id,
            team_a=TeamDocument.from_domain(match.team_a),
            team_b=TeamDocument.from_domain(match.team_b),
            winner=match.winner,
            timestamp=match.timestamp,
        )

    def to_domain(self) -> Match:
        return Match(
            id=self.id,
            team_a=self.team_a.to_domain(),
            team_b=self.team_b.to_domain(),
            winner=self.winner,
            timestamp=self.timestamp,
        )


class GameStateDocument(_Document):
    players: list[PlayerDocument] = Field(default_factory=list)
    team_a: list[PlayerDocument] = Field(default_factory=list, alias="teamA")
    team_b: list[PlayerDocument] = Field(default_factory=list, alias="teamB")
    bench: list[PlayerDocument] = Field(default_factory=list)
    current_match: MatchDocument | None = Field(default=None, alias="currentMatch")
    match_history: list[MatchDocument] = Field(default_factory=list, alias="matchHistory")

    @model_validator(mode="after")
    def _check_slots(self) -> "GameStateDocument":
        pool_ids = [p.id for p in self.players]
        if len(pool_ids) != len(set(pool_ids)):
            raise ValueError("player ids must be unique")

        seen: dict[str, str] = {}
        for slot, members in (("teamA", self.team_a), ("teamB", self.team_b), ("bench", self.bench)):
            for player in members:
                if player.id in seen:
                    raise ValueError(
                        f"player {player.id} appears in both {seen[player.id]} and {slot}"
                    )
                seen[player.id] = slot

        unknown = set(seen) - set(pool_ids)
        if unknown:
            raise ValueError(f"slotted players missing from pool: {sorted(unknown)}")

        if self.current_match is None:
            if self.team_a or self.team_b:
                raise ValueError("teamA and teamB must be empty when there is no current match")
        elif len(self.team_a) != len(self.team_b):
            raise ValueError(
                f"teamA and teamB must be the same size during a match "
                f"({len(self.team_a)} vs {len(self.team_b)})"
            )
        return self

    @classmethod
    def from_domain(cls, state: GameState) -> "GameStateDocument":
        return cls(
            players=[PlayerDocument.from_domain(p) for p in state.players],
            team_a=[PlayerDocument.from_domain(p) for p in state.team_a],
            team_b=[PlayerDocument.from_domain(p) for p in state.team_b],
            bench=[PlayerDocument.from_domain(p) for p in state.bench],
            current_match=(
                MatchDocument.from_domain(state.current_match) if state.current_match else None
            ),
            match_history=[MatchDocument.from_domain(m) for m in state.match_history],
        )

    def to_domain(self) -> GameState:
        return GameState(
            players=[p.to_domain() for p in self.players],
            team_a=[p.to_domain() for p in self.team_a],
            team_b=[p.to_domain() for p in self.team_b],
            bench=[p.to_domain() for p in self.bench],
            current_match=self.current_match.to_domain() if self.current_match else None,
            match_history=[m.to_domain() for m in self.match_history],
        )


def parse_game_state(data: Any) -> GameState:
    """Validate a JSON-compatible document and build a GameState from it.

    Raises:
        InvalidGameStateError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise InvalidGameStateError(f"Expected a JSON object, got {type(data).__name__}")
    try:
        return GameStateDocument.model_validate(data).to_domain()
    except ValidationError as e:
        raise InvalidGameStateError(str(e)) from e


def dump_game_state(state: GameState) -> dict[str, Any]:
    """Serialize a GameState to its document form."""
    return GameStateDocument.from_domain(state).to_dict()
