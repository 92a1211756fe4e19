"""Builds Match records from two lineups."""

import copy
from collections.abc import Callable, Sequence

from fut_evolucao.models.match import Match, Side
from fut_evolucao.models.team import TEAM_A_ID, TEAM_B_ID, Player, Team
from fut_evolucao.utils.id_generator import generate_id, now_ms

TEAM_A_NAME = "Team A"
TEAM_B_NAME = "Team B"


def create_match(
    team_a: Sequence[Player],
    team_b: Sequence[Player],
    winner: Side | None = None,
    id_factory: Callable[[], str] = generate_id,
    clock: Callable[[], int] = now_ms,
) -> Match:
    """Wrap both lineups into team snapshots under a fresh id and timestamp.

    Snapshots hold copies of the players, so later roster changes never
    leak into the match unless applied to it explicitly.
    """
    return Match(
        id=id_factory(),
        team_a=Team(id=TEAM_A_ID, name=TEAM_A_NAME, players=copy.deepcopy(list(team_a))),
        team_b=Team(id=TEAM_B_ID, name=TEAM_B_NAME, players=copy.deepcopy(list(team_b))),
        winner=winner,
        timestamp=clock(),
    )
