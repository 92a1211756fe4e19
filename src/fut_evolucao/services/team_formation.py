"""Random split of a player pool into two teams and a bench."""

from collections.abc import Sequence

from fut_evolucao.models.team import Lineup, Player
from fut_evolucao.utils.shuffler import Shuffler


def split_into_teams(
    players: Sequence[Player],
    players_per_team: int,
    shuffler: Shuffler,
) -> Lineup:
    """Shuffle the pool, then take two teams off the top and bench the rest.

    No validation happens here: with fewer than ``2 * players_per_team``
    players the teams come back undersized. Callers check the pool size
    first.
    """
    shuffled = shuffler.shuffle(players)
    return Lineup(
        team_a=shuffled[:players_per_team],
        team_b=shuffled[players_per_team : players_per_team * 2],
        bench=shuffled[players_per_team * 2 :],
    )
