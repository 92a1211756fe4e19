"""Post-match rotation of bench players against the losing side.

The winners stay on. The losing side's slot is refilled from the bench:

- Enough bench players for a full team: the first ``n`` on the bench come
  in, and the losers go to the back of the bench behind whoever is still
  waiting.
- Short bench: the bench and the losers are pooled and shuffled, and the
  new side is drawn from the pool. Strict queue order cannot be honoured
  when some of the losers have to play again, so the draw is random.
- Empty bench: nothing changes.
"""

from collections.abc import Sequence

from fut_evolucao.models.match import Side
from fut_evolucao.models.team import Lineup, Player
from fut_evolucao.utils.shuffler import Shuffler


def rotate_teams(
    team_a: Sequence[Player],
    team_b: Sequence[Player],
    bench: Sequence[Player],
    winner: Side,
    shuffler: Shuffler,
) -> Lineup:
    """Compute the next lineup after ``winner`` won.

    Returns new lists; the inputs are not modified. The caller is expected
    to verify both sides still have ``len(losing side)`` players.
    """
    if not bench:
        return Lineup(team_a=list(team_a), team_b=list(team_b), bench=[])

    winning_team = list(team_a) if winner == "A" else list(team_b)
    losing_team = list(team_b) if winner == "A" else list(team_a)
    players_per_team = len(losing_team)

    if len(bench) >= players_per_team:
        incoming = list(bench[:players_per_team])
        new_bench = list(bench[players_per_team:]) + losing_team
    else:
        pool = shuffler.shuffle(list(bench) + losing_team)
        incoming = pool[:players_per_team]
        new_bench = pool[players_per_team:]

    if winner == "A":
        return Lineup(team_a=winning_team, team_b=incoming, bench=new_bench)
    return Lineup(team_a=incoming, team_b=winning_team, bench=new_bench)
