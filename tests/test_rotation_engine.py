"""Tests for post-match rotation."""

import pytest

from fut_evolucao.models.team import Player
from fut_evolucao.services.rotation_engine import rotate_teams


def _ids(players):
    return [p.id for p in players]


@pytest.fixture
def lineup(make_players):
    def build(per_team: int, bench_size: int):
        team_a = make_players(per_team, prefix="a")
        team_b = make_players(per_team, prefix="b")
        bench = make_players(bench_size, prefix="x")
        return team_a, team_b, bench

    return build


class TestEmptyBench:
    @pytest.mark.parametrize("winner", ["A", "B"])
    def test_no_rotation(self, lineup, shuffler, winner):
        team_a, team_b, _ = lineup(5, 0)
        result = rotate_teams(team_a, team_b, [], winner, shuffler)
        assert result.team_a == team_a
        assert result.team_b == team_b
        assert result.bench == []


class TestFullBench:
    def test_team_a_wins_bench_replaces_b(self, lineup, shuffler):
        team_a, team_b, bench = lineup(4, 6)
        result = rotate_teams(team_a, team_b, bench, "A", shuffler)

        assert _ids(result.team_a) == _ids(team_a)
        assert _ids(result.team_b) == ["x0", "x1", "x2", "x3"]
        # Remaining bench keeps priority, losers queue behind them in order
        assert _ids(result.bench) == ["x4", "x5", "b0", "b1", "b2", "b3"]

    def test_team_b_wins_bench_replaces_a(self, lineup, shuffler):
        team_a, team_b, bench = lineup(3, 3)
        result = rotate_teams(team_a, team_b, bench, "B", shuffler)

        assert _ids(result.team_a) == ["x0", "x1", "x2"]
        assert _ids(result.team_b) == _ids(team_b)
        assert _ids(result.bench) == ["a0", "a1", "a2"]

    def test_bench_order_is_fifo_over_two_rotations(self, lineup, shuffler):
        team_a, team_b, bench = lineup(2, 4)
        first = rotate_teams(team_a, team_b, bench, "A", shuffler)
        second = rotate_teams(first.team_a, first.team_b, first.bench, "B", shuffler)

        # A lost the second match; x2, x3 waited longest and come in
        assert _ids(second.team_a) == ["x2", "x3"]
        assert _ids(second.team_b) == ["x0", "x1"]
        assert _ids(second.bench) == ["b0", "b1", "a0", "a1"]


class TestShortBench:
    def test_pool_of_bench_and_losers_is_redrawn(self, lineup, shuffler):
        team_a, team_b, bench = lineup(4, 2)
        result = rotate_teams(team_a, team_b, bench, "A", shuffler)

        assert _ids(result.team_a) == _ids(team_a)
        assert len(result.team_b) == 4
        assert len(result.bench) == 2
        pool = set(_ids(team_b) + _ids(bench))
        assert set(_ids(result.team_b)) | set(_ids(result.bench)) == pool
        assert not set(_ids(result.team_b)) & set(_ids(result.bench))

    def test_winner_b_keeps_lineup(self, lineup, shuffler):
        team_a, team_b, bench = lineup(5, 1)
        result = rotate_teams(team_a, team_b, bench, "B", shuffler)
        assert _ids(result.team_b) == _ids(team_b)
        assert len(result.team_a) == 5
        assert len(result.bench) == 1


class TestInvariants:
    @pytest.mark.parametrize("per_team,bench_size", [(5, 0), (5, 2), (5, 5), (5, 9), (1, 1), (3, 2)])
    @pytest.mark.parametrize("winner", ["A", "B"])
    def test_population_preserved_and_losing_side_refilled(
        self, lineup, shuffler, per_team, bench_size, winner
    ):
        team_a, team_b, bench = lineup(per_team, bench_size)
        result = rotate_teams(team_a, team_b, bench, winner, shuffler)

        assert result.total == len(team_a) + len(team_b) + len(bench)
        everyone = _ids(result.team_a) + _ids(result.team_b) + _ids(result.bench)
        assert len(set(everyone)) == len(everyone)

        winners_before = team_a if winner == "A" else team_b
        winners_after = result.team_a if winner == "A" else result.team_b
        losers_after = result.team_b if winner == "A" else result.team_a
        assert set(_ids(winners_after)) == set(_ids(winners_before))
        assert len(losers_after) == per_team

    def test_inputs_not_mutated(self, lineup, shuffler):
        team_a, team_b, bench = lineup(4, 2)
        snapshot = (list(team_a), list(team_b), list(bench))
        rotate_teams(team_a, team_b, bench, "A", shuffler)
        assert (team_a, team_b, bench) == snapshot

    def test_returns_new_lists(self, shuffler):
        team_a = [Player(id="a", name="A")]
        team_b = [Player(id="b", name="B")]
        result = rotate_teams(team_a, team_b, [], "A", shuffler)
        assert result.team_a is not team_a
        assert result.team_b is not team_b
