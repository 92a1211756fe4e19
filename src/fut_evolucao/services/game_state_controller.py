"""Owner of a GameState and the operations that mutate it.

Match status is derived from ``current_match``:

- ``None``: no match, the pool is just a list of players.
- winner ``None``: a match is being played.
- winner set: the match is decided and stays visible until the next match
  is started.

Every operation returns an ``OperationResult``. Ordinary precondition
failures (too few players, no match, undecided match) leave the state
untouched and are reported through the result, never raised.
"""

import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from fut_evolucao.models.game_state import GameState
from fut_evolucao.models.match import SIDES, Side
from fut_evolucao.models.team import Player
from fut_evolucao.repositories.state_store import GameStateStore
from fut_evolucao.services.match_factory import create_match
from fut_evolucao.services.rotation_engine import rotate_teams
from fut_evolucao.services.team_formation import split_into_teams
from fut_evolucao.utils.id_generator import generate_id, now_ms
from fut_evolucao.utils.shuffler import Shuffler

logger = logging.getLogger(__name__)

DEFAULT_PLAYERS_PER_TEAM = 5


class OperationStatus(str, Enum):
    """Outcome of a controller operation."""

    OK = "ok"
    PRECONDITION_FAILED = "precondition_failed"
    UNAUTHORIZED = "unauthorized"
    PERSISTENCE_FAILED = "persistence_failed"


@dataclass
class OperationResult:
    """Result of a controller operation, carrying the state after it ran."""

    success: bool
    status: OperationStatus
    state: GameState
    error_message: str | None = None


class GameStateController:
    """Applies roster and match operations to one room's (or session's) state.

    Collaborators are injected so tests can pin randomness and time:

    Args:
        state: Initial state; defaults to an empty one
        store: Persistence adapter; each successful mutation is saved
            through it before being committed in memory
        can_mutate: False for viewers of a room without the owner token;
            every mutation is then refused
        shuffler: Random permutation source for splits and rotations
        id_factory: Produces player and match ids
        clock: Returns epoch milliseconds for match timestamps
    """

    def __init__(
        self,
        state: GameState | None = None,
        *,
        store: GameStateStore | None = None,
        can_mutate: bool = True,
        shuffler: Shuffler | None = None,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], int] = now_ms,
    ):
        self._state = state.copy() if state is not None else GameState()
        self._store = store
        self.can_mutate = can_mutate
        self._shuffler = shuffler or Shuffler()
        self._id_factory = id_factory
        self._clock = clock

    @classmethod
    def from_store(cls, store: GameStateStore, **kwargs) -> "GameStateController":
        """Build a controller over whatever the store holds (or an empty state)."""
        return cls(store.load(), store=store, **kwargs)

    @property
    def state(self) -> GameState:
        """A copy of the current state."""
        return self._state.copy()

    # ------------------------------------------------------------------ helpers

    def _ok(self) -> OperationResult:
        return OperationResult(success=True, status=OperationStatus.OK, state=self.state)

    def _reject(self, message: str, level: int = logging.WARNING) -> OperationResult:
        logger.log(level, message)
        return OperationResult(
            success=False,
            status=OperationStatus.PRECONDITION_FAILED,
            state=self.state,
            error_message=message,
        )

    def _denied(self, action: str) -> OperationResult:
        logger.info("Refused %s: caller is not the room owner", action)
        return OperationResult(
            success=False,
            status=OperationStatus.UNAUTHORIZED,
            state=self.state,
            error_message="Only the room owner can make changes",
        )

    def _commit(self, new_state: GameState, action: str) -> OperationResult:
        if self._store is not None and not self._store.save(new_state):
            logger.error("Could not save state after %s; keeping previous state", action)
            return OperationResult(
                success=False,
                status=OperationStatus.PERSISTENCE_FAILED,
                state=self.state,
                error_message="Failed to save changes",
            )
        self._state = new_state
        logger.debug("Applied %s", action)
        return self._ok()

    def _find_player(self, player_id: str) -> Player | None:
        return next((p for p in self._state.players if p.id == player_id), None)

    # ------------------------------------------------------------------ roster

    def add_player(self, name: str, rating: float | None = None) -> OperationResult:
        """Add a player to the pool.

        While a match exists the newcomer also joins the back of the bench,
        so the match on the pitch is not disturbed.
        """
        if not self.can_mutate:
            return self._denied("add_player")
        name = name.strip()
        if not name:
            return self._reject("Player name is required")

        player = Player(id=self._id_factory(), name=name, rating=rating)
        new_state = self._state.copy()
        new_state.players.append(player)
        if new_state.current_match is not None:
            new_state.bench.append(player)
        return self._commit(new_state, "add_player")

    def edit_player(self, player_id: str, name: str) -> OperationResult:
        """Rename a player wherever they appear in the live state.

        The in-progress match's snapshots are renamed too. Decided matches,
        including the copies in the history, keep the old name.
        """
        if not self.can_mutate:
            return self._denied("edit_player")
        if self._find_player(player_id) is None:
            return self._reject(f"Player not found: {player_id}")

        name = name.strip()

        def rename(players: list[Player]) -> list[Player]:
            return [replace(p, name=name) if p.id == player_id else p for p in players]

        new_state = self._state.copy()
        new_state.players = rename(new_state.players)
        new_state.team_a = rename(new_state.team_a)
        new_state.team_b = rename(new_state.team_b)
        new_state.bench = rename(new_state.bench)
        if new_state.match_in_progress:
            match = new_state.current_match
            match.team_a.players = rename(match.team_a.players)
            match.team_b.players = rename(match.team_b.players)
        return self._commit(new_state, "edit_player")

    def remove_player(self, player_id: str) -> OperationResult:
        """Remove a player from the pool, both teams and the bench.

        Losing someone from a team while a match exists rebalances: the
        bigger side is trimmed from the end down to the smaller side's size
        and the trimmed players go to the back of the bench.
        """
        if not self.can_mutate:
            return self._denied("remove_player")
        if self._find_player(player_id) is None:
            return self._reject(f"Player not found: {player_id}")

        prev = self._state
        new_state = prev.copy()
        new_state.players = [p for p in new_state.players if p.id != player_id]
        team_a = [p for p in new_state.team_a if p.id != player_id]
        team_b = [p for p in new_state.team_b if p.id != player_id]
        bench = [p for p in new_state.bench if p.id != player_id]

        removed_from_team = len(team_a) != len(prev.team_a) or len(team_b) != len(prev.team_b)
        match = new_state.current_match

        if match is not None and removed_from_team:
            target_size = min(len(team_a), len(team_b))
            if len(team_a) > target_size:
                bench.extend(team_a[target_size:])
                team_a = team_a[:target_size]
            elif len(team_b) > target_size:
                bench.extend(team_b[target_size:])
                team_b = team_b[:target_size]
            if new_state.match_in_progress:
                match.team_a.players = copy.deepcopy(team_a)
                match.team_b.players = copy.deepcopy(team_b)
        elif new_state.match_in_progress:
            match.team_a.players = [p for p in match.team_a.players if p.id != player_id]
            match.team_b.players = [p for p in match.team_b.players if p.id != player_id]

        new_state.team_a = team_a
        new_state.team_b = team_b
        new_state.bench = bench
        return self._commit(new_state, "remove_player")

    # ------------------------------------------------------------------ matches

    def shuffle_and_split(self, players_per_team: int = DEFAULT_PLAYERS_PER_TEAM) -> OperationResult:
        """Draw two fresh teams from the whole pool and start a match.

        Any current match is replaced without being archived.
        """
        if not self.can_mutate:
            return self._denied("shuffle_and_split")
        if players_per_team < 1:
            return self._reject(f"Players per team must be at least 1, got {players_per_team}")
        needed = players_per_team * 2
        if len(self._state.players) < needed:
            return self._reject(f"Not enough players. Need at least {needed} players.")

        lineup = split_into_teams(self._state.players, players_per_team, self._shuffler)
        if len(lineup.team_a) < players_per_team or len(lineup.team_b) < players_per_team:
            return self._reject("Failed to create complete teams", logging.ERROR)

        new_state = self._state.copy()
        new_state.team_a = lineup.team_a
        new_state.team_b = lineup.team_b
        new_state.bench = lineup.bench
        new_state.current_match = create_match(
            lineup.team_a,
            lineup.team_b,
            id_factory=self._id_factory,
            clock=self._clock,
        )
        return self._commit(new_state, "shuffle_and_split")

    def pick_winner(self, side: Side) -> OperationResult:
        """Record the winner and prepend the decided match to the history.

        The decided match stays as ``current_match`` until
        ``start_next_match`` replaces it.
        """
        if not self.can_mutate:
            return self._denied("pick_winner")
        if side not in SIDES:
            return self._reject(f"Winner must be one of {', '.join(SIDES)}, got {side!r}")
        match = self._state.current_match
        if match is None:
            return self._reject("No match in progress")
        if match.winner is not None:
            return self._reject(f"Match already decided (winner: {match.winner})")

        new_state = self._state.copy()
        decided = replace(new_state.current_match, winner=side)
        new_state.current_match = decided
        new_state.match_history = [copy.deepcopy(decided)] + new_state.match_history
        return self._commit(new_state, "pick_winner")

    def start_next_match(self) -> OperationResult:
        """Rotate the bench against the losers and start a new match."""
        if not self.can_mutate:
            return self._denied("start_next_match")
        state = self._state
        match = state.current_match
        if match is None or match.winner is None:
            return self._reject("Pick a winner before starting the next match")

        players_per_team = min(len(state.team_a), len(state.team_b))
        total = len(state.team_a) + len(state.team_b) + len(state.bench)
        if players_per_team == 0 or total < players_per_team * 2:
            return self._reject("Not enough players to continue matches", logging.ERROR)

        lineup = rotate_teams(state.team_a, state.team_b, state.bench, match.winner, self._shuffler)
        if (
            len(lineup.team_a) != players_per_team
            or len(lineup.team_b) != players_per_team
            or lineup.total != total
        ):
            return self._reject("Failed to rotate teams properly", logging.ERROR)

        new_state = state.copy()
        new_state.team_a = lineup.team_a
        new_state.team_b = lineup.team_b
        new_state.bench = lineup.bench
        new_state.current_match = create_match(
            lineup.team_a,
            lineup.team_b,
            id_factory=self._id_factory,
            clock=self._clock,
        )
        return self._commit(new_state, "start_next_match")

    # ------------------------------------------------------------------ resets

    def reset_game(self) -> OperationResult:
        """Clear teams, bench, current match and history; keep the players."""
        if not self.can_mutate:
            return self._denied("reset_game")
        return self._commit(GameState(players=copy.deepcopy(self._state.players)), "reset_game")

    def clear_all_data(self) -> OperationResult:
        """Reset every field, players included."""
        if not self.can_mutate:
            return self._denied("clear_all_data")
        return self._commit(GameState(), "clear_all_data")

    def replace_state(self, state: GameState) -> OperationResult:
        """Overwrite the whole state with an already validated one."""
        if not self.can_mutate:
            return self._denied("replace_state")
        return self._commit(state.copy(), "replace_state")
