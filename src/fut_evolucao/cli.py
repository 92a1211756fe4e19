"""Command line for single-user mode, plus the API server.

The game state lives in one JSON file (``LOCAL_STATE_PATH``), the local
counterpart of a room. Every command loads it, applies one operation and
saves it back.

Usage:
    fut-evolucao add "Ana"
    fut-evolucao split --per-team 5
    fut-evolucao winner A
    fut-evolucao next
    fut-evolucao show
    fut-evolucao serve
"""

import argparse
import logging
import sys
from pathlib import Path

from fut_evolucao.config import resolve_path, settings
from fut_evolucao.models.game_state import GameState
from fut_evolucao.models.team import Player
from fut_evolucao.repositories.state_store import JsonFileStateStore
from fut_evolucao.services.game_state_controller import GameStateController, OperationResult
from fut_evolucao.utils.shuffler import Shuffler


def _format_players(players: list[Player]) -> str:
    if not players:
        return "  (none)"
    return "\n".join(f"  {p.name} [{p.id}]" for p in players)


def format_state(state: GameState) -> str:
    """Render the state as plain text."""
    lines = [f"Players ({len(state.players)}):", _format_players(state.players)]
    match = state.current_match
    if match is None:
        lines.append("No match in progress.")
    else:
        status = "in progress" if match.winner is None else f"won by Team {match.winner}"
        lines.append(f"Current match ({status}):")
        lines.append(f"Team A ({len(state.team_a)}):")
        lines.append(_format_players(state.team_a))
        lines.append(f"Team B ({len(state.team_b)}):")
        lines.append(_format_players(state.team_b))
        lines.append(f"Bench ({len(state.bench)}):")
        lines.append(_format_players(state.bench))
    if state.match_history:
        lines.append(f"History ({len(state.match_history)} matches):")
        for past in state.match_history:
            a = ", ".join(p.name for p in past.team_a.players)
            b = ", ".join(p.name for p in past.team_b.players)
            lines.append(f"  Team {past.winner} won: [{a}] vs [{b}]")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fut-evolucao", description="Pickup soccer team manager")
    parser.add_argument(
        "--state-file",
        type=Path,
        default=None,
        help="Game state JSON file (default: LOCAL_STATE_PATH setting)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for shuffles")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Show players, teams and history")

    add = sub.add_parser("add", help="Add a player")
    add.add_argument("name")
    add.add_argument("--rating", type=float, default=None)

    edit = sub.add_parser("edit", help="Rename a player")
    edit.add_argument("player_id")
    edit.add_argument("name")

    remove = sub.add_parser("remove", help="Remove a player")
    remove.add_argument("player_id")

    split = sub.add_parser("split", help="Shuffle players into two teams and a bench")
    split.add_argument("--per-team", type=int, default=settings.default_players_per_team)

    winner = sub.add_parser("winner", help="Record the winner of the current match")
    winner.add_argument("side", choices=["A", "B"])

    sub.add_parser("next", help="Rotate the bench in and start the next match")
    sub.add_parser("reset", help="Clear teams and history, keep players")
    sub.add_parser("clear", help="Delete all data and the state file")

    serve = sub.add_parser("serve", help="Run the rooms API server")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    return parser


def _apply(controller: GameStateController, args: argparse.Namespace) -> OperationResult | None:
    command = args.command
    if command == "add":
        return controller.add_player(args.name, args.rating)
    if command == "edit":
        return controller.edit_player(args.player_id, args.name)
    if command == "remove":
        return controller.remove_player(args.player_id)
    if command == "split":
        return controller.shuffle_and_split(args.per_team)
    if command == "winner":
        return controller.pick_winner(args.side)
    if command == "next":
        return controller.start_next_match()
    if command == "reset":
        return controller.reset_game()
    if command == "clear":
        return controller.clear_all_data()
    return None


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        import uvicorn

        uvicorn.run("fut_evolucao.main:app", host=args.host, port=args.port)
        return 0

    state_file = args.state_file or resolve_path(settings.local_state_path)
    seed = args.seed if args.seed is not None else settings.random_seed
    store = JsonFileStateStore(state_file)
    controller = GameStateController.from_store(store, shuffler=Shuffler(seed=seed))

    result = _apply(controller, args)
    if result is not None and not result.success:
        print(f"Error: {result.error_message}", file=sys.stderr)
        return 1
    if args.command == "clear":
        store.clear()
    print(format_state(controller.state))
    return 0


if __name__ == "__main__":
    sys.exit(main())
