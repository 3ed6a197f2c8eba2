"""
Morris CLI - Command-line interface for the engine.

Usage:
    morris play  [--white human] [--black medium]   Play in the terminal
    morris watch [--white easy] [--black strong]    Let computers play

Human moves are typed as "12" (place), "12-13" (move) or "x12" (remove).
"""

import argparse
import logging
import sys

from pydantic import ValidationError


BOARD_TEMPLATE = """\
{0}-----------{1}-----------{2}
|           |           |
|   {3}-------{4}-------{5}   |
|   |       |       |   |
|   |   {6}---{7}---{8}   |   |
|   |   |       |   |   |
{9}---{10}---{11}       {12}---{13}---{14}
|   |   |       |   |   |
|   |   {15}---{16}---{17}   |   |
|   |       |       |   |
|   {18}-------{19}-------{20}   |
|           |           |
{21}-----------{22}-----------{23}"""


def main():
    """Main CLI entry point."""
    from .bots import Difficulty

    levels = [d.value for d in Difficulty]
    parser = argparse.ArgumentParser(
        description="Morris - Nine men's morris against the computer",
        prog="morris",
    )
    parser.add_argument("--decision-time", type=int, help="Computer decision time in ms")
    parser.add_argument("--depth", type=int, help="Search depth for medium/strong")
    parser.add_argument("--pace", action="store_true", default=None, help="Wait out the decision time")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a match in the terminal")
    play_parser.add_argument("--white", choices=levels, default="human", help="White player (moves first)")
    play_parser.add_argument("--black", choices=levels, default="medium", help="Black player")
    play_parser.add_argument("--seed", type=int, help="Seed for computer players")

    # Watch command
    watch_parser = subparsers.add_parser("watch", help="Let computer players play")
    watch_parser.add_argument("--white", choices=levels[1:], default="easy", help="White player")
    watch_parser.add_argument("--black", choices=levels[1:], default="medium", help="Black player")
    watch_parser.add_argument("--games", type=int, default=1, help="Number of matches")
    watch_parser.add_argument("--seed", type=int, help="Seed for computer players")

    args = parser.parse_args()

    settings = _load_settings(args)
    logging.basicConfig(
        level=logging.DEBUG if settings.debug_log else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args, settings)
    elif args.command == "watch":
        cmd_watch(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def _load_settings(args):
    from .config import MatchSettings

    try:
        return MatchSettings.from_env(
            decision_time_ms=args.decision_time,
            search_depth=args.depth,
            pace_moves=args.pace,
            debug_log=True if args.debug else None,
        )
    except ValidationError as e:
        print(f"Error: invalid settings\n{e}")
        sys.exit(2)


def render_board(board) -> str:
    """ASCII diagram of a board: W/B for stones, position numbers otherwise."""
    from .engine_core import StoneColor

    cells = []
    for pos in range(24):
        owner = board.owner(pos)
        if owner == StoneColor.WHITE:
            cells.append("W")
        elif owner == StoneColor.BLACK:
            cells.append("B")
        else:
            cells.append(str(pos) if pos < 10 else chr(ord("a") + pos - 10))
    return BOARD_TEMPLATE.format(*cells)


def cmd_play(args, settings):
    """Play a match in the terminal."""
    from .engine_core import parse_move
    from .session import SessionManager

    manager = SessionManager(settings)
    session = manager.create_session(white=args.white, black=args.black, seed=args.seed)
    loop = session.loop

    print("Empty positions are shown as 0-9 and a-n (a=10 ... n=23).")
    print("Type moves with decimal positions: 12, 12-13 or x12. 'q' quits.")

    while not loop.is_over():
        turn = loop.run_computer_turns()
        for line in turn.computer_moves:
            print(f"  {line}")
        if loop.is_over():
            break

        board = loop.board
        print()
        print(render_board(board))
        print(f"\nTurn {board.turn} - {board.current_player.name} to {board.phase.value}")

        try:
            text = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            text = "q"
        if text in {"q", "quit"}:
            manager.end_session(session.session_id, reason="abandoned")
            print("Bye.")
            return
        try:
            move = parse_move(text, board.phase)
        except ValueError as e:
            print(f"Error: {e}")
            continue

        result = loop.apply_move(move)
        if not result.success:
            print(f"Error: {result.error}")
            continue
        for change in result.state_changes[1:]:
            print(f"  {change}")

    print()
    print(render_board(loop.board))
    _print_outcome(loop.outcome)
    manager.end_session(session.session_id)


def cmd_watch(args, settings):
    """Let computer players play a number of matches."""
    from .session import SessionManager

    manager = SessionManager(settings)
    wins = {"WHITE": 0, "BLACK": 0}
    draws = 0

    for game in range(args.games):
        seed = None if args.seed is None else args.seed + 2 * game
        session = manager.create_session(white=args.white, black=args.black, seed=seed)
        turn = session.loop.run_computer_turns()
        if args.games == 1:
            for line in turn.computer_moves:
                print(f"  {line}")
            print(render_board(session.loop.board))

        outcome = session.loop.outcome
        if outcome is None:
            print(f"Game {game + 1}: stopped ({'; '.join(turn.errors) or 'move limit'})")
        elif outcome.is_draw:
            draws += 1
        else:
            wins[outcome.winner.name] += 1
        _print_outcome(outcome, prefix=f"Game {game + 1}: ")
        manager.end_session(session.session_id)

    print(f"White: {wins['WHITE']} - Black: {wins['BLACK']} - Draw: {draws} (Total: {args.games})")


def _print_outcome(outcome, prefix: str = ""):
    if outcome is None:
        return
    if outcome.is_draw:
        print(f"{prefix}Match drawn ({outcome.reason})")
    else:
        print(f"{prefix}{outcome.winner.name} wins ({outcome.reason})")


if __name__ == "__main__":
    main()
