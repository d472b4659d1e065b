#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--width W] [--height H] [--mines N] [--seed S]
    python main.py demo [--games N] [--delay SECONDS]
"""
import argparse
import logging
import random
import time
from typing import Optional, Tuple

from src.minesweeper.board import BoardConfig
from src.minesweeper.environment import MinesweeperEnv
from src.minesweeper.errors import MinesweeperError
from src.minesweeper.events import GameEnded
from src.minesweeper.session import GameSession


HELP_TEXT = """Commands:
  r X Y   reveal cell (chord if it shows a number)
  f X Y   toggle flag
  n       new game with the same settings
  q       quit"""


def parse_command(line: str) -> Optional[Tuple[str, int, int]]:
    """
    Parse one line of player input.

    Returns:
        (action, x, y) with coordinates set to -1 for n/q,
        or None if the line is not a command.
    """
    parts = line.strip().lower().split()
    if not parts:
        return None
    action = parts[0]
    if action in ("n", "q") and len(parts) == 1:
        return action, -1, -1
    if action in ("r", "f") and len(parts) == 3:
        try:
            return action, int(parts[1]), int(parts[2])
        except ValueError:
            return None
    return None


def print_status(session: GameSession) -> None:
    """Print the board with the counters above it."""
    print(
        f"\nMines left: {session.flag_budget}   "
        f"Time: {session.elapsed:.2f}s"
    )
    print(session.render())


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    rng = random.Random(args.seed) if args.seed is not None else None
    session = GameSession(rng=rng)
    try:
        session.configure(args.width, args.height, args.mines)
    except MinesweeperError as error:
        print(f"Error: {error}")
        return

    def on_event(event: object) -> None:
        if isinstance(event, GameEnded):
            print("\n*** WIN! ***" if event.won else "\n*** LOST (hit mine) ***")

    session.subscribe(on_event)
    print(HELP_TEXT)
    print_status(session)

    while True:
        try:
            line = input("> ")
        except EOFError:
            break

        command = parse_command(line)
        if command is None:
            print(HELP_TEXT)
            continue

        action, x, y = command
        if action == "q":
            break
        if action == "n":
            session.reset()
        elif action == "r":
            session.handle_reveal(x, y)
        else:
            session.handle_flag_toggle(x, y)
        print_status(session)


def demo(args: argparse.Namespace) -> None:
    """Watch a random agent play through the Gymnasium environment."""
    config = BoardConfig(args.width, args.height, args.mines)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = random.Random(args.seed)

    wins = 0
    for game in range(args.games):
        env.reset(seed=rng.randrange(2 ** 31))
        done = False
        step = 0
        info = {}

        while not done:
            mask = env.get_action_mask()
            # Reveal only; flags never end a game
            reveal_actions = [
                i for i in range(config.width * config.height) if mask[i]
            ]
            action = rng.choice(reveal_actions)
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

        print(f"=== Game {game + 1}/{args.games} | Steps {step} ===")
        print(env.render())
        if info.get("game_state") == "WON":
            wins += 1
            print("*** WIN! ***\n")
        else:
            print("*** LOST (hit mine) ***\n")
        time.sleep(args.delay)

    print(f"=== Final: {wins}/{args.games} wins ({100 * wins / args.games:.0f}%) ===")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper in the terminal")
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine events"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_board_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--width", type=int, default=9, help="Board columns")
        sub.add_argument("--height", type=int, default=9, help="Board rows")
        sub.add_argument("--mines", type=int, default=10, help="Number of mines")
        sub.add_argument("--seed", type=int, default=None, help="Random seed")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play interactively")
    add_board_arguments(play_parser)

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch random play")
    add_board_arguments(demo_parser)
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between games"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
