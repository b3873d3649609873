#!/usr/bin/env python3
"""
PandaQuest - Main entry point.

Usage:
    python main.py play [--seed N]
    python main.py simulate [--games N] [--seed N]
"""
import argparse
import logging
import random
from typing import Callable, Optional, Tuple

from src.pandaquest.environment import render_board
from src.pandaquest.game import Game


logger = logging.getLogger(__name__)


def parse_selection(line: str) -> Optional[Tuple[int, int]]:
    """Parse a "row col" line into a pair of ints, or None if malformed."""
    parts = line.split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def play(
    args: argparse.Namespace,
    read: Callable[[str], str] = input,
    game: Optional[Game] = None,
) -> None:
    """
    Play PandaQuest in the console.

    Args:
        args: Parsed command line arguments.
        read: Prompts for and returns one line of player input.
        game: Game to play (default: a new game seeded from args).
    """
    game = game or Game(seed=args.seed)

    print("=== Welcome to PandaQuest! ===")
    print("Clear the board by revealing all safe tiles.")
    print("Avoid the bamboo or you'll lose a life!")

    while not game.is_game_over:
        if game.is_level_complete:
            print(f"\nLevel {game.current_level} Complete!")
            answer = read("Ready for the next level? (y/n) ").strip().lower()
            if answer not in ("y", "yes"):
                print(f"Thanks for playing! Final Level: {game.current_level}")
                return
            game.next_level()
            continue

        print()
        print(render_board(game.board))
        print(f"\nLevel: {game.current_level} | Lives: {game.lives}")
        line = read("Enter row and column (e.g., 2 3) or 'q' to quit: ").strip()

        if line.lower() == "q":
            print("Thanks for playing!")
            return

        selection = parse_selection(line)
        if selection is None:
            print("Invalid input. Please enter row and column separated by space.")
            continue

        if not game.select_tile(*selection):
            print("Invalid selection. Try again.")

    print()
    print(render_board(game.board))
    print("\nGame Over! You ran out of lives.")
    print(f"Final Level: {game.current_level}")


def simulate(args: argparse.Namespace) -> None:
    """Play random games and report the levels reached."""
    rng = random.Random(args.seed)
    game = Game(seed=args.seed)
    levels = []

    for _ in range(args.games):
        game.reset()
        while not game.is_game_over and game.current_level <= args.max_level:
            if game.is_level_complete:
                game.next_level()
                continue
            row, col = rng.choice(game.board.get_valid_actions())
            game.select_tile(row, col)
        levels.append(game.current_level)
        logger.debug("Game finished at level %d", game.current_level)

    average = sum(levels) / len(levels) if levels else 0.0
    print(f"Simulated {args.games} games")
    print(f"  Avg level reached: {average:.2f}")
    print(f"  Best level: {max(levels, default=0)}")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="PandaQuest - Reveal the safe tiles, avoid the bamboo"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the console")
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for the boards"
    )

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games"
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--max-level", type=int, default=20, help="Stop a game past this level"
    )
    simulate_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
