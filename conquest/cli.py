"""
Conquest CLI - Command-line interface for the engine.

Usage:
    conquest play               Hot-seat game in the terminal
    conquest rules              Print the rules
    conquest tally [--reset]    Show (or clear) the win counters
"""

import argparse
import logging
import os
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Conquest - Territorial Board Game",
        prog="conquest",
    )
    parser.add_argument("--data-dir", help="Where the win tally is stored")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    subparsers.add_parser("play", help="Play a hot-seat game in the terminal")

    # Rules command
    subparsers.add_parser("rules", help="Print the rules")

    # Tally command
    tally_parser = subparsers.add_parser("tally", help="Show the win counters")
    tally_parser.add_argument("--reset", action="store_true", help="Set both counters to zero")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=os.getenv("CONQUEST_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "rules":
        cmd_rules(args)
    elif args.command == "tally":
        cmd_tally(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_rules(args):
    """Print the rules."""
    from .render import RULES_TITLE, RULES_TEXT

    print(RULES_TITLE)
    print(RULES_TEXT)


def cmd_tally(args):
    """Show or clear the win counters."""
    from .session import WinTally
    from .engine_core import Player

    tally = WinTally(data_dir=args.data_dir)
    if args.reset:
        tally.clear()
        print("Win counters cleared.")

    for player in Player:
        print(f"{player.label} Wins: {tally.wins(player)}")


def cmd_play(args, input_fn=input):
    """Hot-seat game: both players type moves into the same terminal."""
    from .session import SessionManager, WinTally
    from .engine_core import Player
    from .render import board_text, turn_indicator, outcome_message, RULES_TEXT

    tally = WinTally(data_dir=args.data_dir)
    manager = SessionManager(tally=tally)
    session = manager.create_session()

    print(RULES_TEXT)
    print("\nEnter moves as 'row col'. 'r' resets the board, 'q' quits.\n")

    while True:
        engine = session.engine
        print(board_text(engine.board_view()))
        if engine.game_over:
            print(f"\n{outcome_message(engine.outcome)}")
            for player in Player:
                print(f"{player.label} Wins: {tally.wins(player)}")
            print("Press 'r' for a new game or 'q' to quit.")
        else:
            print(f"\n{turn_indicator(engine.current_player)}")

        try:
            line = input_fn("> ").strip().lower()
        except EOFError:
            break

        if line == "q":
            break
        if line == "r":
            session.reset()
            continue

        parts = line.split()
        try:
            if len(parts) != 2:
                raise ValueError(line)
            row, col = int(parts[0]), int(parts[1])
        except ValueError:
            print("Enter a move as two numbers: row col")
            continue

        result = session.play(row, col, tally=tally)
        if not result.success:
            print(f"Move ignored: {result.error}")
        elif result.expansions:
            print(f"{result.expansions} expansion(s)!")

    manager.end_session(session.session_id)
    print("Goodbye!")


if __name__ == "__main__":
    main()
