"""
Scoundrel CLI - Command-line interface for the engine.

Usage:
    scoundrel play [--seed N] [--save-dir DIR] [--new]   Play in the terminal
    scoundrel serve [--host H] [--port P]                Run the HTTP API
"""

import argparse
import sys

from .config import Settings, configure_logging
from .engine_core.state import Phase, value_to_label

HELP_TEXT = "Commands: f=face  a=avoid  1-4=select card  n=new game  r=restart  q=quit"


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Scoundrel - single-player dungeon crawl card game",
        prog="scoundrel",
    )
    parser.add_argument("--log-level", help="Logging level (default from SCOUNDREL_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--seed", type=int, help="Shuffle seed for a reproducible deck")
    play_parser.add_argument("--save-dir", help="Directory for the saved game")
    play_parser.add_argument("--new", action="store_true", help="Ignore any saved game")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    configure_logging(args.log_level.upper() if args.log_level else None)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def render(state) -> str:
    """Text view of a game: HUD, room, latest log lines."""
    weapon = "-"
    last = "-"
    if state.weapon:
        weapon = state.weapon.card.display
        if state.weapon.last_defeated is not None:
            last = value_to_label(state.weapon.last_defeated)

    lines = [
        f"Health {state.health}/{state.max_health}  Weapon {weapon} (last {last})  "
        f"Turn {state.turn}  Deck {len(state.deck)}  Discard {len(state.discard)}  "
        f"Avoid {'Ready' if state.can_avoid else 'Used'}",
        "Room: " + "  ".join(
            f"[{i + 1}] {card.display} {card.kind.value}" for i, card in enumerate(state.room)
        ),
    ]
    for entry in reversed(state.log[-3:]):
        lines.append(f"  > {entry}")
    return "\n".join(lines)


def cmd_play(args):
    """Interactive terminal game."""
    from .session import GameSession
    from .storage import GameStorage, FileStore

    settings = Settings.from_env()
    store = FileStore(args.save_dir or settings.save_dir)
    session = GameSession(storage=GameStorage(store))

    if args.new or args.seed is not None:
        session.new_game(args.seed)
    else:
        session.open()

    print(HELP_TEXT)
    while True:
        state = session.state
        print()
        print(render(state))
        if state.is_over:
            outcome = state.outcome.value if state.outcome else "ended"
            print(f"Game over ({outcome}). Score: {state.score}. n=new game, q=quit")
        elif state.phase == Phase.RESOLVING:
            print(f"Pick {state.selections_remaining} more card(s).")

        try:
            command = input("> ").strip().lower()
        except EOFError:
            break

        if command == "q":
            break
        elif command == "f":
            session.face_room()
        elif command == "a":
            session.avoid_room()
        elif command == "n":
            session.new_game()
        elif command == "r":
            session.restart()
        elif command.isdigit():
            session.select_card(int(command) - 1)
        else:
            print(HELP_TEXT)


def cmd_serve(args):
    """Run the API under uvicorn."""
    import uvicorn

    uvicorn.run("scoundrel.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
