#!/usr/bin/env python3
"""
Mini Arcade - Main Entry Point
==============================

Command-line front door to the arcade engines.

Usage:
    # Show the available games
    python main.py --list

    # Show best scores for every game
    python main.py --scores

    # Clear one game's best scores
    python main.py --reset-scores snake

    # Serve all games to a browser front end
    python main.py --serve --port 5001

Options:
    --score-dir DIR   Where best_scores.json lives (default: scores/)
    --log-level LVL   DEBUG, INFO, WARNING or ERROR
    --seed N          Seed every engine for reproducible sessions
"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from minigames.config import Config
from minigames.core.errors import PersistenceError
from minigames.core.scores import JsonScoreStore, default_record
from minigames.game import get_all_game_info, get_game, get_game_info, list_games
from minigames.utils.logger import LogLevel, setup_logging


def print_games() -> None:
    """Print the game registry."""
    print("\n🎮 Available games")
    print("=" * 60)
    for key, info in get_all_game_info().items():
        difficulties = f"  [{', '.join(info['difficulties'])}]" if info['difficulties'] else ""
        print(f"  {info['icon']} {key:<14} {info['name']}{difficulties}")
        print(f"     {info['description']} ({info['scheduling'].replace('_', '-')})")
    print("=" * 60)


def print_scores(store: JsonScoreStore) -> int:
    """Print every game's best-score record. Returns an exit code."""
    exit_code = 0
    print(f"\n🏆 Best scores ({store.path})")
    print("=" * 60)
    for key in list_games():
        try:
            record = store.load(key)
        except PersistenceError as e:
            print(f"  {key:<14} ⚠️ unreadable: {e}")
            record = default_record(key)
            exit_code = 1
        fields = ", ".join(f"{k}={v}" for k, v in record.to_dict().items())
        print(f"  {key:<14} {fields}")
    print("=" * 60)
    return exit_code


def reset_scores(store: JsonScoreStore, name: str) -> int:
    """Reset one game's record. Returns an exit code."""
    game_class = get_game(name)
    if game_class is None:
        print(f"❌ Unknown game: {name} (available: {', '.join(list_games())})")
        return 2
    key = game_class.GAME_KEY
    info = get_game_info(key)
    _, saved = store.reset(key)
    if not saved:
        print(f"❌ Could not write {store.path}")
        return 1
    print(f"🧹 Best scores cleared for {info['icon']} {info['name']}")
    return 0


def serve(config: Config, store: JsonScoreStore) -> int:
    """Run the web bridge until interrupted."""
    try:
        from minigames.web.server import GameServer
        server = GameServer(config, score_store=store)
    except RuntimeError as e:
        print(f"❌ {e}")
        return 1

    print(f"🌐 Serving {len(server.games)} games at http://{server.host}:{server.port}")
    try:
        server.run()
    except KeyboardInterrupt:
        print("\n⛔ Server stopped by user")
    finally:
        server.stop()
    return 0


def parse_args(argv=None):
    """Parse command line arguments."""
    available_games = list_games()

    parser = argparse.ArgumentParser(
        description="Mini Arcade - five classic browser games on one engine core",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
EXAMPLES
========
    python main.py --list                   Show the games
    python main.py --scores                 Show best scores
    python main.py --reset-scores memory    Clear one game's best scores
    python main.py --serve --port 5001      Serve to a browser

AVAILABLE GAMES: {', '.join(available_games)}
        """
    )

    # Mode selection
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        '--list', action='store_true',
        help='List the available games'
    )
    mode_group.add_argument(
        '--scores', action='store_true',
        help='Show best scores for every game'
    )
    mode_group.add_argument(
        '--reset-scores', type=str, metavar='GAME',
        help='Clear the best scores of one game'
    )
    mode_group.add_argument(
        '--serve', action='store_true',
        help='Run the Flask + SocketIO server for a browser front end'
    )

    # Server options
    parser.add_argument(
        '--host', type=str, default=None,
        help='Server bind address (default: 127.0.0.1)'
    )
    parser.add_argument(
        '--port', type=int, default=None,
        help='Server port (default: 5000)'
    )

    # Shared options
    parser.add_argument(
        '--score-dir', type=str, default=None,
        help='Directory holding best_scores.json (default: scores/)'
    )
    parser.add_argument(
        '--log-level', type=str.upper, default=None,
        choices=[level.name for level in LogLevel],
        help='Logging verbosity (default: INFO)'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for reproducible sessions'
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    config = Config()
    if args.score_dir:
        config.SCORE_DIR = args.score_dir
    if args.log_level:
        config.LOG_LEVEL = args.log_level
    if args.host:
        config.WEB_HOST = args.host
    if args.port:
        config.WEB_PORT = args.port
    if args.seed is not None:
        config.SEED = args.seed

    setup_logging(
        log_dir=config.LOG_DIR,
        level=LogLevel.from_name(config.LOG_LEVEL),
        file_output=config.LOG_TO_FILE,
        force=True,
    )
    store = JsonScoreStore(config.SCORE_PATH)

    if args.scores:
        return print_scores(store)
    if args.reset_scores:
        return reset_scores(store, args.reset_scores)
    if args.serve:
        return serve(config, store)

    print_games()
    if not args.list:
        print("\nRun with --serve to play in the browser, or --help for all options.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
