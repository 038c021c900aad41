"""Main entry point for the Fish self-play simulator."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from fish_engine.config import GameLogConfig, load_config
from fish_engine.logging import GameLogger
from fish_engine.models.rules import FISH_OPTIONS
from fish_engine.selfplay import run_games
from fish_engine.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str, num_players: int) -> str:
    """Generate log filename with timestamp and table size.

    Format: {ISO timestamp}_{N}p.jsonl

    Args:
        log_dir: Directory for log files.
        num_players: Number of seats.

    Returns:
        Full path to log file.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    return str(Path(log_dir) / f"{timestamp}_{num_players}p.jsonl")


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    option_keys = [spec.key for spec in FISH_OPTIONS]

    parser = argparse.ArgumentParser(
        description="Fish card game self-play simulator"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-n",
        "--num-games",
        type=int,
        help="Number of games to play (overrides config)",
    )
    parser.add_argument(
        "-p",
        "--players",
        type=int,
        help="Number of players (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Random seed",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-events",
        action="store_true",
        help="Print every request and pass",
    )
    parser.add_argument(
        "--enable",
        action="append",
        default=[],
        choices=option_keys,
        metavar="OPTION",
        help=f"Enable a rule option (one of: {', '.join(option_keys)})",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )

    args = parser.parse_args(argv)

    # Load config
    config = load_config(args.config)

    # Apply command-line overrides
    if args.num_games:
        config.game.num_games = args.num_games
    if args.players:
        config.game.num_players = args.players
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_events:
        config.logging.show_events = True

    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else str(Path(config.game_log.output_path).parent)

    setup_logging(config.logging.level)
    display = GameDisplay(show_events=config.logging.show_events)
    options = {key: True for key in args.enable}

    if game_log_enabled:
        log_path = generate_log_filename(game_log_dir, config.game.num_players)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            wins = run_games(
                config,
                seed=args.seed,
                options=options,
                game_logger=game_logger,
                display=display,
            )
        display.print_final_results(wins, config.game.num_games)
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Simulation error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
