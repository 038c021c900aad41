"""Self-play runner driving games with bot strategies."""

import logging
import random
from typing import Iterable, Mapping

from fish_engine.config import Config
from fish_engine.errors import FishError
from fish_engine.events import ObserverFactory
from fish_engine.game.builder import GameBuilder
from fish_engine.game.engine import FishGame
from fish_engine.logging import GameLogger
from fish_engine.models.player import TEAM_NAMES
from fish_engine.strategy import SimpleStrategy, Strategy
from fish_engine.utils.logger import GameDisplay

logger = logging.getLogger(__name__)


def run_game(
    config: Config,
    strategy: Strategy,
    rng: random.Random | None = None,
    options: Mapping[str, bool] | None = None,
    observers: Iterable[ObserverFactory] = (),
    game_logger: GameLogger | None = None,
    display: GameDisplay | None = None,
    game_num: int = 1,
) -> FishGame:
    """Play one game to the end.

    Args:
        config: Configuration (player count, turn cap, rule defaults)
        strategy: Strategy used for every seat
        rng: Random source for the deal
        options: Rule options to set on top of the config defaults
        observers: Extra per-player observer factories
        game_logger: JSONL logger to attach
        display: Console display to attach
        game_num: Game number for logging

    Returns:
        The finished game
    """
    builder = GameBuilder(config)
    for key, value in (options or {}).items():
        builder.options.set(key, value)
    for i in range(config.game.num_players):
        builder.add_handle(f"bot{i}")

    game = builder.build(observers=observers, rng=rng)
    if game_logger:
        game_logger.attach(game, game_num)
    if display:
        display.attach(game)
    game.start()

    steps = 0
    while not game.finished:
        steps += 1
        if steps > config.game.max_turns:
            logger.warning(f"Game {game_num} hit the {config.game.max_turns} step cap, aborting")
            _abort(game)
            break

        try:
            player = game.current_player
            if player is None:
                declarer = next(p for p in game.players if p.hand)
                strategy.declare_liquidated(game, declarer)
            else:
                strategy.take_turn(game, player)
        except FishError as e:
            logger.warning(f"Strategy made an illegal move: {e.kind.value}: {e}")

    return game


def _abort(game: FishGame) -> None:
    for player in game.players:
        if game.finished:
            break
        if not player.abort_voted:
            game.vote_abort(player)


def run_games(
    config: Config,
    num_games: int | None = None,
    seed: int | None = None,
    options: Mapping[str, bool] | None = None,
    game_logger: GameLogger | None = None,
    display: GameDisplay | None = None,
) -> dict[str, int]:
    """Run multiple self-play games.

    Args:
        config: Configuration
        num_games: Number of games (uses config if not specified)
        seed: Seed for a reproducible session
        options: Rule options to set for every game
        game_logger: JSONL logger shared by all games
        display: Console display

    Returns:
        Dict of team name -> games won (a tie counts for both teams)
    """
    num_games = num_games or config.game.num_games
    rng = random.Random(seed)
    strategy = SimpleStrategy(rng)
    wins = {name: 0 for name in TEAM_NAMES}

    if game_logger:
        rules = config.rules.model_dump()
        rules.update(options or {})
        game_logger.log_session_start(config.game.num_players, rules)

    for game_num in range(1, num_games + 1):
        logger.info(f"Starting game {game_num}/{num_games}")
        if display:
            display.print_game_start(game_num, num_games)

        game = run_game(
            config,
            strategy,
            rng=rng,
            options=options,
            game_logger=game_logger,
            display=display,
            game_num=game_num,
        )
        for team in game.winners:
            wins[team.name] += 1

    if game_logger:
        game_logger.log_session_end(num_games, wins)

    return wins
