"""Logging utilities and game event display."""

import logging
import sys
from typing import TYPE_CHECKING, Sequence

from fish_engine.events import GameEvent

if TYPE_CHECKING:
    from fish_engine.game.engine import FishGame
    from fish_engine.models.card import Card
    from fish_engine.models.half_suit import HalfSuit
    from fish_engine.models.player import Player, Team


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Display game events to stdout."""

    def __init__(self, show_events: bool = False):
        """Initialize display.

        Args:
            show_events: Whether to print every request and pass, not just
                game starts, scores and results
        """
        self.show_events = show_events

    def attach(self, game: "FishGame") -> None:
        bus = game.events
        bus.subscribe(GameEvent.GAME_BEGIN, lambda: self.print_game_begin(game))
        bus.subscribe(GameEvent.SCORE_SET, self.print_score)
        bus.subscribe(GameEvent.LIQUIDATE, self.print_liquidate)
        bus.subscribe(GameEvent.GAME_END, self.print_game_end)
        if self.show_events:
            bus.subscribe(GameEvent.REQUEST, self.print_request)
            bus.subscribe(GameEvent.TURN_PASS, self.print_pass)

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def print_game_start(self, game_number: int, num_games: int) -> None:
        """Print game start message."""
        self.print_separator()
        print(f"GAME {game_number}/{num_games}")
        self.print_separator()

    def print_game_begin(self, game: "FishGame") -> None:
        print("The game of Fish begins!")
        for team in game.teams:
            members = ", ".join(p.character for p in team.players) or "Nobody"
            print(f"  Team {team.name}: {members}")
        if game.current_player:
            print(f"It is now {game.current_player.character}'s turn.")

    def print_request(self, asker: "Player", target: "Player", card: "Card", success: bool) -> None:
        outcome = "and succeeds!" if success else "but fails."
        print(f"  {asker.character} tries to take the {card} from {target.character}... {outcome}")

    def print_pass(self, giver: "Player", taker: "Player") -> None:
        print(f"  {giver.character} passes their turn to {taker.character}.")

    def print_score(self, half_suit: "HalfSuit", team: "Team") -> None:
        print(f"Team {team.name} has acquired the {half_suit} half-suit!")

    def print_liquidate(self, team: "Team") -> None:
        print(f"Team {team.name} is out of cards and claims Liquidation!")

    def print_game_end(self, winners: Sequence["Team"]) -> None:
        if not winners:
            print("The game was aborted.")
        elif len(winners) == 1:
            winner = winners[0]
            opponent = winner.opponent
            against = opponent.score() if opponent else 0
            print(f"The game is over. Team {winner.name} wins {winner.score()}-{against}!")
        else:
            print("The game ends in a tie!")

    def print_final_results(self, wins: dict[str, int], num_games: int) -> None:
        """Print final session results."""
        self.print_separator()
        print("FINAL RESULTS")
        self.print_separator()
        for name, count in sorted(wins.items(), key=lambda x: x[1], reverse=True):
            print(f"  Team {name}: {count}/{num_games} wins")
