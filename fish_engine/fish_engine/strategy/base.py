"""Base strategy class for self-play bots.

Defines the interface that all bot strategies must implement.
"""

from abc import ABC, abstractmethod

from fish_engine.game.engine import FishGame
from fish_engine.models.player import Player


class Strategy(ABC):
    """Abstract base class for bot strategies.

    A strategy acts through the game's public operations only, exactly like
    a human player sending commands.
    """

    @abstractmethod
    def take_turn(self, game: FishGame, player: Player) -> None:
        """Perform one action as the current turn holder.

        Must call exactly one state-changing operation (request, pass,
        declare or liquidate) so the game makes progress.

        Args:
            game: Running game
            player: Current turn holder
        """
        pass

    @abstractmethod
    def declare_liquidated(self, game: FishGame, player: Player) -> None:
        """Declare one remaining half-suit while the game is in liquidation.

        Args:
            game: Game in liquidation
            player: A player who still holds cards
        """
        pass
