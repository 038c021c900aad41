"""Simple strategy implementation.

Strategy:
- Self-declare any half-suit held completely
- Occasionally declare the half-suit with the most cards in hand, guessing
  which teammates hold the rest
- Otherwise ask a random opponent with cards for a random requestable card
- Without anything to ask for, pass to a teammate who can ask, or claim
  liquidation once the team is out of cards
"""

import random

from fish_engine.game.engine import FishGame
from fish_engine.models.half_suit import HalfSuit
from fish_engine.models.player import Player
from fish_engine.strategy.base import Strategy


class SimpleStrategy(Strategy):
    """Random-play bot that only uses public information and its own hand."""

    def __init__(self, rng: random.Random | None = None, declare_chance: float = 0.05):
        """Initialize strategy.

        Args:
            rng: Random source
            declare_chance: Chance per turn of declaring on a guess
        """
        self.rng = rng or random.Random()
        self.declare_chance = declare_chance

    def take_turn(self, game: FishGame, player: Player) -> None:
        full = self._full_half_suit(game, player)
        if full is not None:
            game.declare_self(player, full)
            return

        if player.hand and self.rng.random() < self.declare_chance:
            self._guess_declare(game, player, self._best_half_suit(game, player))
            return

        opponent = player.team.opponent
        requestable = game.requestable_cards(player)
        if requestable:
            targets = [p for p in opponent.players if p.hand]
            if not targets:
                game.liquidate(opponent)
                return
            game.move_card(self.rng.choice(targets), player, self.rng.choice(requestable))
            return

        candidates = [
            p for p in player.team.players
            if p is not player and game.requestable_cards(p)
        ]
        if not candidates and game.rules.enemypass:
            candidates = [p for p in opponent.players if game.requestable_cards(p)]
        if candidates:
            game.pass_turn(player, self.rng.choice(candidates))
            return

        if player.team.is_empty():
            game.liquidate(player.team)
            return

        # Nobody can ask for anything useful: force progress with a guess
        self._guess_declare(game, player, self.rng.choice(game.remaining_half_suits))

    def declare_liquidated(self, game: FishGame, player: Player) -> None:
        full = self._full_half_suit(game, player)
        if full is not None:
            game.declare_self(player, full)
            return
        self._guess_declare(game, player, self._best_half_suit(game, player))

    def _full_half_suit(self, game: FishGame, player: Player) -> HalfSuit | None:
        for half_suit in game.remaining_half_suits:
            if all(player.has_card(c) for c in half_suit.cards):
                return half_suit
        return None

    def _best_half_suit(self, game: FishGame, player: Player) -> HalfSuit:
        return max(
            game.remaining_half_suits,
            key=lambda hs: sum(1 for c in hs.cards if player.has_card(c)),
        )

    def _guess_declare(self, game: FishGame, player: Player, half_suit: HalfSuit) -> None:
        teammates = [p for p in player.team.players if p is not player and p.hand]
        assignment = [
            player if player.has_card(card) or not teammates else self.rng.choice(teammates)
            for card in half_suit.cards
        ]
        game.declare(player, half_suit, assignment)
