"""Move validation for protocol operations.

Every check here runs before the engine touches any state. A failed check
raises FishError and leaves the game exactly as it was.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from fish_engine.errors import ErrorKind, FishError
from fish_engine.models.card import Card
from fish_engine.models.half_suit import HalfSuit, half_suit_for
from fish_engine.models.player import Player, Team

if TYPE_CHECKING:
    from .engine import FishGame


class MoveValidator:
    """Validates requests, declarations, passes and liquidations."""

    def __init__(self, game: FishGame):
        """Initialize validator.

        Args:
            game: Game whose state and rules are checked against
        """
        self.game = game
        self.rules = game.rules

    # Request eligibility

    def can_request(self, player: Player, card: Card) -> bool:
        """Check if `player` may ask an opponent for `card`.

        The card must still be in play. Outside chaos mode the player must
        hold another card of the same half-suit, and may not ask for a card
        they already hold unless duplicates are allowed.
        """
        if card not in self.game.active_cards:
            return False
        if self.rules.chaos:
            return True
        if not self.rules.duplicates and player.has_card(card):
            return False
        half_suit = half_suit_for(card)
        if half_suit is None:
            return False
        return any(other != card and player.has_card(other) for other in half_suit.cards)

    def requestable_cards(self, player: Player) -> list[Card]:
        """Get every card `player` could legally ask for right now."""
        return [
            card
            for half_suit in self.game.remaining_half_suits
            for card in half_suit.cards
            if self.can_request(player, card)
        ]

    # Operation checks

    def check_running(self) -> None:
        """Check that the game has started and not yet finished."""
        if not self.game.started:
            raise FishError(ErrorKind.NOT_STARTED, "The game hasn't started yet.")
        if self.game.finished:
            raise FishError(ErrorKind.GAME_FINISHED, "The game is already over.")

    def check_players(self, *players: Player) -> None:
        for player in players:
            if not any(player is p for p in self.game.players):
                raise FishError(ErrorKind.UNKNOWN_PLAYER, f"{player} isn't playing in this game.")

    def check_turn(self, player: Player) -> None:
        if self.game.current_player is not player:
            raise FishError(ErrorKind.WRONG_TURN, f"It isn't {player}'s turn.")

    def validate_request(self, src: Player, dest: Player, card: Card) -> None:
        """Validate `dest` asking `src` for `card`."""
        self.check_running()
        self.check_players(src, dest)
        self.check_turn(dest)
        if src.team is dest.team:
            raise FishError(ErrorKind.TEAM_REQUEST, "You can't ask your own teammate for a card.")
        if not self.can_request(dest, card):
            raise FishError(ErrorKind.BAD_REQUEST, f"You aren't allowed to ask for the {card}.")

    def validate_declare(
        self,
        declarer: Player,
        half_suit: HalfSuit,
        assignment: Sequence[Player],
    ) -> Team:
        """Validate a declaration.

        Returns:
            The team named by the assignment.
        """
        self.check_running()
        self.check_players(declarer, *assignment)
        if half_suit not in self.game.remaining_half_suits:
            raise FishError(ErrorKind.ALREADY_CLAIMED, f"{half_suit} is not in play.")
        if len(assignment) != len(half_suit.cards):
            raise FishError(
                ErrorKind.DECLARE_SIZE_MISMATCH,
                f"{half_suit} has {len(half_suit.cards)} cards, but {len(assignment)} owners were named.",
            )

        named_teams = {id(p.team): p.team for p in assignment}
        if self.rules.countercall:
            if len(named_teams) != 1:
                raise FishError(
                    ErrorKind.DECLARE_HOMOGENEITY_MISMATCH,
                    "Everyone named in a declaration must be on the same team.",
                )
        elif any(p.team is not declarer.team for p in assignment):
            raise FishError(
                ErrorKind.DECLARE_TEAM_MISMATCH,
                "You can only name players on your own team.",
            )
        return assignment[0].team

    def validate_self_declare(self, declarer: Player, half_suit: HalfSuit) -> None:
        self.check_running()
        self.check_players(declarer)
        if half_suit not in self.game.remaining_half_suits:
            raise FishError(ErrorKind.ALREADY_CLAIMED, f"{half_suit} is not in play.")
        if not all(declarer.has_card(card) for card in half_suit.cards):
            raise FishError(
                ErrorKind.BAD_SELF_DECLARE,
                f"{declarer} doesn't hold every card of {half_suit}.",
            )

    def validate_pass(self, giver: Player, taker: Player) -> None:
        """Validate `giver` handing the turn to `taker`."""
        self.check_running()
        self.check_players(giver, taker)
        self.check_turn(giver)
        if not self.rules.freepass and self.requestable_cards(giver):
            raise FishError(ErrorKind.EARLY_PASS, "You can't pass while you still have cards to ask for.")
        if not self.requestable_cards(taker):
            raise FishError(ErrorKind.RECURSIVE_PASS, f"{taker} has nothing to ask for either.")
        if not self.rules.enemypass and taker.team is not giver.team:
            raise FishError(ErrorKind.ENEMY_PASS, "You can't pass your turn to the other team.")

    def validate_liquidate(self, team: Team) -> None:
        self.check_running()
        if self.game.liquidated:
            raise FishError(ErrorKind.ALREADY_LIQUIDATED, "The game is already in liquidation.")
        if not any(team is t for t in self.game.teams):
            raise FishError(ErrorKind.UNKNOWN_PLAYER, f"{team} isn't playing in this game.")
        if not team.is_empty():
            raise FishError(ErrorKind.EARLY_LIQUIDATE, f"{team} still has cards left.")

    def validate_abort(self, player: Player) -> None:
        self.check_running()
        self.check_players(player)
        if player.abort_voted:
            raise FishError(ErrorKind.ALREADY_VOTED, "You've already voted to abort this game.")
