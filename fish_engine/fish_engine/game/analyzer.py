"""Common-knowledge bookkeeping.

Tracks what every observer at the table can deduce about one player's hand
from the public outcome of requests. Nothing here uses private information.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from fish_engine.events import PlayerObserver
from fish_engine.models.card import Card
from fish_engine.models.half_suit import HalfSuit, half_suit_for

if TYPE_CHECKING:
    from fish_engine.models.player import Player


class KnowledgeReport(BaseModel):
    """Public facts about a player, as shown by a "common knowledge" query."""

    character: str
    hand_size: int
    bookkeeping: bool = False
    has: list[Card] = Field(default_factory=list)
    has_not: list[Card] = Field(default_factory=list)
    has_half_suit: list[HalfSuit] = Field(default_factory=list)


class KnowledgeAnalyzer(PlayerObserver):
    """Derives public deductions from one player's request outcomes.

    Sets:
        has: cards the player is known to hold
        has_not: cards the player is known not to hold
        has_half_suit: half-suits the player holds some card of, exact
            card unknown
    """

    name = "analyzer"

    def __init__(self, player: Player, duplicates: bool = False, chaos: bool = False):
        """Initialize analyzer.

        Args:
            player: Player being tracked
            duplicates: Whether players may ask for cards they hold
            chaos: Whether requests are unrestricted (asking then reveals nothing)
        """
        super().__init__(player)
        self.duplicates = duplicates
        self.chaos = chaos

        self.has: set[Card] = set()
        self.has_not: set[Card] = set()
        self.has_half_suit: set[HalfSuit] = set()

    def must_have_half_suit(self, half_suit: HalfSuit) -> bool:
        """Check if the player is already known to hold a card of `half_suit`."""
        if any(card in self.has for card in half_suit.cards):
            return True
        return half_suit in self.has_half_suit

    def on_take_card(self, card: Card) -> None:
        self.has.add(card)
        self.has_not.discard(card)
        self._forget_half_suit(card)

    def on_give_card(self, card: Card) -> None:
        self.has.discard(card)
        self.has_not.add(card)
        self._forget_half_suit(card)

    def on_take_fail(self, card: Card) -> None:
        """This player asked for `card` and was refused.

        In chaos mode nothing is deduced about the asker, since any card may
        be asked for, including one already held. The table-top rules do not
        say this explicitly; it still needs confirming.
        """
        if self.chaos:
            return
        if not self.duplicates:
            self.has_not.add(card)
        half_suit = half_suit_for(card)
        if half_suit is not None and not self.must_have_half_suit(half_suit):
            self.has_half_suit.add(half_suit)

    def on_give_fail(self, card: Card) -> None:
        self.has_not.add(card)

    def on_half_suit_removed(self, half_suit: HalfSuit) -> None:
        self.has.difference_update(half_suit.cards)
        self.has_not.difference_update(half_suit.cards)
        self.has_half_suit.discard(half_suit)

    def _forget_half_suit(self, card: Card) -> None:
        half_suit = half_suit_for(card)
        if half_suit is not None:
            self.has_half_suit.discard(half_suit)

    def report(self) -> KnowledgeReport:
        return KnowledgeReport(
            character=self.player.character,
            hand_size=self.player.hand_size(),
            bookkeeping=True,
            has=sorted(self.has, key=lambda c: c.ordinal),
            has_not=sorted(self.has_not, key=lambda c: c.ordinal),
            has_half_suit=sorted(self.has_half_suit, key=lambda hs: hs.name),
        )
