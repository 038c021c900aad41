"""Half-suit catalog."""

import re
from functools import lru_cache

from pydantic import BaseModel

from .card import JOKER_SUITS, Card, Rank, Suit, card_for

LOW_RANKS = (Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX, Rank.SEVEN)
HIGH_RANKS = (Rank.NINE, Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE)

JOKERS_NAME = "Jokers"


class HalfSuit(BaseModel, frozen=True):
    """Named group of cards claimed as a unit.

    The card order is fixed; declarations list one owner per card in this
    order.
    """

    name: str
    cards: tuple[Card, ...]

    @property
    def abbreviation(self) -> str:
        """Upper-case initials, e.g. "LS" for Low Spades."""
        return re.sub(r"[^A-Z]+", "", self.name)

    @property
    def is_jokers(self) -> bool:
        return self.name == JOKERS_NAME

    def __contains__(self, card: Card) -> bool:
        return card in self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"HalfSuit({self.name!r})"


@lru_cache(maxsize=None)
def build_half_suits() -> tuple[HalfSuit, ...]:
    """Create the full catalog: Jokers, then Low/High of every suit."""
    catalog = [
        HalfSuit(
            name=JOKERS_NAME,
            cards=tuple(card_for(suit, Rank.JOKER) for suit in JOKER_SUITS),
        )
    ]
    for suit in Suit:
        catalog.append(
            HalfSuit(
                name=f"Low {suit}",
                cards=tuple(card_for(suit, rank) for rank in LOW_RANKS),
            )
        )
        catalog.append(
            HalfSuit(
                name=f"High {suit}",
                cards=tuple(card_for(suit, rank) for rank in HIGH_RANKS),
            )
        )
    return tuple(catalog)


@lru_cache(maxsize=None)
def _half_suit_index() -> dict[Card, HalfSuit]:
    return {card: hs for hs in build_half_suits() for card in hs.cards}


def half_suit_for(card: Card) -> HalfSuit | None:
    """Get the half-suit containing a card (None for eights)."""
    return _half_suit_index().get(card)


def half_suits_for(jokers: bool) -> tuple[HalfSuit, ...]:
    """Get the active catalog for a game."""
    return tuple(hs for hs in build_half_suits() if jokers or not hs.is_jokers)
