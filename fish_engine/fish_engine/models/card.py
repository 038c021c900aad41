"""Card, suit and rank models."""

from enum import IntEnum
from functools import lru_cache

from pydantic import BaseModel, model_validator


class Suit(IntEnum):
    """Card suit (value is the suit ordinal)."""

    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @property
    def color(self) -> str:
        return "Red" if self.is_red else "Black"

    def __str__(self) -> str:
        return self.name.title()


class Rank(IntEnum):
    """Card rank (value is the rank ordinal, Ace low)."""

    ACE = 0
    TWO = 1
    THREE = 2
    FOUR = 3
    FIVE = 4
    SIX = 5
    SEVEN = 6
    EIGHT = 7
    NINE = 8
    TEN = 9
    JACK = 10
    QUEEN = 11
    KING = 12
    JOKER = 13

    @property
    def abbr(self) -> str:
        return RANK_ABBRS[self]

    def __str__(self) -> str:
        return self.name.title()


SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♡",
    Suit.DIAMONDS: "♢",
    Suit.CLUBS: "♣",
}

RANK_ABBRS = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.JOKER: "*",
}

# Jokers only exist in the two low-ordinal suits (one black, one red)
JOKER_SUITS = (Suit.SPADES, Suit.HEARTS)


class Card(BaseModel, frozen=True):
    """Single playing card.

    Cards are compared and hashed by value, but the engine only ever hands out
    the instances from the card universe, so `card_for` lookups are identical
    objects as well.
    """

    suit: Suit
    rank: Rank

    @model_validator(mode="after")
    def _check_joker_suit(self) -> "Card":
        if self.rank == Rank.JOKER and self.suit not in JOKER_SUITS:
            raise ValueError("Jokers only exist in Spades and Hearts")
        return self

    @property
    def is_joker(self) -> bool:
        """Check if this card is a joker."""
        return self.rank == Rank.JOKER

    @property
    def ordinal(self) -> int:
        """Stable global ordinal used for sorting."""
        return int(self.suit) + len(Suit) * int(self.rank)

    @property
    def abbr(self) -> str:
        """Short form, e.g. "Q♡" or "RJo"."""
        if self.is_joker:
            return f"{self.suit.color[0]}Jo"
        return f"{self.rank.abbr}{self.suit.symbol}"

    def __lt__(self, other: "Card") -> bool:
        return self.ordinal < other.ordinal

    def __str__(self) -> str:
        if self.is_joker:
            return f"{self.suit.color} Joker"
        return f"{self.rank} of {self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.abbr})"


@lru_cache(maxsize=None)
def build_card_universe() -> tuple[Card, ...]:
    """Create every addressable card, ordered by ordinal.

    4 suits x 13 ranks plus the two jokers. The result is cached, so every
    caller shares the same card instances.
    """
    cards = []
    for rank in Rank:
        for suit in Suit:
            if rank == Rank.JOKER and suit not in JOKER_SUITS:
                continue
            cards.append(Card(suit=suit, rank=rank))
    return tuple(cards)


@lru_cache(maxsize=None)
def _card_index() -> dict[tuple[Suit, Rank], Card]:
    return {(c.suit, c.rank): c for c in build_card_universe()}


def card_for(suit: Suit, rank: Rank) -> Card:
    """Get the singleton card for a suit and rank.

    Raises:
        KeyError: If no such card exists (e.g. a Diamonds joker).
    """
    return _card_index()[(suit, rank)]
