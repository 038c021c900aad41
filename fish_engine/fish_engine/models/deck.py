"""Draw/discard deck over a fixed list of cards."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Iterable, Sequence

from fish_engine.errors import DeckExhaustedError

from .card import Card, build_card_universe

if TYPE_CHECKING:
    from fish_engine.config import DeckConfig


class Deck:
    """An ordered draw pile plus a discard pile.

    The card list given at construction is the deck's whole universe; cards
    only ever move between the draw pile, the discard pile and whoever they
    were dealt to.
    """

    def __init__(
        self,
        cards: Sequence[Card],
        autodiscard: bool = False,
        autosort: bool = True,
        rng: random.Random | None = None,
    ):
        """Initialize deck.

        Args:
            cards: Cards in the deck, top of the pile first.
            autodiscard: Put dealt cards straight onto the discard pile.
            autosort: Sort every dealt stack by card ordinal.
            rng: Random source (module-level random if not provided).
        """
        self.cards: tuple[Card, ...] = tuple(cards)
        self.autodiscard = autodiscard
        self.autosort = autosort
        self.rng = rng or random.Random()

        self._pile: list[Card] = list(self.cards)
        self._discard: list[Card] = []

    @property
    def size(self) -> int:
        """Number of cards left in the draw pile."""
        return len(self._pile)

    @property
    def discard_size(self) -> int:
        """Number of cards in the discard pile."""
        return len(self._discard)

    def reset(self) -> "Deck":
        """Put the discard pile back under the draw pile."""
        self._pile.extend(self._discard)
        self._discard = []
        return self

    def shuffle(self) -> "Deck":
        """Merge the discard pile back in and shuffle everything."""
        self.reset()
        self.rng.shuffle(self._pile)
        return self

    def discard(self, cards: Iterable[Card]) -> None:
        self._discard.extend(cards)

    def deal_some(self, count: int) -> list[Card]:
        """Deal up to `count` cards from the top of the pile.

        Returns fewer cards if the pile runs out.
        """
        stack = self._pile[:count]
        self._pile = self._pile[count:]
        if self.autodiscard:
            self.discard(stack)
        return self.sort_cards(stack) if self.autosort else stack

    def deal_one(self) -> Card | None:
        dealt = self.deal_some(1)
        return dealt[0] if dealt else None

    def deal(self, count: int) -> list[Card]:
        """Deal exactly `count` cards, reshuffling the discards if needed.

        Raises:
            DeckExhaustedError: If both piles run dry before `count` cards.
        """
        stack = self.deal_some(count)
        while len(stack) < count:
            if not self.discard_size:
                raise DeckExhaustedError(
                    f"Deck out of cards after {len(stack)} drawn ({count} requested)"
                )
            self.shuffle()
            stack += self.deal_some(count - len(stack))
        return self.sort_cards(stack) if self.autosort else stack

    def take_remaining(self) -> list[Card]:
        return self.deal_some(self.size)

    def partition_remaining(self, count: int) -> list[list[Card]]:
        """Split the draw pile into `count` nearly equal partitions.

        Each partition takes floor(remaining / partitions left), so sizes
        differ by at most one. The partitions are returned in shuffled order
        so seat order does not predict which slice a player receives.
        """
        if count < 1:
            raise ValueError("Need at least one partition")
        partitions = []
        for left in range(count, 0, -1):
            partitions.append(self.deal_some(self.size // left))
        self.rng.shuffle(partitions)
        return partitions

    @staticmethod
    def sort_cards(cards: list[Card]) -> list[Card]:
        """Sort cards in place by ordinal and return them."""
        cards.sort(key=lambda c: c.ordinal)
        return cards

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Deck(pile={self.size}, discard={self.discard_size})"


def filter_cards(config: DeckConfig) -> list[Card]:
    """Select the cards of the universe allowed by a deck configuration."""
    excluded_cards = set(config.excluded_cards)
    excluded_suits = set(config.excluded_suits)
    excluded_ranks = set(config.excluded_ranks)

    cards = []
    for card in build_card_universe():
        if card in excluded_cards:
            continue
        if card.is_joker:
            if not config.jokers:
                continue
        elif card.suit in excluded_suits or card.rank in excluded_ranks:
            continue
        cards.append(card)
    return cards


def build_deck(config: DeckConfig, rng: random.Random | None = None) -> Deck:
    """Build an unshuffled deck from a deck configuration."""
    return Deck(
        filter_cards(config),
        autodiscard=config.autodiscard,
        autosort=config.autosort,
        rng=rng,
    )
