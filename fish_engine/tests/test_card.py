"""Tests for card, deck and half-suit models."""

import random

import pytest
from pydantic import ValidationError

from fish_engine.config import DeckConfig
from fish_engine.errors import DeckExhaustedError
from fish_engine.models.card import Card, Rank, Suit, build_card_universe, card_for
from fish_engine.models.deck import Deck, build_deck, filter_cards
from fish_engine.models.half_suit import (
    build_half_suits,
    half_suit_for,
    half_suits_for,
)


class TestCard:
    """Tests for Card class."""

    def test_create_normal_card(self):
        """Test creating a normal card."""
        card = Card(suit=Suit.HEARTS, rank=Rank.QUEEN)
        assert card.suit == Suit.HEARTS
        assert card.rank == Rank.QUEEN
        assert not card.is_joker

    def test_joker_suits(self):
        """Jokers only exist in Spades (black) and Hearts (red)."""
        assert Card(suit=Suit.SPADES, rank=Rank.JOKER).is_joker
        assert Card(suit=Suit.HEARTS, rank=Rank.JOKER).is_joker
        with pytest.raises(ValidationError):
            Card(suit=Suit.CLUBS, rank=Rank.JOKER)

    def test_ordinal(self):
        """Ordinal is suit + 4 * rank."""
        assert card_for(Suit.SPADES, Rank.ACE).ordinal == 0
        assert card_for(Suit.CLUBS, Rank.ACE).ordinal == 3
        assert card_for(Suit.HEARTS, Rank.QUEEN).ordinal == 1 + 4 * 11
        assert card_for(Suit.HEARTS, Rank.JOKER).ordinal == 53

    def test_names(self):
        """Test long and short card names."""
        queen = card_for(Suit.HEARTS, Rank.QUEEN)
        assert str(queen) == "Queen of Hearts"
        assert queen.abbr == "Q♡"
        assert str(card_for(Suit.HEARTS, Rank.JOKER)) == "Red Joker"
        assert card_for(Suit.SPADES, Rank.JOKER).abbr == "BJo"

    def test_equality_and_hash(self):
        """Cards are compared by value."""
        a = Card(suit=Suit.CLUBS, rank=Rank.TEN)
        b = card_for(Suit.CLUBS, Rank.TEN)
        assert a == b
        assert len({a, b}) == 1

    def test_universe(self):
        """The universe has 52 ranked cards plus two jokers."""
        universe = build_card_universe()
        assert len(universe) == 54
        assert len(set(universe)) == 54
        assert sum(1 for c in universe if c.is_joker) == 2
        assert list(universe) == sorted(universe)

    def test_card_for_unknown(self):
        with pytest.raises(KeyError):
            card_for(Suit.DIAMONDS, Rank.JOKER)


class TestHalfSuit:
    """Tests for the half-suit catalog."""

    def test_catalog(self):
        """Jokers plus a low and a high half-suit per suit."""
        catalog = build_half_suits()
        assert len(catalog) == 9
        assert catalog[0].name == "Jokers"
        assert len(catalog[0]) == 2
        assert all(len(hs) == 6 for hs in catalog[1:])
        assert [hs.abbreviation for hs in catalog[1:3]] == ["LS", "HS"]

    def test_catalog_is_disjoint(self):
        """No card belongs to two half-suits."""
        cards = [c for hs in build_half_suits() for c in hs.cards]
        assert len(cards) == len(set(cards)) == 50

    def test_high_half_suit_includes_ace(self):
        high_spades = half_suit_for(card_for(Suit.SPADES, Rank.ACE))
        assert high_spades.name == "High Spades"
        assert card_for(Suit.SPADES, Rank.NINE) in high_spades

    def test_eights_belong_nowhere(self):
        assert half_suit_for(card_for(Suit.DIAMONDS, Rank.EIGHT)) is None

    def test_active_catalog(self):
        assert len(half_suits_for(False)) == 8
        assert len(half_suits_for(True)) == 9
        assert not any(hs.is_jokers for hs in half_suits_for(False))


class TestDeck:
    """Tests for Deck."""

    def test_default_filter(self):
        """The standard Fish deck drops the eights."""
        cards = filter_cards(DeckConfig())
        assert len(cards) == 50
        assert not any(c.rank == Rank.EIGHT for c in cards)

    def test_filter_without_jokers(self):
        cards = filter_cards(DeckConfig(jokers=False))
        assert len(cards) == 48
        assert not any(c.is_joker for c in cards)

    def test_filter_exclusions(self):
        config = DeckConfig(
            excluded_suits=[Suit.CLUBS],
            excluded_cards=[card_for(Suit.SPADES, Rank.ACE)],
            jokers=False,
        )
        cards = filter_cards(config)
        assert len(cards) == 35
        assert card_for(Suit.SPADES, Rank.ACE) not in cards

    def test_shuffle_is_seeded(self):
        a = build_deck(DeckConfig(), rng=random.Random(42)).shuffle()
        b = build_deck(DeckConfig(), rng=random.Random(42)).shuffle()
        assert a.take_remaining() == b.take_remaining()

    def test_deal_some_sorts(self):
        deck = build_deck(DeckConfig(), rng=random.Random(1)).shuffle()
        stack = deck.deal_some(10)
        assert stack == sorted(stack)
        assert deck.size == 40

    def test_deal_one(self):
        deck = Deck([card_for(Suit.SPADES, Rank.TWO)])
        assert deck.deal_one() == card_for(Suit.SPADES, Rank.TWO)
        assert deck.deal_one() is None

    def test_deal_reshuffles_discards(self):
        """Dealing past the pile pulls the discards back in."""
        cards = filter_cards(DeckConfig(jokers=False))[:4]
        deck = Deck(cards, autodiscard=True, rng=random.Random(0))
        deck.deal(3)
        assert deck.discard_size == 3
        stack = deck.deal(3)
        assert len(stack) == 3

    def test_deal_exhausted(self):
        deck = Deck(filter_cards(DeckConfig())[:2])
        with pytest.raises(DeckExhaustedError):
            deck.deal(3)

    @pytest.mark.parametrize("count", [4, 5, 6, 7, 17])
    def test_partition_remaining(self, count):
        """Partitions cover the deck and differ in size by at most one."""
        deck = build_deck(DeckConfig(), rng=random.Random(count)).shuffle()
        parts = deck.partition_remaining(count)
        sizes = [len(p) for p in parts]
        assert len(parts) == count
        assert max(sizes) - min(sizes) <= 1
        assert sorted(c for p in parts for c in p) == sorted(deck.cards)
        assert deck.size == 0

    def test_partition_needs_one(self):
        deck = build_deck(DeckConfig())
        with pytest.raises(ValueError):
            deck.partition_remaining(0)
