"""Shared fixtures and helpers for engine tests."""

import random

import pytest

from fish_engine.game.builder import GameBuilder
from fish_engine.models.card import Card, Rank, Suit, card_for
from fish_engine.models.half_suit import HalfSuit, build_half_suits

SUIT_LETTERS = {"S": Suit.SPADES, "H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS}
RANK_LETTERS = {rank.abbr: rank for rank in Rank if rank != Rank.JOKER}

# Team 0: alice, carol. Team 1: bob, dave. Seats alternate: B=alice, E=bob,
# F=carol, G=dave.
TEAM_0 = ["alice", "carol"]
TEAM_1 = ["bob", "dave"]


def card(code: str) -> Card:
    """Parse a test card code like "2S", "10H" or "QC"."""
    return card_for(SUIT_LETTERS[code[-1]], RANK_LETTERS[code[:-1]])


def half_suit(abbreviation: str) -> HalfSuit:
    for hs in build_half_suits():
        if hs.abbreviation == abbreviation:
            return hs
    raise KeyError(abbreviation)


def cards_of(*abbreviations: str) -> list[Card]:
    return [c for abbr in abbreviations for c in half_suit(abbr).cards]


def without(cards: list[Card], *codes: str) -> list[Card]:
    removed = {card(code) for code in codes}
    return [c for c in cards if c not in removed]


def standard_hands() -> dict[str, list[Card]]:
    """Hands where everyone but whoever holds two full half-suits can ask.

    alice: Low Spades except 2S, High Spades
    bob: 2S, Low Hearts, High Hearts
    carol: Low Diamonds except 2D, High Diamonds
    dave: 2D, Low Clubs, High Clubs
    """
    return {
        "alice": without(cards_of("LS", "HS"), "2S"),
        "bob": [card("2S")] + cards_of("LH", "HH"),
        "carol": without(cards_of("LD", "HD"), "2D"),
        "dave": [card("2D")] + cards_of("LC", "HC"),
    }


def whole_suit_hands() -> dict[str, list[Card]]:
    """Every player holds two complete half-suits."""
    return {
        "alice": cards_of("LS", "HS"),
        "bob": cards_of("LH", "HH"),
        "carol": cards_of("LD", "HD"),
        "dave": cards_of("LC", "HC"),
    }


def make_builder(**options):
    """Create a builder with the four test handles seated."""
    builder = GameBuilder()
    for handle in TEAM_0:
        builder.add_handle(handle, 0)
    for handle in TEAM_1:
        builder.add_handle(handle, 1)
    for key, value in options.items():
        builder.options.set(key, value)
    return builder


def make_game(hands=None, first="alice", observers=(), **options):
    """Build and start a four-player game with preset hands."""
    builder = make_builder(**options)
    game = builder.build(
        observers=observers,
        rng=random.Random(0),
        hands=hands if hands is not None else standard_hands(),
    )
    game.start(first)
    return game


@pytest.fixture
def builder():
    return make_builder()


@pytest.fixture
def game():
    return make_game()


@pytest.fixture
def players(game):
    return {h: game.player_for(h) for h in TEAM_0 + TEAM_1}
