"""Game models."""

from .card import Card, Rank, Suit, build_card_universe, card_for
from .deck import Deck, build_deck
from .half_suit import HalfSuit, build_half_suits, half_suit_for, half_suits_for
from .options import FrozenOptions, Options, OptionSpec
from .player import PLAYER_CHARS, TEAM_NAMES, Player, Team, make_teams
from .rules import FISH_OPTIONS, GameRules, fish_options

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "build_card_universe",
    "card_for",
    "Deck",
    "build_deck",
    "HalfSuit",
    "build_half_suits",
    "half_suit_for",
    "half_suits_for",
    "FrozenOptions",
    "Options",
    "OptionSpec",
    "PLAYER_CHARS",
    "TEAM_NAMES",
    "Player",
    "Team",
    "make_teams",
    "FISH_OPTIONS",
    "GameRules",
    "fish_options",
]
