"""Formatters for game log output."""

from typing import Iterable

from fish_engine.models.card import Card, Rank, Suit
from fish_engine.models.player import Player

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.SPADES: "S",
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
}


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "QH" for Queen of Hearts, "RJo" for the red
        Joker).
    """
    if card.rank == Rank.JOKER:
        return f"{card.suit.color[0]}Jo"
    return f"{card.rank.abbr}{SUIT_CODES[card.suit]}"


def format_cards(cards: Iterable[Card]) -> str:
    """Format cards to a comma-separated string in ordinal order.

    Returns:
        Comma-separated card strings (e.g., "2S,3S,4S").
        Empty string if no cards.
    """
    return ",".join(format_card(c) for c in sorted(cards, key=lambda c: c.ordinal))


def format_player(player: Player) -> str:
    """Format a player as its table letter."""
    return player.character


def format_hands(players: Iterable[Player]) -> dict[str, str]:
    """Format all players' hands to dict keyed by table letter."""
    return {p.character: format_cards(p.hand) for p in players}
