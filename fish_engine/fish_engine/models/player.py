"""Player and team models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, Iterable

from .card import Card

if TYPE_CHECKING:
    from fish_engine.events import PlayerObserver

    from .half_suit import HalfSuit

# One letter per player, which also caps the table size
PLAYER_CHARS = "BEFGIMNOPRTUVWXYZ"

TEAM_NAMES = ("Trivial", "Obvious")


class Player:
    """A seat at the table.

    The handle is supplied by the host and only used for equality and
    lookup. The hand is only changed by the engine.
    """

    def __init__(
        self,
        handle: Hashable,
        team: Team,
        hand: Iterable[Card],
        character: str = "",
    ):
        self.handle = handle
        self.team = team
        self.hand: set[Card] = set(hand)
        self.character = character

        self.observers: list[PlayerObserver] = []
        self.abort_voted = False

    def attach(self, observer: PlayerObserver) -> None:
        """Attach an observer plugin. Observers are notified in attach order."""
        self.observers.append(observer)

    def plugin(self, kind: type[PlayerObserver]) -> PlayerObserver | None:
        """Get the first attached observer of the given type, if any."""
        for observer in self.observers:
            if isinstance(observer, kind):
                return observer
        return None

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def hand_size(self) -> int:
        return len(self.hand)

    def is_empty(self) -> bool:
        return not self.hand

    def __str__(self) -> str:
        return f"Player[{self.character or '?'}:{self.handle}]"

    def __repr__(self) -> str:
        return (
            f"Player(handle={self.handle!r}, character={self.character!r}, "
            f"team={self.team.ordinal}, cards={len(self.hand)})"
        )


class Team:
    """One side of the table and the half-suits it has claimed."""

    def __init__(self, ordinal: int):
        self.ordinal = ordinal
        self.players: list[Player] = []
        self.owned_half_suits: list[HalfSuit] = []
        self.opponent: Team | None = None

    @property
    def name(self) -> str:
        return TEAM_NAMES[self.ordinal]

    def score(self) -> int:
        """Number of half-suits claimed by this team."""
        return len(self.owned_half_suits)

    def is_empty(self) -> bool:
        """Check if every member is out of cards."""
        return all(p.is_empty() for p in self.players)

    def __str__(self) -> str:
        return f"Team {self.name}"

    def __repr__(self) -> str:
        return f"Team({self.ordinal}, players={len(self.players)}, score={self.score()})"


def make_teams() -> tuple[Team, Team]:
    """Create the two opposing teams, linked to each other."""
    first, second = Team(0), Team(1)
    first.opponent = second
    second.opponent = first
    return first, second
