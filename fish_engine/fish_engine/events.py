"""Notifications emitted by the engine.

Protocol operations never call listeners directly. They queue notifications
while mutating and flush them once the mutation is complete, so a failing
listener can neither block nor roll back a committed state change.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from fish_engine.models.card import Card
    from fish_engine.models.half_suit import HalfSuit
    from fish_engine.models.player import Player

logger = logging.getLogger(__name__)


class GameEvent(str, Enum):
    """Game-level notification types.

    Payloads (positional arguments passed to listeners):
        GAME_BEGIN: ()
        TURN_START: (player,)
        TURN_PASS: (giver, taker)
        HAND_CHANGE: (player, hand)
        SCORE_SET: (half_suit, team)
        LIQUIDATE: (team,)
        GAME_END: (winners,)
        REQUEST: (asker, target, card, success)
        DECLARE: (declarer, half_suit, assignment, correct)
    """

    GAME_BEGIN = "game_begin"
    TURN_START = "turn_start"
    TURN_PASS = "turn_pass"
    HAND_CHANGE = "hand_change"
    SCORE_SET = "score_set"
    LIQUIDATE = "liquidate"
    GAME_END = "game_end"
    REQUEST = "request"
    DECLARE = "declare"


Listener = Callable[..., None]


class EventBus:
    """Ordered publish/subscribe dispatch."""

    def __init__(self) -> None:
        self._listeners: dict[GameEvent, list[Listener]] = defaultdict(list)

    def subscribe(self, event: GameEvent, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def unsubscribe(self, event: GameEvent, listener: Listener) -> None:
        if listener in self._listeners[event]:
            self._listeners[event].remove(listener)

    def subscribe_all(self, listener: Callable[..., None]) -> None:
        """Subscribe one listener to every event; it receives (event, *args)."""
        for event in GameEvent:
            self.subscribe(event, _bind_event(listener, event))

    def publish(self, event: GameEvent, *args: Any) -> None:
        """Deliver an event to its listeners in subscription order."""
        for listener in list(self._listeners[event]):
            try:
                listener(*args)
            except Exception:
                logger.exception(f"Listener {listener!r} failed on {event.value}")


def _bind_event(listener: Callable[..., None], event: GameEvent) -> Listener:
    def bound(*args: Any) -> None:
        listener(event, *args)

    return bound


class PlayerObserver:
    """Per-player plugin interface.

    Subclasses override the hooks they care about. The engine creates one
    observer per player from the factories given to the builder.
    """

    name = "observer"

    def __init__(self, player: Player):
        self.player = player

    def on_hand_change(self, hand: frozenset[Card]) -> None:
        pass

    def on_turn_start(self) -> None:
        pass

    def on_take_card(self, card: Card) -> None:
        """This player received `card` from an opponent."""

    def on_give_card(self, card: Card) -> None:
        """This player lost `card` to an opponent."""

    def on_take_fail(self, card: Card) -> None:
        """This player asked for `card` and was refused."""

    def on_give_fail(self, card: Card) -> None:
        """This player was asked for `card` and did not have it."""

    def on_half_suit_removed(self, half_suit: HalfSuit) -> None:
        pass


ObserverFactory = Callable[["Player"], PlayerObserver]


@dataclass
class Notification:
    """A queued notification, delivered after the mutation commits.

    Either a bus event (`event` set) or a player observer hook (`player` and
    `hook` set).
    """

    args: tuple[Any, ...]
    event: GameEvent | None = None
    player: Player | None = None
    hook: str = ""

    def deliver(self, bus: EventBus) -> None:
        if self.event is not None:
            bus.publish(self.event, *self.args)
            return
        if self.player is None:
            return
        for observer in self.player.observers:
            try:
                getattr(observer, self.hook)(*self.args)
            except Exception:
                logger.exception(
                    f"Observer {observer.name!r} of {self.player} failed on {self.hook}"
                )
