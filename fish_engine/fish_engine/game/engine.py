"""Game engine for Fish."""

from __future__ import annotations

import logging
import math
import random
from enum import Enum
from functools import partial
from typing import Hashable, Iterable, Mapping, Sequence

from fish_engine.config import DeckConfig
from fish_engine.errors import ErrorKind, FishError
from fish_engine.events import EventBus, GameEvent, Notification, ObserverFactory
from fish_engine.models.card import Card
from fish_engine.models.deck import Deck, build_deck
from fish_engine.models.half_suit import HalfSuit, half_suits_for
from fish_engine.models.player import PLAYER_CHARS, Player, Team, make_teams
from fish_engine.models.rules import GameRules

from .analyzer import KnowledgeAnalyzer, KnowledgeReport
from .validator import MoveValidator

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Lifecycle of a built game."""

    DEALT = "dealt"  # Hands dealt, waiting for start()
    ACTIVE = "active"  # Turn-based play
    LIQUIDATED = "liquidated"  # No turn holder, only declarations remain
    FINISHED = "finished"  # Terminal, winners fixed


class FishGame:
    """Turn/protocol state machine for one game of Fish.

    Every protocol operation validates first, then mutates, then flushes the
    notifications it queued. A FishError means nothing changed.
    """

    def __init__(
        self,
        rules: GameRules,
        teams: Sequence[Sequence[Hashable]],
        observers: Iterable[ObserverFactory] = (),
        rng: random.Random | None = None,
        hands: Mapping[Hashable, Iterable[Card]] | None = None,
    ):
        """Initialize game and deal hands.

        Args:
            rules: Frozen rule set
            teams: Handles of each team's players (exactly two teams)
            observers: Factories creating per-player observers
            rng: Random source for shuffling and the starting player
            hands: Preset hands by handle instead of a random deal; must
                cover the active deck exactly
        """
        if len(teams) != 2:
            raise ValueError("Fish is played by exactly two teams")

        self.rules = rules
        self.rng = rng or random.Random()
        self.events = EventBus()

        self.half_suits: tuple[HalfSuit, ...] = half_suits_for(rules.jokers)
        self.remaining_half_suits: list[HalfSuit] = list(self.half_suits)
        self.win_threshold = 1 + len(self.half_suits) // 2

        self.phase = Phase.DEALT
        self.current_player: Player | None = None
        self.winners: list[Team] = []
        self.turn_number = 0

        self.deck: Deck = build_deck(DeckConfig(jokers=rules.jokers), rng=self.rng).shuffle()
        self.teams: tuple[Team, Team] = make_teams()
        self.players: list[Player] = []
        self._seat_players(teams, hands)

        factories: list[ObserverFactory] = []
        if rules.bookkeeping:
            factories.append(
                partial(KnowledgeAnalyzer, duplicates=rules.duplicates, chaos=rules.chaos)
            )
        factories.extend(observers)
        for player in self.players:
            for factory in factories:
                player.attach(factory(player))

        self.validator = MoveValidator(self)
        self._pending: list[Notification] = []

        logger.info(
            f"Game created: {len(self.players)} players, "
            f"{len(self.half_suits)} half-suits, rules={rules.model_dump()}"
        )

    def _seat_players(
        self,
        teams: Sequence[Sequence[Hashable]],
        hands: Mapping[Hashable, Iterable[Card]] | None,
    ) -> None:
        """Seat players alternating between teams and hand out cards."""
        seats: list[tuple[int, Hashable]] = []
        for i in range(max(len(t) for t in teams)):
            for ordinal, handles in enumerate(teams):
                if i < len(handles):
                    seats.append((ordinal, handles[i]))

        if len(seats) > len(PLAYER_CHARS):
            raise ValueError(f"At most {len(PLAYER_CHARS)} players are supported")

        if hands is None:
            dealt = self.deck.partition_remaining(len(seats))
        else:
            dealt = self._preset_hands([h for _, h in seats], hands)

        for seat, ((ordinal, handle), hand) in enumerate(zip(seats, dealt)):
            team = self.teams[ordinal]
            player = Player(handle, team, hand, character=PLAYER_CHARS[seat])
            team.players.append(player)
            self.players.append(player)

    def _preset_hands(
        self,
        handles: list[Hashable],
        hands: Mapping[Hashable, Iterable[Card]],
    ) -> list[list[Card]]:
        if set(hands) != set(handles):
            raise ValueError("Preset hands must be given for exactly the seated players")
        dealt = [list(hands[h]) for h in handles]
        flat = [card for hand in dealt for card in hand]
        if len(flat) != len(set(flat)) or set(flat) != set(self.deck.cards):
            raise ValueError("Preset hands must partition the active deck")
        self.deck.take_remaining()
        return dealt

    # State accessors

    @property
    def started(self) -> bool:
        return self.phase != Phase.DEALT

    @property
    def liquidated(self) -> bool:
        return self.phase == Phase.LIQUIDATED

    @property
    def finished(self) -> bool:
        return self.phase == Phase.FINISHED

    @property
    def active_cards(self) -> frozenset[Card]:
        """Cards still in play (not yet absorbed into a claimed half-suit)."""
        return frozenset(card for hs in self.remaining_half_suits for card in hs.cards)

    @property
    def abort_votes(self) -> int:
        return sum(1 for p in self.players if p.abort_voted)

    @property
    def abort_target(self) -> int:
        return math.ceil(len(self.players) / 2)

    def player_for(self, handle: Hashable) -> Player | None:
        for player in self.players:
            if player.handle == handle:
                return player
        return None

    def player_for_character(self, character: str) -> Player | None:
        for player in self.players:
            if player.character == character.upper():
                return player
        return None

    def team_for(self, player: Player) -> Team:
        return player.team

    def can_request(self, player: Player, card: Card) -> bool:
        return self.validator.can_request(player, card)

    def requestable_cards(self, player: Player) -> list[Card]:
        return self.validator.requestable_cards(player)

    def common_knowledge(self, player: Player) -> KnowledgeReport:
        """Get what everyone at the table knows about a player's hand."""
        self.validator.check_players(player)
        analyzer = player.plugin(KnowledgeAnalyzer)
        if isinstance(analyzer, KnowledgeAnalyzer):
            return analyzer.report()
        return KnowledgeReport(character=player.character, hand_size=player.hand_size())

    # Protocol operations

    def start(self, first: Hashable | None = None) -> Player:
        """Pick the starting player and begin turn-based play.

        Args:
            first: Handle of the starting player (random if not given)

        Returns:
            The starting player
        """
        if self.started:
            raise FishError(ErrorKind.GAME_STARTED, "The game's already started.")
        if first is None:
            player = self.rng.choice(self.players)
        else:
            player = self.player_for(first)
            if player is None:
                raise ValueError(f"Unknown starting handle: {first!r}")

        self.phase = Phase.ACTIVE
        self.turn_number = 1
        for p in self.players:
            self._queue_hand_change(p)
        self._queue(GameEvent.GAME_BEGIN)
        self._set_turn(player)
        logger.info(f"Game started, first player: {player}")
        self._flush()
        return player

    def move_card(self, src: Player, dest: Player, card: Card) -> bool:
        """`dest` (the turn holder) asks `src` for `card`.

        On success the card changes hands and `dest` keeps the turn; on
        failure the turn goes to `src`.

        Returns:
            True if `src` had the card
        """
        self.validator.validate_request(src, dest, card)

        success = src.has_card(card)
        if success:
            src.hand.discard(card)
            dest.hand.add(card)
            self._queue_hook(dest, "on_take_card", card)
            self._queue_hook(src, "on_give_card", card)
            self._queue_hand_change(src)
            self._queue_hand_change(dest)
            next_player = dest
        else:
            self._queue_hook(dest, "on_take_fail", card)
            self._queue_hook(src, "on_give_fail", card)
            next_player = src

        self.turn_number += 1
        self._queue(GameEvent.REQUEST, dest, src, card, success)
        self._set_turn(next_player)
        logger.info(f"{dest} asked {src} for {card.abbr}: {'success' if success else 'fail'}")
        self._flush()
        return success

    def declare(
        self,
        declarer: Player,
        half_suit: HalfSuit,
        assignment: Sequence[Player],
    ) -> bool:
        """Declare who holds each card of a half-suit.

        `assignment` names one player per card, in the half-suit's card
        order. A correct declaration scores for the declarer's team; a wrong
        one scores for the opponent of the team that was named.

        Returns:
            True if every named player holds the assigned card
        """
        named_team = self.validator.validate_declare(declarer, half_suit, assignment)

        correct = all(p.has_card(card) for card, p in zip(half_suit.cards, assignment))
        winner = declarer.team if correct else named_team.opponent

        self._queue(GameEvent.DECLARE, declarer, half_suit, tuple(assignment), correct)
        logger.info(
            f"{declarer} declared {half_suit}: {'correct' if correct else 'wrong'}, "
            f"awarded to {winner}"
        )
        self._claim(half_suit, winner)
        self._flush()
        return correct

    def declare_self(self, declarer: Player, half_suit: HalfSuit) -> bool:
        """Declare a half-suit held entirely by the declarer."""
        self.validator.validate_self_declare(declarer, half_suit)
        return self.declare(declarer, half_suit, [declarer] * len(half_suit.cards))

    def pass_turn(self, giver: Player, taker: Player) -> None:
        """Hand the turn from the current holder to another player."""
        self.validator.validate_pass(giver, taker)

        self.turn_number += 1
        self._queue(GameEvent.TURN_PASS, giver, taker)
        self._set_turn(taker)
        logger.info(f"{giver} passed the turn to {taker}")
        self._flush()

    def liquidate(self, team: Team) -> None:
        """Enter liquidation once every member of `team` is out of cards."""
        self.validator.validate_liquidate(team)

        self.phase = Phase.LIQUIDATED
        self.current_player = None
        self._queue(GameEvent.LIQUIDATE, team)
        logger.info(f"{team} claims liquidation")
        self._flush()

    def vote_abort(self, player: Player) -> bool:
        """Record a vote to cancel the game.

        Returns:
            True if the vote ended the game (no winners)
        """
        self.validator.validate_abort(player)

        player.abort_voted = True
        logger.info(f"{player} voted to abort ({self.abort_votes}/{self.abort_target})")
        if self.abort_votes >= self.abort_target:
            self._finish([])
        self._flush()
        return self.finished

    # Internals

    def _claim(self, half_suit: HalfSuit, team: Team) -> None:
        """Take a half-suit out of circulation and award it to `team`."""
        cards = set(half_suit.cards)
        for player in self.players:
            if player.hand & cards:
                player.hand -= cards
                self._queue_hand_change(player)

        self.remaining_half_suits.remove(half_suit)
        team.owned_half_suits.append(half_suit)
        for player in self.players:
            self._queue_hook(player, "on_half_suit_removed", half_suit)
        self._queue(GameEvent.SCORE_SET, half_suit, team)
        self._check_end()

    def _check_end(self) -> None:
        winners: list[Team] = []
        if self.rules.quick:
            winners = [t for t in self.teams if t.score() >= self.win_threshold]
        if not winners and not self.remaining_half_suits:
            top = max(t.score() for t in self.teams)
            winners = [t for t in self.teams if t.score() == top]
        if winners:
            self._finish(winners)

    def _finish(self, winners: list[Team]) -> None:
        self.phase = Phase.FINISHED
        self.current_player = None
        self.winners = winners
        self._queue(GameEvent.GAME_END, tuple(winners))
        scores = "-".join(str(t.score()) for t in self.teams)
        logger.info(f"Game over ({scores}), winners: {[t.name for t in winners]}")

    def _set_turn(self, player: Player) -> None:
        if player is self.current_player:
            return
        self.current_player = player
        self._queue_hook(player, "on_turn_start")
        self._queue(GameEvent.TURN_START, player)

    def _queue(self, event: GameEvent, *args: object) -> None:
        self._pending.append(Notification(args=args, event=event))

    def _queue_hook(self, player: Player, hook: str, *args: object) -> None:
        self._pending.append(Notification(args=args, player=player, hook=hook))

    def _queue_hand_change(self, player: Player) -> None:
        hand = frozenset(player.hand)
        self._queue_hook(player, "on_hand_change", hand)
        self._queue(GameEvent.HAND_CHANGE, player, hand)

    def _flush(self) -> None:
        """Deliver queued notifications in order."""
        pending, self._pending = self._pending, []
        for notification in pending:
            notification.deliver(self.events)

    def __repr__(self) -> str:
        scores = "-".join(str(t.score()) for t in self.teams)
        return (
            f"FishGame(phase={self.phase.value}, players={len(self.players)}, "
            f"score={scores}, remaining={len(self.remaining_half_suits)})"
        )
