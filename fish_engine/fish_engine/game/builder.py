"""Pre-game team assembly."""

from __future__ import annotations

import logging
import random
from typing import Hashable, Iterable, Mapping

from fish_engine.config import Config
from fish_engine.errors import ErrorKind, FishError
from fish_engine.events import ObserverFactory
from fish_engine.models.card import Card
from fish_engine.models.rules import GameRules, fish_options

from .engine import FishGame

logger = logging.getLogger(__name__)


class GameBuilder:
    """Collects players and options until a game is built.

    Handles are opaque to the builder; they are only compared and stored.
    Options stay editable through `options` until `build()` freezes them.
    """

    def __init__(self, config: Config | None = None):
        """Initialize builder.

        Args:
            config: Configuration (uses defaults if not provided). Rule
                defaults and player limits come from here.
        """
        self.config = config or Config()
        self.options = fish_options(self.config.rules.model_dump())
        self.teams: tuple[list[Hashable], list[Hashable]] = ([], [])
        self.started = False

    @property
    def min_players(self) -> int:
        return self.config.game.min_players

    @property
    def max_players(self) -> int:
        return self.config.game.max_players

    def team_for(self, handle: Hashable) -> int | None:
        """Get the team ordinal a handle is on, if any."""
        for ordinal, team in enumerate(self.teams):
            if handle in team:
                return ordinal
        return None

    def add_handle(self, handle: Hashable, side: int | None = None) -> int:
        """Put a handle on a team.

        Args:
            handle: Player handle
            side: Team ordinal (0 or 1). If None, a new handle joins the
                smaller team (team 0 on ties).

        Returns:
            Team ordinal joined, or -1 if the handle is already on that team.
        """
        self._check_open()
        current = self.team_for(handle)
        if side is None:
            if current is not None:
                return -1
            side = 1 if len(self.teams[0]) > len(self.teams[1]) else 0
        if side not in (0, 1):
            raise ValueError(f"Invalid side: {side}")
        if current == side:
            return -1
        if current is None and self.total_players() >= self.max_players:
            raise FishError(
                ErrorKind.TOO_MANY_PLAYERS,
                f"Too many players this game (capped at {self.max_players})!",
            )

        self.remove_handle(handle)
        self.teams[side].append(handle)
        logger.debug(f"Handle {handle!r} joined team {side}")
        return side

    def remove_handle(self, handle: Hashable) -> bool:
        """Take a handle off its team.

        Returns:
            True if the handle was on a team
        """
        self._check_open()
        ordinal = self.team_for(handle)
        if ordinal is None:
            return False
        self.teams[ordinal].remove(handle)
        return True

    def total_players(self) -> int:
        return sum(len(team) for team in self.teams)

    def validate(self) -> None:
        """Check that the roster can start a game."""
        self._check_open()
        if self.total_players() < self.min_players:
            raise FishError(
                ErrorKind.NOT_ENOUGH_PLAYERS,
                f"Can't start without at least {self.min_players} players!",
            )
        if abs(len(self.teams[0]) - len(self.teams[1])) >= 2:
            raise FishError(ErrorKind.TEAMS_IMBALANCED, "Can't start, teams too imbalanced!")

    def build(
        self,
        observers: Iterable[ObserverFactory] = (),
        rng: random.Random | None = None,
        hands: Mapping[Hashable, Iterable[Card]] | None = None,
    ) -> FishGame:
        """Freeze the options and create the game.

        Args:
            observers: Extra per-player observer factories
            rng: Random source for the deal and the starting player
            hands: Preset hands by handle instead of a random deal

        Returns:
            A dealt game; call `start()` once listeners are subscribed.
        """
        self.validate()
        rules = GameRules.from_options({key: self.options.get(key) for key in self.options.listing})
        logger.info(
            f"Building game: teams {len(self.teams[0])}v{len(self.teams[1])}"
        )
        game = FishGame(
            rules,
            [list(team) for team in self.teams],
            observers=observers,
            rng=rng,
            hands=hands,
        )
        # A failed deal leaves the builder open
        self.options.freeze()
        self.started = True
        return game

    def _check_open(self) -> None:
        if self.started:
            raise FishError(ErrorKind.GAME_STARTED, "The game's already started.")
