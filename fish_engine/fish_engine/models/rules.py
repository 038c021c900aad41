"""Fish rule options and the immutable rule set a game runs with."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from .options import OptionSpec, Options, is_bool

FISH_OPTIONS: list[OptionSpec] = [
    OptionSpec(
        key="jokers",
        name="Jokers",
        description="Whether Jokers are enabled for this game",
        default=False,
        predicate=is_bool,
    ),
    OptionSpec(
        key="duplicates",
        name="Duplicate Requests",
        description="Whether you're allowed to ask for a card you have",
        default=False,
        predicate=is_bool,
    ),
    OptionSpec(
        key="bookkeeping",
        name="Bookkeeping",
        description="Whether the game will track common knowledge",
        default=False,
        predicate=is_bool,
    ),
    OptionSpec(
        key="quick",
        name="Quick Finish",
        description="Whether the game ends as soon as a team holds a majority of half-suits",
        default=False,
        predicate=is_bool,
    ),
    OptionSpec(
        key="freepass",
        name="Free Passing",
        description="Whether you can pass your turn while you still have cards to ask for",
        default=False,
        predicate=is_bool,
    ),
    OptionSpec(
        key="enemypass",
        name="Enemy Passing",
        description="Whether you can pass your turn to the opposing team",
        default=False,
        predicate=is_bool,
    ),
    OptionSpec(
        key="countercall",
        name="Countercalls",
        description="Whether you can declare a half-suit held entirely by the other team",
        default=False,
        predicate=is_bool,
    ),
    OptionSpec(
        key="chaos",
        name="No Holds Barred",
        description="Whether players can ask for Any Card Whatsoever",
        default=False,
        predicate=is_bool,
    ),
]


class GameRules(BaseModel, frozen=True):
    """Rule switches for a running game. Immutable."""

    jokers: bool = False
    duplicates: bool = False
    bookkeeping: bool = False
    quick: bool = False
    freepass: bool = False
    enemypass: bool = False
    countercall: bool = False
    chaos: bool = False

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "GameRules":
        """Build rules from a frozen option snapshot."""
        return cls(**{key: options[key] for key in cls.model_fields if key in options})


def fish_options(defaults: Mapping[str, bool] | None = None) -> Options:
    """Create an option store for a new game.

    Args:
        defaults: Table defaults overriding the built-in ones (e.g. from
            `RulesConfig`).
    """
    options = Options(FISH_OPTIONS)
    for key, value in (defaults or {}).items():
        options.set(key, value)
    return options
