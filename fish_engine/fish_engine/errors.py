"""Error types raised by the engine."""

from enum import Enum


class ErrorKind(str, Enum):
    """Rule violations a player can commit during normal play."""

    WRONG_TURN = "wrong_turn"
    BAD_REQUEST = "bad_request"
    TEAM_REQUEST = "team_request"
    DECLARE_SIZE_MISMATCH = "declare_size_mismatch"
    DECLARE_TEAM_MISMATCH = "declare_team_mismatch"
    DECLARE_HOMOGENEITY_MISMATCH = "declare_homogeneity_mismatch"
    BAD_SELF_DECLARE = "bad_self_declare"
    EARLY_LIQUIDATE = "early_liquidate"
    EARLY_PASS = "early_pass"
    RECURSIVE_PASS = "recursive_pass"
    ENEMY_PASS = "enemy_pass"
    ALREADY_CLAIMED = "already_claimed"
    ALREADY_VOTED = "already_voted"
    ALREADY_LIQUIDATED = "already_liquidated"
    NOT_STARTED = "not_started"
    GAME_STARTED = "game_started"
    GAME_FINISHED = "game_finished"
    UNKNOWN_PLAYER = "unknown_player"
    NOT_ENOUGH_PLAYERS = "not_enough_players"
    TOO_MANY_PLAYERS = "too_many_players"
    TEAMS_IMBALANCED = "teams_imbalanced"


class FishError(Exception):
    """Recoverable, user-facing rule violation.

    Raised before any state is touched, so the host can report the message
    and carry on with the same game.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"FishError({self.kind.name}, {self.message!r})"


class OptionError(Exception):
    """Misuse of an option store. Indicates a bug in the host layer."""


class InvalidOptionValue(OptionError, ValueError):
    """Option value rejected by its validation predicate."""


class FrozenConfigMutation(OptionError, RuntimeError):
    """Attempt to change options after they were frozen."""


class DeckExhaustedError(RuntimeError):
    """No cards left in either the draw or the discard pile."""
