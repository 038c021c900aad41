"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from fish_engine.models.card import Card, Rank, Suit
from fish_engine.models.player import PLAYER_CHARS


class RulesConfig(BaseModel):
    """Default values for the per-game rule options."""

    jokers: bool = False
    duplicates: bool = False
    bookkeeping: bool = False
    quick: bool = False
    freepass: bool = False
    enemypass: bool = False
    countercall: bool = False
    chaos: bool = False


class DeckConfig(BaseModel):
    """Deck filtering and dealing behaviour."""

    excluded_cards: list[Card] = Field(default_factory=list)
    excluded_suits: list[Suit] = Field(default_factory=list)
    excluded_ranks: list[Rank] = Field(default_factory=lambda: [Rank.EIGHT])
    jokers: bool = True
    autodiscard: bool = False
    autosort: bool = True


class GameConfig(BaseModel):
    """Table configuration."""

    min_players: int = Field(4, ge=2)
    max_players: int = Field(len(PLAYER_CHARS), ge=2, le=len(PLAYER_CHARS))
    num_players: int = Field(6, ge=2, le=len(PLAYER_CHARS))
    num_games: int = Field(10, ge=1)
    max_turns: int = Field(1000, ge=1)

    @model_validator(mode="after")
    def _check_player_bounds(self) -> "GameConfig":
        if self.min_players > self.max_players:
            raise ValueError("min_players must not exceed max_players")
        if not self.min_players <= self.num_players <= self.max_players:
            raise ValueError("num_players must lie between min_players and max_players")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_events: bool = False


class GameLogConfig(BaseModel):
    """Configuration for the JSONL game event log."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class Config(BaseModel):
    """Root configuration."""

    rules: RulesConfig = RulesConfig()
    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
