"""Rules engine for the Fish team card game."""

from fish_engine.errors import ErrorKind, FishError
from fish_engine.events import EventBus, GameEvent, PlayerObserver
from fish_engine.game import FishGame, GameBuilder, KnowledgeAnalyzer, Phase

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "EventBus",
    "FishError",
    "FishGame",
    "GameBuilder",
    "GameEvent",
    "KnowledgeAnalyzer",
    "Phase",
    "PlayerObserver",
]
