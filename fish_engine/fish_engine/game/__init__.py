"""Game logic module."""

from .analyzer import KnowledgeAnalyzer, KnowledgeReport
from .builder import GameBuilder
from .engine import FishGame, Phase
from .validator import MoveValidator

__all__ = [
    "FishGame",
    "GameBuilder",
    "KnowledgeAnalyzer",
    "KnowledgeReport",
    "MoveValidator",
    "Phase",
]
