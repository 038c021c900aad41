"""Strategy module for self-play bots."""

from fish_engine.strategy.base import Strategy
from fish_engine.strategy.simple import SimpleStrategy

__all__ = ["Strategy", "SimpleStrategy"]
