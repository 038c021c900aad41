"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence, TextIO

from fish_engine.config import GameLogConfig
from fish_engine.events import GameEvent
from fish_engine.game.engine import FishGame
from fish_engine.models.card import Card
from fish_engine.models.half_suit import HalfSuit
from fish_engine.models.player import Player, Team

from .formatters import format_card, format_cards, format_hands, format_player


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None
        self._game: FishGame | None = None
        self._game_num = 0

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def attach(self, game: FishGame, game_num: int = 1) -> None:
        """Subscribe to a game's events. Call before `game.start()`.

        Args:
            game: Game to record.
            game_num: Game number written into every record.
        """
        self._game = game
        self._game_num = game_num
        bus = game.events
        bus.subscribe(GameEvent.GAME_BEGIN, self.log_game_begin)
        bus.subscribe(GameEvent.TURN_PASS, self.log_pass)
        bus.subscribe(GameEvent.REQUEST, self.log_request)
        bus.subscribe(GameEvent.DECLARE, self.log_declare)
        bus.subscribe(GameEvent.SCORE_SET, self.log_score)
        bus.subscribe(GameEvent.LIQUIDATE, self.log_liquidate)
        bus.subscribe(GameEvent.GAME_END, self.log_game_end)

    def _record(self, kind: str, **fields: Any) -> None:
        record: dict[str, Any] = {"type": kind, "game": self._game_num}
        if self._game is not None:
            record["turn"] = self._game.turn_number
        record.update(fields)
        self._write(record)

    def log_session_start(self, num_players: int, rules: dict[str, bool]) -> None:
        """Log session start with table information."""
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "players": num_players,
            "rules": rules,
        })

    def log_game_begin(self) -> None:
        """Log game start with teams and initial hands."""
        game = self._game
        if game is None:
            return
        self._record(
            "game_begin",
            teams={
                t.name: [format_player(p) for p in t.players] for t in game.teams
            },
            hands=format_hands(game.players),
            first_player=format_player(game.current_player) if game.current_player else None,
        )

    def log_request(self, asker: Player, target: Player, card: Card, success: bool) -> None:
        self._record(
            "request",
            asker=format_player(asker),
            target=format_player(target),
            card=format_card(card),
            success=success,
        )

    def log_pass(self, giver: Player, taker: Player) -> None:
        self._record("pass", giver=format_player(giver), taker=format_player(taker))

    def log_declare(
        self,
        declarer: Player,
        half_suit: HalfSuit,
        assignment: Sequence[Player],
        correct: bool,
    ) -> None:
        self._record(
            "declare",
            declarer=format_player(declarer),
            half_suit=half_suit.abbreviation,
            cards=format_cards(half_suit.cards),
            assignment="".join(format_player(p) for p in assignment),
            correct=correct,
        )

    def log_score(self, half_suit: HalfSuit, team: Team) -> None:
        self._record("score", half_suit=half_suit.abbreviation, team=team.name)

    def log_liquidate(self, team: Team) -> None:
        self._record("liquidate", team=team.name)

    def log_game_end(self, winners: Sequence[Team]) -> None:
        """Log game end with final scores."""
        game = self._game
        scores = {t.name: t.score() for t in game.teams} if game else {}
        self._record("game_end", winners=[t.name for t in winners], scores=scores)

    def log_session_end(self, total_games: int, wins: dict[str, int]) -> None:
        """Log session end with win counts per team (ties count for both)."""
        self._write({
            "type": "session_end",
            "total_games": total_games,
            "wins": wins,
        })
