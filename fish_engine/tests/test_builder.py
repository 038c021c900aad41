"""Tests for pre-game team assembly and dealing."""

import random

import pytest

from fish_engine.config import Config, GameConfig, RulesConfig
from fish_engine.errors import ErrorKind, FishError, FrozenConfigMutation
from fish_engine.events import PlayerObserver
from fish_engine.game.analyzer import KnowledgeAnalyzer
from fish_engine.game.builder import GameBuilder
from fish_engine.game.engine import Phase
from fish_engine.models.card import Rank

from conftest import make_game, standard_hands


class TestRoster:
    """Tests for adding and removing handles."""

    def test_alternating_join(self):
        """Without a side, new handles join the smaller team."""
        builder = GameBuilder()
        assert [builder.add_handle(h) for h in "abcde"] == [0, 1, 0, 1, 0]
        assert builder.teams == (["a", "c", "e"], ["b", "d"])
        assert builder.total_players() == 5

    def test_repeat_join(self):
        builder = GameBuilder()
        builder.add_handle("a")
        assert builder.add_handle("a") == -1
        assert builder.add_handle("a", 0) == -1
        assert builder.total_players() == 1

    def test_switch_sides(self):
        builder = GameBuilder()
        builder.add_handle("a", 0)
        assert builder.add_handle("a", 1) == 1
        assert builder.teams == ([], ["a"])
        assert builder.team_for("a") == 1

    def test_invalid_side(self):
        builder = GameBuilder()
        with pytest.raises(ValueError):
            builder.add_handle("a", 2)

    def test_remove(self):
        builder = GameBuilder()
        builder.add_handle("a")
        assert builder.remove_handle("a")
        assert not builder.remove_handle("a")
        assert builder.team_for("a") is None

    def test_too_many_players(self):
        builder = GameBuilder(Config(game=GameConfig(max_players=5, num_players=5)))
        for h in "abcde":
            builder.add_handle(h)
        with pytest.raises(FishError) as exc:
            builder.add_handle("f")
        assert exc.value.kind == ErrorKind.TOO_MANY_PLAYERS
        # Switching an existing handle is still allowed at the cap
        assert builder.add_handle("a", 1) == 1

    def test_not_enough_players(self):
        builder = GameBuilder()
        for h in "abc":
            builder.add_handle(h)
        with pytest.raises(FishError) as exc:
            builder.build()
        assert exc.value.kind == ErrorKind.NOT_ENOUGH_PLAYERS
        assert not builder.started

    def test_teams_imbalanced(self):
        builder = GameBuilder()
        for h in "abc":
            builder.add_handle(h, 0)
        builder.add_handle("d", 1)
        with pytest.raises(FishError) as exc:
            builder.validate()
        assert exc.value.kind == ErrorKind.TEAMS_IMBALANCED


class TestBuild:
    """Tests for building a game."""

    def test_build_freezes(self, builder):
        game = builder.build(rng=random.Random(0))
        assert builder.started
        assert game.phase == Phase.DEALT
        with pytest.raises(FrozenConfigMutation):
            builder.options.set("quick", True)
        with pytest.raises(FishError) as exc:
            builder.add_handle("erin")
        assert exc.value.kind == ErrorKind.GAME_STARTED

    def test_rules_follow_options(self, builder):
        builder.options.set("jokers", True).set("chaos", True)
        game = builder.build(rng=random.Random(0))
        assert game.rules.jokers
        assert game.rules.chaos
        assert len(game.half_suits) == 9

    def test_config_rule_defaults(self):
        builder = GameBuilder(Config(rules=RulesConfig(quick=True)))
        assert builder.options.get("quick") is True

    def test_seating(self, builder):
        """Seats alternate between teams and get letters in order."""
        game = builder.build(rng=random.Random(0))
        assert [p.handle for p in game.players] == ["alice", "bob", "carol", "dave"]
        assert [p.character for p in game.players] == ["B", "E", "F", "G"]
        assert [p.team.ordinal for p in game.players] == [0, 1, 0, 1]
        assert game.player_for_character("f").handle == "carol"
        assert game.player_for("zed") is None
        assert game.team_for(game.player_for("bob")) is game.teams[1]

    @pytest.mark.parametrize("jokers", [False, True])
    @pytest.mark.parametrize("handles", ["abcd", "abcdef", "abcdefg"])
    def test_random_deal_partitions_deck(self, handles, jokers):
        """Every active card is dealt to exactly one player."""
        builder = GameBuilder()
        for h in handles:
            builder.add_handle(h)
        builder.options.set("jokers", jokers)
        game = builder.build(rng=random.Random(7))

        dealt = [c for p in game.players for c in p.hand]
        assert len(dealt) == len(set(dealt)) == len(game.deck.cards)
        assert set(dealt) == game.active_cards
        assert not any(c.rank == Rank.EIGHT for c in dealt)
        sizes = [p.hand_size() for p in game.players]
        assert max(sizes) - min(sizes) <= 1

    def test_seeded_deal(self):
        def deal(seed):
            builder = GameBuilder()
            for h in "abcd":
                builder.add_handle(h)
            game = builder.build(rng=random.Random(seed))
            return [sorted(p.hand) for p in game.players]

        assert deal(3) == deal(3)

    def test_preset_hands_must_partition(self, builder):
        hands = standard_hands()
        hands["alice"] = hands["alice"][1:]
        with pytest.raises(ValueError):
            builder.build(hands=hands)

    def test_failed_build_can_be_retried(self, builder):
        """A rejected deal leaves the builder open and its options editable."""
        hands = standard_hands()
        hands["alice"] = hands["alice"][1:]
        with pytest.raises(ValueError):
            builder.build(hands=hands)

        assert not builder.started
        assert not builder.options.is_frozen
        builder.options.set("quick", True)
        game = builder.build(hands=standard_hands())
        assert game.rules.quick
        assert builder.started
        assert builder.options.is_frozen

    def test_observers_attached(self, builder):
        class Recorder(PlayerObserver):
            name = "recorder"

        builder.options.set("bookkeeping", True)
        game = builder.build(observers=[Recorder], hands=standard_hands())
        for player in game.players:
            assert [o.name for o in player.observers] == ["analyzer", "recorder"]

    def test_observers_with_same_name(self):
        """Observers sharing a name are all attached and all notified."""
        turns = []

        class First(PlayerObserver):
            def on_turn_start(self):
                turns.append(("first", self.player.handle))

        class Second(PlayerObserver):
            def on_turn_start(self):
                turns.append(("second", self.player.handle))

        game = make_game(observers=[First, Second])
        assert [type(o) for o in game.player_for("alice").observers] == [First, Second]
        assert turns == [("first", "alice"), ("second", "alice")]

    def test_observer_named_like_analyzer(self):
        """A host observer cannot displace the bookkeeping analyzer."""

        class Impostor(PlayerObserver):
            name = "analyzer"

        game = make_game(observers=[Impostor], bookkeeping=True)
        alice = game.player_for("alice")
        assert isinstance(alice.plugin(KnowledgeAnalyzer), KnowledgeAnalyzer)
        assert isinstance(alice.plugin(Impostor), Impostor)
        assert game.common_knowledge(alice).bookkeeping
