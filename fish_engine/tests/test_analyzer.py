"""Tests for common-knowledge bookkeeping."""

from fish_engine.game.analyzer import KnowledgeAnalyzer

from conftest import card, half_suit, make_game


def analyzer_for(game, handle):
    return game.player_for(handle).plugin(KnowledgeAnalyzer)


class TestKnowledgeAnalyzer:
    """Tests for KnowledgeAnalyzer deductions."""

    def test_attached_with_bookkeeping(self):
        game = make_game(bookkeeping=True)
        assert all(isinstance(analyzer_for(game, p.handle), KnowledgeAnalyzer) for p in game.players)

    def test_not_attached_without_bookkeeping(self):
        game = make_game()
        assert analyzer_for(game, "alice") is None

    def test_successful_request(self):
        """The asker is known to hold the card and the target not to."""
        game = make_game(bookkeeping=True)
        alice, bob = game.player_for("alice"), game.player_for("bob")
        game.move_card(bob, alice, card("2S"))

        assert card("2S") in analyzer_for(game, "alice").has
        assert card("2S") in analyzer_for(game, "bob").has_not
        assert card("2S") not in analyzer_for(game, "bob").has

    def test_failed_request(self):
        """A failed ask reveals the half-suit but not which card."""
        game = make_game(bookkeeping=True)
        alice, dave = game.player_for("alice"), game.player_for("dave")
        game.move_card(dave, alice, card("2S"))

        knows_alice = analyzer_for(game, "alice")
        assert card("2S") in knows_alice.has_not
        assert knows_alice.has_half_suit == {half_suit("LS")}
        assert knows_alice.must_have_half_suit(half_suit("LS"))
        assert card("2S") in analyzer_for(game, "dave").has_not

    def test_failed_request_with_duplicates(self):
        """With duplicates allowed, asking says nothing about holding the card."""
        game = make_game(bookkeeping=True, duplicates=True)
        alice, bob = game.player_for("alice"), game.player_for("bob")
        game.move_card(bob, alice, card("2S"))
        game.move_card(bob, alice, card("3S"))

        knows_alice = analyzer_for(game, "alice")
        assert knows_alice.has == {card("2S")}
        assert card("3S") not in knows_alice.has_not
        # Already implied by the known 2S
        assert knows_alice.has_half_suit == set()

    def test_chaos_reveals_nothing_about_asker(self):
        game = make_game(bookkeeping=True, chaos=True)
        alice, dave = game.player_for("alice"), game.player_for("dave")
        game.move_card(dave, alice, card("3H"))

        knows_alice = analyzer_for(game, "alice")
        assert knows_alice.has_not == set()
        assert knows_alice.has_half_suit == set()
        assert card("3H") in analyzer_for(game, "dave").has_not

    def test_half_suit_removed(self):
        """Claimed cards drop out of every deduction."""
        game = make_game(bookkeeping=True)
        alice, dave = game.player_for("alice"), game.player_for("dave")
        game.move_card(dave, alice, card("2S"))
        game.declare(alice, half_suit("LS"), [alice] * 6)

        assert analyzer_for(game, "alice").has_not == set()
        assert analyzer_for(game, "alice").has_half_suit == set()
        assert analyzer_for(game, "dave").has_not == set()

    def test_taking_card_settles_half_suit(self):
        analyzer = KnowledgeAnalyzer(make_game().player_for("alice"))
        analyzer.on_take_fail(card("2S"))
        assert analyzer.has_half_suit == {half_suit("LS")}

        analyzer.on_take_card(card("2S"))
        assert analyzer.has == {card("2S")}
        assert analyzer.has_not == set()
        assert analyzer.has_half_suit == set()
        assert analyzer.must_have_half_suit(half_suit("LS"))

    def test_giving_card(self):
        analyzer = KnowledgeAnalyzer(make_game().player_for("bob"))
        analyzer.on_take_card(card("3S"))
        analyzer.on_give_card(card("3S"))
        assert analyzer.has == set()
        assert analyzer.has_not == {card("3S")}

    def test_report(self):
        """Common-knowledge queries go through the analyzer."""
        game = make_game(bookkeeping=True)
        alice, dave = game.player_for("alice"), game.player_for("dave")
        game.move_card(dave, alice, card("2S"))

        report = game.common_knowledge(alice)
        assert report.bookkeeping
        assert report.character == "B"
        assert report.hand_size == 11
        assert report.has == []
        assert report.has_not == [card("2S")]
        assert report.has_half_suit == [half_suit("LS")]
