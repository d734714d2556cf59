"""
Tests for the oscillation guard.
"""

from patience.engine_core.action import Outcome
from patience.engine_core.oscillation import OscillationGuard
from patience.session import GameLoop, Session

from .factories import lane, table


class TestOscillationGuard:
    def test_history_is_bounded(self):
        guard = OscillationGuard()
        history = ()
        for code in ["12", "34", "56", "71"]:
            history = guard.record(history, code)
        assert history == ("34", "56", "71")

    def test_needs_three_entries(self):
        guard = OscillationGuard()
        assert not guard.is_oscillating(("12", "21"))

    def test_back_and_forth(self):
        guard = OscillationGuard()
        assert guard.is_oscillating(("12", "21", "12"))

    def test_other_patterns(self):
        guard = OscillationGuard()
        assert not guard.is_oscillating(("12", "23", "12"))
        assert not guard.is_oscillating(("12", "21", "13"))
        assert not guard.is_oscillating(("12", "12", "12"))

    def test_check_records_before_detecting(self):
        guard = OscillationGuard()
        history, blocked = guard.check(("12", "21"), "12")
        assert history == ("12", "21", "12")
        assert blocked


class TestOscillationInGameLoop:
    """The guard as seen through the command interpreter."""

    def make_loop(self):
        session = Session(session_id="s", game_state=table(lanes={1: lane(1, "KS")}))
        return session, GameLoop(session)

    def test_third_bounce_is_blocked(self):
        session, loop = self.make_loop()

        first = loop.process_command("121")
        second = loop.process_command("211")
        third = loop.process_command("121")

        assert first.success and first.score_delta == 5
        assert second.success and second.score_delta == 5
        assert not third.success
        assert third.outcome == Outcome.OSCILLATION_BLOCKED
        assert third.score_delta == 0

        state = session.game_state
        assert state.score == 10
        assert state.move_count == 2
        assert state.lane(1).top_card is not None
        assert state.recent_commands == ("12", "21", "12")

    def test_blocked_attempts_are_still_recorded(self):
        session, loop = self.make_loop()
        for token in ["121", "211", "121", "211"]:
            loop.process_command(token)

        assert session.game_state.recent_commands == ("21", "12", "21")
        assert session.game_state.score == 10

    def test_rejected_moves_are_recorded(self):
        session, loop = self.make_loop()
        result = loop.process_command("341")

        assert not result.success
        assert result.outcome == Outcome.EMPTY_SOURCE
        assert session.game_state.recent_commands == ("34",)

    def test_two_character_moves_are_not_tracked(self):
        session, loop = self.make_loop()
        for token in ["12", "21", "12"]:
            assert loop.process_command(token).success

        assert session.game_state.recent_commands == ()
        assert session.game_state.score == 15
