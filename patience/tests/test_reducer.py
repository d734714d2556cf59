"""
Tests for the reducer (state transitions).

Tests:
- Action application
- State mutation correctness and atomicity
- Card visibility
- Scoring and move counting
- Error handling
"""

from patience.engine_core.action import Action, Outcome
from patience.engine_core.reducer import Reducer, ScoringRules, apply_action
from patience.engine_core.state import GamePhase, Rank, Suit

from .factories import card, foundation, lane, table


class TestDrawAction:
    """Tests for draw and recycle."""

    def test_draw_moves_top_card_to_reserve(self):
        state = table(draw=["3C", "9H"])
        result = apply_action(state, Action.draw())

        assert result.success
        assert result.new_state.draw_pile.cards == [card("3C")]
        assert result.new_state.reserve.top_card == card("9H")
        assert result.new_state.move_count == 1
        assert result.new_state.score == 0
        assert "9H" in result.message

    def test_recycle_when_draw_pile_empty(self):
        state = table(reserve=["3C", "9H", "JD"])
        result = apply_action(state, Action.draw())

        assert result.success
        assert result.new_state.reserve.is_empty
        assert result.new_state.draw_pile.cards == [card("3C"), card("9H"), card("JD")]
        assert result.new_state.move_count == 0
        assert result.new_state.score == 0
        assert "Recycled" in result.message

    def test_draw_with_nothing_left(self):
        state = table()
        result = apply_action(state, Action.draw())

        assert not result.success
        assert result.outcome == Outcome.EMPTY_SOURCE
        assert result.message

    def test_draw_from_dealt_game(self, dealt_state):
        result = apply_action(dealt_state, Action.draw())

        assert result.success
        assert result.new_state.draw_pile.count == 23
        assert result.new_state.card_count == 52
        # Original state is untouched
        assert dealt_state.draw_pile.count == 24


class TestLaneToLane:
    """Tests for lane-to-lane moves."""

    def test_single_card_move(self):
        state = table(lanes={1: lane(1, "QH"), 2: lane(2, "KS")})
        result = apply_action(state, Action.lane_to_lane(1, 2))

        assert result.success
        new_state = result.new_state
        assert new_state.lane(1).is_empty
        assert new_state.lane(2).top_cards(2) == [card("KS"), card("QH")]
        assert new_state.score == 5
        assert new_state.move_count == 1

    def test_stack_move_preserves_order_and_scores_per_card(self):
        state = table(lanes={
            1: lane(1, "4D", "10S", "9H", "8C", hidden=1),
            2: lane(2, "JD"),
        })
        result = apply_action(state, Action.lane_to_lane(1, 2, 3))

        assert result.success
        new_state = result.new_state
        assert new_state.lane(2).top_cards(4) == [card("JD"), card("10S"), card("9H"), card("8C")]
        assert new_state.score == 15
        assert result.score_delta == 15
        # 4D is revealed
        assert new_state.lane(1).count == 1
        assert not new_state.lane(1).cards[0].hidden

    def test_visibility_after_move(self):
        """Moving the top card reveals the card below it."""
        state = table(lanes={1: lane(1, "QH", "KS", hidden=1)})
        result = apply_action(state, Action.lane_to_lane(1, 2))

        assert result.success
        assert not result.new_state.lane(1).cards[0].hidden
        assert not result.new_state.lane(2).cards[0].hidden

    def test_king_to_empty_lane(self):
        state = table(lanes={2: lane(2, "KS")})
        result = apply_action(state, Action.lane_to_lane(2, 1))

        assert result.success
        assert result.new_state.lane(1).top_card == card("KS")

    def test_non_king_to_empty_lane_rejected(self):
        state = table(lanes={2: lane(2, "QD")})
        result = apply_action(state, Action.lane_to_lane(2, 1))

        assert not result.success
        assert result.outcome == Outcome.REJECTED_MOVE
        assert "Only Kings" in result.error

    def test_same_color_rejected(self):
        state = table(lanes={1: lane(1, "7S"), 2: lane(2, "6C")})
        result = apply_action(state, Action.lane_to_lane(2, 1))

        assert not result.success
        assert result.new_state is None
        assert state.lane(2).top_card == card("6C")

    def test_invalid_stack_rejected(self):
        state = table(lanes={1: lane(1, "10S", "9S"), 2: lane(2, "JD")})
        result = apply_action(state, Action.lane_to_lane(1, 2, 2))

        assert not result.success
        assert "valid sequence" in result.error

    def test_hidden_cards_rejected(self):
        state = table(lanes={1: lane(1, "10S", "9H", hidden=1), 2: lane(2, "JD")})
        result = apply_action(state, Action.lane_to_lane(1, 2, 2))

        assert not result.success
        assert state.lane(1).cards[0].hidden

    def test_too_many_cards_rejected(self):
        state = table(lanes={1: lane(1, "KS"), 2: lane(2, "KD")})
        result = apply_action(state, Action.lane_to_lane(1, 2, 4))

        assert not result.success
        assert "Not enough" in result.error

    def test_empty_source(self):
        state = table(lanes={2: lane(2, "KD")})
        result = apply_action(state, Action.lane_to_lane(1, 2))

        assert not result.success
        assert result.outcome == Outcome.EMPTY_SOURCE

    def test_same_lane_rejected(self):
        state = table(lanes={3: lane(3, "KD")})
        result = apply_action(state, Action.lane_to_lane(3, 3))

        assert not result.success
        assert result.outcome == Outcome.REJECTED_MOVE


class TestLaneToFoundation:
    """Tests for lane-to-foundation moves."""

    def test_ace_then_two(self):
        state = table(lanes={1: lane(1, "2D", "AD")})
        result = apply_action(state, Action.lane_to_foundation(1, Suit.DIAMONDS))

        assert result.success
        assert result.new_state.foundation_size(Suit.DIAMONDS) == 1
        assert result.new_state.score == 20

        result = apply_action(result.new_state, Action.lane_to_foundation(1, Suit.DIAMONDS))

        assert result.success
        assert result.new_state.foundation(Suit.DIAMONDS).top_card == card("2D")
        assert result.new_state.score == 40
        assert result.new_state.move_count == 2

    def test_non_ace_to_empty_foundation(self):
        state = table(lanes={1: lane(1, "5D")})
        result = apply_action(state, Action.lane_to_foundation(1, Suit.DIAMONDS))

        assert not result.success
        assert "Only Aces" in result.error
        assert state.lane(1).top_card == card("5D")

    def test_wrong_suit(self):
        state = table(lanes={1: lane(1, "2H")}, foundations=[foundation(Suit.SPADES, Rank.ACE)])
        result = apply_action(state, Action.lane_to_foundation(1, Suit.SPADES))

        assert not result.success

    def test_reveals_new_top(self):
        state = table(lanes={1: lane(1, "9C", "AH", hidden=1)})
        result = apply_action(state, Action.lane_to_foundation(1, Suit.HEARTS))

        assert result.success
        assert not result.new_state.lane(1).cards[0].hidden

    def test_empty_lane(self):
        result = apply_action(table(), Action.lane_to_foundation(4, Suit.CLUBS))

        assert not result.success
        assert result.outcome == Outcome.EMPTY_SOURCE


class TestReserveMoves:
    """Tests for reserve placements."""

    def test_reserve_to_foundation_scores_ten(self):
        state = table(reserve=["5C", "AS"])
        result = apply_action(state, Action.reserve_to_foundation(Suit.SPADES))

        assert result.success
        assert result.new_state.reserve.top_card == card("5C")
        assert result.new_state.foundation(Suit.SPADES).top_card == card("AS")
        assert result.new_state.score == 10
        assert result.new_state.move_count == 1

    def test_reserve_to_lane_scores_nothing(self):
        state = table(lanes={4: lane(4, "8D")}, reserve=["7S"])
        result = apply_action(state, Action.reserve_to_lane(4))

        assert result.success
        assert result.new_state.lane(4).top_card == card("7S")
        assert result.new_state.score == 0
        assert result.new_state.move_count == 1

    def test_rejected_card_stays_in_reserve(self):
        state = table(lanes={4: lane(4, "8D")}, reserve=["7H"])
        result = apply_action(state, Action.reserve_to_lane(4))

        assert not result.success
        assert state.reserve.top_card == card("7H")
        assert state.lane(4).count == 1

    def test_empty_reserve(self):
        result = apply_action(table(), Action.reserve_to_lane(1))

        assert not result.success
        assert result.outcome == Outcome.EMPTY_SOURCE


class TestHistoryAndPhase:
    def test_accepted_actions_are_logged(self):
        state = table(draw=["KS"])
        action = Action.draw()
        result = apply_action(state, action)

        assert result.new_state.action_history == [action]
        assert state.action_history == []

    def test_rejected_actions_are_not_logged(self):
        state = table(lanes={1: lane(1, "5D")})
        result = apply_action(state, Action.lane_to_foundation(1, Suit.DIAMONDS))

        assert not result.success
        assert state.action_history == []

    def test_last_card_wins(self):
        foundations = [
            foundation(Suit.HEARTS, Rank.KING),
            foundation(Suit.DIAMONDS, Rank.KING),
            foundation(Suit.CLUBS, Rank.KING),
            foundation(Suit.SPADES, Rank.QUEEN),
        ]
        state = table(lanes={1: lane(1, "KS")}, foundations=foundations)
        result = apply_action(state, Action.lane_to_foundation(1, Suit.SPADES))

        assert result.success
        assert result.new_state.is_won
        assert result.new_state.phase == GamePhase.WON


class TestErrorHandling:
    def test_malformed_action_is_rejected(self):
        action = Action.lane_to_lane(1, 2)
        bad = Action(action_type=action.action_type, payload=Action.draw().payload)
        result = apply_action(table(), bad)

        assert not result.success
        assert "Source must be a lane" in result.error

    def test_conservation_violation_is_internal_error(self):
        class LeakyReducer(Reducer):
            def _handle_draw(self, state, action):
                _, new_pile = state.draw_pile.remove_top()
                return self._commit(state, state._copy_with(draw_pile=new_pile), action, ["lost"])

        result = LeakyReducer().apply(table(draw=["KS"]), Action.draw())

        assert not result.success
        assert result.outcome == Outcome.INTERNAL_ERROR

    def test_custom_scoring(self):
        state = table(lanes={1: lane(1, "AH")})
        result = apply_action(
            state,
            Action.lane_to_foundation(1, Suit.HEARTS),
            scoring=ScoringRules(lane_to_foundation=15),
        )

        assert result.new_state.score == 15
