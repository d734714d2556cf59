"""
Tests for the legal move generator.
"""

from patience.engine_core.action import Action
from patience.engine_core.action_generator import ActionGenerator, has_possible_moves, legal_actions
from patience.engine_core.reducer import apply_action
from patience.engine_core.state import GamePhase, Rank, Suit

from .factories import foundation, lane, table


class TestLegalActions:
    def test_empty_table_has_no_moves(self):
        assert legal_actions(table()) == []
        assert not has_possible_moves(table())

    def test_draw_available_while_cards_remain(self):
        assert Action.draw() in legal_actions(table(draw=["5C"]))
        assert Action.draw() in legal_actions(table(reserve=["5C"]))

    def test_reserve_moves(self):
        state = table(lanes={2: lane(2, "6H")}, reserve=["AS", "5C"])
        actions = legal_actions(state)

        assert Action.reserve_to_lane(2) in actions
        assert Action.reserve_to_foundation(Suit.CLUBS) not in actions

    def test_foundation_and_king_moves(self):
        state = table(lanes={1: lane(1, "AH"), 3: lane(3, "9D", "KC", hidden=1)})
        actions = legal_actions(state)

        assert Action.lane_to_foundation(1, Suit.HEARTS) in actions
        assert Action.lane_to_lane(3, 2, 1) in actions
        assert Action.lane_to_lane(1, 2, 1) not in actions

    def test_stack_moves_respect_visibility(self):
        state = table(lanes={
            1: lane(1, "10S", "9H", "8C", hidden=1),
            2: lane(2, "10C"),
        })
        actions = legal_actions(state)

        assert Action.lane_to_lane(1, 2, 1) not in actions
        assert Action.lane_to_lane(1, 2, 2) in actions
        assert Action.lane_to_lane(1, 2, 3) not in actions

    def test_every_generated_action_is_accepted(self, dealt_state):
        state = dealt_state
        for _ in range(40):
            actions = legal_actions(state)
            for action in actions:
                assert apply_action(state, action).success, action
            state = apply_action(state, actions[0]).new_state

    def test_won_game_has_no_moves(self):
        foundations = [foundation(suit, Rank.KING) for suit in Suit]
        state = table(foundations=foundations)._copy_with(phase=GamePhase.WON)

        assert ActionGenerator().generate(state) == []

    def test_max_stack_is_configurable(self):
        state = table(lanes={1: lane(1, "10S", "9H"), 2: lane(2, "JD")})

        assert Action.lane_to_lane(1, 2, 2) in ActionGenerator().generate(state)
        assert Action.lane_to_lane(1, 2, 2) not in ActionGenerator(max_stack=1).generate(state)
