"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. The API to list available moves
2. has_possible_moves() to tell a stuck game from a live one

Design: Generates Action objects, not just action types.
Legality is decided by the same rules module the reducer uses.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, GamePhase, Lane
from .action import Action
from .command import MAX_STACK_COUNT
from .rules import can_move_stack, can_place_on_foundation, can_place_on_lane


@dataclass
class ActionGenerator:
    """Generates legal actions for the current game state."""

    max_stack: int = MAX_STACK_COUNT

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions.

        Returns a list of fully-specified Action objects.
        """
        if state.phase == GamePhase.WON:
            return []

        actions = []
        actions.extend(self._generate_draw_actions(state))
        actions.extend(self._generate_reserve_actions(state))
        actions.extend(self._generate_foundation_actions(state))
        actions.extend(self._generate_lane_actions(state))
        return actions

    def _generate_draw_actions(self, state: GameState) -> list[Action]:
        if state.draw_pile.is_empty and state.reserve.is_empty:
            return []
        return [Action.draw()]

    def _generate_reserve_actions(self, state: GameState) -> list[Action]:
        card = state.reserve.top_card
        if card is None:
            return []

        actions = []
        foundation = state.foundation(card.suit)
        if can_place_on_foundation(card, foundation):
            actions.append(Action.reserve_to_foundation(card.suit))
        for lane in state.lanes:
            if can_place_on_lane(card, lane):
                actions.append(Action.reserve_to_lane(lane.number))
        return actions

    def _generate_foundation_actions(self, state: GameState) -> list[Action]:
        actions = []
        for lane in state.lanes:
            if lane.visible_count == 0:
                continue
            card = lane.top_card
            if can_place_on_foundation(card, state.foundation(card.suit)):
                actions.append(Action.lane_to_foundation(lane.number, card.suit))
        return actions

    def _generate_lane_actions(self, state: GameState) -> list[Action]:
        actions = []
        for source in state.lanes:
            for count in self._movable_counts(source):
                bottom_card = source.top_cards(count)[0]
                for destination in state.lanes:
                    if destination.number == source.number:
                        continue
                    if can_place_on_lane(bottom_card, destination):
                        actions.append(
                            Action.lane_to_lane(source.number, destination.number, count)
                        )
        return actions

    def _movable_counts(self, lane: Lane) -> list[int]:
        limit = min(lane.visible_count, self.max_stack)
        return [
            count for count in range(1, limit + 1)
            if can_move_stack(lane.top_cards(count))
        ]


def legal_actions(state: GameState) -> list[Action]:
    """Convenience function to get legal actions."""
    generator = ActionGenerator()
    return generator.generate(state)


def has_possible_moves(state: GameState) -> bool:
    return len(legal_actions(state)) > 0
