"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through Reducer.apply (apply_action wraps it).

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying; a rejected action leaves state untouched
- Returns ActionResult with success/failure, never raises for rule violations
- Scores and counts moves
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .state import GameState, GamePhase, Location, Pile
from .action import Action, ActionType, ActionResult, Outcome
from .rules import (
    foundation_placement_error,
    lane_placement_error,
    stack_move_error,
)

logger = logging.getLogger(__name__)


class InvariantViolation(RuntimeError):
    """Raised when an internal state invariant is broken."""


@dataclass(frozen=True)
class ScoringRules:
    """Points awarded per accepted move."""
    lane_to_foundation: int = 20
    reserve_to_foundation: int = 10
    lane_to_lane_per_card: int = 5
    reserve_to_lane: int = 0


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """
    scoring: ScoringRules = field(default_factory=ScoringRules)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code=Outcome.REJECTED_MOVE)

        handler = self._get_handler(action.action_type)

        try:
            result = handler(state, action)
            if result.success:
                self._check_conservation(state, result.new_state)
        except Exception as e:
            logger.exception("Handler failed for %s", action)
            return ActionResult.failure(str(e), error_code=Outcome.INTERNAL_ERROR)

        if result.success:
            logger.debug("Applied %s: %s", action.action_type.value, result.message)
        else:
            logger.debug("Rejected %s: %s", action.action_type.value, result.error)
        return result

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """
        Validate that the action is well formed.

        Returns error message if invalid, None if valid.
        """
        payload = action.payload
        if action.action_type == ActionType.DRAW:
            return None

        if action.action_type in {ActionType.LANE_TO_LANE, ActionType.LANE_TO_FOUNDATION}:
            if payload.source is None or not payload.source.is_lane:
                return "Source must be a lane"
        else:
            if payload.source != Location.RESERVE:
                return "Source must be the reserve"

        if action.action_type in {ActionType.LANE_TO_LANE, ActionType.RESERVE_TO_LANE}:
            if payload.destination is None or not payload.destination.is_lane:
                return "Destination must be a lane"
        elif payload.destination is None or not payload.destination.is_foundation:
            return "Destination must be a suit pile"

        if payload.count < 1:
            return "Must move at least one card"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.DRAW: self._handle_draw,
            ActionType.LANE_TO_LANE: self._handle_lane_to_lane,
            ActionType.LANE_TO_FOUNDATION: self._handle_lane_to_foundation,
            ActionType.RESERVE_TO_LANE: self._handle_reserve_to_lane,
            ActionType.RESERVE_TO_FOUNDATION: self._handle_reserve_to_foundation,
        }
        return handlers[action_type]

    def _handle_draw(self, state: GameState, action: Action) -> ActionResult:
        """Draw one card, or recycle the reserve when the draw pile is empty."""
        if not state.draw_pile.is_empty:
            card, new_draw_pile = state.draw_pile.remove_top()
            new_state = state._copy_with(
                draw_pile=new_draw_pile,
                reserve=state.reserve.add_top(card),
            )
            return self._commit(state, new_state, action, [f"Drew card: {card}."])

        if not state.reserve.is_empty:
            count = state.reserve.count
            new_state = state._copy_with(
                draw_pile=Pile(name="draw_pile", cards=state.reserve.cards.copy()),
                reserve=Pile(name="reserve"),
            )
            return self._commit(
                state,
                new_state,
                action,
                [f"Recycled {count} unused card(s) back into the draw pile."],
                moves=0,
            )

        return ActionResult.failure("No more cards to draw.", error_code=Outcome.EMPTY_SOURCE)

    def _handle_lane_to_lane(self, state: GameState, action: Action) -> ActionResult:
        """Move the top `count` cards of one lane onto another."""
        source = state.lane(action.payload.source.lane_number)
        destination = state.lane(action.payload.destination.lane_number)
        count = action.payload.count

        if source.number == destination.number:
            return ActionResult.failure("Source and destination lanes are the same.")

        if source.is_empty:
            return ActionResult.failure(
                f"Cannot move from an empty lane (lane {source.number}).",
                error_code=Outcome.EMPTY_SOURCE,
            )

        error = stack_move_error(source, count)
        if error:
            return ActionResult.failure(error)

        bottom_card = source.top_cards(count)[0]
        error = lane_placement_error(bottom_card, destination)
        if error:
            return ActionResult.failure(error)

        moved, new_source = source.remove_top(count)
        new_destination = destination.add_cards(moved)
        new_state = state.with_lane(new_source).with_lane(new_destination)

        moved_text = " ".join(str(c) for c in moved)
        return self._commit(
            state,
            new_state,
            action,
            [f"Moved {moved_text} from lane {source.number} to lane {destination.number}."],
            points=self.scoring.lane_to_lane_per_card * count,
        )

    def _handle_lane_to_foundation(self, state: GameState, action: Action) -> ActionResult:
        """Move the top card of a lane onto its suit pile."""
        source = state.lane(action.payload.source.lane_number)
        foundation = state.foundation(action.payload.destination.suit)

        if source.is_empty:
            return ActionResult.failure(
                f"Source lane {source.number} is empty.",
                error_code=Outcome.EMPTY_SOURCE,
            )

        error = stack_move_error(source, 1)
        if error:
            return ActionResult.failure(error)

        card = source.top_card
        error = foundation_placement_error(card, foundation)
        if error:
            return ActionResult.failure(error)

        _, new_source = source.remove_top(1)
        new_state = state.with_lane(new_source).with_foundation(foundation.add_top(card))

        return self._commit(
            state,
            new_state,
            action,
            [f"Moved {card} to Suit Pile {foundation.suit.letter}."],
            points=self.scoring.lane_to_foundation,
        )

    def _handle_reserve_to_lane(self, state: GameState, action: Action) -> ActionResult:
        """Place the most recently drawn card on a lane."""
        if state.reserve.is_empty:
            return ActionResult.failure("The reserve is empty.", error_code=Outcome.EMPTY_SOURCE)

        destination = state.lane(action.payload.destination.lane_number)
        card = state.reserve.top_card
        error = lane_placement_error(card, destination)
        if error:
            return ActionResult.failure(error)

        _, new_reserve = state.reserve.remove_top()
        new_state = state.with_lane(destination.add_cards([card]))._copy_with(reserve=new_reserve)

        return self._commit(
            state,
            new_state,
            action,
            [f"Moved {card} to Lane {destination.number}."],
            points=self.scoring.reserve_to_lane,
        )

    def _handle_reserve_to_foundation(self, state: GameState, action: Action) -> ActionResult:
        """Place the most recently drawn card on its suit pile."""
        if state.reserve.is_empty:
            return ActionResult.failure("The reserve is empty.", error_code=Outcome.EMPTY_SOURCE)

        foundation = state.foundation(action.payload.destination.suit)
        card = state.reserve.top_card
        error = foundation_placement_error(card, foundation)
        if error:
            return ActionResult.failure(error)

        _, new_reserve = state.reserve.remove_top()
        new_state = state.with_foundation(foundation.add_top(card))._copy_with(reserve=new_reserve)

        return self._commit(
            state,
            new_state,
            action,
            [f"Moved {card} to Suit Pile {foundation.suit.letter}."],
            points=self.scoring.reserve_to_foundation,
        )

    def _commit(
        self,
        old_state: GameState,
        new_state: GameState,
        action: Action,
        changes: list[str],
        points: int = 0,
        moves: int = 1,
    ) -> ActionResult:
        """Apply score, move count, history and phase to a new state."""
        new_state = new_state._copy_with(
            score=old_state.score + points,
            move_count=old_state.move_count + moves,
            action_history=[*old_state.action_history, action],
        )
        if new_state.is_won:
            new_state = new_state._copy_with(phase=GamePhase.WON)
            changes = [*changes, "All cards are on the suit piles!"]
        return ActionResult.success_with_state(new_state, changes=changes, score_delta=points)

    def _check_conservation(self, old_state: GameState, new_state: GameState) -> None:
        if new_state.card_count != old_state.card_count:
            raise InvariantViolation(
                f"Card count changed from {old_state.card_count} to {new_state.card_count}"
            )


def apply_action(state: GameState, action: Action, scoring: ScoringRules | None = None) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(scoring=scoring or ScoringRules())
    return reducer.apply(state, action)
