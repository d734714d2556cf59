"""
Action System - Actions, payloads, outcomes and results.

Actions represent the five things a player can do to the table:
draw (or recycle), and the four card transfers.

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import Location, Suit


class ActionType(Enum):
    """Types of actions in the system."""
    DRAW = "draw"
    LANE_TO_LANE = "lane_to_lane"
    LANE_TO_FOUNDATION = "lane_to_foundation"
    RESERVE_TO_LANE = "reserve_to_lane"
    RESERVE_TO_FOUNDATION = "reserve_to_foundation"


class Outcome(str, Enum):
    """How a command was resolved."""
    ACCEPTED = "ACCEPTED"
    REJECTED_MOVE = "REJECTED_MOVE"
    OSCILLATION_BLOCKED = "OSCILLATION_BLOCKED"
    EMPTY_SOURCE = "EMPTY_SOURCE"
    MALFORMED_COMMAND = "MALFORMED_COMMAND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - where cards come from, where they go, how many.

    Validation happens in the reducer.
    """
    source: Location | None = None
    destination: Location | None = None
    count: int = 1


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged in the state history
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def draw(cls) -> Action:
        """Factory for draw (or recycle) action."""
        return cls(
            action_type=ActionType.DRAW,
            payload=ActionPayload(source=Location.DRAW_PILE, destination=Location.RESERVE),
        )

    @classmethod
    def lane_to_lane(cls, source: int, destination: int, count: int = 1) -> Action:
        """Factory for moving `count` cards between 1-based lanes."""
        return cls(
            action_type=ActionType.LANE_TO_LANE,
            payload=ActionPayload(
                source=Location.lane(source),
                destination=Location.lane(destination),
                count=count,
            ),
        )

    @classmethod
    def lane_to_foundation(cls, source: int, suit: Suit) -> Action:
        return cls(
            action_type=ActionType.LANE_TO_FOUNDATION,
            payload=ActionPayload(
                source=Location.lane(source),
                destination=Location.foundation(suit),
            ),
        )

    @classmethod
    def reserve_to_lane(cls, destination: int) -> Action:
        return cls(
            action_type=ActionType.RESERVE_TO_LANE,
            payload=ActionPayload(
                source=Location.RESERVE,
                destination=Location.lane(destination),
            ),
        )

    @classmethod
    def reserve_to_foundation(cls, suit: Suit) -> Action:
        return cls(
            action_type=ActionType.RESERVE_TO_FOUNDATION,
            payload=ActionPayload(
                source=Location.RESERVE,
                destination=Location.foundation(suit),
            ),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error and outcome code (if failed)
    - Human-readable changes (for the status line)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: Outcome | None = None

    state_changes: list[str] = field(default_factory=list)
    score_delta: int = 0

    @property
    def outcome(self) -> Outcome:
        if self.success:
            return Outcome.ACCEPTED
        return self.error_code or Outcome.REJECTED_MOVE

    @property
    def message(self) -> str:
        """Single-line status message."""
        if not self.success:
            return self.error or "Move rejected."
        return " ".join(self.state_changes) or "OK."

    @classmethod
    def failure(cls, error: str, error_code: Outcome = Outcome.REJECTED_MOVE) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        score_delta: int = 0,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            score_delta=score_delta,
        )
