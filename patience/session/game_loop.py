"""
Game Loop - Interprets one player command at a time.

The loop:
1. Normalizes and parses the token
2. Runs three-digit lane commands through the oscillation guard
3. Hands the action to the reducer
4. Stores the new state on the session
5. Reports a single-line status message

Every command produces exactly one TurnResult, accepted or not.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from typing import TYPE_CHECKING

from ..engine_core.action import Outcome
from ..engine_core.command import CommandKind, normalize, parse_command
from ..engine_core.oscillation import OscillationGuard
from ..engine_core.reducer import Reducer

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_COMMAND = "waiting_command"
    GAME_WON = "game_won"
    QUIT = "quit"


@dataclass
class TurnResult:
    """
    Result of processing one command.

    `message` is the status line shown to the player.
    """
    success: bool
    loop_state: LoopState
    message: str
    outcome: Outcome = Outcome.ACCEPTED
    score_delta: int = 0

    @property
    def quit(self) -> bool:
        return self.loop_state == LoopState.QUIT


class GameLoop:
    """
    The command interpreter for one session.

    Usage:
        loop = GameLoop(session)
        result = loop.process_command("D")
        print(result.message)
    """

    def __init__(
        self,
        session: Session,
        reducer: Reducer | None = None,
        guard: OscillationGuard | None = None,
    ):
        self.session = session
        self.reducer = reducer or Reducer()
        self.guard = guard or OscillationGuard()
        self.state = LoopState.WAITING_COMMAND

    def process_command(self, raw: str) -> TurnResult:
        """Process one raw input line."""
        command = parse_command(raw)
        if command is None:
            logger.debug("Malformed command %r", raw)
            return self._result(
                False,
                f"Invalid command: '{normalize(raw)}'. Please try again.",
                Outcome.MALFORMED_COMMAND,
            )

        if command.kind == CommandKind.QUIT:
            self.state = LoopState.QUIT
            return TurnResult(success=True, loop_state=self.state, message="Exiting the game.")

        game_state = self.session.game_state

        if command.kind == CommandKind.LANE_STACK_MOVE:
            history, blocked = self.guard.check(game_state.recent_commands, command.move_code)
            game_state = game_state._copy_with(recent_commands=history)
            self.session.update_state(game_state)
            if blocked:
                logger.debug("Oscillation blocked %s (history %s)", command.token, history)
                return self._result(
                    False,
                    "Oscillation detected! Repeating moves are not played and no score is added.",
                    Outcome.OSCILLATION_BLOCKED,
                )

        result = self.reducer.apply(game_state, command.action)
        if not result.success:
            return self._result(False, result.message, result.outcome)

        self.session.update_state(result.new_state)
        if result.new_state.is_won:
            self.state = LoopState.GAME_WON
        return self._result(True, result.message, Outcome.ACCEPTED, result.score_delta)

    def _result(
        self,
        success: bool,
        message: str,
        outcome: Outcome,
        score_delta: int = 0,
    ) -> TurnResult:
        return TurnResult(
            success=success,
            loop_state=self.state,
            message=message,
            outcome=outcome,
            score_delta=score_delta,
        )
