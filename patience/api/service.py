"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions and their game loops
3. Formats snapshots for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    # Requests
    CreateSessionRequest,
    CommandRequest,
    # Responses
    CommandResponse,
    ErrorResponse,
    GameStateResponse,
    LegalMovesResponse,
    # Shared
    CardInfo,
    FoundationInfo,
    LaneCardInfo,
    LaneInfo,
    # Enums
    CommandOutcome,
    ErrorCode,
    SessionStatus,
)
from ..engine_core.action_generator import legal_actions
from ..engine_core.command import command_for
from ..engine_core.snapshot import take_snapshot
from ..engine_core.state import Card, Suit
from ..session import GameLoop, Session, SessionManager

logger = logging.getLogger(__name__)


def card_info(card: Card) -> CardInfo:
    return CardInfo(
        code=str(card),
        suit=card.suit.value,
        rank=card.rank.label,
        color=card.color.value,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        state = service.create_session(CreateSessionRequest())
        response = service.submit_command(state.session_id, CommandRequest(command="D"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_session(self, request: CreateSessionRequest) -> GameStateResponse:
        """Deal a new game."""
        session = self.session_manager.create_session(random_seed=request.random_seed)
        self._game_loops[session.session_id] = GameLoop(session)
        return self._state_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._state_to_response(session)

    def submit_command(self, session_id: str, request: CommandRequest) -> CommandResponse | ErrorResponse:
        """
        Run one command through the session's game loop.

        Quitting ends the session rather than the server process.
        """
        session = self.session_manager.get_session(session_id)
        game_loop = self._game_loops.get(session_id)
        if not session or not game_loop:
            return self._not_found(session_id)

        result = game_loop.process_command(request.command)

        if result.quit:
            self.end_session(session_id)
            return CommandResponse(
                session_id=session_id,
                command=request.command,
                success=True,
                outcome=CommandOutcome.ACCEPTED,
                message=result.message,
                session_ended=True,
            )

        return CommandResponse(
            session_id=session_id,
            command=request.command,
            success=result.success,
            outcome=CommandOutcome(result.outcome.value),
            message=result.message,
            score_delta=result.score_delta,
            game_state=self._state_to_response(session),
        )

    def get_legal_moves(self, session_id: str) -> LegalMovesResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        commands = [command_for(action) for action in legal_actions(session.game_state)]
        return LegalMovesResponse(session_id=session_id, commands=commands, count=len(commands))

    def end_session(self, session_id: str) -> bool:
        self._game_loops.pop(session_id, None)
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """End abandoned sessions along with their game loops."""
        ended = self.session_manager.cleanup_stale_sessions(max_age_seconds)
        for session_id in ended:
            self._game_loops.pop(session_id, None)
        return ended

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _state_to_response(self, session: Session) -> GameStateResponse:
        """Convert the session's render snapshot to a response."""
        snapshot = take_snapshot(session.game_state)
        lanes = [
            LaneInfo(
                lane=number,
                cards=[
                    LaneCardInfo(
                        hidden=view.hidden,
                        card=card_info(view.card) if view.card is not None else None,
                    )
                    for view in views
                ],
            )
            for number, views in enumerate(snapshot.lanes, start=1)
        ]
        foundations = []
        for suit in Suit:
            top = snapshot.foundations.get(suit)
            foundations.append(FoundationInfo(
                suit=suit.value,
                card_count=session.game_state.foundation_size(suit),
                top_card=card_info(top) if top is not None else None,
            ))
        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            score=snapshot.score,
            move_count=snapshot.move_count,
            draw_pile_count=snapshot.draw_pile_count,
            reserve_count=snapshot.reserve_count,
            reserve_top=card_info(snapshot.reserve_top) if snapshot.reserve_top else None,
            lanes=lanes,
            foundations=foundations,
            is_won=snapshot.is_won,
            random_seed=session.game_state.random_seed,
        )
