"""
Session Manager - Registry of in-memory patience games.

LIFECYCLE:
1. A session is created with a freshly dealt GameState
2. Every command replaces the session's GameState with the next one
3. Quitting (or an explicit end) removes the session; nothing is persisted

Each session is one single-player game. The manager is only a registry,
used by the HTTP service; the CLI owns a single Session directly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..engine_core.deck import deal_new_game
from ..engine_core.state import GameState, GamePhase

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Where a session is in its life."""
    ACTIVE = "active"  # Accepting commands
    WON = "won"  # All cards on the suit piles
    ENDED = "ended"  # Player quit or session closed


@dataclass
class Session:
    """
    One dealt game and the state of play around it.

    Owns exactly one GameState. State is NOT persisted.
    """
    session_id: str
    game_state: GameState
    created_at: float = field(default_factory=time.time)

    state: SessionState = SessionState.ACTIVE

    @classmethod
    def new(cls, random_seed: int | None = None) -> Session:
        return cls(
            session_id=str(uuid.uuid4()),
            game_state=deal_new_game(random_seed=random_seed),
        )

    def is_active(self) -> bool:
        """Check if session still accepts commands."""
        return self.state != SessionState.ENDED

    def update_state(self, game_state: GameState):
        self.game_state = game_state
        if game_state.phase == GamePhase.WON and self.state == SessionState.ACTIVE:
            self.state = SessionState.WON


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up ended sessions

    Nothing is written to disk; a restart forgets every table.
    """

    def __init__(self, default_seed: int | None = None):
        self._sessions: dict[str, Session] = {}
        self.default_seed = default_seed

    def create_session(self, random_seed: int | None = None) -> Session:
        """
        Deal a new game and register it.

        Args:
            random_seed: Shuffle seed; falls back to the manager default

        Returns:
            New Session with a dealt game
        """
        seed = random_seed if random_seed is not None else self.default_seed
        session = Session.new(random_seed=seed)
        self._sessions[session.session_id] = session
        logger.info("Created session %s (seed %s)", session.session_id, session.game_state.random_seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Look up a live session, or None."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and remove it from memory.

        Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.state = SessionState.ENDED
        logger.info("Ended session %s", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """IDs of sessions that still accept commands."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        End sessions older than max_age.

        Returns the IDs that were ended.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return to_remove
