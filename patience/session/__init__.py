"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of a game:
- Created with a freshly dealt state
- Holds the current game state
- Processes player commands through the game loop
- Destroyed when the player quits

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult
from .display import render_text

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "render_text",
]
