"""
API Module - HTTP interface.

Exposes the engine via REST API:
1. Deal a game (create a session)
2. Submit command tokens
3. Read the render snapshot and legal moves
4. End the session

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    CommandRequest,
    # Responses
    CommandResponse,
    GameStateResponse,
    LegalMovesResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    LaneInfo,
    FoundationInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "CommandRequest",
    # Responses
    "CommandResponse",
    "GameStateResponse",
    "LegalMovesResponse",
    "ErrorResponse",
    # Shared
    "CardInfo",
    "LaneInfo",
    "FoundationInfo",
    # Service
    "APIService",
    "create_app",
]
