"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a client and the engine.
The game state response is the render snapshot: hidden lane cards carry
no rank or suit.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- VALIDATION_ERROR: Request body is invalid
- INTERNAL_ERROR: Unexpected engine fault
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    WON = "won"
    ENDED = "ended"


class CommandOutcome(str, Enum):
    """How a submitted command was resolved."""
    ACCEPTED = "ACCEPTED"
    REJECTED_MOVE = "REJECTED_MOVE"
    OSCILLATION_BLOCKED = "OSCILLATION_BLOCKED"
    EMPTY_SOURCE = "EMPTY_SOURCE"
    MALFORMED_COMMAND = "MALFORMED_COMMAND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A face-up card."""
    code: str = Field(description="Rank label + suit letter, e.g. 10H, QS")
    suit: str
    rank: str
    color: str


class LaneCardInfo(BaseModel):
    """A lane slot; face-down slots have no card."""
    hidden: bool
    card: Optional[CardInfo] = None


class LaneInfo(BaseModel):
    lane: int = Field(ge=1, le=7)
    cards: list[LaneCardInfo] = Field(default_factory=list)


class FoundationInfo(BaseModel):
    suit: str
    card_count: int = 0
    top_card: Optional[CardInfo] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to deal a new game."""
    random_seed: Optional[int] = Field(None, description="Seed for a reproducible deal")


class CommandRequest(BaseModel):
    """A single command token, as typed at the prompt."""
    command: str = Field(..., min_length=1, max_length=16, description="e.g. D, 1H, P3, 723")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Render snapshot of a session."""
    session_id: str
    status: SessionStatus
    score: int = 0
    move_count: int = 0
    draw_pile_count: int = 0
    reserve_count: int = 0
    reserve_top: Optional[CardInfo] = None
    lanes: list[LaneInfo] = Field(default_factory=list)
    foundations: list[FoundationInfo] = Field(default_factory=list)
    is_won: bool = False
    random_seed: Optional[int] = None

    api_version: str = "v1"


class CommandResponse(BaseModel):
    """Result of a command; a message is always present."""
    session_id: str
    command: str
    success: bool
    outcome: CommandOutcome
    message: str
    score_delta: int = 0
    session_ended: bool = False
    game_state: Optional[GameStateResponse] = None

    api_version: str = "v1"


class LegalMovesResponse(BaseModel):
    """Commands that would currently be accepted."""
    session_id: str
    commands: list[str] = Field(default_factory=list)
    count: int = 0


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
