"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a client (web or mobile
front end) and the engine. Everything a renderer needs for the HUD,
the room and the log is in GameStateResponse.

Error Codes:
- GAME_NOT_FOUND: Game id does not exist or has been ended
- VALIDATION_ERROR: Request body did not validate
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    kind: str = Field(description="monster, weapon or potion")
    kind_label: str = Field(description="Monster, Weapon or Potion")
    suit: str
    value: int
    label: str = Field(description="2-10, J, Q, K or A")

    model_config = {"from_attributes": True}


class WeaponInfo(BaseModel):
    """The equipped weapon and how far it has been worn down."""
    card: CardInfo
    last_defeated: Optional[int] = Field(None, description="Value of the last monster beaten")
    last_defeated_label: Optional[str] = None
    stack: list[CardInfo] = Field(default_factory=list)


# =============================================================================
# Requests
# =============================================================================

class NewGameRequest(BaseModel):
    """Start a game, optionally reproducible."""
    seed: Optional[int] = Field(None, ge=0, le=0xFFFFFFFF, description="Unsigned 32-bit shuffle seed")


class SelectCardRequest(BaseModel):
    """Resolve one card of the exposed room."""
    index: int = Field(..., description="Position of the card in the room (0-based)")


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """Read-only view of a game after the last intent."""
    game_id: str
    health: int
    max_health: int
    weapon: Optional[WeaponInfo] = None
    turn: int
    deck_count: int
    discard_count: int
    can_avoid: bool
    avoid_state: str = Field(description="Ready or Used")
    used_potion: bool
    selections_remaining: int
    phase: str
    status: str
    outcome: Optional[str] = None
    score: Optional[int] = None
    room: list[CardInfo] = Field(default_factory=list)
    carried_card: Optional[CardInfo] = None
    log: list[str] = Field(default_factory=list, description="Newest first")
    api_version: str = "v1"


class IntentResponse(BaseModel):
    """Result of face/avoid/select."""
    applied: bool
    reason: Optional[str] = Field(None, description="Why the intent was ignored")
    changes: list[str] = Field(default_factory=list)
    game: GameStateResponse
    api_version: str = "v1"


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameListResponse(BaseModel):
    """Active game ids."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
