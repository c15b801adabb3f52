"""
API Module - HTTP interface for front ends.

A front end:
1. Deals a game
2. Faces or avoids each room
3. Selects cards to resolve
4. Re-renders from the returned game state

All state is session-scoped; saves are optional and keyed by game id.
"""

from .schemas import (
    # Requests
    NewGameRequest,
    SelectCardRequest,
    # Responses
    GameStateResponse,
    IntentResponse,
    ErrorResponse,
    ErrorCode,
    # Shared
    CardInfo,
    WeaponInfo,
)
from .service import APIService

__all__ = [
    # Requests
    "NewGameRequest",
    "SelectCardRequest",
    # Responses
    "GameStateResponse",
    "IntentResponse",
    "ErrorResponse",
    "ErrorCode",
    # Shared
    "CardInfo",
    "WeaponInfo",
    # Service
    "APIService",
]
