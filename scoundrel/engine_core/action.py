"""
Action System - Player intents and results.

Actions represent what the presentation layer asks for:
face the room, avoid it, or resolve the card at an index.
New game and restart are session-level and live in GameSession.

All in-game state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of in-game intents."""
    FACE_ROOM = "face_room"
    AVOID_ROOM = "avoid_room"
    SELECT_CARD = "select_card"


@dataclass
class Action:
    """
    A single intent to be applied to the game state.

    Only SELECT_CARD carries a payload (the room index).
    """
    action_type: ActionType
    index: int | None = None

    @classmethod
    def face_room(cls) -> Action:
        """Factory for facing the current room."""
        return cls(action_type=ActionType.FACE_ROOM)

    @classmethod
    def avoid_room(cls) -> Action:
        """Factory for avoiding the current room."""
        return cls(action_type=ActionType.AVOID_ROOM)

    @classmethod
    def select_card(cls, index: int) -> Action:
        """Factory for resolving the room card at index."""
        return cls(action_type=ActionType.SELECT_CARD, index=index)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    A rejected action is not an error: out-of-phase intents are
    no-ops and leave the state untouched.
    """
    success: bool
    state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    # Log lines produced by this action, oldest first
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def rejected(cls, state: Any, reason: str, error_code: str = "NOT_ALLOWED") -> ActionResult:
        """Create a no-op result."""
        return cls(success=False, state=state, error=reason, error_code=error_code)

    @classmethod
    def applied(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a success result."""
        return cls(success=True, state=state, state_changes=changes or [])
