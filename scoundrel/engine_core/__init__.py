"""
Engine Core - Scoundrel game state and rules.

The engine is the runtime that:
1. Holds the GameState
2. Validates intents against phase and status
3. Resolves cards (monster, weapon, potion)
4. Detects the end of the game and scores it
"""

from .state import (
    Card,
    CardKind,
    Suit,
    Phase,
    Status,
    Outcome,
    WeaponSlot,
    GameState,
    MAX_HEALTH,
)
from .action import Action, ActionType, ActionResult
from .reducer import RulesEngine, apply_action
from .scoring import loss_score, win_score

__all__ = [
    "Card",
    "CardKind",
    "Suit",
    "Phase",
    "Status",
    "Outcome",
    "WeaponSlot",
    "GameState",
    "MAX_HEALTH",
    "Action",
    "ActionType",
    "ActionResult",
    "RulesEngine",
    "apply_action",
    "loss_score",
    "win_score",
]
