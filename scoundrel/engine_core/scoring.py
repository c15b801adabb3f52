"""
Scoring - End-of-game score rules.

A loss scores the negated strength of the monsters still waiting in the
deck. A win scores the health the player walked out with.
"""

from __future__ import annotations
from typing import Iterable

from .state import Card, GameState


def remaining_monster_value(deck: Iterable[Card]) -> int:
    """Sum of monster values in the given cards."""
    return sum(card.value for card in deck if card.is_monster)


def loss_score(deck: Iterable[Card]) -> int:
    """Score for dying: never positive, 0 if no monsters are left undrawn."""
    return -remaining_monster_value(deck)


def win_score(state: GameState) -> int:
    return state.health
