"""
Game content - the Scoundrel deck and game setup.
"""

from .cards import build_deck, DECK_SIZE, MONSTER_SUITS
from .setup import shuffle_deck, create_initial_state

__all__ = [
    "build_deck",
    "DECK_SIZE",
    "MONSTER_SUITS",
    "shuffle_deck",
    "create_initial_state",
]
