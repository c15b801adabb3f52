"""
Scoundrel Game Setup - Creates initial game state.

This module handles:
- Shuffling with an optional seed for determinism
- Building a fresh GameState around the shuffled deck

The first room is drawn by the RulesEngine, not here.
"""

from __future__ import annotations
import logging
import random

from ..engine_core.state import Card, GameState
from .cards import build_deck

logger = logging.getLogger(__name__)

SEED_MASK = 0xFFFFFFFF


def normalize_seed(seed: int | None) -> int | None:
    """Coerce a seed into the unsigned 32-bit range."""
    if seed is None:
        return None
    return int(seed) & SEED_MASK


def shuffle_deck(deck: list[Card], seed: int | None = None) -> list[Card]:
    """
    Return a shuffled copy of deck (Fisher-Yates).

    Args:
        deck: Cards to shuffle; the list itself is left untouched
        seed: Unsigned 32-bit seed, or None for a non-reproducible order

    Returns:
        A new list holding a permutation of the same cards
    """
    seed = normalize_seed(seed)
    rng = random.Random(seed) if seed is not None else random.SystemRandom()

    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]

    return cards


def create_initial_state(seed: int | None = None) -> GameState:
    """
    Set up a new game.

    Args:
        seed: Seed for deterministic shuffling

    Returns:
        Fresh GameState with a full shuffled deck and an empty room
    """
    seed = normalize_seed(seed)
    deck = shuffle_deck(build_deck(), seed)
    logger.debug("Created deck of %d cards (seed=%s)", len(deck), seed)

    return GameState(seed=seed, deck=deck)
