"""
Pytest fixtures for Scoundrel tests.
"""

import pytest

from ..engine_core.state import Card, CardKind, Suit, GameState, Phase
from ..engine_core.reducer import RulesEngine
from ..storage import GameStorage, MemoryStore

_SUITS = {
    CardKind.MONSTER: Suit.SPADES,
    CardKind.WEAPON: Suit.DIAMONDS,
    CardKind.POTION: Suit.HEARTS,
}

_counter = {"n": 0}


def make(kind: CardKind, value: int, suit: Suit | None = None) -> Card:
    """Build a card with a readable, unique id."""
    _counter["n"] += 1
    return Card(
        card_id=f"{kind.value}_{value}_{_counter['n']}",
        kind=kind,
        suit=suit or _SUITS[kind],
        value=value,
    )


def monster(value: int, suit: Suit = Suit.SPADES) -> Card:
    return make(CardKind.MONSTER, value, suit)


def weapon(value: int) -> Card:
    return make(CardKind.WEAPON, value)


def potion(value: int) -> Card:
    return make(CardKind.POTION, value)


@pytest.fixture
def engine() -> RulesEngine:
    return RulesEngine()


@pytest.fixture
def storage() -> GameStorage:
    return GameStorage(MemoryStore())


@pytest.fixture
def resolving_state() -> GameState:
    """A state with a faced room of four harmless cards and a short deck."""
    return GameState(
        room=[potion(2), potion(3), weapon(2), weapon(3)],
        deck=[monster(2), monster(3), monster(4), monster(5), monster(6)],
        phase=Phase.RESOLVING,
    )


@pytest.fixture
def choice_state() -> GameState:
    """A state waiting for face-or-avoid with a full room and a deck."""
    return GameState(
        room=[monster(2), monster(3), potion(4), weapon(5)],
        deck=[monster(6), monster(7), monster(8), monster(9), potion(2)],
    )
