"""
Scoundrel Cards - The canonical 44-card dungeon deck.

A standard deck with the red face cards and red aces removed:
- Clubs and spades 2..A (2..14) are monsters (26 cards)
- Diamonds 2..10 are weapons (9 cards)
- Hearts 2..10 are potions (9 cards)
"""

from __future__ import annotations
import uuid

from ..engine_core.state import Card, CardKind, Suit, value_to_label

MONSTER_SUITS = (Suit.CLUBS, Suit.SPADES)
MONSTER_VALUES = range(2, 15)
WEAPON_VALUES = range(2, 11)
POTION_VALUES = range(2, 11)

DECK_SIZE = (
    len(MONSTER_SUITS) * len(MONSTER_VALUES)
    + len(WEAPON_VALUES)
    + len(POTION_VALUES)
)

__all__ = [
    "DECK_SIZE",
    "MONSTER_SUITS",
    "build_deck",
    "make_card",
    "value_to_label",
]


def make_card(kind: CardKind, suit: Suit, value: int) -> Card:
    """Create a card with a fresh unique id."""
    return Card(
        card_id=uuid.uuid4().hex,
        kind=kind,
        suit=suit,
        value=value,
    )


def build_deck() -> list[Card]:
    """
    Build the unshuffled deck.

    Order is canonical: monsters by value (clubs then spades), then
    weapon/potion pairs by value. Ids are unique per call.
    """
    deck = []

    for value in MONSTER_VALUES:
        for suit in MONSTER_SUITS:
            deck.append(make_card(CardKind.MONSTER, suit, value))

    for value in WEAPON_VALUES:
        deck.append(make_card(CardKind.WEAPON, Suit.DIAMONDS, value))
        deck.append(make_card(CardKind.POTION, Suit.HEARTS, value))

    return deck
