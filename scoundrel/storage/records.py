"""
Saved-game records - Structural encoding of GameState.

Field names mirror GameState one-to-one and are stable; there is no
versioning. Records are pydantic models so that a malformed save fails
validation instead of producing a half-built state.
"""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, Field

from ..engine_core.state import (
    Card,
    CardKind,
    GameState,
    Outcome,
    Phase,
    Status,
    Suit,
    WeaponSlot,
    MAX_HEALTH,
    SELECTIONS_PER_ROOM,
)


class CardRecord(BaseModel):
    card_id: str
    kind: CardKind
    suit: Suit
    value: int

    @classmethod
    def from_card(cls, card: Card) -> CardRecord:
        return cls(card_id=card.card_id, kind=card.kind, suit=card.suit, value=card.value)

    def to_card(self) -> Card:
        return Card(card_id=self.card_id, kind=self.kind, suit=self.suit, value=self.value)


class WeaponRecord(BaseModel):
    card: CardRecord
    last_defeated: Optional[int] = None


def _cards(records: list[CardRecord]) -> list[Card]:
    return [r.to_card() for r in records]


def _records(cards: list[Card]) -> list[CardRecord]:
    return [CardRecord.from_card(c) for c in cards]


class GameRecord(BaseModel):
    """A whole GameState as plain data."""
    seed: Optional[int] = None
    max_health: int = MAX_HEALTH
    health: int
    weapon: Optional[WeaponRecord] = None
    weapon_stack: list[CardRecord] = Field(default_factory=list)
    room: list[CardRecord] = Field(default_factory=list, max_length=4)
    carried_card: Optional[CardRecord] = None
    deck: list[CardRecord] = Field(default_factory=list)
    discard: list[CardRecord] = Field(default_factory=list)
    turn: int = 1
    can_avoid: bool = True
    used_potion: bool = False
    selections_remaining: int = SELECTIONS_PER_ROOM
    phase: Phase = Phase.CHOICE
    status: Status = Status.PLAYING
    outcome: Optional[Outcome] = None
    score: Optional[int] = None
    log: list[str] = Field(default_factory=list)

    @classmethod
    def from_state(cls, state: GameState) -> GameRecord:
        weapon = None
        if state.weapon is not None:
            weapon = WeaponRecord(
                card=CardRecord.from_card(state.weapon.card),
                last_defeated=state.weapon.last_defeated,
            )
        carried = CardRecord.from_card(state.carried_card) if state.carried_card else None

        return cls(
            seed=state.seed,
            max_health=state.max_health,
            health=state.health,
            weapon=weapon,
            weapon_stack=_records(state.weapon_stack),
            room=_records(state.room),
            carried_card=carried,
            deck=_records(state.deck),
            discard=_records(state.discard),
            turn=state.turn,
            can_avoid=state.can_avoid,
            used_potion=state.used_potion,
            selections_remaining=state.selections_remaining,
            phase=state.phase,
            status=state.status,
            outcome=state.outcome,
            score=state.score,
            log=list(state.log),
        )

    def to_state(self) -> GameState:
        weapon = None
        if self.weapon is not None:
            weapon = WeaponSlot(
                card=self.weapon.card.to_card(),
                last_defeated=self.weapon.last_defeated,
            )

        return GameState(
            seed=self.seed,
            max_health=self.max_health,
            health=self.health,
            weapon=weapon,
            weapon_stack=_cards(self.weapon_stack),
            room=_cards(self.room),
            carried_card=self.carried_card.to_card() if self.carried_card else None,
            deck=_cards(self.deck),
            discard=_cards(self.discard),
            turn=self.turn,
            can_avoid=self.can_avoid,
            used_potion=self.used_potion,
            selections_remaining=self.selections_remaining,
            phase=self.phase,
            status=self.status,
            outcome=self.outcome,
            score=self.score,
            log=list(self.log),
        )
