"""
Game State - The mutable entity graph for one Scoundrel game.

Design principles:
- Owned: exactly one RulesEngine mutates a GameState, in place
- Serializable: storage.records encodes every field structurally
- Explicit optionals: no sentinel values for weapon, carry or bound
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum

MAX_HEALTH = 20
ROOM_SIZE = 4
SELECTIONS_PER_ROOM = 3

VALUE_LABELS = {
    11: "J",
    12: "Q",
    13: "K",
    14: "A",
}


def value_to_label(value: int) -> str:
    """Render a card value the way it is printed on the card."""
    return VALUE_LABELS.get(value, str(value))


class CardKind(Enum):
    """What a card does when resolved."""
    MONSTER = "monster"
    WEAPON = "weapon"
    POTION = "potion"


class Suit(Enum):
    """The four suits. Clubs and spades are monsters."""
    CLUBS = "♣"
    SPADES = "♠"
    DIAMONDS = "♦"
    HEARTS = "♥"


class Phase(Enum):
    """Room lifecycle phases."""
    CHOICE = "choice"  # Waiting for face-or-avoid
    RESOLVING = "resolving"  # Room exposed, cards being selected


class Status(Enum):
    PLAYING = "playing"
    ENDED = "ended"


class Outcome(Enum):
    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class Card:
    """
    A single card of the dungeon deck.

    The card_id is only used for identity (carry tracking, equality),
    never for rules.
    """
    card_id: str
    kind: CardKind
    suit: Suit
    value: int

    def __hash__(self):
        return hash(self.card_id)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.card_id == other.card_id

    @property
    def label(self) -> str:
        return value_to_label(self.value)

    @property
    def display(self) -> str:
        """Suit and label, e.g. '♠Q'."""
        return f"{self.suit.value}{self.label}"

    @property
    def is_monster(self) -> bool:
        return self.kind == CardKind.MONSTER


@dataclass
class WeaponSlot:
    """
    The equipped weapon.

    last_defeated is the value of the last monster this weapon beat.
    None means the weapon has not fought yet and any monster is allowed.
    """
    card: Card
    last_defeated: int | None = None

    @property
    def value(self) -> int:
        return self.card.value

    @property
    def suit(self) -> Suit:
        return self.card.suit

    def can_defeat(self, monster: Card) -> bool:
        """A weapon only beats monsters no stronger than its last kill."""
        if self.last_defeated is None:
            return True
        return monster.value <= self.last_defeated


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    Mutated in place by the RulesEngine. Presentation code should only
    read from snapshots (see clone()).
    """
    seed: int | None = None
    max_health: int = MAX_HEALTH
    health: int = MAX_HEALTH

    # Weapon and the monsters it has defeated (display/record only)
    weapon: WeaponSlot | None = None
    weapon_stack: list[Card] = field(default_factory=list)

    # Zones
    room: list[Card] = field(default_factory=list)
    carried_card: Card | None = None
    deck: list[Card] = field(default_factory=list)  # Front is the next draw
    discard: list[Card] = field(default_factory=list)

    # Room-cycle bookkeeping
    turn: int = 1
    can_avoid: bool = True
    used_potion: bool = False
    selections_remaining: int = SELECTIONS_PER_ROOM
    phase: Phase = Phase.CHOICE

    # Lifecycle
    status: Status = Status.PLAYING
    outcome: Outcome | None = None
    score: int | None = None

    # Human-readable events, oldest first
    log: list[str] = field(default_factory=list)

    @property
    def is_playing(self) -> bool:
        return self.status == Status.PLAYING

    @property
    def is_over(self) -> bool:
        return self.status == Status.ENDED

    def push_log(self, message: str):
        self.log.append(message)

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
