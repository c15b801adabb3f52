"""
Game Storage - Save, restore and clear a game under a fixed key.

Loading never raises: a missing key, unreadable JSON or a record of the
wrong shape all mean "no save present".
"""

from __future__ import annotations
import logging

from pydantic import ValidationError

from ..engine_core.state import GameState
from .records import GameRecord
from .store import KeyValueStore, MemoryStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "scoundrel-game-state"


def serialize_state(state: GameState) -> str:
    """Encode a GameState as JSON."""
    return GameRecord.from_state(state).model_dump_json()


def deserialize_state(raw: str) -> GameState:
    """
    Decode a GameState from JSON.

    Raises pydantic.ValidationError on malformed input.
    """
    return GameRecord.model_validate_json(raw).to_state()


class GameStorage:
    """Persistence boundary for a single saved game."""

    def __init__(self, store: KeyValueStore | None = None, key: str = STORAGE_KEY):
        self.store = store if store is not None else MemoryStore()
        self.key = key

    def save(self, state: GameState):
        self.store.set(self.key, serialize_state(state))

    def load(self) -> GameState | None:
        try:
            raw = self.store.get(self.key)
            if not raw:
                return None
            return deserialize_state(raw)
        except (ValidationError, UnicodeDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable saved game under %r: %s", self.key, e)
            return None

    def clear(self):
        self.store.delete(self.key)
