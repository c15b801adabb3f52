"""
Storage Module - The persistence boundary.

A saved game is a whole-state snapshot stored under one fixed key.
The engine never reads or writes individual fields through storage.
"""

from .store import KeyValueStore, MemoryStore, FileStore
from .records import GameRecord, CardRecord, WeaponRecord
from .persistence import GameStorage, STORAGE_KEY, serialize_state, deserialize_state

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "FileStore",
    "GameRecord",
    "CardRecord",
    "WeaponRecord",
    "GameStorage",
    "STORAGE_KEY",
    "serialize_state",
    "deserialize_state",
]
