"""
Session Module - Owns live games.

A session represents one player's game:
- Opened from a save, or dealt fresh
- Accepts intents from the presentation layer
- Saves the whole state after every applied intent
"""

from .manager import GameSession, SessionManager

__all__ = [
    "GameSession",
    "SessionManager",
]
