"""
Session Manager - Owns live games and turns intents into engine calls.

LIFECYCLE:
1. A GameSession is opened: restore the save, or start a fresh game
2. The presentation layer sends intents (face, avoid, select, new, restart)
3. The engine validates and mutates the session's state
4. After every applied intent the whole state is saved
5. The presentation layer re-renders from snapshot()

There is no ambient game: every caller holds its own GameSession.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import time
import uuid

from ..engine_core.state import GameState
from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import RulesEngine
from ..storage import GameStorage

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """
    One player's game plus its save slot.

    Usage:
        session = GameSession(storage=GameStorage(FileStore()))
        session.open()
        session.face_room()
        session.select_card(0)
        view = session.snapshot()
    """
    storage: GameStorage = field(default_factory=GameStorage)
    engine: RulesEngine = field(default_factory=RulesEngine)
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)

    state: GameState | None = None

    def open(self) -> GameState:
        """Restore the last save, or start a new game if there is none."""
        saved = self.storage.load()
        if saved is None:
            self.state = self.engine.new_game()
            self.state.log = ["Welcome to Scoundrel."]
        else:
            self.state = saved
        if not self.state.room and self.state.is_playing:
            self.engine.draw_room(self.state)
        self._persist()
        return self.state

    # =========================================================================
    # Session intents
    # =========================================================================

    def new_game(self, seed: int | None = None) -> GameState:
        """Throw away the save and deal a fresh game."""
        self.storage.clear()
        self.state = self.engine.new_game(seed)
        self._persist()
        return self.state

    def restart(self) -> GameState:
        """Reload the last save, falling back to a new game."""
        saved = self.storage.load()
        if saved is None:
            return self.new_game()
        self.state = saved
        self.state.push_log("Game restored from last session.")
        self._persist()
        logger.info("Session %s restored from save", self.session_id)
        return self.state

    # =========================================================================
    # In-game intents
    # =========================================================================

    def face_room(self) -> ActionResult:
        return self.apply(Action.face_room())

    def avoid_room(self) -> ActionResult:
        return self.apply(Action.avoid_room())

    def select_card(self, index: int) -> ActionResult:
        return self.apply(Action.select_card(index))

    def apply(self, action: Action) -> ActionResult:
        if self.state is None:
            self.open()
        result = self.engine.apply(self.state, action)
        if result.success:
            self._persist()
        else:
            logger.debug("Ignored %s: %s", action.action_type.value, result.error)
        return result

    # =========================================================================
    # Read-only views
    # =========================================================================

    def snapshot(self) -> GameState:
        """Deep copy of the current state for rendering."""
        if self.state is None:
            self.open()
        return self.state.clone()

    def recent_log(self, limit: int | None = None) -> list[str]:
        """Log entries newest first."""
        entries = list(reversed(self.state.log)) if self.state else []
        return entries if limit is None else entries[:limit]

    def _persist(self):
        self.storage.save(self.state)


class SessionManager:
    """
    Manages live game sessions.

    Responsibilities:
    - Create sessions, each with its own save slot
    - Look sessions up by id
    - Drop finished or abandoned sessions
    """

    def __init__(self, storage_factory=None):
        self._sessions: dict[str, GameSession] = {}
        self._storage_factory = storage_factory or (lambda session_id: GameStorage())

    def create_session(self, seed: int | None = None) -> GameSession:
        """Create a session with a freshly dealt game."""
        session_id = str(uuid.uuid4())
        session = GameSession(
            storage=self._storage_factory(session_id),
            session_id=session_id,
        )
        session.new_game(seed)
        self._sessions[session_id] = session
        logger.debug("Created session %s", session_id)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session and clear its save."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.storage.clear()
        session.state = None
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions whose game is still being played."""
        return [
            sid for sid, session in self._sessions.items()
            if session.state is not None and session.state.is_playing
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600):
        """
        Drop finished sessions older than max_age.

        Called periodically to free memory.
        """
        current_time = time.time()
        to_remove = [
            sid for sid, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
            and (session.state is None or session.state.is_over)
        ]
        for session_id in to_remove:
            self.end_session(session_id)
