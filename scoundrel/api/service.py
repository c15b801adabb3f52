"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session intents
2. Manages sessions
3. Formats game state for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union

from ..engine_core.state import Card, CardKind, GameState, value_to_label
from ..engine_core.action import ActionResult
from ..session import SessionManager, GameSession
from .schemas import (
    CardInfo,
    WeaponInfo,
    NewGameRequest,
    GameStateResponse,
    IntentResponse,
    ErrorResponse,
    ErrorCode,
)

KIND_LABELS = {
    CardKind.MONSTER: "Monster",
    CardKind.WEAPON: "Weapon",
    CardKind.POTION: "Potion",
}


def card_info(card: Card) -> CardInfo:
    return CardInfo(
        card_id=card.card_id,
        kind=card.kind.value,
        kind_label=KIND_LABELS[card.kind],
        suit=card.suit.value,
        value=card.value,
        label=card.label,
    )


def game_state_response(game_id: str, state: GameState) -> GameStateResponse:
    """Build the client view of a state."""
    weapon = None
    if state.weapon is not None:
        last = state.weapon.last_defeated
        weapon = WeaponInfo(
            card=card_info(state.weapon.card),
            last_defeated=last,
            last_defeated_label=value_to_label(last) if last is not None else None,
            stack=[card_info(c) for c in state.weapon_stack],
        )

    return GameStateResponse(
        game_id=game_id,
        health=state.health,
        max_health=state.max_health,
        weapon=weapon,
        turn=state.turn,
        deck_count=len(state.deck),
        discard_count=len(state.discard),
        can_avoid=state.can_avoid,
        avoid_state="Ready" if state.can_avoid else "Used",
        used_potion=state.used_potion,
        selections_remaining=state.selections_remaining,
        phase=state.phase.value,
        status=state.status.value,
        outcome=state.outcome.value if state.outcome else None,
        score=state.score,
        room=[card_info(c) for c in state.room],
        carried_card=card_info(state.carried_card) if state.carried_card else None,
        log=list(reversed(state.log)),
    )


def _not_found(game_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Game {game_id} not found",
        error_code=ErrorCode.GAME_NOT_FOUND,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        game = service.new_game(NewGameRequest(seed=7))
        result = service.face_room(game.game_id)
        result = service.select_card(game.game_id, 0)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Finished games older than this are dropped when a new game is dealt
    stale_after_seconds: int = 3600

    def new_game(self, request: NewGameRequest | None = None) -> GameStateResponse:
        seed = request.seed if request else None
        self.session_manager.cleanup_stale_sessions(self.stale_after_seconds)
        session = self.session_manager.create_session(seed=seed)
        return game_state_response(session.session_id, session.state)

    def get_game(self, game_id: str) -> Union[GameStateResponse, ErrorResponse]:
        session = self.session_manager.get_session(game_id)
        if not session:
            return _not_found(game_id)
        return game_state_response(game_id, session.snapshot())

    def restart(self, game_id: str) -> Union[GameStateResponse, ErrorResponse]:
        session = self.session_manager.get_session(game_id)
        if not session:
            return _not_found(game_id)
        session.restart()
        return game_state_response(game_id, session.state)

    def face_room(self, game_id: str) -> Union[IntentResponse, ErrorResponse]:
        return self._intent(game_id, lambda s: s.face_room())

    def avoid_room(self, game_id: str) -> Union[IntentResponse, ErrorResponse]:
        return self._intent(game_id, lambda s: s.avoid_room())

    def select_card(self, game_id: str, index: int) -> Union[IntentResponse, ErrorResponse]:
        return self._intent(game_id, lambda s: s.select_card(index))

    def end_game(self, game_id: str) -> bool:
        return self.session_manager.end_session(game_id)

    def list_games(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def _intent(self, game_id: str, send) -> Union[IntentResponse, ErrorResponse]:
        session: GameSession | None = self.session_manager.get_session(game_id)
        if not session:
            return _not_found(game_id)

        result: ActionResult = send(session)
        return IntentResponse(
            applied=result.success,
            reason=result.error,
            changes=result.state_changes,
            game=game_state_response(game_id, session.state),
        )
