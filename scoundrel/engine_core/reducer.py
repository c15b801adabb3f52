"""
Rules Engine - Applies player intents to game state.

The engine is the single point of state mutation.
All in-game changes go through its handlers.

Design principles:
- In place: handlers mutate the GameState they are given
- Guarded: every handler checks phase/status first and no-ops when out of phase
- Quiet: a rejected intent is never an exception
- End check runs after every card resolution
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import (
    Card,
    CardKind,
    GameState,
    Outcome,
    Phase,
    Status,
    WeaponSlot,
    ROOM_SIZE,
    SELECTIONS_PER_ROOM,
)
from .action import Action, ActionType, ActionResult
from .scoring import loss_score, win_score

logger = logging.getLogger(__name__)


@dataclass
class RulesEngine:
    """
    Rules engine for one game.

    Stateless - all state is in GameState.
    """
    room_size: int = ROOM_SIZE
    selections_per_room: int = SELECTIONS_PER_ROOM

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult carrying the log lines the action produced.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.rejected(
                state,
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        log_start = len(state.log)
        if action.action_type == ActionType.SELECT_CARD:
            applied = handler(state, action.index)
        else:
            applied = handler(state)

        if not applied:
            return ActionResult.rejected(
                state,
                self._rejection_reason(state, action),
            )
        return ActionResult.applied(state, changes=state.log[log_start:])

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.FACE_ROOM: self.face_room,
            ActionType.AVOID_ROOM: self.avoid_room,
            ActionType.SELECT_CARD: self.select_card,
        }
        return handlers.get(action_type)

    def _rejection_reason(self, state: GameState, action: Action) -> str:
        if state.is_over:
            return "Game is over - no actions allowed"
        if action.action_type == ActionType.SELECT_CARD:
            if state.phase != Phase.RESOLVING:
                return "Face the room before selecting cards"
            return f"No card at index {action.index}"
        if state.phase != Phase.CHOICE:
            return "Finish resolving the room first"
        return "Room already avoided this cycle"

    # =========================================================================
    # Game lifecycle
    # =========================================================================

    def new_game(self, seed: int | None = None) -> GameState:
        """Create a fresh game with its first room already drawn."""
        from ..game.setup import create_initial_state

        state = create_initial_state(seed)
        state.push_log("New game started.")
        self.draw_room(state)
        logger.info("New game started (seed=%s)", state.seed)
        return state

    def draw_room(self, state: GameState):
        """
        Refill the room.

        The carried card (if any) takes the first slot, then cards come
        off the front of the deck until the room is full or the deck is out.
        """
        state.room = []
        if state.carried_card is not None:
            state.room.append(state.carried_card)
            state.carried_card = None
        while len(state.room) < self.room_size and state.deck:
            state.room.append(state.deck.pop(0))

    def _reset_room_cycle(self, state: GameState):
        state.selections_remaining = self.selections_per_room
        state.used_potion = False

    # =========================================================================
    # Room intents
    # =========================================================================

    def face_room(self, state: GameState) -> bool:
        """Expose the room for resolution."""
        if state.status != Status.PLAYING:
            return False
        if state.phase != Phase.CHOICE:
            return False

        state.can_avoid = True
        if not state.room:
            self.draw_room(state)
        self._reset_room_cycle(state)
        state.phase = Phase.RESOLVING
        logger.debug("Turn %d: facing room of %d cards", state.turn, len(state.room))
        return True

    def avoid_room(self, state: GameState) -> bool:
        """Send the whole room to the bottom of the deck and draw a new one."""
        if not state.can_avoid or state.status != Status.PLAYING:
            return False
        if state.phase != Phase.CHOICE:
            return False

        if not state.room:
            self.draw_room(state)
        state.deck.extend(state.room)
        state.room = []
        state.turn += 1
        state.can_avoid = False
        state.phase = Phase.CHOICE
        state.push_log("Avoided the room.")
        self.draw_room(state)
        self._reset_room_cycle(state)
        logger.debug("Turn %d: room avoided, deck now %d cards", state.turn, len(state.deck))
        return True

    def select_card(self, state: GameState, index: int | None) -> bool:
        """
        Resolve the room card at index.

        After the last selection of the cycle a single leftover card is
        carried into the next room.
        """
        if state.status != Status.PLAYING:
            return False
        if state.phase != Phase.RESOLVING:
            return False
        if state.selections_remaining <= 0:
            return False
        if index is None or not 0 <= index < len(state.room):
            return False

        card = state.room.pop(index)
        self.resolve_card(state, card)
        state.selections_remaining -= 1

        if state.selections_remaining == 0:
            self._finish_room(state)

        self.check_end(state)
        return True

    def _finish_room(self, state: GameState):
        if len(state.room) == 1:
            state.carried_card = state.room[0]
        elif state.room:
            # Unreachable with a full room; keep every card accounted for
            state.discard.extend(state.room)
        state.room = []

        state.turn += 1
        state.can_avoid = True
        state.phase = Phase.CHOICE
        self.draw_room(state)
        self._reset_room_cycle(state)

    # =========================================================================
    # Card resolution
    # =========================================================================

    def resolve_card(self, state: GameState, card: Card):
        """Dispatch by card kind, then discard the card."""
        handlers = {
            CardKind.WEAPON: self._resolve_weapon,
            CardKind.POTION: self._resolve_potion,
            CardKind.MONSTER: self._resolve_monster,
        }
        handlers[card.kind](state, card)
        state.discard.append(card)

    def _resolve_monster(self, state: GameState, monster: Card):
        weapon = state.weapon
        if weapon is None:
            state.health -= monster.value
            state.push_log(f"Took {monster.value} damage (no weapon).")
            return

        if not weapon.can_defeat(monster):
            state.health -= monster.value
            state.push_log(f"Weapon too weak, took {monster.value} damage.")
            return

        damage = max(0, monster.value - weapon.value)
        if damage > 0:
            state.health -= damage
            state.push_log(f"Blocked with {weapon.card.display}, took {damage} damage.")
        else:
            state.push_log(f"Defeated {monster.display} with weapon.")
        weapon.last_defeated = monster.value
        state.weapon_stack.append(monster)

    def _resolve_weapon(self, state: GameState, weapon: Card):
        state.weapon = WeaponSlot(card=weapon)
        state.weapon_stack = []
        state.push_log(f"Equipped {weapon.display}.")

    def _resolve_potion(self, state: GameState, potion: Card):
        # Only the first potion of a room-cycle heals
        if state.used_potion:
            state.push_log(f"Discarded extra potion {potion.display}.")
            return

        before = state.health
        state.health = min(state.max_health, state.health + potion.value)
        healed = state.health - before
        state.used_potion = True
        state.push_log(f"Healed {healed} with {potion.display}.")

    # =========================================================================
    # End of game
    # =========================================================================

    def check_end(self, state: GameState) -> bool:
        """
        End the game if the player died or cleared the dungeon.

        Death is checked first, so a lethal last card is still a loss.
        """
        if state.health <= 0:
            state.health = 0
            state.status = Status.ENDED
            state.outcome = Outcome.LOSS
            state.score = loss_score(state.deck)
            state.push_log(f"Defeat. Score {state.score}.")
            logger.info("Game lost on turn %d with score %d", state.turn, state.score)
            return True

        if not state.deck and not state.room:
            state.status = Status.ENDED
            state.outcome = Outcome.WIN
            state.score = win_score(state)
            state.push_log(f"Victory! Score {state.score}.")
            logger.info("Game won on turn %d with score %d", state.turn, state.score)
            return True

        return False


def apply_action(state: GameState, action: Action) -> ActionResult:
    """Convenience function to apply an action with a default engine."""
    return RulesEngine().apply(state, action)
