"""
Tests for the rules engine (state transitions).

Tests:
- Card resolution (monster, weapon, potion)
- Room lifecycle (face, avoid, select, carry)
- End of game and scoring
- Out-of-phase guards
"""

import pytest

from ..engine_core.state import GameState, WeaponSlot, Phase, Status, Outcome
from ..engine_core.action import Action
from ..engine_core.reducer import RulesEngine, apply_action
from ..engine_core.scoring import loss_score
from .conftest import monster, weapon, potion


def resolving(room, deck=None, **kwargs) -> GameState:
    return GameState(room=list(room), deck=list(deck or []), phase=Phase.RESOLVING, **kwargs)


class TestMonster:
    """Tests for combat."""

    def test_no_weapon_full_damage(self, engine):
        state = resolving([monster(9), potion(2)], deck=[monster(2)], health=15)

        assert engine.select_card(state, 0)

        assert state.health == 6
        assert state.weapon is None
        assert state.weapon_stack == []
        assert state.log[-1] == "Took 9 damage (no weapon)."

    def test_weapon_reduces_damage(self, engine):
        state = resolving([monster(9), potion(2)], deck=[monster(2)])
        state.weapon = WeaponSlot(card=weapon(5))

        engine.select_card(state, 0)

        assert state.health == 16
        assert state.weapon.last_defeated == 9
        assert state.log[-1] == "Blocked with ♦5, took 4 damage."

    def test_weapon_blocks_fully(self, engine):
        beast = monster(3)
        state = resolving([beast, potion(2)], deck=[monster(2)])
        state.weapon = WeaponSlot(card=weapon(5))

        engine.select_card(state, 0)

        assert state.health == 20
        assert state.weapon.last_defeated == 3
        assert state.weapon_stack == [beast]
        assert state.log[-1] == "Defeated ♠3 with weapon."

    def test_durability_rule(self, engine):
        """A 5 that beat a 9 can beat another 9 but not a 10."""
        first, second, big = monster(9), monster(9), monster(10)
        state = resolving([first, second, big, potion(2)], deck=[monster(2)])
        state.weapon = WeaponSlot(card=weapon(5))

        engine.select_card(state, 0)
        assert state.weapon.last_defeated == 9
        assert state.health == 16

        engine.select_card(state, 0)
        assert state.weapon.last_defeated == 9
        assert state.health == 12
        assert state.weapon_stack == [first, second]

        engine.select_card(state, 0)
        assert state.health == 2
        assert state.weapon.last_defeated == 9
        assert state.weapon_stack == [first, second]
        assert "Weapon too weak, took 10 damage." in state.log

    def test_weaker_monster_lowers_bound(self, engine):
        state = resolving([monster(8), monster(4), monster(6), potion(2)], deck=[monster(2)])
        state.weapon = WeaponSlot(card=weapon(10))

        engine.select_card(state, 0)
        engine.select_card(state, 0)
        assert state.weapon.last_defeated == 4

        # 6 > 4, so the weapon cannot be used
        engine.select_card(state, 0)
        assert state.health == 14
        assert state.weapon.last_defeated == 4


class TestWeapon:

    def test_equip_replaces_weapon_and_stack(self, engine):
        new_weapon = weapon(7)
        state = resolving([new_weapon, potion(2)], deck=[monster(2)])
        state.weapon = WeaponSlot(card=weapon(5), last_defeated=9)
        state.weapon_stack = [monster(9)]

        engine.select_card(state, 0)

        assert state.weapon.card == new_weapon
        assert state.weapon.last_defeated is None
        assert state.weapon_stack == []
        assert state.log[-1] == "Equipped ♦7."


class TestPotion:

    def test_only_first_potion_heals(self, engine):
        first, second = potion(4), potion(6)
        state = resolving([first, second, monster(2), monster(3)], deck=[monster(2)], health=10)

        engine.select_card(state, 0)
        assert state.health == 14
        assert state.used_potion is True
        assert state.log[-1] == "Healed 4 with ♥4."

        engine.select_card(state, 0)
        assert state.health == 14
        assert state.log[-1] == "Discarded extra potion ♥6."
        assert first in state.discard and second in state.discard

    def test_heal_clamped_to_max(self, engine):
        state = resolving([potion(4), monster(2)], deck=[monster(2)], health=18)

        engine.select_card(state, 0)

        assert state.health == 20
        assert state.log[-1] == "Healed 2 with ♥4."

    def test_no_op_heal_still_uses_potion(self, engine):
        state = resolving([potion(3), potion(5), monster(2)], deck=[monster(2)])

        engine.select_card(state, 0)
        assert state.log[-1] == "Healed 0 with ♥3."
        assert state.used_potion is True

        state.health = 10
        engine.select_card(state, 0)
        assert state.health == 10

    def test_potion_flag_resets_next_room(self, engine, resolving_state):
        state = resolving_state
        for _ in range(3):
            engine.select_card(state, 0)

        assert state.used_potion is False


class TestDiscard:

    def test_every_resolved_card_discarded(self, engine):
        cards = [monster(2), weapon(3), potion(4), monster(5)]
        state = resolving(cards, deck=[monster(6)])

        for _ in range(3):
            engine.select_card(state, 0)

        assert state.discard == cards[:3]


class TestFaceRoom:

    def test_face_enters_resolving(self, engine, choice_state):
        state = choice_state
        state.can_avoid = False
        state.used_potion = True

        assert engine.face_room(state)

        assert state.phase == Phase.RESOLVING
        assert state.selections_remaining == 3
        assert state.used_potion is False
        assert state.can_avoid is True

    def test_face_twice_is_noop(self, engine, choice_state):
        engine.face_room(choice_state)
        assert not engine.face_room(choice_state)

    def test_face_draws_empty_room(self, engine):
        deck = [monster(2), monster(3), potion(4), weapon(5), monster(6)]
        state = GameState(deck=list(deck))

        engine.face_room(state)

        assert state.room == deck[:4]
        assert state.deck == deck[4:]


class TestAvoidRoom:

    def test_avoid_returns_room_to_bottom(self, engine, choice_state):
        state = choice_state
        old_room = list(state.room)
        old_deck = list(state.deck)

        assert engine.avoid_room(state)

        assert state.room == old_deck[:4]
        assert state.deck == old_deck[4:] + old_room
        assert len(state.deck) + len(state.room) == len(old_deck) + len(old_room)
        assert state.turn == 2
        assert state.can_avoid is False
        assert state.phase == Phase.CHOICE
        assert state.log[-1] == "Avoided the room."
        assert state.discard == []

    def test_avoid_resets_room_cycle(self, engine, choice_state):
        state = choice_state
        state.used_potion = True
        state.selections_remaining = 0

        engine.avoid_room(state)

        assert state.used_potion is False
        assert state.selections_remaining == 3

    def test_cannot_avoid_twice(self, engine, choice_state):
        engine.avoid_room(choice_state)
        deck_before = list(choice_state.deck)

        assert not engine.avoid_room(choice_state)
        assert choice_state.deck == deck_before
        assert choice_state.turn == 2

    def test_avoid_available_again_next_cycle(self, engine):
        state = GameState(
            room=[potion(2), potion(3), weapon(2), weapon(3)],
            deck=[potion(4), potion(5), weapon(4), weapon(5), monster(2)],
        )
        engine.avoid_room(state)
        assert state.can_avoid is False
        engine.face_room(state)
        for _ in range(3):
            engine.select_card(state, 0)

        assert state.phase == Phase.CHOICE
        assert state.can_avoid is True

    def test_cannot_avoid_while_resolving(self, engine, resolving_state):
        assert not engine.avoid_room(resolving_state)

    def test_avoid_draws_empty_room_first(self, engine):
        deck = [monster(v) for v in range(2, 10)]
        state = GameState(deck=list(deck))

        engine.avoid_room(state)

        assert state.room == deck[4:8]
        assert state.deck == deck[:4]


class TestSelectCard:

    def test_requires_resolving_phase(self, engine, choice_state):
        room = list(choice_state.room)
        assert not engine.select_card(choice_state, 0)
        assert choice_state.room == room

    @pytest.mark.parametrize("index", [-1, 4, 10, None])
    def test_bad_index_is_noop(self, engine, resolving_state, index):
        room = list(resolving_state.room)
        assert not engine.select_card(resolving_state, index)
        assert resolving_state.room == room
        assert resolving_state.selections_remaining == 3

    def test_carry_forward(self, engine, resolving_state):
        state = resolving_state
        leftover = state.room[3]
        deck = list(state.deck)

        for _ in range(3):
            engine.select_card(state, 0)

        assert state.carried_card is None
        assert state.room[0] == leftover
        assert state.room[1:] == deck[:3]
        assert state.deck == deck[3:]
        assert state.turn == 2
        assert state.phase == Phase.CHOICE
        assert state.selections_remaining == 3

    def test_three_card_room_leaves_nothing(self, engine):
        deck = [monster(v) for v in range(2, 7)]
        state = resolving([potion(2), potion(3), weapon(2)], deck=deck)

        for _ in range(3):
            engine.select_card(state, 0)

        assert state.carried_card is None
        assert state.room == deck[:4]

    def test_selection_counter(self, engine, resolving_state):
        engine.select_card(resolving_state, 1)
        assert resolving_state.selections_remaining == 2
        assert len(resolving_state.room) == 3
        assert resolving_state.phase == Phase.RESOLVING


class TestEndOfGame:

    def test_loss_scores_monsters_left_in_deck(self, engine):
        deck = [monster(5), monster(7), potion(3), weapon(4)]
        state = resolving([monster(10), potion(2)], deck=deck, health=5)

        engine.select_card(state, 0)

        assert state.status == Status.ENDED
        assert state.outcome == Outcome.LOSS
        assert state.score == -12
        assert state.health == 0
        assert state.log[-1] == "Defeat. Score -12."

    def test_loss_with_no_monsters_left_scores_zero(self, engine):
        state = resolving([monster(14)], health=5)

        engine.select_card(state, 0)

        assert state.outcome == Outcome.LOSS
        assert state.score == 0

    def test_win_scores_health(self, engine):
        state = resolving([potion(2)], health=10)

        engine.select_card(state, 0)

        assert state.status == Status.ENDED
        assert state.outcome == Outcome.WIN
        assert state.score == 12
        assert state.log[-1] == "Victory! Score 12."

    def test_last_card_carried_then_cleared(self, engine):
        state = resolving([potion(2), potion(3), monster(2), monster(3)], health=10)

        for _ in range(3):
            engine.select_card(state, 0)
        assert state.status == Status.PLAYING
        assert len(state.room) == 1

        engine.face_room(state)
        engine.select_card(state, 0)

        assert state.outcome == Outcome.WIN
        assert state.score == 7

    def test_no_intents_after_end(self, engine):
        state = resolving([potion(2)], health=10)
        engine.select_card(state, 0)

        assert not engine.face_room(state)
        assert not engine.avoid_room(state)
        assert not engine.select_card(state, 0)

    def test_loss_score_helper(self):
        assert loss_score([monster(2), potion(9), monster(11)]) == -13
        assert loss_score([]) == 0


class TestNewGame:

    def test_new_game_draws_room(self, engine):
        state = engine.new_game(seed=3)

        assert len(state.room) == 4
        assert len(state.deck) == 40
        assert state.phase == Phase.CHOICE
        assert state.status == Status.PLAYING
        assert state.log == ["New game started."]

    def test_seeded_games_match(self, engine):
        a = engine.new_game(seed=11)
        b = engine.new_game(seed=11)
        assert [(c.kind, c.value) for c in a.room] == [(c.kind, c.value) for c in b.room]


class TestApply:
    """Tests for action dispatch."""

    def test_applied_result_carries_changes(self, choice_state):
        result = apply_action(choice_state, Action.avoid_room())

        assert result.success
        assert result.state is choice_state
        assert result.state_changes == ["Avoided the room."]

    def test_rejected_result(self, resolving_state):
        result = apply_action(resolving_state, Action.face_room())

        assert not result.success
        assert result.error_code == "NOT_ALLOWED"
        assert "resolving" in result.error.lower()

    def test_select_out_of_phase_reason(self, choice_state):
        result = RulesEngine().apply(choice_state, Action.select_card(0))

        assert not result.success
        assert "face" in result.error.lower()

    def test_game_over_reason(self):
        state = GameState(status=Status.ENDED)
        result = apply_action(state, Action.face_room())
        assert "over" in result.error.lower()
