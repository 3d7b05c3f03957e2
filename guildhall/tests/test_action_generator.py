"""
Tests for legal action generation.

Tests:
- Phase handling
- Pending intent answers
- Credit and map actions
- Every generated action is accepted by the reducer
"""

from ..engine_core.state import GamePhase
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import ActionGenerator, legal_actions, is_legal
from ..engine_core.reducer import apply_action, reduce
from .helpers import occupy, with_armies, with_hand, with_pile, with_resources


def _types(actions):
    return [a.action_type for a in actions]


def _play(spec, state, card_id, pile=()):
    card = spec.get_card(card_id)
    if pile:
        state = with_pile(state, "player-1", card.guild.value, [spec.get_card(c) for c in pile])
    filler = [spec.get_card(c) for c in ("culture-purple-1", "building-purple-1")]
    state = with_hand(state, "player-1", [card] + filler)
    return reduce(spec, state, Action.expand("player-1", card_id))


def _assert_all_accepted(spec, state):
    actions = legal_actions(spec, state)
    assert actions
    for action in actions:
        result = apply_action(spec, state, action)
        assert result.success, f"{action.to_dict()} rejected: {result.error}"


class TestPhases:
    """Phase-dependent generation."""

    def test_setup_only_allows_end_turn(self, setup_state, guilds_spec):
        assert legal_actions(guilds_spec, setup_state) == [Action.end_turn("player-1")]

    def test_nothing_after_game_end(self, two_player_state, guilds_spec):
        ended = two_player_state._copy_with(phase=GamePhase.ENDED)
        assert legal_actions(guilds_spec, ended) == []

    def test_turn_actions(self, two_player_state, guilds_spec):
        actions = ActionGenerator(guilds_spec).generate(two_player_state)
        hand = two_player_state.current_player.hand
        expands = [a for a in actions if a.action_type == ActionType.EXPAND]
        assert {a.payload.card_id for a in expands} == {c.id for c in hand.cards}
        assert _types(actions)[-2:] == [ActionType.CONSOLIDATE, ActionType.END_TURN]

    def test_only_current_player_acts(self, two_player_state, guilds_spec):
        actions = legal_actions(guilds_spec, two_player_state)
        assert {a.player_id for a in actions} == {"player-1"}


class TestPendingAnswers:
    """Answers to pending intents."""

    def test_choice_answers(self, two_player_state, guilds_spec):
        state = _play(guilds_spec, two_player_state, "culture-yellow-2")
        actions = legal_actions(guilds_spec, state)
        assert actions[:2] == [
            Action.resolve_choice("player-1", 0, "1 Knowledge"),
            Action.resolve_choice("player-1", 0, "1 Gold"),
        ]

    def test_conditional_accept_and_decline(self, two_player_state, guilds_spec):
        state = _play(guilds_spec, two_player_state, "military-red-1")
        actions = legal_actions(guilds_spec, state)
        assert actions[:2] == [
            Action.resolve_conditional("player-1", True),
            Action.resolve_conditional("player-1", False),
        ]

    def test_unpayable_conditional_only_declines(self, two_player_state, guilds_spec):
        state = _play(guilds_spec, two_player_state, "military-red-1")
        state = with_resources(state, "player-1", gold=0)
        answers = [
            a for a in legal_actions(guilds_spec, state)
            if a.action_type == ActionType.RESOLVE_CONDITIONAL
        ]
        assert answers == [Action.resolve_conditional("player-1", False)]

    def test_nested_choice_answers(self, two_player_state, guilds_spec):
        pile = ("technology-red-1", "technology-blue-1", "technology-green-1")
        state = _play(guilds_spec, two_player_state, "technology-yellow-2", pile=pile)
        answers = [
            a for a in legal_actions(guilds_spec, state)
            if a.action_type == ActionType.RESOLVE_CONDITIONAL
        ]
        assert answers == [
            Action.resolve_conditional("player-1", True, "3 Draw"),
            Action.resolve_conditional("player-1", True, "2 Gold"),
            Action.resolve_conditional("player-1", False),
        ]

    def test_conditionals_wait_for_choices(self, two_player_state, guilds_spec):
        state = _play(guilds_spec, two_player_state, "military-blue-1", pile=("military-red-1",))
        assert ActionType.RESOLVE_CONDITIONAL not in _types(legal_actions(guilds_spec, state))

    def test_strict_policy_hides_expand(self, two_player_state, strict_spec):
        state = _play(strict_spec, two_player_state, "military-red-1")
        assert ActionType.EXPAND not in _types(legal_actions(strict_spec, state))

    def test_owed_discards_hide_expand(self, two_player_state, guilds_spec):
        state = _play(guilds_spec, two_player_state, "royal-yellow-2", pile=("royal-red-1",))
        state = reduce(guilds_spec, state, Action.resolve_conditional("player-1", True))
        types = _types(legal_actions(guilds_spec, state))
        assert ActionType.EXPAND not in types
        assert ActionType.RESOLVE_CONDITIONAL not in types
        assert ActionType.DISCARD in types


class TestCreditAndMapActions:
    """Credit-gated actions."""

    def test_take_per_market_card(self, two_player_state, guilds_spec):
        state = with_resources(two_player_state, "player-1", take_credits=1)
        takes = [a for a in legal_actions(guilds_spec, state) if a.action_type == ActionType.TAKE]
        assert [a.payload.card_id for a in takes] == [c.id for c in state.market]

    def test_no_credits_no_card_actions(self, two_player_state, guilds_spec):
        types = set(_types(legal_actions(guilds_spec, two_player_state)))
        assert types == {ActionType.EXPAND, ActionType.CONSOLIDATE, ActionType.END_TURN}

    def test_place_army_on_starting_spots(self, two_player_state, guilds_spec):
        state = with_armies(two_player_state, "player-1", 1)
        spots = [
            a.payload.spot_id for a in legal_actions(guilds_spec, state)
            if a.action_type == ActionType.PLACE_ARMY
        ]
        assert spots == [1, 5, 16, 20]

    def test_fight_and_outpost(self, two_player_state, guilds_spec):
        state = occupy(two_player_state, 8, "player-1")
        state = occupy(state, 9, "player-2")
        state = with_resources(state, "player-1", fight_credits=1, outpost_credits=1)
        actions = legal_actions(guilds_spec, state)
        assert Action.fight("player-1", 9) in actions
        assert Action.build_outpost("player-1", 8) in actions


class TestGeneratedActionsAreAccepted:
    """The reducer accepts everything the generator offers."""

    def test_plain_turn(self, two_player_state, guilds_spec):
        _assert_all_accepted(guilds_spec, two_player_state)

    def test_with_credits_and_armies(self, two_player_state, guilds_spec):
        state = with_resources(
            two_player_state,
            "player-1",
            draw_credits=1,
            take_credits=1,
            exile_credits=1,
            bury_credits=1,
        )
        state = with_armies(state, "player-1", 1)
        _assert_all_accepted(guilds_spec, state)

    def test_with_pending_intents(self, two_player_state, guilds_spec):
        _assert_all_accepted(
            guilds_spec,
            _play(guilds_spec, two_player_state, "military-blue-1", pile=("military-red-1",)),
        )
        _assert_all_accepted(
            guilds_spec,
            _play(guilds_spec, two_player_state, "military-red-1"),
        )


class TestIsLegal:
    """Membership checks."""

    def test_expand_from_hand(self, two_player_state, guilds_spec):
        card = two_player_state.current_player.hand.cards[0]
        assert is_legal(guilds_spec, two_player_state, Action.expand("player-1", card.id))

    def test_expand_not_in_hand(self, two_player_state, guilds_spec):
        hand_ids = {c.id for c in two_player_state.current_player.hand.cards}
        other = next(c for c in guilds_spec.cards if c.id not in hand_ids)
        assert not is_legal(guilds_spec, two_player_state, Action.expand("player-1", other.id))

    def test_choice_text_is_case_insensitive(self, two_player_state, guilds_spec):
        state = _play(guilds_spec, two_player_state, "culture-yellow-2")
        assert is_legal(guilds_spec, state, Action.resolve_choice("player-1", 0, "1 GOLD"))
        assert not is_legal(guilds_spec, state, Action.resolve_choice("player-1", 0, "9 Gold"))
