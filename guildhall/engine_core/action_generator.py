"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. The UI to show available actions
2. The API legal-actions endpoint
3. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified, and every
generated action is accepted by the reducer.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .state import GameState, GamePhase, PlayerState
from .action import Action
from .effect_resolver import is_cost_payable
from .placement import can_place_army, can_build_outpost, can_fight
from .queries import playable_cards

if TYPE_CHECKING:
    from ..spec_schema import GameSpec


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the current game state.

    Uses the GameSpec for the pending-resolution policy.
    """
    spec: GameSpec

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Answers to pending intents come first, in the order the player
        is expected to give them.
        """
        if state.phase == GamePhase.ENDED or not state.players:
            return []

        player = state.current_player

        if state.phase == GamePhase.SETUP:
            return [Action.end_turn(player.player_id)]

        actions = []
        actions.extend(self._generate_choice_answers(state, player))
        actions.extend(self._generate_conditional_answers(state, player))
        actions.extend(self._generate_expand_actions(state, player))
        actions.extend(self._generate_card_actions(state, player))
        actions.extend(self._generate_map_actions(state, player))

        actions.append(Action.consolidate(player.player_id))
        actions.append(Action.end_turn(player.player_id))
        return actions

    def _generate_choice_answers(self, state: GameState, player: PlayerState) -> list[Action]:
        return [
            Action.resolve_choice(player.player_id, index, benefit)
            for index, intent in enumerate(state.pending_choices)
            for benefit in intent.benefits
        ]

    def _generate_conditional_answers(
        self,
        state: GameState,
        player: PlayerState,
    ) -> list[Action]:
        """Only the front conditional can be answered, after every choice."""
        if state.pending_choices or not state.pending_conditionals:
            return []
        if state.deferred_conditional is not None:
            return []

        intent = state.pending_conditionals[0]
        actions = []
        if is_cost_payable(player, intent.clause.cost):
            if intent.nested_choices:
                actions.extend(
                    Action.resolve_conditional(player.player_id, True, choice)
                    for choice in intent.nested_choices
                )
            else:
                actions.append(Action.resolve_conditional(player.player_id, True))
        actions.append(Action.resolve_conditional(player.player_id, False))
        return actions

    def _generate_expand_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        if player.resources.discard_credits > 0:
            return []
        if self.spec.strict_pending_resolution and state.awaiting_input is not None:
            return []
        return [
            Action.expand(player.player_id, card_id)
            for card_id in playable_cards(state, player.player_id)
        ]

    def _generate_card_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        """Credit-spending actions that move cards between zones."""
        resources = player.resources
        pid = player.player_id
        actions = []

        if resources.draw_credits > 0 and not (player.deck.is_empty and player.discard.is_empty):
            actions.append(Action.draw(pid))

        if resources.take_credits > 0:
            actions.extend(Action.take(pid, card.id) for card in state.market)

        for card in player.hand.cards:
            if resources.discard_credits > 0:
                actions.append(Action.discard(pid, card.id))
            if resources.exile_credits > 0:
                actions.append(Action.exile(pid, card.id))
            if resources.bury_credits > 0:
                actions.append(Action.bury(pid, card.id))

        if resources.revive_credits > 0:
            actions.extend(Action.revive(pid, card.id) for card in player.discard.cards)

        return actions

    def _generate_map_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        pid = player.player_id
        actions = []
        for spot in state.map:
            if player.armies > 0 and can_place_army(state, pid, spot.id):
                actions.append(Action.place_army(pid, spot.id))
            if player.resources.fight_credits > 0 and can_fight(state, pid, spot.id):
                actions.append(Action.fight(pid, spot.id))
            if player.resources.outpost_credits > 0 and can_build_outpost(state, pid, spot.id):
                actions.append(Action.build_outpost(pid, spot.id))
        return actions


def legal_actions(spec: GameSpec, state: GameState) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator(spec=spec)
    return generator.generate(state)


def is_legal(spec: GameSpec, state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    return _normalized(action) in {_normalized(a) for a in legal_actions(spec, state)}


def _normalized(action: Action) -> Action:
    # Benefit names are matched case-insensitively
    if action.payload.choice is None:
        return action
    return replace(action, payload=replace(action.payload, choice=action.payload.choice.lower()))
