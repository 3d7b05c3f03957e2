"""
Reducer - Applies actions to game state.

The reducer is the single point of state change.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Total: a disallowed action is a no-op that returns the unchanged state
  together with the reason; nothing is raised to the caller
- Delegates card effects and pending intents to EffectResolver
- Delegates map checks to placement
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from ..spec_schema.game_spec import tier_for_position
from ..spec_schema.effect_dsl import Resource
from .state import GameState, GamePhase, PlayerState, Zone
from .action import Action, ActionType, ActionResult
from .effect_resolver import EffectResolver, ResolutionResult
from .placement import can_place_army, can_build_outpost, can_fight
from .queries import can_play_card
from .shuffle import Shuffle, seeded_shuffle

if TYPE_CHECKING:
    from ..spec_schema import GameSpec


# Actions that spend one credit, and the resource holding those credits
CREDIT_FOR_ACTION = {
    ActionType.DRAW: Resource.DRAW,
    ActionType.TAKE: Resource.TAKE,
    ActionType.DISCARD: Resource.DISCARD,
    ActionType.EXILE: Resource.EXILE,
    ActionType.BURY: Resource.BURY,
    ActionType.REVIVE: Resource.REVIVE,
    ActionType.FIGHT: Resource.FIGHT,
    ActionType.BUILD_OUTPOST: Resource.OUTPOST,
}


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    Spec provides rule constants; shuffle is injectable for tests.
    """
    spec: GameSpec
    resolver: EffectResolver = field(default_factory=EffectResolver)
    shuffle: Shuffle = seeded_shuffle

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state, or the unchanged state and
        an error when the action is not allowed.
        """
        validation = self._validate_action(state, action)
        if validation:
            error, code = validation
            return ActionResult.failure(error, error_code=code, state=state)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
                state=state,
            )

        try:
            result = handler(state, action)
        except Exception as e:
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR", state=state)

        if result.success:
            result.new_state = result.new_state._copy_with(
                action_history=result.new_state.action_history + (action,),
            )
        else:
            result.new_state = state
        return result

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action is allowed in the current state.

        Returns (error message, error code) if invalid, None if valid.
        """
        if state.phase == GamePhase.ENDED:
            return "Game is over - no actions allowed", "WRONG_PHASE"

        if state.phase == GamePhase.SETUP and action.action_type != ActionType.END_TURN:
            return "Game not started - only endTurn allowed during setup", "WRONG_PHASE"

        if not state.players:
            return "Game has no players", "WRONG_PHASE"

        if action.payload.player_id != state.current_player.player_id:
            return f"Not {action.payload.player_id}'s turn", "WRONG_PLAYER"

        credit = CREDIT_FOR_ACTION.get(action.action_type)
        if credit is not None and state.current_player.resources.get(credit) <= 0:
            return f"No {credit.value} credits left", "NO_CREDITS"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.EXPAND: self._handle_expand,
            ActionType.CONSOLIDATE: self._handle_consolidate,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.DRAW: self._handle_draw,
            ActionType.TAKE: self._handle_take,
            ActionType.DISCARD: self._handle_discard,
            ActionType.EXILE: self._handle_exile,
            ActionType.BURY: self._handle_bury,
            ActionType.REVIVE: self._handle_revive,
            ActionType.FIGHT: self._handle_fight,
            ActionType.BUILD_OUTPOST: self._handle_build_outpost,
            ActionType.PLACE_ARMY: self._handle_place_army,
            ActionType.RESOLVE_CHOICE: self._handle_resolve_choice,
            ActionType.RESOLVE_CONDITIONAL: self._handle_resolve_conditional,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Primary actions
    # =========================================================================

    def _handle_expand(self, state: GameState, action: Action) -> ActionResult:
        """
        Play a card from hand onto its guild pile.

        The tier is chosen by the pile length after the card lands.
        Intents left over from the previous card are declined.
        """
        player = state.current_player
        card_id = action.payload.card_id
        card = player.hand.find(card_id) if card_id else None
        if card is None:
            return ActionResult.failure(f"Card {card_id} not in hand", "CARD_NOT_IN_HAND")

        if player.resources.discard_credits > 0:
            return ActionResult.failure(
                "Discard the owed cards before playing another card", "DISCARD_PENDING"
            )

        if self.spec.strict_pending_resolution and state.awaiting_input is not None:
            return ActionResult.failure(
                "Answer the pending effects before playing another card", "AWAITING_INPUT"
            )

        if not can_play_card(state, player.player_id, card.id):
            return ActionResult.failure(
                f"Guild {card.guild.value} already holds a {card.color.value} card",
                "COLOR_RESTRICTION",
            )

        declined = list(state.pending_choices) + list(state.pending_conditionals)
        state = self.resolver.clear_pending(state)

        pile = player.get_pile(card.guild).add_top(card)
        player = player.with_changes(hand=player.hand.remove(card)).with_pile(pile)
        new_state, plan = self.resolver.play_card(state.with_player(player), card, pile.size)

        tier = tier_for_position(pile.size)
        changes = [
            f"{player.name} expanded {card.id} into {card.guild.value} "
            f"at position {pile.size} ({tier.value})"
        ]
        changes.extend(f"{player.name} gained {d.describe()}" for d in plan.immediate)
        changes.extend(f"Declined '{i.source_text}'" for i in declined)

        result = ActionResult.success_with_state(new_state, changes=changes)
        result.declined_intents = declined
        return result

    def _handle_consolidate(self, state: GameState, action: Action) -> ActionResult:
        """
        Reorganize: discard the hand and every pile card except each
        pile's base card, shuffle the discard pile under the deck, draw a
        new hand, then end the turn.
        """
        player = state.current_player

        to_discard = list(player.hand.cards)
        piles = {}
        for guild, pile in player.guild_piles.items():
            kept, removed = pile.keep_base()
            piles[guild] = kept
            to_discard.extend(removed)

        shuffled, state = self._shuffle(state, player.discard.cards + tuple(to_discard))
        drawn, deck = player.deck.add_all(shuffled).draw(self.spec.hand_size)

        player = player.with_changes(
            hand=Zone(name="hand", cards=drawn),
            deck=deck,
            discard=Zone(name="discard"),
            guild_piles=piles,
            resources=player.resources.reset_transient(),
        )
        new_state = self._advance_turn(
            self.resolver.clear_pending(state.with_player(player))
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[
                f"{player.name} consolidated and drew {len(drawn)} card(s)",
                f"Turn ended. Next player: {new_state.current_player.name}",
            ],
        )

    def _handle_end_turn(self, state: GameState, action: Action) -> ActionResult:
        """
        End the turn keeping hand and piles as they are, and pass play to
        the next player in seat order.

        The one exception is the endTurn that closes setup: it starts the
        game, fills the active player's hand from their deck and leaves
        current_player_idx and turn_number unchanged.
        """
        player = state.current_player

        if state.phase == GamePhase.SETUP:
            missing = max(0, self.spec.hand_size - player.hand.count)
            drawn, deck = player.deck.draw(missing)
            player = player.with_changes(hand=player.hand.add_all(drawn), deck=deck)
            new_state = state.with_player(player)._copy_with(phase=GamePhase.PLAYING)
            return ActionResult.success_with_state(
                new_state,
                changes=[f"Game started. {player.name} drew {len(drawn)} card(s)"],
            )

        player = player.with_resources(player.resources.reset_transient())
        new_state = self._advance_turn(
            self.resolver.clear_pending(state.with_player(player))
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Turn ended. Next player: {new_state.current_player.name}"],
        )

    # =========================================================================
    # Auxiliary actions
    # =========================================================================

    def _handle_draw(self, state: GameState, action: Action) -> ActionResult:
        """Draw the top card of the private deck, reshuffling discards if empty."""
        player = state.current_player
        deck, discard = player.deck, player.discard

        if deck.is_empty:
            if discard.is_empty:
                return ActionResult.failure("No cards left to draw", "DECK_EMPTY")
            shuffled, state = self._shuffle(state, discard.cards)
            deck = deck.replace_cards(shuffled)
            discard = discard.replace_cards(())

        drawn, deck = deck.draw(1)
        player = _spend(player, Resource.DRAW).with_changes(
            hand=player.hand.add_all(drawn),
            deck=deck,
            discard=discard,
        )
        return ActionResult.success_with_state(
            state.with_player(player),
            changes=[f"{player.name} drew a card"],
        )

    def _handle_take(self, state: GameState, action: Action) -> ActionResult:
        """Take a card from the market; the window refills from the common deck."""
        player = state.current_player
        card_id = action.payload.card_id
        card = next((c for c in state.market if c.id == card_id), None)
        if card is None:
            return ActionResult.failure(f"Card {card_id} not in market", "CARD_NOT_IN_MARKET")

        player = _spend(player, Resource.TAKE).with_changes(hand=player.hand.add(card))
        new_state = state.with_player(player)._copy_with(
            common_deck=state.common_deck.remove(card),
        )
        return ActionResult.success_with_state(
            new_state,
            changes=[f"{player.name} took {card.id} from the market"],
        )

    def _handle_discard(self, state: GameState, action: Action) -> ActionResult:
        """Discard a card from hand; may complete an accepted conditional."""
        player = state.current_player
        card = player.hand.find(action.payload.card_id or "")
        if card is None:
            return ActionResult.failure(
                f"Card {action.payload.card_id} not in hand", "CARD_NOT_IN_HAND"
            )

        player = _spend(player, Resource.DISCARD).with_changes(
            hand=player.hand.remove(card),
            discard=player.discard.add(card),
        )
        changes = [f"{player.name} discarded {card.id}"]

        completed = self.resolver.complete_deferred(state.with_player(player))
        changes.extend(completed.changes)
        return ActionResult.success_with_state(completed.new_state, changes=changes)

    def _handle_exile(self, state: GameState, action: Action) -> ActionResult:
        """Remove a card from hand permanently."""
        player = state.current_player
        card = player.hand.find(action.payload.card_id or "")
        if card is None:
            return ActionResult.failure(
                f"Card {action.payload.card_id} not in hand", "CARD_NOT_IN_HAND"
            )

        player = _spend(player, Resource.EXILE).with_changes(
            hand=player.hand.remove(card),
            exile=player.exile.add(card),
        )
        return ActionResult.success_with_state(
            state.with_player(player),
            changes=[f"{player.name} exiled {card.id}"],
        )

    def _handle_bury(self, state: GameState, action: Action) -> ActionResult:
        """Put a card from hand on the bottom of the private deck."""
        player = state.current_player
        card = player.hand.find(action.payload.card_id or "")
        if card is None:
            return ActionResult.failure(
                f"Card {action.payload.card_id} not in hand", "CARD_NOT_IN_HAND"
            )

        player = _spend(player, Resource.BURY).with_changes(
            hand=player.hand.remove(card),
            deck=player.deck.add(card),
        )
        return ActionResult.success_with_state(
            state.with_player(player),
            changes=[f"{player.name} buried {card.id}"],
        )

    def _handle_revive(self, state: GameState, action: Action) -> ActionResult:
        """Return a card from the discard pile to hand."""
        player = state.current_player
        card = player.discard.find(action.payload.card_id or "")
        if card is None:
            return ActionResult.failure(
                f"Card {action.payload.card_id} not in discard pile", "CARD_NOT_IN_DISCARD"
            )

        player = _spend(player, Resource.REVIVE).with_changes(
            hand=player.hand.add(card),
            discard=player.discard.remove(card),
        )
        return ActionResult.success_with_state(
            state.with_player(player),
            changes=[f"{player.name} revived {card.id}"],
        )

    def _handle_place_army(self, state: GameState, action: Action) -> ActionResult:
        """Place one available army on the map."""
        player = state.current_player
        spot_id = action.payload.spot_id

        if player.armies <= 0:
            return ActionResult.failure("No armies to place", "NO_ARMIES")

        spot = state.get_spot(spot_id) if spot_id is not None else None
        if spot is None:
            return ActionResult.failure(f"Unknown spot {spot_id}", "UNKNOWN_SPOT")

        if not can_place_army(state, player.player_id, spot.id):
            return ActionResult.failure(
                f"{player.name} cannot place an army on spot {spot.id}", "ILLEGAL_PLACEMENT"
            )

        new_spot = replace(
            spot,
            occupying_player=player.player_id,
            army_count=spot.army_count + 1,
        )
        player = player.with_changes(armies=player.armies - 1)
        return ActionResult.success_with_state(
            state.with_player(player).with_spot(new_spot),
            changes=[f"{player.name} placed an army on spot {spot.id}"],
        )

    def _handle_fight(self, state: GameState, action: Action) -> ActionResult:
        """Remove one opposing army from a neighbouring spot."""
        player = state.current_player
        spot_id = action.payload.spot_id
        spot = state.get_spot(spot_id) if spot_id is not None else None
        if spot is None:
            return ActionResult.failure(f"Unknown spot {spot_id}", "UNKNOWN_SPOT")

        if not can_fight(state, player.player_id, spot.id):
            return ActionResult.failure(
                f"{player.name} cannot attack spot {spot.id}", "ILLEGAL_PLACEMENT"
            )

        defender = spot.occupying_player
        remaining = spot.army_count - 1
        new_spot = replace(
            spot,
            occupying_player=defender if remaining > 0 else None,
            army_count=max(remaining, 0),
        )
        player = _spend(player, Resource.FIGHT)
        return ActionResult.success_with_state(
            state.with_player(player).with_spot(new_spot),
            changes=[f"{player.name} removed an army of {defender} from spot {spot.id}"],
        )

    def _handle_build_outpost(self, state: GameState, action: Action) -> ActionResult:
        """Build an outpost on an outpost spot the player holds."""
        player = state.current_player
        spot_id = action.payload.spot_id
        spot = state.get_spot(spot_id) if spot_id is not None else None
        if spot is None:
            return ActionResult.failure(f"Unknown spot {spot_id}", "UNKNOWN_SPOT")

        if not can_build_outpost(state, player.player_id, spot.id):
            return ActionResult.failure(
                f"{player.name} cannot build an outpost on spot {spot.id}", "ILLEGAL_PLACEMENT"
            )

        player = _spend(player, Resource.OUTPOST).with_changes(
            outposts=player.outposts + (spot.id,),
        )
        return ActionResult.success_with_state(
            state.with_player(player),
            changes=[f"{player.name} built an outpost on spot {spot.id}"],
        )

    # =========================================================================
    # Pending intents
    # =========================================================================

    def _handle_resolve_choice(self, state: GameState, action: Action) -> ActionResult:
        index = action.payload.intent_index
        resolution = self.resolver.resolve_choice(
            state,
            0 if index is None else index,
            action.payload.choice or "",
        )
        return _from_resolution(resolution)

    def _handle_resolve_conditional(self, state: GameState, action: Action) -> ActionResult:
        if action.payload.accept is None:
            return ActionResult.failure("Answer must accept or decline", "INVALID_CHOICE")
        resolution = self.resolver.resolve_conditional(
            state,
            bool(action.payload.accept),
            action.payload.choice,
        )
        return _from_resolution(resolution)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _shuffle(self, state: GameState, cards) -> tuple[tuple, GameState]:
        """Shuffle with the game's seed; every shuffle advances the counter."""
        shuffled = self.shuffle(tuple(cards), state.random_seed, state.shuffle_count)
        return tuple(shuffled), state._copy_with(shuffle_count=state.shuffle_count + 1)

    def _advance_turn(self, state: GameState) -> GameState:
        return state._copy_with(
            current_player_idx=(state.current_player_idx + 1) % state.num_players,
            turn_number=state.turn_number + 1,
        )


def _spend(player: PlayerState, resource: Resource) -> PlayerState:
    """Consume one credit."""
    return player.with_resources(player.resources.add(resource, -1))


def _from_resolution(resolution: ResolutionResult) -> ActionResult:
    if not resolution.success:
        return ActionResult.failure(resolution.error, resolution.error_code)
    return ActionResult.success_with_state(resolution.new_state, changes=resolution.changes)


def apply_action(spec: GameSpec, state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(spec=spec)
    return reducer.apply(state, action)


def reduce(spec: GameSpec, state: GameState, action: Action) -> GameState:
    """The pure reducer: (state, action) -> state."""
    return apply_action(spec, state, action).new_state
