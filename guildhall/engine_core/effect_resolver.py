"""
Effect Resolver - Applies compiled card effects and runs the pending
effect protocol.

Playing a card resolves in two phases:
1. Immediate deltas from the tier power and the bonus are applied at once.
2. Choice and conditional clauses become pending intents that the player
   answers one at a time. Choices are answered before conditionals; each
   category is FIFO.

A conditional with a discard cost spans several actions: accepting it
grants discard credits, and the benefit lands only when the last required
card has been discarded. Every other conditional pays and applies in the
same call.

The resolver owns no state; it returns new states.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..spec_schema.game_spec import Card, tier_for_position
from ..spec_schema.effect_dsl import (
    Benefit,
    ClauseKind,
    ConditionalClause,
    Cost,
    CostType,
    EffectProgram,
    Resource,
    ResourceDelta,
    UnrecognizedClause,
)
from .state import (
    DeferredConditional,
    GameState,
    PendingChoice,
    PendingConditional,
    PlayerState,
)


@dataclass(frozen=True)
class EffectPlan:
    """
    What playing a card does.

    Intents from the tier power come before intents from the bonus.
    """
    immediate: tuple[ResourceDelta, ...] = ()
    conditionals: tuple[PendingConditional, ...] = ()
    choices: tuple[PendingChoice, ...] = ()
    dropped: tuple[UnrecognizedClause, ...] = ()


def apply_delta(player: PlayerState, delta: ResourceDelta) -> PlayerState:
    """Apply a single resource delta to a player."""
    if delta.resource == Resource.ARMY:
        return player.with_changes(armies=player.armies + delta.amount)
    return player.with_resources(player.resources.add(delta.resource, delta.amount))


def apply_deltas(player: PlayerState, deltas: tuple[ResourceDelta, ...]) -> PlayerState:
    for delta in deltas:
        player = apply_delta(player, delta)
    return player


def _resource_amount(player: PlayerState, resource: Resource) -> int:
    if resource == Resource.ARMY:
        return player.armies
    return player.resources.get(resource)


def is_cost_payable(player: PlayerState, cost: Cost) -> bool:
    """
    Check a cost against the player.

    PAY needs the resource on hand; DISCARD needs enough cards in hand.
    """
    if cost.cost_type == CostType.DISCARD:
        return player.hand.count >= cost.amount
    if cost.resource is None:
        return False
    return _resource_amount(player, cost.resource) >= cost.amount


def pay_cost(player: PlayerState, cost: Cost) -> PlayerState:
    """Spend a PAY cost. Discard costs are paid through discard actions."""
    if cost.cost_type != CostType.PAY or cost.resource is None:
        return player
    return apply_delta(player, ResourceDelta(resource=cost.resource, amount=-cost.amount))


def plan_effects(
    tier_program: EffectProgram,
    bonus_program: EffectProgram,
    player: PlayerState,
) -> EffectPlan:
    """
    Turn the tier power and bonus into an EffectPlan.

    Conditionals are kept only if their cost is payable once the
    immediate deltas have been applied; free actions are opt-in, so a
    conditional the player cannot afford is never offered.
    """
    immediate: list[ResourceDelta] = []
    candidates: list[ConditionalClause] = []
    choices: list[PendingChoice] = []
    dropped: list[UnrecognizedClause] = []

    for program in (tier_program, bonus_program):
        for clause in program.clauses:
            if clause.kind == ClauseKind.GAIN:
                immediate.extend(clause.deltas)
            elif clause.kind == ClauseKind.CONDITIONAL:
                candidates.append(clause)
            elif clause.kind == ClauseKind.CHOICE:
                choices.append(PendingChoice(clause=clause))
            else:
                dropped.append(clause)

    after = apply_deltas(player, tuple(immediate))
    conditionals = tuple(
        PendingConditional(clause=clause)
        for clause in candidates
        if is_cost_payable(after, clause.cost)
    )

    return EffectPlan(
        immediate=tuple(immediate),
        conditionals=conditionals,
        choices=tuple(choices),
        dropped=tuple(dropped),
    )


def plan_card_play(card: Card, position: int, player: PlayerState) -> EffectPlan:
    """Plan the effects of a card landing at a 1-based pile position."""
    tier = tier_for_position(position)
    if tier is None:
        return EffectPlan()
    return plan_effects(card.effects_for(tier), card.compiled_bonus(), player)


@dataclass
class EffectResolver:
    """
    Runs card plays and answers to pending intents.

    All methods act on the current player of the given state.
    """

    def play_card(
        self,
        state: GameState,
        card: Card,
        position: int,
    ) -> tuple[GameState, EffectPlan]:
        """
        Apply the immediate effects of a card already placed in its pile
        and install its pending intents.
        """
        player = state.current_player
        plan = plan_card_play(card, position, player)
        player = apply_deltas(player, plan.immediate)
        new_state = state.with_player(player)._copy_with(
            pending_choices=plan.choices,
            pending_conditionals=plan.conditionals,
            deferred_conditional=None,
        )
        return new_state, plan

    def resolve_choice(
        self,
        state: GameState,
        intent_index: int,
        chosen_text: str,
    ) -> ResolutionResult:
        """Apply the chosen benefit of a pending choice and remove it."""
        if not state.pending_choices:
            return ResolutionResult.failure("No choice pending", "NO_PENDING_INTENT")

        if intent_index < 0 or intent_index >= len(state.pending_choices):
            return ResolutionResult.failure(
                f"No pending choice at index {intent_index}", "NO_PENDING_INTENT"
            )

        intent = state.pending_choices[intent_index]
        option = intent.clause.find_option(chosen_text or "")
        if option is None:
            return ResolutionResult.failure(
                f"'{chosen_text}' is not one of: {', '.join(intent.benefits)}",
                "INVALID_CHOICE",
            )

        player = apply_deltas(state.current_player, option.deltas)
        remaining = (
            state.pending_choices[:intent_index]
            + state.pending_choices[intent_index + 1:]
        )
        new_state = state.with_player(player)._copy_with(pending_choices=remaining)
        return ResolutionResult(
            new_state=new_state,
            changes=[f"{player.name} chose {option.text}"],
        )

    def resolve_conditional(
        self,
        state: GameState,
        accept: bool,
        chosen_text: str | None = None,
    ) -> ResolutionResult:
        """
        Answer the front pending conditional.

        Declining removes it. Accepting a PAY cost pays and applies the
        benefit at once; accepting a DISCARD cost grants the discard
        credits and defers the benefit.
        """
        if state.pending_choices:
            return ResolutionResult.failure(
                "Resolve pending choices first", "CHOICE_FIRST"
            )
        if not state.pending_conditionals:
            return ResolutionResult.failure("No conditional pending", "NO_PENDING_INTENT")
        if state.deferred_conditional is not None:
            return ResolutionResult.failure(
                "Finish discarding for the accepted conditional first",
                "DISCARD_PENDING",
            )

        intent = state.pending_conditionals[0]
        remaining = state.pending_conditionals[1:]
        player = state.current_player

        if not accept:
            return ResolutionResult(
                new_state=state._copy_with(pending_conditionals=remaining),
                changes=[f"{player.name} declined '{intent.source_text}'"],
            )

        benefit = self._select_benefit(intent.clause, chosen_text)
        if benefit is None:
            return ResolutionResult.failure(
                f"Choose one of: {', '.join(intent.nested_choices)}",
                "INVALID_CHOICE",
            )

        cost = intent.clause.cost
        if not is_cost_payable(player, cost):
            return ResolutionResult.failure(
                f"Cannot pay '{cost.text}'", "COST_UNPAYABLE"
            )

        if cost.cost_type == CostType.DISCARD:
            player = player.with_resources(
                player.resources.set(Resource.DISCARD, cost.amount)
            )
            new_state = state.with_player(player)._copy_with(
                deferred_conditional=DeferredConditional(intent=intent, benefit=benefit),
            )
            return ResolutionResult(
                new_state=new_state,
                changes=[
                    f"{player.name} accepted '{intent.source_text}': "
                    f"discard {cost.amount} card(s) to receive {benefit.text}"
                ],
            )

        player = apply_deltas(pay_cost(player, cost), benefit.deltas)
        new_state = state.with_player(player)._copy_with(pending_conditionals=remaining)
        return ResolutionResult(
            new_state=new_state,
            changes=[f"{player.name} paid {cost.text} for {benefit.text}"],
        )

    def complete_deferred(self, state: GameState) -> ResolutionResult:
        """
        Apply a deferred benefit once the discard credits are used up.

        Leaves the state unchanged while discards are still owed.
        """
        deferred = state.deferred_conditional
        player = state.current_player
        if deferred is None or player.resources.discard_credits > 0:
            return ResolutionResult(new_state=state)

        player = apply_deltas(player, deferred.benefit.deltas)
        # The deferred intent is always the front conditional
        remaining = state.pending_conditionals[1:]
        new_state = state.with_player(player)._copy_with(
            pending_conditionals=remaining,
            deferred_conditional=None,
        )
        return ResolutionResult(
            new_state=new_state,
            changes=[f"{player.name} received {deferred.benefit.text}"],
        )

    @staticmethod
    def _select_benefit(
        clause: ConditionalClause,
        chosen_text: str | None,
    ) -> Benefit | None:
        if not clause.nested_choices:
            return clause.benefit
        if not chosen_text:
            return None
        return clause.find_choice(chosen_text)

    @staticmethod
    def clear_pending(state: GameState) -> GameState:
        """Drop every unanswered intent, as an implicit "no"."""
        return state._copy_with(
            pending_choices=(),
            pending_conditionals=(),
            deferred_conditional=None,
        )


@dataclass
class ResolutionResult:
    """Result of answering a pending intent."""
    new_state: GameState | None = None
    error: str | None = None
    error_code: str | None = None
    changes: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: str, error_code: str) -> ResolutionResult:
        return cls(error=error, error_code=error_code)
