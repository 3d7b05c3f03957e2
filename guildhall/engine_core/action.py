"""
Action System - Actions, payloads, and results.

Actions represent:
1. Primary turn actions (expand, consolidate, end turn)
2. Auxiliary actions that spend credits (draw, take, discard, ...)
3. Answers to pending intents (resolve choice, resolve conditional)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class ActionType(Enum):
    """Types of actions in the system."""
    # Primary turn actions
    EXPAND = "expand"
    CONSOLIDATE = "consolidate"
    END_TURN = "endTurn"

    # Auxiliary actions, one credit each
    DRAW = "draw"
    TAKE = "take"
    DISCARD = "discard"
    EXILE = "exile"
    BURY = "bury"
    REVIVE = "revive"
    FIGHT = "fight"
    BUILD_OUTPOST = "buildOutpost"
    PLACE_ARMY = "placeArmy"

    # Answers to pending intents
    RESOLVE_CHOICE = "resolveChoice"
    RESOLVE_CONDITIONAL = "resolveConditional"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    player_id: str | None = None
    card_id: str | None = None
    spot_id: int | None = None

    # For answers to pending intents
    intent_index: int | None = None
    accept: bool | None = None
    choice: str | None = None


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload

    @property
    def player_id(self) -> str | None:
        return self.payload.player_id

    @classmethod
    def expand(cls, player_id: str, card_id: str) -> Action:
        """Factory for expand action (play a card into its guild pile)."""
        return cls(ActionType.EXPAND, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def consolidate(cls, player_id: str) -> Action:
        return cls(ActionType.CONSOLIDATE, ActionPayload(player_id=player_id))

    @classmethod
    def end_turn(cls, player_id: str) -> Action:
        return cls(ActionType.END_TURN, ActionPayload(player_id=player_id))

    @classmethod
    def draw(cls, player_id: str) -> Action:
        return cls(ActionType.DRAW, ActionPayload(player_id=player_id))

    @classmethod
    def take(cls, player_id: str, card_id: str) -> Action:
        """Factory for taking a card from the market."""
        return cls(ActionType.TAKE, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def discard(cls, player_id: str, card_id: str) -> Action:
        return cls(ActionType.DISCARD, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def exile(cls, player_id: str, card_id: str) -> Action:
        return cls(ActionType.EXILE, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def bury(cls, player_id: str, card_id: str) -> Action:
        return cls(ActionType.BURY, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def revive(cls, player_id: str, card_id: str) -> Action:
        return cls(ActionType.REVIVE, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def fight(cls, player_id: str, spot_id: int) -> Action:
        return cls(ActionType.FIGHT, ActionPayload(player_id=player_id, spot_id=spot_id))

    @classmethod
    def build_outpost(cls, player_id: str, spot_id: int) -> Action:
        return cls(ActionType.BUILD_OUTPOST, ActionPayload(player_id=player_id, spot_id=spot_id))

    @classmethod
    def place_army(cls, player_id: str, spot_id: int) -> Action:
        return cls(ActionType.PLACE_ARMY, ActionPayload(player_id=player_id, spot_id=spot_id))

    @classmethod
    def resolve_choice(cls, player_id: str, intent_index: int, choice: str) -> Action:
        """Factory for answering a pending choice."""
        return cls(
            ActionType.RESOLVE_CHOICE,
            ActionPayload(player_id=player_id, intent_index=intent_index, choice=choice),
        )

    @classmethod
    def resolve_conditional(
        cls,
        player_id: str,
        accept: bool,
        choice: str | None = None,
    ) -> Action:
        """Factory for answering the front pending conditional."""
        return cls(
            ActionType.RESOLVE_CONDITIONAL,
            ActionPayload(player_id=player_id, accept=accept, choice=choice),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.action_type.value}
        for key, value in (
            ("playerId", self.payload.player_id),
            ("cardId", self.payload.card_id),
            ("spotId", self.payload.spot_id),
            ("intentIndex", self.payload.intent_index),
            ("accept", self.payload.accept),
            ("choice", self.payload.choice),
        ):
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Action:
        """
        Build an action from a request dict.

        Accepts camelCase or snake_case keys. Raises ValueError for an
        unknown action type.
        """
        def pick(*keys):
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return None

        spot_id = pick("spotId", "spot_id")
        intent_index = pick("intentIndex", "intent_index")
        return cls(
            action_type=ActionType(data["type"]),
            payload=ActionPayload(
                player_id=pick("playerId", "player_id"),
                card_id=pick("cardId", "card_id"),
                spot_id=int(spot_id) if spot_id is not None else None,
                intent_index=int(intent_index) if intent_index is not None else None,
                accept=pick("accept"),
                choice=pick("choice"),
            ),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    new_state is always set: a rejected action returns the unchanged
    input state together with the reason.
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    # Intents dropped because a new card was played before answering them
    declined_intents: list[Any] = field(default_factory=list)

    @property
    def awaiting_input(self) -> Any | None:
        return self.new_state.awaiting_input if self.new_state else None

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        state: Any | None = None,
    ) -> ActionResult:
        """Create a failure result carrying the unchanged state."""
        return cls(success=False, new_state=state, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
