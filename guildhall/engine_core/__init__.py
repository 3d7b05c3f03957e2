"""
Engine Core - Deterministic game state management and effect resolution.

The engine is the runtime that:
1. Holds immutable GameState values
2. Generates legal actions
3. Applies actions via the reducer
4. Resolves card effects and pending intents
5. Validates map placement

The engine never logs and never raises for a disallowed action.
"""

from .state import (
    GameState,
    GamePhase,
    PlayerState,
    Resources,
    Zone,
    GuildPile,
    MapSpot,
    PendingChoice,
    PendingConditional,
    DeferredConditional,
)
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action, reduce
from .action_generator import ActionGenerator, legal_actions, is_legal
from .effect_resolver import EffectResolver, EffectPlan, plan_card_play
from .placement import (
    grid_adjacency,
    build_map,
    get_adjacent,
    can_place_army,
    can_build_outpost,
    can_fight,
)
from .queries import can_play_card, is_game_over, standings, end_game_if_over
from .serialization import state_to_dict, state_from_dict
from .shuffle import seeded_shuffle, no_shuffle

__all__ = [
    "GameState",
    "GamePhase",
    "PlayerState",
    "Resources",
    "Zone",
    "GuildPile",
    "MapSpot",
    "PendingChoice",
    "PendingConditional",
    "DeferredConditional",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "reduce",
    "ActionGenerator",
    "legal_actions",
    "is_legal",
    "EffectResolver",
    "EffectPlan",
    "plan_card_play",
    "grid_adjacency",
    "build_map",
    "get_adjacent",
    "can_place_army",
    "can_build_outpost",
    "can_fight",
    "can_play_card",
    "is_game_over",
    "standings",
    "end_game_if_over",
    "state_to_dict",
    "state_from_dict",
    "seeded_shuffle",
    "no_shuffle",
]
