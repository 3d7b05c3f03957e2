"""Game specification schema - catalog, map and effect DSL definitions."""

from .game_spec import (
    GameSpec,
    Card,
    Guild,
    Color,
    SpotKind,
    SpotDefinition,
    Tier,
    tier_for_position,
    MAX_PILE_SIZE,
)
from .effect_dsl import (
    Resource,
    ClauseKind,
    CostType,
    ResourceDelta,
    Benefit,
    Cost,
    GainClause,
    ConditionalClause,
    ChoiceClause,
    UnrecognizedClause,
    EffectProgram,
)
from .effect_parser import tokenize, compile_effects, compile_clause, compile_benefit
from .validation import validate_spec, CatalogValidationError, ValidationResult

__all__ = [
    "GameSpec",
    "Card",
    "Guild",
    "Color",
    "SpotKind",
    "SpotDefinition",
    "Tier",
    "tier_for_position",
    "MAX_PILE_SIZE",
    "Resource",
    "ClauseKind",
    "CostType",
    "ResourceDelta",
    "Benefit",
    "Cost",
    "GainClause",
    "ConditionalClause",
    "ChoiceClause",
    "UnrecognizedClause",
    "EffectProgram",
    "tokenize",
    "compile_effects",
    "compile_clause",
    "compile_benefit",
    "validate_spec",
    "CatalogValidationError",
    "ValidationResult",
]
