"""
Spec Validation - Checks the catalog and map of a GameSpec.

Validates that:
1. Card ids are unique and every (guild, color) pair has the expected count
2. Every card text compiles (unrecognized clauses are reported as warnings)
3. Map spot ids are 1..N, positions fit the grid, and kinds are valid
4. Rule constants are consistent (e.g., min_players <= max_players)
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field

from .game_spec import GameSpec, Card, Color, Guild, SpotKind, Tier


CARDS_PER_GUILD_COLOR = 2


class CatalogValidationError(Exception):
    """Raised when a spec fails validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_spec(spec: GameSpec, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a complete game specification.

    Raises CatalogValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not spec.game_id:
        errors.append("game_id is required")
    if spec.min_players < 1:
        errors.append("min_players must be >= 1")
    if spec.max_players < spec.min_players:
        errors.append("max_players must be >= min_players")
    if spec.hand_size < 1:
        errors.append("hand_size must be >= 1")

    card_errors, card_warnings = validate_catalog(spec.cards)
    errors.extend(card_errors)
    warnings.extend(card_warnings)

    errors.extend(validate_map(spec))

    needed = spec.max_players * (spec.hand_size + spec.starting_deck_size)
    if spec.cards and needed > len(spec.cards):
        errors.append(
            f"{spec.max_players} players need {needed} cards, catalog has {len(spec.cards)}"
        )

    result = ValidationResult(valid=not errors, errors=errors, warnings=warnings)
    if raise_on_error and errors:
        raise CatalogValidationError(errors)
    return result


def validate_catalog(cards: tuple[Card, ...]) -> tuple[list[str], list[str]]:
    """Validate card definitions. Returns (errors, warnings)."""
    errors = []
    warnings = []

    ids = Counter(card.id for card in cards)
    for card_id, count in ids.items():
        if not card_id:
            errors.append("Card has empty ID")
        elif count > 1:
            errors.append(f"Card id '{card_id}' appears {count} times")

    pairs = Counter((card.guild, card.color) for card in cards)
    if cards:
        for guild in Guild:
            for color in Color:
                count = pairs.get((guild, color), 0)
                if count != CARDS_PER_GUILD_COLOR:
                    errors.append(
                        f"Expected {CARDS_PER_GUILD_COLOR} {color.value} {guild.value} "
                        f"cards, found {count}"
                    )
    else:
        warnings.append("No cards defined - catalog may be incomplete")

    for card in cards:
        for tier in Tier:
            for clause in card.effects_for(tier).unrecognized:
                warnings.append(
                    f"Card '{card.id}' {tier.value}: unrecognized clause '{clause.source_text}'"
                )
        for clause in card.compiled_bonus().unrecognized:
            warnings.append(
                f"Card '{card.id}' bonus: unrecognized clause '{clause.source_text}'"
            )

    return errors, warnings


def validate_map(spec: GameSpec) -> list[str]:
    """Validate spot definitions against the grid size."""
    errors = []
    expected = spec.map_columns * spec.map_rows
    if not spec.spots:
        return errors

    ids = sorted(spot.id for spot in spec.spots)
    if ids != list(range(1, expected + 1)):
        errors.append(f"Spot ids must be 1..{expected}")

    for spot in spec.spots:
        row, col = divmod(spot.id - 1, spec.map_columns)
        if (spot.row, spot.col) != (row, col):
            errors.append(
                f"Spot {spot.id} is at ({spot.row}, {spot.col}), expected ({row}, {col})"
            )

    if not any(spot.kind == SpotKind.STARTING for spot in spec.spots):
        errors.append("Map has no starting spots")

    return errors
