"""
Guilds Game Specification

The spec defines:
- The 50-card catalog (compiled once, here)
- The 20-spot map
- Rule constants (hand size, market size, victory threshold)

Catalog problems are reported at load time: errors raise, unrecognized
effect clauses are logged as warnings and dropped at play time.
"""

from __future__ import annotations
import logging

from ...spec_schema.game_spec import GameSpec
from ...spec_schema.validation import validate_spec
from .board import MAP_COLUMNS, MAP_ROWS, create_spots
from .cards import create_catalog

logger = logging.getLogger(__name__)


def create_guilds_spec(
    strict_pending_resolution: bool = False,
    market_size: int = 5,
) -> GameSpec:
    """
    Create the Guilds game specification.

    Raises CatalogValidationError if the catalog or map is inconsistent.
    """
    spec = GameSpec(
        game_id="guilds_base",
        game_name="Guilds",
        version="1.0.0",
        min_players=2,
        max_players=4,
        cards=create_catalog(),
        spots=create_spots(),
        map_columns=MAP_COLUMNS,
        map_rows=MAP_ROWS,
        hand_size=5,
        market_size=market_size,
        starting_deck_size=5,
        starting_gold=5,
        victory_points_to_win=15,
        strict_pending_resolution=strict_pending_resolution,
        metadata={
            "guilds": 5,
            "colors": 5,
        },
    )

    result = validate_spec(spec, raise_on_error=True)
    for warning in result.warnings:
        logger.warning("Catalog: %s", warning)

    return spec
