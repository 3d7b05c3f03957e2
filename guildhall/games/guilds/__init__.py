"""
Guilds - The base game

Guilds is a deck-building card game about growing five guilds.
Key mechanics:
- Cards belong to a guild (5) and have a color (5)
- Players expand guild piles; a pile never holds two cards of one color
- A card's power grows with its position in the pile (tier1, tier2-3, tier4-5)
- Armies spread across a 20-spot map from the corners
- First to 15 victory points wins

This module contains:
- The card catalog and map data
- The Guilds game spec
- Game setup
"""

from .spec import create_guilds_spec
from .cards import CARD_RECORDS, create_catalog
from .board import SPOT_RECORDS, STARTING_SPOTS, OUTPOST_SPOTS, create_spots
from .setup import initialize_game

__all__ = [
    "create_guilds_spec",
    "CARD_RECORDS",
    "create_catalog",
    "SPOT_RECORDS",
    "STARTING_SPOTS",
    "OUTPOST_SPOTS",
    "create_spots",
    "initialize_game",
]
