"""
Guilds card catalog.

50 cards, two for every (guild, color) pair. Records use the external
catalog keys; powers are written in the effect vocabulary understood by
spec_schema.effect_parser.

Tier powers by pile position: tier1 for the first card, tier2-3 for the
second and third, tier4-5 for the fourth and fifth.
"""

from __future__ import annotations

from ...spec_schema.game_spec import Card


def _card(card_id: str, tier1: str, tier2_3: str, tier4_5: str, bonus: str = "") -> dict:
    guild, color, _ = card_id.split("-")
    return {
        "id": card_id,
        "guild": guild,
        "color": color,
        "tier1": tier1,
        "tier2-3": tier2_3,
        "tier4-5": tier4_5,
        "bonus": bonus,
    }


CARD_RECORDS: list[dict] = [
    # =========================================================================
    # Military: armies and fights
    # =========================================================================
    _card("military-red-1", "1 Army", "2 Army", "3 Army and 1 Fight",
          bonus="Pay 1 Gold → 1 Army"),
    _card("military-red-2", "1 Fight", "1 Army and 1 Fight", "2 Army and 2 Fight",
          bonus="1 Gold"),
    _card("military-blue-1", "1 Gold", "1 Army or 2 Gold", "2 Army and 2 Gold",
          bonus="Discard 1 card → 1 Army"),
    _card("military-blue-2", "1 Army", "1 Army and 1 Draw", "2 Army and 1 Victory Point"),
    _card("military-green-1", "1 Draw", "1 Army and 1 Draw", "2 Army and 2 Draw",
          bonus="Pay 2 Gold → 1 Victory Point"),
    _card("military-green-2", "1 Army", "2 Gold or 2 Army", "3 Army"),
    _card("military-yellow-1", "2 Gold", "1 Army and 2 Gold", "Pay 2 Gold → 3 Army",
          bonus="1 Army"),
    _card("military-yellow-2", "1 Take", "1 Army and 1 Take", "2 Army and 1 Take"),
    _card("military-purple-1", "1 Victory Point", "1 Army and 1 Victory Point",
          "2 Fight and 2 Victory Points"),
    _card("military-purple-2", "1 Army", "1 Fight and 1 Outpost", "2 Army and 1 Outpost",
          bonus="1 Knowledge"),

    # =========================================================================
    # Culture: victory points and knowledge
    # =========================================================================
    _card("culture-red-1", "1 Knowledge", "1 Victory Point", "2 Victory Points",
          bonus="Pay 1 Knowledge → 1 Victory Point"),
    _card("culture-red-2", "1 Gold", "1 Knowledge and 1 Gold",
          "Spend 2 Knowledge → 2 Victory Points"),
    _card("culture-blue-1", "1 Revive", "1 Victory Point or 2 Gold",
          "2 Victory Points and 1 Revive"),
    _card("culture-blue-2", "1 Knowledge", "2 Knowledge", "1 Victory Point and 2 Knowledge",
          bonus="1 Draw"),
    _card("culture-green-1", "1 Draw", "1 Draw and 1 Knowledge",
          "Discard 2 cards → 2 Victory Points"),
    _card("culture-green-2", "1 Gold", "1 Victory Point", "1 Victory Point and 2 Gold",
          bonus="Discard 1 card → 1 Knowledge"),
    _card("culture-yellow-1", "2 Gold", "1 Victory Point and 1 Gold",
          "2 Victory Points and 1 Gold"),
    _card("culture-yellow-2", "1 Knowledge or 1 Gold", "2 Knowledge or 2 Gold",
          "1 Victory Point and 1 Knowledge"),
    _card("culture-purple-1", "1 Victory Point", "1 Victory Point and 1 Knowledge",
          "3 Victory Points"),
    _card("culture-purple-2", "1 Exile", "1 Exile and 1 Victory Point",
          "Pay 3 Gold → 3 Victory Points", bonus="1 Gold"),

    # =========================================================================
    # Technology: drawing and deck control
    # =========================================================================
    _card("technology-red-1", "1 Draw", "2 Draw", "3 Draw and 1 Knowledge"),
    _card("technology-red-2", "1 Bury", "1 Bury and 1 Draw", "2 Bury and 2 Draw",
          bonus="1 Knowledge"),
    _card("technology-blue-1", "1 Knowledge", "1 Draw and 1 Knowledge",
          "2 Draw and 2 Knowledge", bonus="Spend 1 Knowledge → 2 Draw"),
    _card("technology-blue-2", "1 Draw", "1 Draw or 1 Bury", "2 Draw and 1 Victory Point"),
    _card("technology-green-1", "1 Gold", "1 Draw and 1 Gold", "2 Draw and 2 Gold"),
    _card("technology-green-2", "1 Revive", "1 Revive and 1 Draw",
          "2 Revive and 1 Victory Point"),
    _card("technology-yellow-1", "1 Take", "1 Take and 1 Draw", "2 Take and 1 Draw",
          bonus="1 Gold"),
    _card("technology-yellow-2", "1 Draw", "Discard 1 card → 2 Draw",
          "Discard 1 card → 3 Draw or 2 Gold"),
    _card("technology-purple-1", "1 Knowledge", "2 Knowledge and 1 Draw",
          "1 Victory Point and 2 Draw"),
    _card("technology-purple-2", "1 Exile", "1 Exile and 1 Draw",
          "2 Exile and 1 Victory Point"),

    # =========================================================================
    # Royal: gold and the market
    # =========================================================================
    _card("royal-red-1", "2 Gold", "3 Gold", "4 Gold and 1 Victory Point"),
    _card("royal-red-2", "1 Take", "1 Take and 1 Gold", "2 Take and 2 Gold",
          bonus="1 Army"),
    _card("royal-blue-1", "1 Gold", "2 Gold or 1 Take", "3 Gold and 1 Take"),
    _card("royal-blue-2", "1 Gold", "Pay 1 Gold → 1 Victory Point",
          "Pay 2 Gold → 2 Victory Points", bonus="1 Gold"),
    _card("royal-green-1", "1 Take", "2 Take", "2 Take and 1 Victory Point"),
    _card("royal-green-2", "1 Gold", "2 Gold and 1 Draw", "3 Gold and 2 Draw"),
    _card("royal-yellow-1", "3 Gold", "1 Victory Point and 2 Gold",
          "2 Victory Points and 2 Gold"),
    _card("royal-yellow-2", "1 Gold and 1 Draw", "Discard 1 card → 3 Gold",
          "Discard 2 cards → 5 Gold"),
    _card("royal-purple-1", "1 Victory Point", "2 Victory Points",
          "3 Victory Points and 1 Gold"),
    _card("royal-purple-2", "1 Gold", "1 Gold and 1 Outpost", "2 Gold and 1 Outpost",
          bonus="1 Take"),

    # =========================================================================
    # Building: outposts, exile and revive
    # =========================================================================
    _card("building-red-1", "1 Outpost", "1 Outpost and 1 Army", "2 Outpost and 1 Army"),
    _card("building-red-2", "1 Gold", "1 Outpost or 2 Gold", "1 Outpost and 1 Victory Point"),
    _card("building-blue-1", "1 Exile", "1 Exile and 1 Gold", "2 Exile and 2 Gold"),
    _card("building-blue-2", "1 Revive", "1 Revive and 1 Gold", "2 Revive and 1 Victory Point",
          bonus="1 Knowledge"),
    _card("building-green-1", "1 Army", "1 Army and 1 Outpost", "2 Army and 1 Outpost"),
    _card("building-green-2", "1 Gold", "Pay 1 Gold → 1 Outpost",
          "Pay 2 Gold → 2 Victory Points"),
    _card("building-yellow-1", "2 Gold", "1 Bury and 2 Gold", "1 Bury and 3 Gold"),
    _card("building-yellow-2", "1 Draw", "1 Draw and 1 Outpost", "2 Draw and 1 Outpost",
          bonus="1 Gold"),
    _card("building-purple-1", "1 Victory Point", "1 Victory Point and 1 Outpost",
          "2 Victory Points and 1 Outpost"),
    _card("building-purple-2", "1 Knowledge", "1 Knowledge and 1 Exile",
          "Spend 2 Knowledge → 2 Victory Points"),
]


def create_catalog() -> tuple[Card, ...]:
    """Build the compiled catalog, in record order."""
    return tuple(Card.from_record(record) for record in CARD_RECORDS)
