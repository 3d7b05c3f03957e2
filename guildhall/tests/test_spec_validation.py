"""
Tests for spec validation.

Tests:
- The shipped catalog and map are valid
- Catalog errors (duplicates, guild/color counts)
- Unrecognized clauses are warnings
- Map and rule-constant errors
"""

from dataclasses import replace

import pytest

from ..spec_schema import (
    GameSpec,
    Guild,
    Color,
    SpotKind,
    CatalogValidationError,
    validate_spec,
)
from ..spec_schema.validation import validate_catalog, CARDS_PER_GUILD_COLOR
from ..games.guilds.cards import create_catalog
from ..games.guilds.board import create_spots, STARTING_SPOTS
from .helpers import make_card


class TestGuildsSpec:
    """The shipped spec."""

    def test_catalog_has_fifty_cards(self, guilds_spec):
        assert len(guilds_spec.cards) == 50
        assert len({card.id for card in guilds_spec.cards}) == 50

    def test_two_cards_per_guild_and_color(self, guilds_spec):
        for guild in Guild:
            for color in Color:
                matching = [
                    c for c in guilds_spec.cards
                    if c.guild == guild and c.color == color
                ]
                assert len(matching) == CARDS_PER_GUILD_COLOR

    def test_spec_is_valid_without_warnings(self, guilds_spec):
        result = validate_spec(guilds_spec)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_map_layout(self, guilds_spec):
        assert len(guilds_spec.spots) == 20
        starting = {s.id for s in guilds_spec.spots if s.kind == SpotKind.STARTING}
        assert starting == STARTING_SPOTS

    def test_get_card(self, guilds_spec):
        card = guilds_spec.get_card("military-red-1")
        assert card.guild == Guild.MILITARY
        assert card.color == Color.RED
        assert guilds_spec.get_card("no-such-card") is None


class TestCatalogValidation:
    """Catalog errors and warnings."""

    def test_duplicate_ids(self):
        cards = (make_card("dup"), make_card("dup", color="blue"))
        errors, _ = validate_catalog(cards)
        assert any("appears 2 times" in e for e in errors)

    def test_wrong_guild_color_count(self):
        cards = create_catalog()[1:]
        errors, _ = validate_catalog(cards)
        assert any("found 1" in e for e in errors)

    def test_unrecognized_clause_is_a_warning(self):
        catalog = list(create_catalog())
        catalog[0] = make_card(catalog[0].id, tier1="Admire the view")
        errors, warnings = validate_catalog(tuple(catalog))
        assert errors == []
        assert any("Admire the view" in w for w in warnings)

    def test_empty_catalog_warns(self):
        errors, warnings = validate_catalog(())
        assert errors == []
        assert warnings


class TestSpecValidation:
    """Rule constants and map checks."""

    def _spec(self, **overrides) -> GameSpec:
        base = GameSpec(
            game_id="test",
            game_name="Test",
            cards=create_catalog(),
            spots=create_spots(),
        )
        return replace(base, **overrides)

    def test_valid_spec(self):
        assert validate_spec(self._spec()).valid

    def test_player_bounds(self):
        result = validate_spec(self._spec(min_players=3, max_players=2))
        assert not result.valid
        assert "max_players must be >= min_players" in result.errors

    def test_missing_spots(self):
        result = validate_spec(self._spec(spots=create_spots()[:-1]))
        assert "Spot ids must be 1..20" in result.errors

    def test_not_enough_cards_for_max_players(self):
        result = validate_spec(self._spec(max_players=6))
        assert any("players need" in e for e in result.errors)

    def test_raise_on_error(self):
        with pytest.raises(CatalogValidationError) as exc_info:
            validate_spec(self._spec(game_id=""), raise_on_error=True)
        assert "game_id is required" in exc_info.value.errors
