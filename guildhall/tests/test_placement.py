"""
Tests for map placement.

Tests:
- Grid adjacency
- Army placement rules
- Fights and outposts
"""

import pytest

from ..engine_core.action import Action
from ..engine_core.reducer import apply_action, reduce
from ..engine_core.placement import (
    grid_adjacency,
    get_adjacent,
    can_place_army,
    can_fight,
    can_build_outpost,
)
from .helpers import occupy, with_armies, with_resources


class TestAdjacency:
    """Orthogonal adjacency on the 5 x 4 grid."""

    @pytest.mark.parametrize("spot_id,expected", [
        (1, {2, 6}),
        (5, {4, 10}),
        (7, {2, 12, 6, 8}),
        (16, {11, 17}),
        (20, {15, 19}),
    ])
    def test_neighbours(self, spot_id, expected):
        assert set(grid_adjacency(spot_id)) == expected

    def test_no_wraparound(self):
        assert 6 not in grid_adjacency(5)
        assert 5 not in grid_adjacency(6)

    def test_unknown_spot(self, two_player_state):
        assert grid_adjacency(0) == ()
        assert grid_adjacency(21) == ()
        assert get_adjacent(two_player_state, 99) == ()

    def test_map_carries_adjacency(self, two_player_state):
        assert set(get_adjacent(two_player_state, 13)) == {8, 18, 12, 14}


class TestCanPlaceArmy:
    """Placement predicate."""

    def test_starting_spot(self, two_player_state):
        assert can_place_army(two_player_state, "player-1", 1)

    def test_isolated_spot(self, two_player_state):
        assert not can_place_army(two_player_state, "player-1", 7)

    def test_next_to_own_spot(self, two_player_state):
        state = occupy(two_player_state, 1, "player-1")
        assert can_place_army(state, "player-1", 2)
        assert can_place_army(state, "player-1", 6)
        assert not can_place_army(state, "player-1", 3)

    def test_own_spot_can_be_reinforced(self, two_player_state):
        state = occupy(two_player_state, 1, "player-1")
        assert can_place_army(state, "player-1", 1)

    def test_enemy_spot(self, two_player_state):
        state = occupy(two_player_state, 1, "player-2")
        assert not can_place_army(state, "player-1", 1)

    def test_unknown_spot(self, two_player_state):
        assert not can_place_army(two_player_state, "player-1", 99)


class TestPlaceArmyAction:
    """placeArmy through the reducer."""

    def test_place_army(self, two_player_state, guilds_spec):
        state = with_armies(two_player_state, "player-1", 2)

        result = apply_action(guilds_spec, state, Action.place_army("player-1", 1))

        assert result.success
        spot = result.new_state.get_spot(1)
        assert spot.occupying_player == "player-1"
        assert spot.army_count == 1
        assert result.new_state.get_player("player-1").armies == 1

    def test_armies_stack(self, two_player_state, guilds_spec):
        state = with_armies(two_player_state, "player-1", 2)
        state = reduce(guilds_spec, state, Action.place_army("player-1", 1))
        state = reduce(guilds_spec, state, Action.place_army("player-1", 1))
        assert state.get_spot(1).army_count == 2
        assert state.get_player("player-1").armies == 0

    def test_no_armies(self, two_player_state, guilds_spec):
        result = apply_action(guilds_spec, two_player_state, Action.place_army("player-1", 1))
        assert result.error_code == "NO_ARMIES"

    def test_unknown_spot(self, two_player_state, guilds_spec):
        state = with_armies(two_player_state, "player-1", 1)
        result = apply_action(guilds_spec, state, Action.place_army("player-1", 99))
        assert result.error_code == "UNKNOWN_SPOT"

    def test_illegal_spot(self, two_player_state, guilds_spec):
        state = with_armies(two_player_state, "player-1", 1)
        result = apply_action(guilds_spec, state, Action.place_army("player-1", 7))
        assert result.error_code == "ILLEGAL_PLACEMENT"
        assert result.new_state is state


class TestFight:
    """Fighting a neighbouring enemy spot."""

    @pytest.fixture
    def front_line(self, two_player_state):
        state = occupy(two_player_state, 1, "player-1")
        state = occupy(state, 2, "player-2", armies=2)
        return with_resources(state, "player-1", fight_credits=2)

    def test_can_fight(self, front_line):
        assert can_fight(front_line, "player-1", 2)
        assert not can_fight(front_line, "player-1", 1)
        assert not can_fight(front_line, "player-1", 3)

    def test_fight_removes_one_army(self, front_line, guilds_spec):
        result = apply_action(guilds_spec, front_line, Action.fight("player-1", 2))
        assert result.success
        spot = result.new_state.get_spot(2)
        assert spot.occupying_player == "player-2"
        assert spot.army_count == 1
        assert result.new_state.get_player("player-1").resources.fight_credits == 1

    def test_last_army_frees_spot(self, front_line, guilds_spec):
        state = reduce(guilds_spec, front_line, Action.fight("player-1", 2))
        state = reduce(guilds_spec, state, Action.fight("player-1", 2))
        spot = state.get_spot(2)
        assert spot.occupying_player is None
        assert spot.army_count == 0

    def test_fight_needs_credit(self, front_line, guilds_spec):
        state = with_resources(front_line, "player-1", fight_credits=0)
        result = apply_action(guilds_spec, state, Action.fight("player-1", 2))
        assert result.error_code == "NO_CREDITS"

    def test_fight_not_adjacent(self, front_line, guilds_spec):
        state = occupy(front_line, 20, "player-2")
        result = apply_action(guilds_spec, state, Action.fight("player-1", 20))
        assert result.error_code == "ILLEGAL_PLACEMENT"


class TestOutposts:
    """Building outposts."""

    def test_can_build_on_held_outpost_spot(self, two_player_state):
        state = occupy(two_player_state, 8, "player-1")
        assert can_build_outpost(state, "player-1", 8)
        assert not can_build_outpost(state, "player-2", 8)

    def test_only_outpost_spots(self, two_player_state):
        state = occupy(two_player_state, 7, "player-1")
        assert not can_build_outpost(state, "player-1", 7)

    def test_build_outpost(self, two_player_state, guilds_spec):
        state = occupy(two_player_state, 8, "player-1")
        state = with_resources(state, "player-1", outpost_credits=2)

        result = apply_action(guilds_spec, state, Action.build_outpost("player-1", 8))

        assert result.success
        assert result.new_state.get_player("player-1").outposts == (8,)

        again = apply_action(guilds_spec, result.new_state, Action.build_outpost("player-1", 8))
        assert again.error_code == "ILLEGAL_PLACEMENT"
