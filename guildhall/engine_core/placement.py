"""
Map placement - Grid topology and placement checks.

The map is a grid of spots numbered row by row from 1. Adjacency is
orthogonal only, with no wraparound:

     1  2  3  4  5
     6  7  8  9 10
    11 12 13 14 15
    16 17 18 19 20
"""

from __future__ import annotations
from typing import Iterable

from ..spec_schema.game_spec import SpotDefinition, SpotKind
from .state import GameState, MapSpot


def grid_position(spot_id: int, columns: int = 5) -> tuple[int, int]:
    """(row, col) of a 1-based spot id."""
    return divmod(spot_id - 1, columns)


def grid_adjacency(spot_id: int, columns: int = 5, rows: int = 4) -> tuple[int, ...]:
    """Orthogonal neighbours of a spot, in up/down/left/right order."""
    if spot_id < 1 or spot_id > columns * rows:
        return ()
    row, col = grid_position(spot_id, columns)
    neighbours = []
    if row > 0:
        neighbours.append(spot_id - columns)
    if row < rows - 1:
        neighbours.append(spot_id + columns)
    if col > 0:
        neighbours.append(spot_id - 1)
    if col < columns - 1:
        neighbours.append(spot_id + 1)
    return tuple(neighbours)


def build_map(
    spots: Iterable[SpotDefinition],
    columns: int = 5,
    rows: int = 4,
) -> tuple[MapSpot, ...]:
    """Create unoccupied map spots with precomputed adjacency."""
    return tuple(
        MapSpot(
            id=spot.id,
            kind=spot.kind,
            row=spot.row,
            col=spot.col,
            adjacent=grid_adjacency(spot.id, columns, rows),
        )
        for spot in sorted(spots, key=lambda s: s.id)
    )


def get_adjacent(state: GameState, spot_id: int) -> tuple[int, ...]:
    """Precomputed neighbours of a spot; empty for unknown ids."""
    spot = state.get_spot(spot_id)
    return spot.adjacent if spot else ()


def occupies_adjacent(state: GameState, player_id: str, spot: MapSpot) -> bool:
    """True if the player occupies any spot next to this one."""
    for adjacent_id in spot.adjacent:
        adjacent = state.get_spot(adjacent_id)
        if adjacent and adjacent.occupying_player == player_id:
            return True
    return False


def can_place_army(state: GameState, player_id: str, spot_id: int) -> bool:
    """
    Check whether a player may place an army on a spot.

    - Never on a spot held by a different player
    - Always on a starting spot
    - Otherwise only next to a spot the player already occupies
    """
    spot = state.get_spot(spot_id)
    if spot is None:
        return False

    if spot.occupying_player is not None and spot.occupying_player != player_id:
        return False

    if spot.kind == SpotKind.STARTING:
        return True

    return occupies_adjacent(state, player_id, spot)


def can_build_outpost(state: GameState, player_id: str, spot_id: int) -> bool:
    """Outposts go on free outpost spots the player occupies."""
    spot = state.get_spot(spot_id)
    if spot is None or spot.kind != SpotKind.OUTPOST:
        return False
    if spot.occupying_player != player_id:
        return False
    return not any(spot_id in p.outposts for p in state.players)


def can_fight(state: GameState, player_id: str, spot_id: int) -> bool:
    """A player may attack an enemy spot next to one of their own."""
    spot = state.get_spot(spot_id)
    if spot is None or spot.occupying_player is None:
        return False
    if spot.occupying_player == player_id:
        return False
    return occupies_adjacent(state, player_id, spot)
