"""
Guilds map data.

A 5 x 4 grid. Players start from the corners; the two outpost spots sit
in the middle of the board.
"""

from __future__ import annotations

from ...spec_schema.game_spec import SpotDefinition, SpotKind

MAP_COLUMNS = 5
MAP_ROWS = 4

STARTING_SPOTS = frozenset({1, 5, 16, 20})
OUTPOST_SPOTS = frozenset({8, 13})


def _spot_kind(spot_id: int) -> str:
    if spot_id in STARTING_SPOTS:
        return SpotKind.STARTING.value
    if spot_id in OUTPOST_SPOTS:
        return SpotKind.OUTPOST.value
    return SpotKind.NORMAL.value


SPOT_RECORDS: list[dict] = [
    {
        "id": spot_id,
        "kind": _spot_kind(spot_id),
        "row": (spot_id - 1) // MAP_COLUMNS,
        "col": (spot_id - 1) % MAP_COLUMNS,
    }
    for spot_id in range(1, MAP_COLUMNS * MAP_ROWS + 1)
]


def create_spots() -> tuple[SpotDefinition, ...]:
    return tuple(SpotDefinition.from_record(record) for record in SPOT_RECORDS)
