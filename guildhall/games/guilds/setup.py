"""
Guilds Game Setup - Creates initial game state.

This module handles:
- Shuffling the catalog into the common deck, with seed for determinism
- Dealing each player a hand and a private deck
- Creating the map

The game starts in the setup phase; the first endTurn starts play.
"""

from __future__ import annotations
import random
import uuid
from typing import TYPE_CHECKING

from ...engine_core.state import GameState, GamePhase, PlayerState, Zone
from ...engine_core.placement import build_map
from ...engine_core.shuffle import seeded_shuffle
from .spec import create_guilds_spec

if TYPE_CHECKING:
    from ...spec_schema import GameSpec


def initialize_game(
    player_names: list[str],
    random_seed: int | None = None,
    spec: GameSpec | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new Guilds game.

    Args:
        player_names: Names in turn order; ids are player-1, player-2, ...
        random_seed: Seed for deterministic shuffling (random if omitted)
        spec: Game spec (creates default if not provided)
        game_id: Explicit id (generated if omitted)

    Returns:
        Initial GameState in the setup phase
    """
    game_spec = spec or create_guilds_spec()

    if not game_spec.min_players <= len(player_names) <= game_spec.max_players:
        raise ValueError(
            f"{game_spec.game_name} supports "
            f"{game_spec.min_players}-{game_spec.max_players} players"
        )

    if random_seed is None:
        random_seed = random.randrange(2**31)

    # Shuffle count 0 is the initial deck shuffle
    deck = list(seeded_shuffle(game_spec.cards, random_seed, 0))

    players = []
    for index, name in enumerate(player_names):
        player = PlayerState.create(
            player_id=f"player-{index + 1}",
            name=name,
            gold=game_spec.starting_gold,
        )
        hand, deck = deck[:game_spec.hand_size], deck[game_spec.hand_size:]
        private, deck = deck[:game_spec.starting_deck_size], deck[game_spec.starting_deck_size:]
        players.append(player.with_changes(
            hand=Zone(name="hand", cards=tuple(hand)),
            deck=Zone(name="deck", cards=tuple(private)),
        ))

    return GameState(
        game_id=game_id or f"guilds_{uuid.uuid4().hex[:12]}",
        spec_id=game_spec.game_id,
        phase=GamePhase.SETUP,
        turn_number=0,
        current_player_idx=0,
        players=tuple(players),
        common_deck=Zone(name="common_deck", cards=tuple(deck)),
        market_size=game_spec.market_size,
        map=build_map(game_spec.spots, game_spec.map_columns, game_spec.map_rows),
        random_seed=random_seed,
        shuffle_count=1,
    )
