"""
State builders for tests.

Engine states are immutable; these return modified copies so tests can
arrange exact hands, resources and map positions.
"""

from dataclasses import replace

from ..spec_schema import Card, Guild
from ..engine_core.state import GameState, GuildPile, Zone


def make_card(
    card_id: str,
    guild: str = "military",
    color: str = "red",
    tier1: str = "1 Gold",
    tier2_3: str = "2 Gold",
    tier4_5: str = "3 Gold",
    bonus: str = "",
) -> Card:
    return Card.build(
        id=card_id,
        guild=guild,
        color=color,
        tier1=tier1,
        tier2_3=tier2_3,
        tier4_5=tier4_5,
        bonus=bonus,
    )


def with_hand(state: GameState, player_id: str, cards) -> GameState:
    player = state.get_player(player_id)
    return state.with_player(player.with_changes(hand=Zone(name="hand", cards=tuple(cards))))


def with_deck(state: GameState, player_id: str, cards) -> GameState:
    player = state.get_player(player_id)
    return state.with_player(player.with_changes(deck=Zone(name="deck", cards=tuple(cards))))


def with_discard(state: GameState, player_id: str, cards) -> GameState:
    player = state.get_player(player_id)
    return state.with_player(
        player.with_changes(discard=Zone(name="discard", cards=tuple(cards)))
    )


def with_pile(state: GameState, player_id: str, guild: str, cards) -> GameState:
    player = state.get_player(player_id)
    pile = GuildPile(guild=Guild(guild), cards=tuple(cards))
    return state.with_player(player.with_pile(pile))


def with_resources(state: GameState, player_id: str, **amounts) -> GameState:
    player = state.get_player(player_id)
    return state.with_player(player.with_resources(replace(player.resources, **amounts)))


def with_armies(state: GameState, player_id: str, armies: int) -> GameState:
    player = state.get_player(player_id)
    return state.with_player(player.with_changes(armies=armies))


def occupy(state: GameState, spot_id: int, player_id: str, armies: int = 1) -> GameState:
    spot = state.get_spot(spot_id)
    return state.with_spot(replace(spot, occupying_player=player_id, army_count=armies))
