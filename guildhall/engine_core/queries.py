"""
Read-only queries over GameState.

Used by the UI to decide affordances and by the session layer to detect
the end of the game. None of these change state except end_game_if_over,
which returns a new state.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..spec_schema.game_spec import MAX_PILE_SIZE
from .state import GamePhase, GameState, PlayerState

if TYPE_CHECKING:
    from ..spec_schema import GameSpec


def can_play_card(state: GameState, player_id: str, card_id: str) -> bool:
    """
    Check the guild-color restriction for a card in the player's hand.

    A card may not join a guild pile that already holds its color.
    """
    player = state.get_player(player_id)
    if player is None:
        return False

    card = player.hand.find(card_id)
    if card is None:
        return False

    pile = player.get_pile(card.guild)
    if pile.size >= MAX_PILE_SIZE:
        return False
    return not pile.has_color(card.color)


def playable_cards(state: GameState, player_id: str) -> list[str]:
    player = state.get_player(player_id)
    if player is None:
        return []
    return [c.id for c in player.hand.cards if can_play_card(state, player_id, c.id)]


@dataclass(frozen=True)
class Standing:
    player_id: str
    name: str
    victory_points: int
    gold: int
    spots_held: int
    outposts: int


def standings(state: GameState) -> list[Standing]:
    """Players ordered by victory points, then gold, then map presence."""
    rows = [
        Standing(
            player_id=p.player_id,
            name=p.name,
            victory_points=p.resources.victory_points,
            gold=p.resources.gold,
            spots_held=sum(1 for s in state.map if s.occupying_player == p.player_id),
            outposts=len(p.outposts),
        )
        for p in state.players
    ]
    return sorted(
        rows,
        key=lambda r: (r.victory_points, r.gold, r.spots_held),
        reverse=True,
    )


def is_game_over(spec: GameSpec, state: GameState) -> bool:
    """The game ends when a player reaches the VP target or the common deck runs out."""
    if state.phase == GamePhase.ENDED:
        return True
    if state.phase == GamePhase.SETUP:
        return False
    if state.common_deck.is_empty:
        return True
    return any(
        p.resources.victory_points >= spec.victory_points_to_win
        for p in state.players
    )


def leader(state: GameState) -> PlayerState | None:
    ranked = standings(state)
    if not ranked:
        return None
    return state.get_player(ranked[0].player_id)


def end_game_if_over(spec: GameSpec, state: GameState) -> GameState:
    """Move a finished game to the ended phase."""
    if state.phase == GamePhase.PLAYING and is_game_over(spec, state):
        return state._copy_with(phase=GamePhase.ENDED)
    return state
