"""
Plain-dict form of GameState, for storage and transport.

Cards are written by id and looked up in the spec's catalog on load.
Pending intents are written by source text and recompiled on load, so
the stored form never depends on the shape of the effect AST.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

from ..spec_schema.game_spec import Guild, SpotKind
from ..spec_schema.effect_dsl import ChoiceClause, ConditionalClause
from ..spec_schema.effect_parser import compile_clause
from .action import Action
from .state import (
    DeferredConditional,
    GamePhase,
    GameState,
    GuildPile,
    MapSpot,
    PendingChoice,
    PendingConditional,
    PlayerState,
    Resources,
    Zone,
)

if TYPE_CHECKING:
    from ..spec_schema import GameSpec


FORMAT_VERSION = 1


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Convert a GameState to JSON-compatible data."""
    deferred = None
    if state.deferred_conditional is not None:
        deferred = {
            "intent": state.deferred_conditional.intent.source_text,
            "benefit": state.deferred_conditional.benefit.text,
        }

    return {
        "format_version": FORMAT_VERSION,
        "game_id": state.game_id,
        "spec_id": state.spec_id,
        "phase": state.phase.value,
        "turn_number": state.turn_number,
        "current_player_idx": state.current_player_idx,
        "players": [_player_to_dict(p) for p in state.players],
        "common_deck": _card_ids(state.common_deck),
        "market_size": state.market_size,
        "map": [_spot_to_dict(s) for s in state.map],
        "pending_choices": [i.source_text for i in state.pending_choices],
        "pending_conditionals": [i.source_text for i in state.pending_conditionals],
        "deferred_conditional": deferred,
        "action_history": [a.to_dict() for a in state.action_history],
        "random_seed": state.random_seed,
        "shuffle_count": state.shuffle_count,
        "metadata": dict(state.metadata),
    }


def state_from_dict(data: dict[str, Any], spec: GameSpec) -> GameState:
    """
    Rebuild a GameState from state_to_dict output.

    Raises ValueError for unknown card ids or intents that no longer
    compile to the expected clause kind.
    """
    version = data.get("format_version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported state format version: {version}")

    def zone(name: str, card_ids: list[str]) -> Zone:
        return Zone(name=name, cards=tuple(_lookup(spec, cid) for cid in card_ids))

    players = tuple(_player_from_dict(p, zone) for p in data.get("players", []))

    pending_conditionals = tuple(
        PendingConditional(clause=_compile_as(text, ConditionalClause))
        for text in data.get("pending_conditionals", [])
    )

    deferred = None
    if data.get("deferred_conditional"):
        raw = data["deferred_conditional"]
        intent = PendingConditional(clause=_compile_as(raw["intent"], ConditionalClause))
        benefit = intent.clause.find_choice(raw["benefit"]) or intent.clause.benefit
        deferred = DeferredConditional(intent=intent, benefit=benefit)

    return GameState(
        game_id=data["game_id"],
        spec_id=data["spec_id"],
        phase=GamePhase(data.get("phase", GamePhase.SETUP.value)),
        turn_number=data.get("turn_number", 0),
        current_player_idx=data.get("current_player_idx", 0),
        players=players,
        common_deck=zone("common_deck", data.get("common_deck", [])),
        market_size=data.get("market_size", 0),
        map=tuple(_spot_from_dict(s) for s in data.get("map", [])),
        pending_choices=tuple(
            PendingChoice(clause=_compile_as(text, ChoiceClause))
            for text in data.get("pending_choices", [])
        ),
        pending_conditionals=pending_conditionals,
        deferred_conditional=deferred,
        action_history=tuple(Action.from_dict(a) for a in data.get("action_history", [])),
        random_seed=data.get("random_seed", 0),
        shuffle_count=data.get("shuffle_count", 0),
        metadata=dict(data.get("metadata", {})),
    )


def _card_ids(zone: Zone) -> list[str]:
    return [card.id for card in zone.cards]


def _lookup(spec: GameSpec, card_id: str):
    card = spec.get_card(card_id)
    if card is None:
        raise ValueError(f"Unknown card id: {card_id}")
    return card


def _compile_as(text: str, expected: type):
    clause = compile_clause(text)
    if not isinstance(clause, expected):
        raise ValueError(f"Stored intent no longer compiles: {text!r}")
    return clause


def _player_to_dict(player: PlayerState) -> dict[str, Any]:
    return {
        "player_id": player.player_id,
        "name": player.name,
        "hand": _card_ids(player.hand),
        "deck": _card_ids(player.deck),
        "discard": _card_ids(player.discard),
        "exile": _card_ids(player.exile),
        "guild_piles": {
            guild.value: [card.id for card in pile.cards]
            for guild, pile in player.guild_piles.items()
        },
        "resources": player.resources.as_dict(),
        "armies": player.armies,
        "outposts": list(player.outposts),
    }


def _player_from_dict(data: dict[str, Any], zone) -> PlayerState:
    piles = {guild: GuildPile(guild=guild) for guild in Guild}
    for guild_value, card_ids in data.get("guild_piles", {}).items():
        guild = Guild(guild_value)
        piles[guild] = GuildPile(guild=guild, cards=zone("pile", card_ids).cards)

    return PlayerState(
        player_id=data["player_id"],
        name=data["name"],
        hand=zone("hand", data.get("hand", [])),
        deck=zone("deck", data.get("deck", [])),
        discard=zone("discard", data.get("discard", [])),
        exile=zone("exile", data.get("exile", [])),
        guild_piles=piles,
        resources=Resources(**data.get("resources", {})),
        armies=data.get("armies", 0),
        outposts=tuple(data.get("outposts", [])),
    )


def _spot_to_dict(spot: MapSpot) -> dict[str, Any]:
    return {
        "id": spot.id,
        "kind": spot.kind.value,
        "row": spot.row,
        "col": spot.col,
        "adjacent": list(spot.adjacent),
        "occupying_player": spot.occupying_player,
        "army_count": spot.army_count,
    }


def _spot_from_dict(data: dict[str, Any]) -> MapSpot:
    return MapSpot(
        id=data["id"],
        kind=SpotKind(data["kind"]),
        row=data["row"],
        col=data["col"],
        adjacent=tuple(data.get("adjacent", [])),
        occupying_player=data.get("occupying_player"),
        army_count=data.get("army_count", 0),
    )
