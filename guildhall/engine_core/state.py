"""
Game State - Immutable state values the reducer operates on.

Design principles:
- Immutable: every container is a frozen dataclass over tuples, and
  every mutation helper returns a new value
- Serializable: see serialization.py for the plain-dict form
- Cards are shared by reference with the catalog, never copied
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Mapping

from ..spec_schema.game_spec import Card, Color, Guild, SpotKind
from ..spec_schema.effect_dsl import (
    Benefit,
    ChoiceClause,
    ConditionalClause,
    CostType,
    Resource,
)


class GamePhase(Enum):
    """High-level game phases."""
    SETUP = "setup"
    PLAYING = "playing"
    ENDED = "ended"


@dataclass(frozen=True)
class Zone:
    """
    An ordered group of cards: hand, deck, discard, exile, common deck.

    For decks, index 0 is the top.
    """
    name: str
    cards: tuple[Card, ...] = ()

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def top_card(self) -> Card | None:
        return self.cards[0] if self.cards else None

    def find(self, card_id: str) -> Card | None:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def contains(self, card_id: str) -> bool:
        return self.find(card_id) is not None

    def add(self, card: Card) -> Zone:
        """Return new zone with card added at the end (bottom)."""
        return Zone(name=self.name, cards=self.cards + (card,))

    def add_all(self, cards: tuple[Card, ...] | list[Card]) -> Zone:
        return Zone(name=self.name, cards=self.cards + tuple(cards))

    def remove(self, card: Card) -> Zone:
        """Return new zone with card removed."""
        return Zone(name=self.name, cards=tuple(c for c in self.cards if c.id != card.id))

    def draw(self, count: int = 1) -> tuple[tuple[Card, ...], Zone]:
        """Return (cards taken from the top, new zone)."""
        taken = self.cards[:count]
        return taken, Zone(name=self.name, cards=self.cards[count:])

    def replace_cards(self, cards: tuple[Card, ...] | list[Card]) -> Zone:
        return Zone(name=self.name, cards=tuple(cards))


@dataclass(frozen=True)
class GuildPile:
    """
    A player's stack of played cards for one guild, in play order.

    No two cards share a color, so a pile holds at most one card per color.
    """
    guild: Guild
    cards: tuple[Card, ...] = ()

    @property
    def size(self) -> int:
        return len(self.cards)

    @property
    def top_card(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    @property
    def colors(self) -> frozenset[Color]:
        return frozenset(card.color for card in self.cards)

    def has_color(self, color: Color) -> bool:
        return color in self.colors

    def add_top(self, card: Card) -> GuildPile:
        return GuildPile(guild=self.guild, cards=self.cards + (card,))

    def keep_base(self) -> tuple[GuildPile, tuple[Card, ...]]:
        """Keep the first card only. Returns (new pile, removed cards)."""
        return GuildPile(guild=self.guild, cards=self.cards[:1]), self.cards[1:]


@dataclass(frozen=True)
class Resources:
    """
    A player's resource counters.

    gold and victory_points persist; everything else is transient and is
    reset at every end of turn. Credits grant one auxiliary action each.
    """
    gold: int = 0
    victory_points: int = 0
    knowledge: int = 0
    draw_credits: int = 0
    take_credits: int = 0
    discard_credits: int = 0
    exile_credits: int = 0
    bury_credits: int = 0
    fight_credits: int = 0
    outpost_credits: int = 0
    revive_credits: int = 0

    def get(self, resource: Resource) -> int:
        return getattr(self, RESOURCE_FIELDS[resource])

    def add(self, resource: Resource, amount: int) -> Resources:
        name = RESOURCE_FIELDS[resource]
        return replace(self, **{name: getattr(self, name) + amount})

    def set(self, resource: Resource, value: int) -> Resources:
        return replace(self, **{RESOURCE_FIELDS[resource]: value})

    def reset_transient(self) -> Resources:
        return Resources(gold=self.gold, victory_points=self.victory_points)

    def transient_total(self) -> int:
        return sum(getattr(self, name) for name in TRANSIENT_FIELDS)

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Army is tracked on the player (unplaced tokens), not in Resources
RESOURCE_FIELDS: dict[Resource, str] = {
    Resource.GOLD: "gold",
    Resource.VICTORY_POINTS: "victory_points",
    Resource.KNOWLEDGE: "knowledge",
    Resource.DRAW: "draw_credits",
    Resource.TAKE: "take_credits",
    Resource.DISCARD: "discard_credits",
    Resource.EXILE: "exile_credits",
    Resource.BURY: "bury_credits",
    Resource.FIGHT: "fight_credits",
    Resource.OUTPOST: "outpost_credits",
    Resource.REVIVE: "revive_credits",
}

PERSISTENT_FIELDS = ("gold", "victory_points")
TRANSIENT_FIELDS = tuple(
    f for f in RESOURCE_FIELDS.values() if f not in PERSISTENT_FIELDS
)


def _empty_piles() -> dict[Guild, GuildPile]:
    return {guild: GuildPile(guild=guild) for guild in Guild}


@dataclass(frozen=True)
class PlayerState:
    """State for a single player."""
    player_id: str
    name: str

    hand: Zone = field(default_factory=lambda: Zone(name="hand"))
    deck: Zone = field(default_factory=lambda: Zone(name="deck"))
    discard: Zone = field(default_factory=lambda: Zone(name="discard"))
    exile: Zone = field(default_factory=lambda: Zone(name="exile"))

    # Copied on write, never mutated in place
    guild_piles: Mapping[Guild, GuildPile] = field(default_factory=_empty_piles)

    resources: Resources = field(default_factory=Resources)
    armies: int = 0  # Available, not yet placed
    outposts: tuple[int, ...] = ()

    def get_pile(self, guild: Guild) -> GuildPile:
        return self.guild_piles.get(guild) or GuildPile(guild=guild)

    def with_pile(self, pile: GuildPile) -> PlayerState:
        return replace(self, guild_piles={**self.guild_piles, pile.guild: pile})

    def with_resources(self, resources: Resources) -> PlayerState:
        return replace(self, resources=resources)

    def with_changes(self, **kwargs) -> PlayerState:
        return replace(self, **kwargs)

    def all_cards(self) -> tuple[Card, ...]:
        piles = tuple(c for pile in self.guild_piles.values() for c in pile.cards)
        return (
            self.hand.cards + self.deck.cards + self.discard.cards
            + self.exile.cards + piles
        )

    @classmethod
    def create(cls, player_id: str, name: str, gold: int = 0) -> PlayerState:
        """Factory for a new player with empty zones."""
        return cls(player_id=player_id, name=name, resources=Resources(gold=gold))


@dataclass(frozen=True)
class MapSpot:
    """A map spot and its current occupancy."""
    id: int
    kind: SpotKind
    row: int
    col: int
    adjacent: tuple[int, ...] = ()
    occupying_player: str | None = None
    army_count: int = 0

    @property
    def is_occupied(self) -> bool:
        return self.occupying_player is not None


@dataclass(frozen=True)
class PendingChoice:
    """A forced selection among mutually exclusive benefits."""
    clause: ChoiceClause

    @property
    def benefits(self) -> tuple[str, ...]:
        return tuple(option.text for option in self.clause.options)

    @property
    def source_text(self) -> str:
        return self.clause.source_text


@dataclass(frozen=True)
class PendingConditional:
    """An optional cost-for-benefit sub-effect awaiting acceptance."""
    clause: ConditionalClause

    @property
    def cost(self) -> str:
        return self.clause.cost.text

    @property
    def benefit(self) -> str:
        return self.clause.benefit.text

    @property
    def source_text(self) -> str:
        return self.clause.source_text

    @property
    def nested_choices(self) -> tuple[str, ...]:
        return tuple(option.text for option in self.clause.nested_choices)

    @property
    def is_discard_cost(self) -> bool:
        return self.clause.cost.cost_type == CostType.DISCARD


@dataclass(frozen=True)
class DeferredConditional:
    """
    An accepted discard-cost conditional.

    The benefit is applied once the player's discard credits reach zero.
    """
    intent: PendingConditional
    benefit: Benefit


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the sole unit of persistence and the sole argument and
    return value of every engine operation.
    """
    game_id: str
    spec_id: str

    phase: GamePhase = GamePhase.SETUP
    turn_number: int = 0
    current_player_idx: int = 0

    players: tuple[PlayerState, ...] = ()

    # Shared zones; the market is a window onto the top of the common deck
    common_deck: Zone = field(default_factory=lambda: Zone(name="common_deck"))
    market_size: int = 0

    map: tuple[MapSpot, ...] = ()

    # Effect resolution state for the last card played
    pending_choices: tuple[PendingChoice, ...] = ()
    pending_conditionals: tuple[PendingConditional, ...] = ()
    deferred_conditional: DeferredConditional | None = None

    # History (for replay, logging)
    action_history: tuple[Any, ...] = ()

    # Seed and counter for deterministic shuffles
    random_seed: int = 0
    shuffle_count: int = 0

    metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def market(self) -> tuple[Card, ...]:
        return self.common_deck.cards[:self.market_size]

    @property
    def awaiting_input(self) -> PendingChoice | PendingConditional | None:
        """
        The intent the current player must answer next, if any.

        Choices come before conditionals; each category is FIFO.
        """
        if self.pending_choices:
            return self.pending_choices[0]
        if self.pending_conditionals:
            return self.pending_conditionals[0]
        return None

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def get_spot(self, spot_id: int) -> MapSpot | None:
        for spot in self.map:
            if spot.id == spot_id:
                return spot
        return None

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def with_spot(self, spot: MapSpot) -> GameState:
        """Return new state with updated map spot."""
        new_map = tuple(spot if s.id == spot.id else s for s in self.map)
        return self._copy_with(map=new_map)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
