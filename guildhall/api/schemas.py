"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes (ErrorResponse):
- GAME_NOT_FOUND: Game does not exist
- INVALID_PLAYERS: Unsupported number of players
- INVALID_ACTION: Action request could not be parsed
- INTERNAL_ERROR: Unexpected failure

Rejected actions are not errors at the HTTP level: they return an
ActionResponse with success=false and the engine's error_code.
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GamePhaseValue(str, Enum):
    """Game phase values."""
    SETUP = "setup"
    PLAYING = "playing"
    ENDED = "ended"


class IntentType(str, Enum):
    CHOICE = "choice"
    CONDITIONAL = "conditional"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_PLAYERS = "INVALID_PLAYERS"
    INVALID_ACTION = "INVALID_ACTION"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    guild: str
    color: str
    tier1: str
    tier2_3: str
    tier4_5: str
    bonus: str = ""


class GuildPileInfo(BaseModel):
    guild: str
    size: int = 0
    cards: list[CardInfo] = Field(default_factory=list, description="Base card first")


class ResourcesInfo(BaseModel):
    """Resource counters; everything but gold and victory points resets each turn."""
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


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    is_current_turn: bool = False
    hand: list[CardInfo] = Field(default_factory=list)
    deck_count: int = 0
    discard: list[CardInfo] = Field(default_factory=list)
    exile_count: int = 0
    guild_piles: list[GuildPileInfo] = Field(default_factory=list)
    resources: ResourcesInfo = Field(default_factory=ResourcesInfo)
    armies: int = Field(0, description="Armies not yet placed on the map")
    outposts: list[int] = Field(default_factory=list)


class MapSpotInfo(BaseModel):
    id: int
    kind: str = Field(description="normal, starting, outpost")
    row: int
    col: int
    adjacent: list[int] = Field(default_factory=list)
    occupying_player: Optional[str] = None
    army_count: int = 0


class PendingIntentInfo(BaseModel):
    """A card sub-effect waiting for the current player's answer."""
    intent_type: IntentType
    index: int
    source_text: str
    benefits: list[str] = Field(default_factory=list, description="Options of a choice")
    cost: Optional[str] = None
    benefit: Optional[str] = None
    nested_choices: list[str] = Field(
        default_factory=list,
        description="Benefit options; accepting must name one",
    )


class StandingInfo(BaseModel):
    player_id: str
    name: str
    victory_points: int
    gold: int
    spots_held: int
    outposts: int


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to create a new game."""
    player_names: list[str] = Field(
        ..., min_length=1, description="Player names in turn order"
    )
    random_seed: Optional[int] = Field(None, description="Seed for reproducible games")


class ActionRequest(BaseModel):
    """
    An action for the current player.

    Accepts camelCase (playerId) or snake_case (player_id) keys.
    """
    action_type: str = Field(..., alias="type", description="expand, consolidate, endTurn, ...")
    player_id: str = Field(..., alias="playerId")
    card_id: Optional[str] = Field(None, alias="cardId")
    spot_id: Optional[int] = Field(None, alias="spotId")
    intent_index: Optional[int] = Field(None, alias="intentIndex")
    accept: Optional[bool] = None
    choice: Optional[str] = None

    model_config = {"populate_by_name": True}


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    game_id: str
    phase: GamePhaseValue
    turn_number: int
    current_player_id: Optional[str] = None
    players: list[PlayerInfo] = Field(default_factory=list)
    market: list[CardInfo] = Field(default_factory=list)
    common_deck_count: int = 0
    map: list[MapSpotInfo] = Field(default_factory=list)
    pending_choices: list[PendingIntentInfo] = Field(default_factory=list)
    pending_conditionals: list[PendingIntentInfo] = Field(default_factory=list)
    awaiting_input: Optional[PendingIntentInfo] = None
    discard_pending: Optional[str] = Field(
        None, description="Accepted conditional waiting for discards"
    )
    standings: list[StandingInfo] = Field(default_factory=list)
    victory_points_to_win: int = 15
    created_at: float = 0.0
    updated_at: float = 0.0
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Result of submitting an action."""
    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = Field(None, description="Engine code, e.g. WRONG_PLAYER")
    state_changes: list[str] = Field(default_factory=list)
    declined_intents: list[str] = Field(
        default_factory=list,
        description="Pending effects dropped because a new card was played",
    )
    game_state: GameStateResponse
    api_version: str = "v1"


class LegalActionsResponse(BaseModel):
    game_id: str
    current_player_id: Optional[str] = None
    actions: list[dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    api_version: str = "v1"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
