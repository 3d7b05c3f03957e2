"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Runs them through the session manager
3. Formats states for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, field

from .schemas import (
    # Requests
    CreateGameRequest,
    ActionRequest,
    # Responses
    GameStateResponse,
    ActionResponse,
    LegalActionsResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    GuildPileInfo,
    ResourcesInfo,
    PlayerInfo,
    MapSpotInfo,
    PendingIntentInfo,
    StandingInfo,
    # Enums
    GamePhaseValue,
    IntentType,
    ErrorCode,
)
from ..spec_schema import Card
from ..engine_core.action import Action
from ..engine_core.state import GameState, PendingChoice, PendingConditional, PlayerState
from ..engine_core.queries import standings
from ..games.guilds.spec import create_guilds_spec
from ..session import GameSessionManager, GameNotFoundError


def _default_manager() -> GameSessionManager:
    return GameSessionManager(spec=create_guilds_spec())


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        state = service.create_game(CreateGameRequest(player_names=["Ada", "Grace"]))
        response = service.submit_action(state.game_id, request)
    """
    manager: GameSessionManager = field(default_factory=_default_manager)

    def create_game(self, request: CreateGameRequest) -> GameStateResponse | ErrorResponse:
        """Create a new game in the setup phase."""
        try:
            state = self.manager.new_game(request.player_names, random_seed=request.random_seed)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.INVALID_PLAYERS)
        return self._build_game_state(state)

    def get_game(self, game_id: str) -> GameStateResponse | ErrorResponse:
        try:
            state = self.manager.get(game_id)
        except GameNotFoundError as e:
            return self._not_found(e)
        return self._build_game_state(state)

    def submit_action(
        self,
        game_id: str,
        request: ActionRequest,
    ) -> ActionResponse | ErrorResponse:
        """
        Apply an action for the current player.

        A rejected action is a normal response with success=false.
        """
        try:
            action = Action.from_dict(request.model_dump(by_alias=True))
        except ValueError:
            return ErrorResponse(
                error=f"Unknown action type: {request.action_type}",
                error_code=ErrorCode.INVALID_ACTION,
            )

        try:
            result = self.manager.submit(game_id, action)
        except GameNotFoundError as e:
            return self._not_found(e)

        return ActionResponse(
            success=result.success,
            error=result.error,
            error_code=result.error_code,
            state_changes=result.state_changes,
            declined_intents=[intent.source_text for intent in result.declined_intents],
            game_state=self._build_game_state(result.new_state),
        )

    def legal_actions(self, game_id: str) -> LegalActionsResponse | ErrorResponse:
        try:
            state = self.manager.get(game_id)
            actions = self.manager.legal_actions(game_id)
        except GameNotFoundError as e:
            return self._not_found(e)

        return LegalActionsResponse(
            game_id=game_id,
            current_player_id=state.current_player.player_id if state.players else None,
            actions=[action.to_dict() for action in actions],
            count=len(actions),
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _not_found(self, error: GameNotFoundError) -> ErrorResponse:
        return ErrorResponse(
            error=str(error),
            error_code=ErrorCode.GAME_NOT_FOUND,
            details={"game_id": error.game_id},
        )

    def _build_game_state(self, state: GameState) -> GameStateResponse:
        """Build complete game state response."""
        current_id = state.current_player.player_id if state.players else None
        awaiting = state.awaiting_input

        deferred = None
        if state.deferred_conditional is not None:
            deferred = state.deferred_conditional.intent.source_text

        return GameStateResponse(
            game_id=state.game_id,
            phase=GamePhaseValue(state.phase.value),
            turn_number=state.turn_number,
            current_player_id=current_id,
            players=[
                self._build_player(player, player.player_id == current_id)
                for player in state.players
            ],
            market=[_card_info(card) for card in state.market],
            common_deck_count=state.common_deck.count,
            map=[
                MapSpotInfo(
                    id=spot.id,
                    kind=spot.kind.value,
                    row=spot.row,
                    col=spot.col,
                    adjacent=list(spot.adjacent),
                    occupying_player=spot.occupying_player,
                    army_count=spot.army_count,
                )
                for spot in state.map
            ],
            pending_choices=[
                _intent_info(intent, index)
                for index, intent in enumerate(state.pending_choices)
            ],
            pending_conditionals=[
                _intent_info(intent, index)
                for index, intent in enumerate(state.pending_conditionals)
            ],
            awaiting_input=_intent_info(awaiting, 0) if awaiting is not None else None,
            discard_pending=deferred,
            standings=[
                StandingInfo(**asdict(standing)) for standing in standings(state)
            ],
            victory_points_to_win=self.manager.spec.victory_points_to_win,
            created_at=state.metadata.get("created_at", 0.0),
            updated_at=state.metadata.get("updated_at", 0.0),
        )

    def _build_player(self, player: PlayerState, is_current: bool) -> PlayerInfo:
        return PlayerInfo(
            player_id=player.player_id,
            name=player.name,
            is_current_turn=is_current,
            hand=[_card_info(card) for card in player.hand.cards],
            deck_count=player.deck.count,
            discard=[_card_info(card) for card in player.discard.cards],
            exile_count=player.exile.count,
            guild_piles=[
                GuildPileInfo(
                    guild=guild.value,
                    size=pile.size,
                    cards=[_card_info(card) for card in pile.cards],
                )
                for guild, pile in player.guild_piles.items()
            ],
            resources=ResourcesInfo(**player.resources.as_dict()),
            armies=player.armies,
            outposts=list(player.outposts),
        )


def _card_info(card: Card) -> CardInfo:
    return CardInfo(
        card_id=card.id,
        guild=card.guild.value,
        color=card.color.value,
        tier1=card.tier1,
        tier2_3=card.tier2_3,
        tier4_5=card.tier4_5,
        bonus=card.bonus,
    )


def _intent_info(intent: PendingChoice | PendingConditional, index: int) -> PendingIntentInfo:
    if isinstance(intent, PendingChoice):
        return PendingIntentInfo(
            intent_type=IntentType.CHOICE,
            index=index,
            source_text=intent.source_text,
            benefits=list(intent.benefits),
        )
    return PendingIntentInfo(
        intent_type=IntentType.CONDITIONAL,
        index=index,
        source_text=intent.source_text,
        cost=intent.cost,
        benefit=intent.benefit,
        nested_choices=list(intent.nested_choices),
    )
