"""
FastAPI Application - REST API over the rule engine.

Endpoints:
    POST   /api/v1/games                        Create a game
    GET    /api/v1/games/{id}                   Get game state
    POST   /api/v1/games/{id}/actions           Submit an action
    GET    /api/v1/games/{id}/legal-actions     List legal actions
    GET    /health                              Health check

Action Flow:
    1. POST /games creates a game in the setup phase
    2. The first player submits endTurn to start play
    3. Each POST /actions returns the full new state; a rejected action
       returns success=false with the engine's error_code and the
       unchanged state
    4. When awaiting_input is set, the player answers it with
       resolveChoice / resolveConditional

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Union
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .service import APIService
from .schemas import (
    # Request models
    CreateGameRequest,
    ActionRequest,
    # Response models
    GameStateResponse,
    ActionResponse,
    LegalActionsResponse,
    ErrorResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)
from .. import __version__
from ..games.guilds.spec import create_guilds_spec
from ..session import GameSessionManager, InMemoryStore, JsonFileStore

logger = logging.getLogger(__name__)

# Environment configuration
GUILDHALL_ENV = os.getenv("GUILDHALL_ENV", "development")
GUILDHALL_STORE_DIR = os.getenv("GUILDHALL_STORE_DIR", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

_STATUS_FOR_ERROR = {
    ErrorCode.GAME_NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
}


def _default_service() -> APIService:
    spec = create_guilds_spec()
    if GUILDHALL_STORE_DIR:
        store = JsonFileStore(GUILDHALL_STORE_DIR, spec)
    else:
        store = InMemoryStore()
    return APIService(manager=GameSessionManager(spec=spec, store=store))


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Guildhall Engine API",
        description="""
Rule engine for the Guilds card game.

## Pending effects

Playing a card can leave sub-effects waiting for an answer. The state's
`awaiting_input` names the next one: answer choices with `resolveChoice`
(by `intentIndex` and `choice`), then conditionals with `resolveConditional`
(`accept`, plus `choice` when the benefit offers options). A discard-cost
conditional completes after the owed `discard` actions.

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist |
| `INVALID_PLAYERS` | Unsupported number of players |
| `INVALID_ACTION` | Unknown action type |

Rejected moves are not HTTP errors; see `error_code` in the action response.
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or _default_service()
    logger.info("Guildhall API starting (env=%s)", GUILDHALL_ENV)

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=_STATUS_FOR_ERROR.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(request: CreateGameRequest) -> Union[GameStateResponse, JSONResponse]:
        """
        Create a new game.

        The game starts in the setup phase; the first player's endTurn
        starts play.
        """
        response = api_service.create_game(request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game(game_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/games/{game_id}/actions",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown action type"},
            404: {"model": ErrorResponse},
        },
        tags=["Games"],
        summary="Submit an action",
    )
    async def submit_action(
        game_id: str,
        request: ActionRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """
        Apply an action for the current player.

        Returns the resulting state. Check `success` and `error_code`:
        a rejected action leaves the game unchanged.
        """
        response = api_service.submit_action(game_id, request)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/games/{game_id}/legal-actions",
        response_model=LegalActionsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="List legal actions for the current player",
    )
    async def get_legal_actions(game_id: str) -> Union[LegalActionsResponse, JSONResponse]:
        response = api_service.legal_actions(game_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="guildhall-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Guildhall Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn guildhall.api.app:app
app = create_app()
