"""
API Module - HTTP interface.

Exposes the engine via REST API:
1. Create games
2. Read game state and legal actions
3. Submit actions, including answers to pending card effects

Persistence is whatever store the session manager is given.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    ActionRequest,
    # Responses
    GameStateResponse,
    ActionResponse,
    LegalActionsResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    MapSpotInfo,
    PendingIntentInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "ActionRequest",
    # Responses
    "GameStateResponse",
    "ActionResponse",
    "LegalActionsResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "PlayerInfo",
    "CardInfo",
    "MapSpotInfo",
    "PendingIntentInfo",
    # Service
    "APIService",
    "create_app",
]
