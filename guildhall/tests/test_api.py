"""
Tests for API layer.

Tests:
- API service methods
- Request/response serialization
- HTTP endpoints
- Error handling
"""

import pytest
from fastapi.testclient import TestClient

from ..api.schemas import (
    ActionRequest,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GamePhaseValue,
    IntentType,
)
from ..api.service import APIService
from ..api.app import create_app
from ..engine_core.action import Action
from .helpers import with_hand


@pytest.fixture
def service():
    """Create a fresh API service."""
    return APIService()


@pytest.fixture
def game(service):
    """A started game, player-1 to act."""
    state = service.create_game(CreateGameRequest(player_names=["Ada", "Grace"], random_seed=42))
    service.submit_action(state.game_id, ActionRequest(type="endTurn", playerId="player-1"))
    return state.game_id


class TestAPIService:
    """Tests for APIService."""

    def test_create_game(self, service):
        response = service.create_game(
            CreateGameRequest(player_names=["Ada", "Grace"], random_seed=42)
        )

        assert response.phase == GamePhaseValue.SETUP
        assert [p.name for p in response.players] == ["Ada", "Grace"]
        assert all(len(p.hand) == 5 and p.deck_count == 5 for p in response.players)
        assert len(response.market) == 5
        assert response.common_deck_count == 30
        assert len(response.map) == 20
        assert response.current_player_id == "player-1"
        assert response.players[0].is_current_turn
        assert response.created_at > 0
        assert response.updated_at == response.created_at

    def test_create_game_bad_player_count(self, service):
        response = service.create_game(CreateGameRequest(player_names=["Solo"]))
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.INVALID_PLAYERS

    def test_get_game(self, service, game):
        response = service.get_game(game)
        assert response.game_id == game
        assert response.phase == GamePhaseValue.PLAYING

    def test_get_missing_game(self, service):
        response = service.get_game("missing")
        assert response.error_code == ErrorCode.GAME_NOT_FOUND
        assert response.details == {"game_id": "missing"}

    def test_submit_action(self, service, game):
        response = service.submit_action(
            game, ActionRequest(type="endTurn", playerId="player-1"),
        )
        assert response.success
        assert response.game_state.current_player_id == "player-2"
        assert response.state_changes

    def test_rejected_action(self, service, game):
        response = service.submit_action(
            game, ActionRequest(type="endTurn", playerId="player-2"),
        )
        assert not response.success
        assert response.error_code == "WRONG_PLAYER"
        assert response.game_state.current_player_id == "player-1"

    def test_unknown_action_type(self, service, game):
        response = service.submit_action(game, ActionRequest(type="cheat", playerId="player-1"))
        assert response.error_code == ErrorCode.INVALID_ACTION

    def test_submit_to_missing_game(self, service):
        response = service.submit_action(
            "missing", ActionRequest(type="endTurn", playerId="player-1"),
        )
        assert response.error_code == ErrorCode.GAME_NOT_FOUND

    def test_pending_choice_shown(self, service, game):
        manager = service.manager
        card = manager.spec.get_card("culture-yellow-2")
        manager.store.save(game, with_hand(manager.get(game), "player-1", [card]))

        response = service.submit_action(
            game, ActionRequest(type="expand", playerId="player-1", cardId=card.id),
        )

        awaiting = response.game_state.awaiting_input
        assert awaiting.intent_type == IntentType.CHOICE
        assert awaiting.benefits == ["1 Knowledge", "1 Gold"]

        response = service.submit_action(
            game,
            ActionRequest(type="resolveChoice", playerId="player-1", intentIndex=0, choice="1 Gold"),
        )
        assert response.success
        assert response.game_state.awaiting_input is None
        assert response.game_state.players[0].resources.gold == 6

    def test_declined_intents_reported(self, service, game):
        manager = service.manager
        cards = [manager.spec.get_card(c) for c in ("military-red-1", "royal-red-1")]
        manager.store.save(game, with_hand(manager.get(game), "player-1", cards))
        service.submit_action(
            game, ActionRequest(type="expand", playerId="player-1", cardId="military-red-1"),
        )

        response = service.submit_action(
            game, ActionRequest(type="expand", playerId="player-1", cardId="royal-red-1"),
        )

        assert response.declined_intents == ["Pay 1 Gold → 1 Army"]

    def test_legal_actions(self, service):
        state = service.create_game(CreateGameRequest(player_names=["Ada", "Grace"]))
        response = service.legal_actions(state.game_id)
        assert response.count == 1
        assert response.actions == [Action.end_turn("player-1").to_dict()]

    def test_standings_in_state(self, service, game):
        response = service.get_game(game)
        assert [s.player_id for s in response.standings] == ["player-1", "player-2"]
        assert response.victory_points_to_win == 15


class TestActionRequest:
    """Request parsing."""

    def test_aliases(self):
        request = ActionRequest.model_validate(
            {"type": "placeArmy", "playerId": "player-1", "spotId": 5}
        )
        assert request.action_type == "placeArmy"
        assert request.spot_id == 5

    def test_field_names(self):
        request = ActionRequest(action_type="draw", player_id="player-1")
        assert request.model_dump(by_alias=True)["type"] == "draw"


class TestHTTP:
    """Endpoints through the FastAPI test client."""

    @pytest.fixture
    def client(self):
        return TestClient(create_app(APIService()))

    def _create(self, client):
        response = client.post(
            "/api/v1/games",
            json={"player_names": ["Ada", "Grace"], "random_seed": 7},
        )
        assert response.status_code == 201
        return response.json()["game_id"]

    def test_create_and_get(self, client):
        game_id = self._create(client)
        response = client.get(f"/api/v1/games/{game_id}")
        assert response.status_code == 200
        assert response.json()["phase"] == "setup"

    def test_get_missing(self, client):
        response = client.get("/api/v1/games/missing")
        assert response.status_code == 404
        assert response.json()["error_code"] == "GAME_NOT_FOUND"

    def test_create_invalid_players(self, client):
        response = client.post("/api/v1/games", json={"player_names": ["Solo"]})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_PLAYERS"

    def test_create_validation_error(self, client):
        response = client.post("/api/v1/games", json={"player_names": []})
        assert response.status_code == 422

    def test_submit_action(self, client):
        game_id = self._create(client)
        response = client.post(
            f"/api/v1/games/{game_id}/actions",
            json={"type": "endTurn", "playerId": "player-1"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["game_state"]["phase"] == "playing"

    def test_rejected_action_is_not_http_error(self, client):
        game_id = self._create(client)
        response = client.post(
            f"/api/v1/games/{game_id}/actions",
            json={"type": "draw", "playerId": "player-1"},
        )
        assert response.status_code == 200
        assert response.json()["error_code"] == "WRONG_PHASE"

    def test_unknown_action_type(self, client):
        game_id = self._create(client)
        response = client.post(
            f"/api/v1/games/{game_id}/actions",
            json={"type": "cheat", "playerId": "player-1"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_ACTION"

    def test_legal_actions(self, client):
        game_id = self._create(client)
        response = client.get(f"/api/v1/games/{game_id}/legal-actions")
        assert response.status_code == 200
        assert response.json()["actions"] == [{"type": "endTurn", "playerId": "player-1"}]

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestOpenAPISchema:
    """Tests for the generated OpenAPI schema."""

    def test_openapi_schema_generates(self):
        schema = create_app(APIService()).openapi()
        assert schema["info"]["title"] == "Guildhall Engine API"
        assert "/api/v1/games/{game_id}/actions" in schema["paths"]

    def test_response_models_in_schema(self):
        schema = create_app(APIService()).openapi()
        models = schema["components"]["schemas"]
        for name in ("GameStateResponse", "ActionResponse", "LegalActionsResponse", "ErrorResponse"):
            assert name in models
