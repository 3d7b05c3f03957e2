"""
Pytest fixtures for Guildhall tests.
"""

import pytest

from ..spec_schema import GameSpec
from ..engine_core.state import GameState, GamePhase
from ..engine_core.action import Action
from ..engine_core.reducer import apply_action
from ..games.guilds.spec import create_guilds_spec
from ..games.guilds.setup import initialize_game


@pytest.fixture
def guilds_spec() -> GameSpec:
    """Create the Guilds game spec for testing."""
    return create_guilds_spec()


@pytest.fixture
def strict_spec() -> GameSpec:
    """Guilds spec that refuses expand while an effect awaits an answer."""
    return create_guilds_spec(strict_pending_resolution=True)


@pytest.fixture
def setup_state(guilds_spec: GameSpec) -> GameState:
    """A fresh 2-player game, still in the setup phase."""
    return initialize_game(
        ["Ada", "Grace"],
        random_seed=42,
        spec=guilds_spec,
        game_id="test_game",
    )


@pytest.fixture
def two_player_state(setup_state: GameState, guilds_spec: GameSpec) -> GameState:
    """A 2-player game in the playing phase, player-1 to act."""
    result = apply_action(guilds_spec, setup_state, Action.end_turn("player-1"))
    assert result.success
    assert result.new_state.phase == GamePhase.PLAYING
    return result.new_state
