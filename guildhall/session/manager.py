"""
Session Manager - Creates games and runs actions against stored state.

LIFECYCLE:
1. new_game() sets up a state and saves it
2. submit() loads the state, applies one action through the reducer,
   ends the game if it is over, and saves the result

Saved states carry created_at / updated_at timestamps (time.time())
in their metadata; rejected actions do not touch updated_at.
3. get() / legal_actions() read the stored state

The manager is the only layer that logs; the engine stays silent and
reports everything through ActionResult.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field

from ..spec_schema import GameSpec, tier_for_position
from ..engine_core.state import GameState, GamePhase
from ..engine_core.action import Action, ActionType, ActionResult
from ..engine_core.action_generator import legal_actions
from ..engine_core.queries import Standing, end_game_if_over, standings
from ..engine_core.reducer import Reducer
from ..games.guilds.setup import initialize_game
from .store import GameStore, InMemoryStore

logger = logging.getLogger(__name__)


class GameNotFoundError(LookupError):
    """Raised when a game id is not in the store."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game not found: {game_id}")


@dataclass
class GameSessionManager:
    """
    Manages games on top of a GameStore.

    Usage:
        manager = GameSessionManager(spec=create_guilds_spec())
        state = manager.new_game(["Ada", "Grace"], random_seed=7)
        result = manager.submit(state.game_id, Action.end_turn("player-1"))
    """
    spec: GameSpec
    store: GameStore = field(default_factory=InMemoryStore)

    def __post_init__(self):
        self._reducer = Reducer(spec=self.spec)

    def new_game(
        self,
        player_names: list[str],
        random_seed: int | None = None,
    ) -> GameState:
        """
        Create and save a new game.

        Raises ValueError for an unsupported number of players.
        """
        state = initialize_game(player_names, random_seed=random_seed, spec=self.spec)
        now = time.time()
        state = _stamp(state, created_at=now, updated_at=now)
        self.store.save(state.game_id, state)
        logger.info(
            "Created game %s with %d players (seed %d)",
            state.game_id, state.num_players, state.random_seed,
        )
        return state

    def get(self, game_id: str) -> GameState:
        state = self.store.load(game_id)
        if state is None:
            raise GameNotFoundError(game_id)
        return state

    def submit(self, game_id: str, action: Action) -> ActionResult:
        """
        Apply an action to a stored game.

        Rejected actions leave the stored state untouched.
        """
        state = self.get(game_id)
        result = self._reducer.apply(state, action)

        if not result.success:
            logger.debug(
                "Game %s: rejected %s from %s: %s (%s)",
                game_id, action.action_type.value, action.player_id,
                result.error, result.error_code,
            )
            return result

        if action.action_type == ActionType.EXPAND:
            self._log_dropped_clauses(game_id, result.new_state, action)
        for intent in result.declined_intents:
            logger.debug("Game %s: implicitly declined '%s'", game_id, intent.source_text)

        new_state = end_game_if_over(self.spec, result.new_state)
        if new_state.phase == GamePhase.ENDED and state.phase != GamePhase.ENDED:
            ranked = standings(new_state)
            logger.info(
                "Game %s ended on turn %d; leader %s with %d VP",
                game_id, new_state.turn_number,
                ranked[0].name, ranked[0].victory_points,
            )
        new_state = _stamp(new_state, updated_at=time.time())
        result.new_state = new_state

        self.store.save(game_id, new_state)
        return result

    def legal_actions(self, game_id: str) -> list[Action]:
        return legal_actions(self.spec, self.get(game_id))

    def standings(self, game_id: str) -> list[Standing]:
        return standings(self.get(game_id))

    def _log_dropped_clauses(self, game_id: str, state: GameState, action: Action):
        card = self.spec.get_card(action.payload.card_id or "")
        player = state.get_player(action.player_id or "")
        if card is None or player is None:
            return

        tier = tier_for_position(player.get_pile(card.guild).size)
        if tier is None:
            return

        for program in (card.effects_for(tier), card.compiled_bonus()):
            for clause in program.unrecognized:
                logger.warning(
                    "Game %s: %s has an unrecognized clause '%s'; it was ignored",
                    game_id, card.id, clause.source_text,
                )


def _stamp(state: GameState, **times: float) -> GameState:
    return state._copy_with(metadata={**state.metadata, **times})
