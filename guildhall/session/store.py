"""
Game Store - Persistence for game states.

The engine never persists anything itself; the session layer is handed a
GameStore. Two implementations:
- InMemoryStore: a dict, for tests and single-process servers
- JsonFileStore: one JSON document per game on local disk

Design decisions:
- save() overwrites, so saving the same state twice is a no-op
- load() returns None for unknown ids rather than raising
- Stored states are plain dicts (see engine_core.serialization)
"""

from __future__ import annotations
import json
import re
from pathlib import Path
from typing import Protocol

from ..spec_schema import GameSpec
from ..engine_core.state import GameState
from ..engine_core.serialization import state_to_dict, state_from_dict

_SAFE_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


class GameStore(Protocol):
    """Where game states live between actions."""

    def load(self, game_id: str) -> GameState | None:
        ...

    def save(self, game_id: str, state: GameState) -> None:
        ...


class InMemoryStore:
    """Keeps states in a dict. States are immutable, so no copying is needed."""

    def __init__(self):
        self._states: dict[str, GameState] = {}

    def load(self, game_id: str) -> GameState | None:
        return self._states.get(game_id)

    def save(self, game_id: str, state: GameState) -> None:
        self._states[game_id] = state

    def delete(self, game_id: str) -> None:
        self._states.pop(game_id, None)

    def list_games(self) -> list[str]:
        return list(self._states)


class JsonFileStore:
    """
    File-based store, one <game_id>.json per game.

    Usage:
        store = JsonFileStore("~/.guildhall/games", spec)
        store.save(state.game_id, state)
        state = store.load(game_id)
    """

    def __init__(self, store_dir: str | Path, spec: GameSpec):
        self.store_dir = Path(store_dir).expanduser()
        self.spec = spec

        # Ensure store directory exists
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def load(self, game_id: str) -> GameState | None:
        """
        Load a stored game.

        Returns None if the game is unknown.
        """
        if not _SAFE_ID.match(game_id):
            return None
        path = self._get_path(game_id)
        if not path.exists():
            return None

        with open(path) as f:
            data = json.load(f)
        return state_from_dict(data, self.spec)

    def save(self, game_id: str, state: GameState) -> None:
        path = self._get_path(game_id)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w") as f:
            json.dump(state_to_dict(state), f, indent=2)
        tmp_path.replace(path)

    def delete(self, game_id: str) -> None:
        self._get_path(game_id).unlink(missing_ok=True)

    def list_games(self) -> list[str]:
        """List all stored game ids."""
        if not self.store_dir.exists():
            return []
        return sorted(f.stem for f in self.store_dir.glob("*.json"))

    def _get_path(self, game_id: str) -> Path:
        if not _SAFE_ID.match(game_id):
            raise ValueError(f"Invalid game id: {game_id!r}")
        return self.store_dir / f"{game_id}.json"
