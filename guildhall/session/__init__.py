"""
Session Module - Runs games against a store.

A game is identified by its id:
- Created by the session manager from a GameSpec
- Its state is loaded, reduced and saved once per action
- Ends when a player reaches the victory threshold or the common deck
  runs out

Persistence is pluggable: the in-memory store by default, JSON files on
disk for the CLI and for servers that set GUILDHALL_STORE_DIR.
"""

from .manager import GameSessionManager, GameNotFoundError
from .store import GameStore, InMemoryStore, JsonFileStore

__all__ = [
    "GameSessionManager",
    "GameNotFoundError",
    "GameStore",
    "InMemoryStore",
    "JsonFileStore",
]
