"""
Seeded shuffling.

All randomness in the engine goes through a Shuffle function so tests can
fix the sequence. The default derives a fresh random.Random from the game
seed and a per-game shuffle counter, which keeps the reducer a pure
function of (state, action).
"""

from __future__ import annotations
import random
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

Shuffle = Callable[[Sequence[T], int, int], tuple]


def seeded_shuffle(items: Sequence[T], seed: int, counter: int) -> tuple[T, ...]:
    """Return items shuffled deterministically for (seed, counter)."""
    rng = random.Random(f"{seed}:{counter}")
    shuffled = list(items)
    rng.shuffle(shuffled)
    return tuple(shuffled)


def no_shuffle(items: Sequence[T], seed: int, counter: int) -> tuple[T, ...]:
    """Identity shuffle, for tests that need a known order."""
    return tuple(items)
