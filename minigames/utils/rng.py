"""
Randomness helpers shared by the game engines.

Every engine owns one GameRandom so that a seeded session replays the same
food positions, mole holes, card deals and ball serves.
"""

from typing import List, Optional, Sequence, TypeVar

import numpy as np


T = TypeVar('T')


class GameRandom:
    """Thin wrapper around numpy's Generator with the draws the games need."""

    def __init__(self, seed: Optional[int] = None):
        self.seed(seed)

    def seed(self, seed: Optional[int]) -> None:
        """Re-seed the generator (None draws fresh OS entropy)."""
        self._seed = seed
        self._gen = np.random.default_rng(seed)

    def randint(self, high: int) -> int:
        """Uniform integer in [0, high)."""
        return int(self._gen.integers(0, high))

    def uniform(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return float(self._gen.uniform(low, high))

    def coin(self) -> bool:
        """Fair coin flip."""
        return bool(self._gen.random() > 0.5)

    def sign(self) -> int:
        """Random +1 / -1."""
        return 1 if self.coin() else -1

    def shuffled(self, items: Sequence[T]) -> List[T]:
        """Return a new list with the items in random order."""
        result = list(items)
        return [result[i] for i in self._gen.permutation(len(result))]
