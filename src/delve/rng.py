from __future__ import annotations

import logging
import random
from typing import Any, List, Mapping, Optional

logger = logging.getLogger(__name__)


class RandomSource:
    """Single source of randomness for generation and AI.

    Wraps ``random.Random`` so that a whole run can be replayed from one seed and so
    tests can inject a deterministic stream.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)
        if seed is None:
            logger.debug("RandomSource initialized with non-deterministic seed")
        else:
            logger.debug("RandomSource initialized with seed=%s", seed)

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in the inclusive range [a, b]."""
        return self._rng.randint(a, b)

    def random(self) -> float:
        return self._rng.random()

    def coin(self) -> bool:
        return self._rng.random() < 0.5

    def weighted_choice(self, weights: Mapping[Any, int]) -> Any:
        """Pick a key with probability proportional to its weight.

        Keys with weight 0 are never returned. Raises ValueError for negative
        weights or when every weight is zero.
        """
        keys: List[Any] = []
        cumulative: List[int] = []
        total = 0
        for key, weight in weights.items():
            if weight < 0:
                raise ValueError(f"Weight for {key!r} must be non-negative, got {weight}")
            if weight == 0:
                continue
            total += weight
            keys.append(key)
            cumulative.append(total)

        if total == 0:
            raise ValueError("All weights are zero; cannot make a weighted choice")

        roll = self._rng.randint(1, total)
        for key, bound in zip(keys, cumulative):
            if roll <= bound:
                return key
        return keys[-1]

    def getstate(self) -> Any:
        return self._rng.getstate()

    def setstate(self, state: Any) -> None:
        self._rng.setstate(state)


__all__ = ["RandomSource"]
