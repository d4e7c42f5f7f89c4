from __future__ import annotations

from typing import Any

import numpy as np


class Sequencer:
    """
    The single random stream behind a level.

    Every generation step draws from one instance so that a top-level seed
    reproduces a whole run, including the working seed of each next reset.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)

    @property
    def generator(self) -> np.random.Generator:
        return self._rng

    def seed(self, value: int) -> None:
        self._rng = np.random.default_rng(int(value))

    def rand_range(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi)."""
        if hi <= lo:
            raise ValueError(f"empty random range [{lo}, {hi})")
        return int(self._rng.integers(lo, hi))

    def unit_float(self) -> float:
        return float(self._rng.random())

    def shuffle(self, items: list[Any]) -> None:
        order = self._rng.permutation(len(items))
        items[:] = [items[i] for i in order]

    def next_seed(self, seed_range: int = 10000) -> int:
        return self.rand_range(0, seed_range)
