"""Seeded pseudo-random source shared by the pools, the team generator and the players.

Wraps ``numpy.random.Generator`` so a whole run can be replayed from the
integer seed printed when a match fails.
"""

from typing import List, Optional, Sequence, TypeVar

import numpy as np


T = TypeVar("T")


class PRNG:
    """Deterministic random stream.

    Args:
        seed: Integer seed. ``None`` draws fresh OS entropy; the resolved
            value is still exposed as ``seed`` so the run can be reproduced.
    """

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = int(np.random.SeedSequence().entropy)
        self._seed = int(seed)
        self._rng = np.random.default_rng(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def next(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``."""
        return int(self._rng.integers(bound))

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in ``[low, high]``."""
        return int(self._rng.integers(low, high + 1))

    def random(self) -> float:
        return float(self._rng.random())

    def random_chance(self, numerator: int, denominator: int) -> bool:
        """True with probability ``numerator / denominator``."""
        return self.next(denominator) < numerator

    def sample(self, seq: Sequence[T]) -> T:
        """One element of a non-empty sequence."""
        if not seq:
            raise ValueError("Cannot sample from an empty sequence")
        return seq[self.next(len(seq))]

    def shuffled(self, seq: Sequence[T]) -> List[T]:
        """A new list holding ``seq`` in uniformly random order."""
        return [seq[i] for i in self._rng.permutation(len(seq))]

    def child(self) -> "PRNG":
        """Independent stream seeded with exactly one draw from this one.

        Whatever the child consumes leaves this stream untouched, so a
        collaborator with a variable appetite (a battle AI) cannot shift the
        draws that follow.
        """
        return PRNG(int(self._rng.integers(2**63 - 1)))

    def __repr__(self) -> str:
        return f"PRNG(seed={self._seed})"
