"""Self-exhausting sampling pools.

A pool hands out the identifiers of a fixed universe in shuffled order,
every identifier exactly once per cycle, and counts completed cycles.
The team generator draws from pools and players consume from them through
``mark_used`` so that both sides of a run push towards full coverage.
"""

from collections import deque
from typing import Deque, Iterable, List, Set, Tuple

from ..errors import EmptyPoolError
from .prng import PRNG


class Pool:
    """Uniform-without-replacement sampler over a fixed universe.

    Args:
        possible: The universe of identifiers. Copied and never mutated.
        prng: Random source used for every reshuffle.
    """

    def __init__(self, possible: Iterable[str], prng: PRNG):
        self._possible: Tuple[str, ...] = tuple(possible)
        self._prng = prng
        self._queue: Deque[str] = deque()
        self._unused: Set[str] = set()
        self.exhausted = 0
        self._reset()

    @property
    def possible(self) -> Tuple[str, ...]:
        return self._possible

    @property
    def remaining(self) -> int:
        """Identifiers not yet consumed in the current cycle."""
        return len(self._unused)

    def next(self, n: int = 1) -> List[str]:
        """Consume and return the next ``n`` identifiers.

        Wraps into a freshly shuffled cycle (possibly several) when the
        current one runs out, bumping ``exhausted`` for each completed cycle.

        Raises:
            EmptyPoolError: If the universe is empty.
        """
        if n > 0 and not self._possible:
            raise EmptyPoolError("Cannot draw from an empty pool")

        drawn = []
        while len(drawn) < n:
            key = self._queue.popleft()
            if key not in self._unused:
                # Already consumed this cycle via mark_used
                continue
            drawn.append(key)
            self._consume(key)
        return drawn

    def was_used(self, key: str) -> bool:
        """Whether ``key`` has been consumed in the current cycle."""
        return key not in self._unused

    def mark_used(self, key: str) -> None:
        """Consume ``key`` out of the current cycle without drawing it.

        Unknown keys and keys already consumed this cycle are ignored.
        """
        if key in self._unused:
            self._consume(key)

    def _consume(self, key: str) -> None:
        self._unused.discard(key)
        if not self._unused:
            self.exhausted += 1
            self._reset()

    def _reset(self) -> None:
        self._queue = deque(self._prng.shuffled(self._possible))
        self._unused = set(self._possible)

    def __len__(self) -> int:
        return len(self._possible)

    def __str__(self) -> str:
        return f"{self.exhausted} ({self.remaining}/{len(self._possible)})"

    def __repr__(self) -> str:
        return f"Pool(size={len(self._possible)}, exhausted={self.exhausted}, remaining={self.remaining})"


class Pools:
    """The four pools a run draws from, owned by one runner."""

    def __init__(self, species: Pool, items: Pool, abilities: Pool, moves: Pool):
        self.species = species
        self.items = items
        self.abilities = abilities
        self.moves = moves

    def __str__(self) -> str:
        return f"P:{self.species} I:{self.items} A:{self.abilities} M:{self.moves}"
