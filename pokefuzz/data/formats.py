"""Battle format definitions for exhaustive runs.

Format ids follow Pokemon Showdown's naming, e.g. ``gen8doublescustomgame``.
The generation prefix gates which entities are legal and which pools are
drawn from.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from ..errors import ConfigurationError


class GameType(Enum):
    """Battle layouts recognised in format ids."""
    SINGLES = "singles"
    DOUBLES = "doubles"
    TRIPLES = "triples"
    MULTI = "multi"


# Custom-game formats exercised when no format is given.
# TODO: Add triples once CoordinatedPlayer can issue triple battle orders.
FORMATS: List[str] = [
    "gen8customgame", "gen8doublescustomgame",
    "gen7customgame", "gen7doublescustomgame",
    "gen6customgame", "gen6doublescustomgame",
    "gen5customgame", "gen5doublescustomgame",
    "gen4customgame", "gen4doublescustomgame",
    "gen3customgame", "gen3doublescustomgame",
    "gen2customgame",
    "gen1customgame",
]

_GEN_PATTERN = re.compile(r"^gen(\d+)")


@dataclass(frozen=True)
class RulesetCapabilities:
    """Which optional entity categories a generation has."""

    gen: int
    has_items: bool
    has_abilities: bool

    @classmethod
    def from_gen(cls, gen: int) -> "RulesetCapabilities":
        return cls(gen=gen, has_items=gen >= 2, has_abilities=gen >= 3)


@dataclass(frozen=True)
class FormatInfo:
    """Parsed view of a format id."""

    id: str
    gen: int
    game_type: GameType

    @property
    def players(self) -> int:
        return 4 if self.game_type == GameType.MULTI else 2

    @property
    def capabilities(self) -> RulesetCapabilities:
        return RulesetCapabilities.from_gen(self.gen)

    @classmethod
    def from_id(cls, format_id: str) -> "FormatInfo":
        """Parse a format id.

        Raises:
            ConfigurationError: If the id has no ``genN`` prefix.
        """
        match = _GEN_PATTERN.match(format_id)
        if not match or int(match.group(1)) < 1:
            raise ConfigurationError(f"Cannot determine generation of format {format_id!r}")

        rest = format_id[match.end():]
        game_type = GameType.SINGLES
        for candidate in (GameType.MULTI, GameType.TRIPLES, GameType.DOUBLES):
            if candidate.value in rest:
                game_type = candidate
                break

        return cls(id=format_id, gen=int(match.group(1)), game_type=game_type)
