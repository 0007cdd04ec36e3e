"""Rules database backed by Pokemon Showdown's exported data tables.

Provides the legal entity universe for a ruleset generation: species,
items, abilities, moves and natures, plus the per-entry metadata the
fuzz harness needs (generation, nonstandard flag, base species, gender,
and the mega stone / signature item associations).

The data directory is expected to hold the JSON exports of Showdown's
``data/*.ts`` tables::

    pokedex.json  items.json  abilities.json  moves.json  natures.json
"""

import copy
import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from loguru import logger

from ..errors import ConfigurationError
from .formats import FormatInfo


CATEGORIES = ("species", "items", "abilities", "moves")

_DATA_FILES = {
    "species": "pokedex.json",
    "items": "items.json",
    "abilities": "abilities.json",
    "moves": "moves.json",
    "natures": "natures.json",
}

_NON_ID = re.compile(r"[^a-z0-9]+")


def to_id(name: Any) -> str:
    """Normalize a display name to a Showdown id (lowercase alphanumerics)."""
    if not name:
        return ""
    return _NON_ID.sub("", str(name).lower())


# (first dex number, generation) thresholds, newest first
_SPECIES_GENS = ((906, 9), (810, 8), (722, 7), (650, 6), (494, 5), (387, 4), (252, 3), (152, 2), (1, 1))
_MOVE_GENS = ((827, 9), (743, 8), (622, 7), (560, 6), (468, 5), (355, 4), (252, 3), (166, 2), (1, 1))
_ABILITY_GENS = ((268, 9), (234, 8), (192, 7), (165, 6), (124, 5), (77, 4), (1, 3))
_ITEM_GENS = ((1124, 9), (927, 8), (689, 7), (577, 6), (537, 5), (377, 4), (0, 3))


def _gen_from_num(num: int, thresholds: Tuple[Tuple[int, int], ...]) -> int:
    for first, gen in thresholds:
        if num >= first:
            return gen
    return 0


def _species_gen(num: int, forme: str) -> int:
    if "Paldea" in forme:
        return 9
    if forme in ("Gmax", "Galar", "Galar-Zen", "Hisui"):
        return max(8, _gen_from_num(num, _SPECIES_GENS))
    if forme.startswith("Alola") or forme == "Starter":
        return max(7, _gen_from_num(num, _SPECIES_GENS))
    if forme.startswith("Mega") or forme == "Primal":
        return max(6, _gen_from_num(num, _SPECIES_GENS))
    return _gen_from_num(num, _SPECIES_GENS)


@dataclass(frozen=True)
class Entry:
    """Metadata shared by every dex entry."""

    id: str
    name: str
    num: int = 0
    gen: int = 0
    is_nonstandard: Optional[str] = None


@dataclass(frozen=True)
class Species(Entry):
    base_species: str = ""
    forme: str = ""
    gender: str = ""


@dataclass(frozen=True)
class Item(Entry):
    mega_evolves: Optional[str] = None
    item_user: Tuple[str, ...] = field(default_factory=tuple)
    z_move_from: Optional[str] = None


@dataclass(frozen=True)
class Ability(Entry):
    pass


@dataclass(frozen=True)
class Move(Entry):
    pass


def _base_fields(key: str, raw: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": key,
        "name": raw.get("name", key),
        "num": int(raw.get("num", 0)),
        "is_nonstandard": raw.get("isNonstandard") or None,
    }


def _make_species(key: str, raw: Dict[str, Any]) -> Species:
    fields = _base_fields(key, raw)
    forme = raw.get("forme", "")
    return Species(
        gen=int(raw.get("gen") or _species_gen(fields["num"], forme)),
        base_species=raw.get("baseSpecies") or fields["name"],
        forme=forme,
        gender=raw.get("gender", ""),
        **fields,
    )


def _make_item(key: str, raw: Dict[str, Any]) -> Item:
    fields = _base_fields(key, raw)
    return Item(
        gen=int(raw.get("gen") or _gen_from_num(fields["num"], _ITEM_GENS)),
        mega_evolves=raw.get("megaEvolves"),
        item_user=tuple(raw.get("itemUser") or ()),
        z_move_from=raw.get("zMoveFrom"),
        **fields,
    )


def _make_ability(key: str, raw: Dict[str, Any]) -> Ability:
    fields = _base_fields(key, raw)
    return Ability(gen=int(raw.get("gen") or _gen_from_num(fields["num"], _ABILITY_GENS)), **fields)


def _make_move(key: str, raw: Dict[str, Any]) -> Move:
    fields = _base_fields(key, raw)
    return Move(gen=int(raw.get("gen") or _gen_from_num(fields["num"], _MOVE_GENS)), **fields)


_FACTORIES: Dict[str, Callable[[str, Dict[str, Any]], Entry]] = {
    "species": _make_species,
    "items": _make_item,
    "abilities": _make_ability,
    "moves": _make_move,
}


class Dex:
    """Entity tables viewed through a generation ceiling.

    Example:
        dex = Dex.from_directory("data/showdown").for_format("gen7customgame")
        species = dex.only_valid("species")
    """

    def __init__(
        self,
        tables: Dict[str, Dict[str, Dict[str, Any]]],
        gen: int = 9,
    ):
        """Initialize dex.

        Args:
            tables: Raw Showdown tables keyed by category
                (``species``, ``items``, ``abilities``, ``moves``, ``natures``)
            gen: Generation ceiling for ``only_valid``
        """
        self.gen = gen
        self._tables = tables
        self._entries: Dict[str, Dict[str, Entry]] = {
            category: {
                key: _FACTORIES[category](key, raw)
                for key, raw in tables.get(category, {}).items()
            }
            for category in CATEGORIES
        }
        self.natures: List[str] = [
            raw.get("name", key) for key, raw in tables.get("natures", {}).items()
        ]

    @classmethod
    def from_directory(cls, path: Union[str, Path], gen: int = 9) -> "Dex":
        """Load exported Showdown tables from a directory.

        Raises:
            ConfigurationError: If a table is missing.
        """
        path = Path(path)
        tables = {}
        for category, filename in _DATA_FILES.items():
            table_path = path / filename
            if not table_path.exists():
                raise ConfigurationError(f"Missing dex table: {table_path}")
            with open(table_path, "r") as f:
                tables[category] = json.load(f)

        logger.debug(
            "Loaded dex from {} ({})",
            path,
            ", ".join(f"{k}={len(v)}" for k, v in tables.items()),
        )
        return cls(tables, gen=gen)

    def for_gen(self, gen: int) -> "Dex":
        """View of the same tables with a different generation ceiling."""
        dex = copy.copy(self)
        dex.gen = gen
        return dex

    def for_format(self, format_id: str) -> "Dex":
        return self.for_gen(FormatInfo.from_id(format_id).gen)

    def species(self, name: str) -> Species:
        return self._get("species", name)

    def item(self, name: str) -> Item:
        return self._get("items", name)

    def ability(self, name: str) -> Ability:
        return self._get("abilities", name)

    def move(self, name: str) -> Move:
        return self._get("moves", name)

    def ids(self, category: str) -> List[str]:
        return list(self._entries[category])

    def only_valid(
        self,
        category: str,
        additional: Optional[Callable[[str, Entry], bool]] = None,
        nonstandard: bool = False,
    ) -> List[str]:
        """Ids of a category legal under this dex's generation ceiling.

        Args:
            category: One of ``species``, ``items``, ``abilities``, ``moves``
            additional: Extra ``(id, entry) -> bool`` filter
            nonstandard: Keep entries flagged nonstandard
        """
        return [
            key for key, entry in self._entries[category].items()
            if entry.gen <= self.gen
            and (not entry.is_nonstandard or nonstandard)
            and (additional is None or additional(key, entry))
        ]

    def _get(self, category: str, name: str):
        key = to_id(name)
        try:
            return self._entries[category][key]
        except KeyError:
            raise KeyError(f"Unknown {category} entry: {name!r}") from None
