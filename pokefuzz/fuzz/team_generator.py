"""Random team generation driven by exhaustion pools.

Teams are built without validation for custom-game formats. Species,
items, abilities and moves come from the run's pools so that every legal
option is eventually exercised; the remaining attributes are drawn
uniformly from their full ranges.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from ..data.dex import Dex
from ..data.formats import RulesetCapabilities
from .pool import Pools
from .prng import PRNG
from .signatures import Signatures


NO_ABILITY = "No Ability"

TEAM_SIZE = 6
MOVE_SLOTS = 4
MAX_EV = 252
MAX_IV = 31
MIN_LEVEL = 1
MAX_LEVEL = 100
MAX_HAPPINESS = 255

_STAT_LABELS = (("hp", "HP"), ("atk", "Atk"), ("def_", "Def"), ("spa", "SpA"), ("spd", "SpD"), ("spe", "Spe"))


@dataclass
class StatSpread:
    """Six per-stat values, used for both EVs and IVs."""

    hp: int = 0
    atk: int = 0
    def_: int = 0  # 'def' is a Python keyword
    spa: int = 0
    spd: int = 0
    spe: int = 0

    def to_list(self) -> List[int]:
        return [self.hp, self.atk, self.def_, self.spa, self.spd, self.spe]

    def to_dict(self) -> Dict[str, int]:
        return {
            "hp": self.hp, "atk": self.atk, "def": self.def_,
            "spa": self.spa, "spd": self.spd, "spe": self.spe,
        }

    def format(self, skip: int) -> str:
        """Showdown ``"252 HP / 4 Def"`` notation, omitting stats equal to ``skip``."""
        parts = [
            f"{getattr(self, attr)} {label}"
            for attr, label in _STAT_LABELS
            if getattr(self, attr) != skip
        ]
        return " / ".join(parts)

    @classmethod
    def random(cls, prng: PRNG, maximum: int) -> "StatSpread":
        """Each stat uniform in ``[0, maximum]``."""
        return cls(*(prng.next(maximum + 1) for _ in range(6)))


@dataclass
class MemberSet:
    """One team member as submitted to the simulator."""

    name: str
    species: str
    gender: str = ""
    item: str = ""
    ability: str = NO_ABILITY
    moves: List[str] = field(default_factory=list)
    evs: StatSpread = field(default_factory=StatSpread)
    ivs: StatSpread = field(default_factory=lambda: StatSpread(*([MAX_IV] * 6)))
    nature: str = ""
    level: int = MAX_LEVEL
    happiness: int = MAX_HAPPINESS
    shiny: bool = False

    def to_showdown_paste(self) -> str:
        """Convert to Pokemon Showdown paste format."""
        lines = []

        header = self.species if self.name == self.species else f"{self.name} ({self.species})"
        if self.gender in ("M", "F"):
            header += f" ({self.gender})"
        if self.item:
            header += f" @ {self.item}"
        lines.append(header)

        if self.ability and self.ability != NO_ABILITY:
            lines.append(f"Ability: {self.ability}")
        if self.level != MAX_LEVEL:
            lines.append(f"Level: {self.level}")
        if self.shiny:
            lines.append("Shiny: Yes")
        if self.happiness != MAX_HAPPINESS:
            lines.append(f"Happiness: {self.happiness}")

        evs = self.evs.format(skip=0)
        if evs:
            lines.append(f"EVs: {evs}")
        if self.nature:
            lines.append(f"{self.nature} Nature")
        ivs = self.ivs.format(skip=MAX_IV)
        if ivs:
            lines.append(f"IVs: {ivs}")

        for move in self.moves[:MOVE_SLOTS]:
            lines.append(f"- {move}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "species": self.species,
            "gender": self.gender,
            "item": self.item,
            "ability": self.ability,
            "moves": list(self.moves),
            "evs": self.evs.to_dict(),
            "ivs": self.ivs.to_dict(),
            "nature": self.nature,
            "level": self.level,
            "happiness": self.happiness,
            "shiny": self.shiny,
        }


@dataclass
class Team:
    """An ordered list of member sets."""

    members: List[MemberSet] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self):
        return iter(self.members)

    def to_showdown_paste(self) -> str:
        """Convert entire team to Showdown paste format."""
        return "\n\n".join(m.to_showdown_paste() for m in self.members)

    def to_dict(self) -> Dict[str, Any]:
        return {"members": [m.to_dict() for m in self.members]}


class TeamGenerator:
    """Generates random teams from exhaustion pools.

    Drawn completely at random, signature combinations (Mega Stones,
    Z-Crystals, anything that only works for specific species) would almost
    never meet the species they belong to. So whenever such a species is
    drawn, ``combo_chance`` of the time it is handed one of its combinations
    instead of an independently drawn item.
    """

    COMBO = 0.5
    SHINY = (1, 1024)

    def __init__(
        self,
        dex: Dex,
        prng: PRNG,
        pools: Pools,
        signatures: Signatures,
        capabilities: Optional[RulesetCapabilities] = None,
        combo_chance: Optional[float] = None,
        shiny_chance: Optional[Tuple[int, int]] = None,
    ):
        self.dex = dex
        self.prng = prng
        self.pools = pools
        self.signatures = signatures
        self.capabilities = capabilities or RulesetCapabilities.from_gen(dex.gen)
        self.combo_chance = self.COMBO if combo_chance is None else combo_chance
        self.shiny_chance = shiny_chance or self.SHINY
        self.natures = list(dex.natures)

    @property
    def exhausted(self) -> int:
        """Fewest completed cycles among the pools this ruleset draws from."""
        exhausted = [self.pools.species.exhausted, self.pools.moves.exhausted]
        if self.capabilities.has_items:
            exhausted.append(self.pools.items.exhausted)
        if self.capabilities.has_abilities:
            exhausted.append(self.pools.abilities.exhausted)
        return min(exhausted)

    def generate(self) -> Team:
        """Generate one team of ``TEAM_SIZE`` members."""
        members = [self._member(species_id) for species_id in self.pools.species.next(TEAM_SIZE)]
        return Team(members=members)

    def _member(self, species_id: str) -> MemberSet:
        species = self.dex.species(species_id)

        moves: List[str] = []
        combos = self.signatures.get(species.id)
        if combos and self.prng.random() < self.combo_chance:
            combo = self.prng.sample(combos)
            item = combo.item
            if combo.move:
                moves.append(combo.move)
            logger.debug(f"{species.name} forced signature combo {combo}")
        else:
            item = self.pools.items.next()[0] if self.capabilities.has_items else ""

        ability = self.pools.abilities.next()[0] if self.capabilities.has_abilities else NO_ABILITY
        moves.extend(self.pools.moves.next(MOVE_SLOTS - len(moves)))

        return MemberSet(
            name=species.base_species,
            species=species.name,
            gender=species.gender,
            item=item,
            ability=ability,
            moves=moves,
            evs=StatSpread.random(self.prng, MAX_EV),
            ivs=StatSpread.random(self.prng, MAX_IV),
            nature=self.prng.sample(self.natures),
            level=self.prng.randint(MIN_LEVEL, MAX_LEVEL),
            happiness=self.prng.next(MAX_HAPPINESS + 1),
            shiny=self.prng.random_chance(*self.shiny_chance),
        )
