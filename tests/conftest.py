"""Pytest configuration and shared fixtures for fuzz harness tests."""

import pytest
import json
from pathlib import Path
import tempfile
from typing import Any, Dict, List, Optional

from pokefuzz.data.dex import Dex
from pokefuzz.errors import MatchFailure
from pokefuzz.fuzz.prng import PRNG


# ====================
# Dex Fixtures
# ====================

def _entries(*rows) -> Dict[str, Dict[str, Any]]:
    return {key: dict(fields) for key, fields in rows}


def build_tables() -> Dict[str, Dict[str, Dict[str, Any]]]:
    """Small Showdown-shaped data set spanning generations 1-7."""
    species = _entries(
        ("bulbasaur", {"num": 1, "name": "Bulbasaur", "gen": 1}),
        ("venusaur", {"num": 3, "name": "Venusaur", "gen": 1}),
        ("venusaurmega", {"num": 3, "name": "Venusaur-Mega", "baseSpecies": "Venusaur", "forme": "Mega", "gen": 6}),
        ("charmander", {"num": 4, "name": "Charmander", "gen": 1}),
        ("squirtle", {"num": 7, "name": "Squirtle", "gen": 1}),
        ("pikachu", {"num": 25, "name": "Pikachu", "gen": 1}),
        ("pikachualola", {"num": 25, "name": "Pikachu-Alola", "baseSpecies": "Pikachu", "forme": "Alola", "gen": 7}),
        ("pidgey", {"num": 16, "name": "Pidgey", "gen": 1}),
        ("rattata", {"num": 19, "name": "Rattata", "gen": 1}),
        ("eevee", {"num": 133, "name": "Eevee", "gen": 1}),
        ("chikorita", {"num": 152, "name": "Chikorita", "gen": 2}),
        ("pichuspikyeared", {"num": 172, "name": "Pichu-Spiky-eared", "baseSpecies": "Pichu", "gen": 4}),
        ("treecko", {"num": 252, "name": "Treecko", "gen": 3}),
        ("nidoranf", {"num": 29, "name": "Nidoran-F", "gender": "F", "gen": 1}),
        ("missingno", {"num": 0, "name": "MissingNo.", "isNonstandard": "Custom", "gen": 1}),
    )
    items = _entries(
        ("leftovers", {"num": 234, "name": "Leftovers", "gen": 2}),
        ("lightball", {"num": 236, "name": "Light Ball", "gen": 2, "itemUser": ["Pikachu", "Pikachu-Alola"]}),
        ("choiceband", {"num": 220, "name": "Choice Band", "gen": 3}),
        ("lifeorb", {"num": 270, "name": "Life Orb", "gen": 4}),
        ("venusaurite", {"num": 659, "name": "Venusaurite", "gen": 6,
                         "megaStone": "Venusaur-Mega", "megaEvolves": "Venusaur", "itemUser": ["Venusaur"]}),
        ("pikaniumz", {"num": 794, "name": "Pikanium Z", "gen": 7,
                       "zMove": "Catastropika", "zMoveFrom": "Volt Tackle", "itemUser": ["Pikachu"]}),
        ("crucibellite", {"num": -1, "name": "Crucibellite", "gen": 6, "isNonstandard": "CAP"}),
    )
    abilities = _entries(
        ("noability", {"num": 0, "name": "No Ability", "isNonstandard": "Past"}),
        ("overgrow", {"num": 65, "name": "Overgrow"}),
        ("blaze", {"num": 66, "name": "Blaze"}),
        ("torrent", {"num": 67, "name": "Torrent"}),
        ("static", {"num": 9, "name": "Static"}),
    )
    moves = _entries(
        ("tackle", {"num": 33, "name": "Tackle"}),
        ("thunderbolt", {"num": 85, "name": "Thunderbolt"}),
        ("surf", {"num": 57, "name": "Surf"}),
        ("flamethrower", {"num": 53, "name": "Flamethrower"}),
        ("quickattack", {"num": 98, "name": "Quick Attack"}),
        ("growl", {"num": 45, "name": "Growl"}),
        ("vinewhip", {"num": 22, "name": "Vine Whip"}),
        ("struggle", {"num": 165, "name": "Struggle"}),
        ("hiddenpower", {"num": 237, "name": "Hidden Power"}),
        ("hiddenpowerfire", {"num": 237, "name": "Hidden Power Fire"}),
        ("shadowball", {"num": 247, "name": "Shadow Ball"}),
        ("volttackle", {"num": 344, "name": "Volt Tackle", "isNonstandard": "Past"}),
    )
    natures = _entries(
        ("adamant", {"name": "Adamant", "plus": "atk", "minus": "spa"}),
        ("modest", {"name": "Modest", "plus": "spa", "minus": "atk"}),
        ("timid", {"name": "Timid", "plus": "spe", "minus": "atk"}),
        ("jolly", {"name": "Jolly", "plus": "spe", "minus": "spa"}),
        ("hardy", {"name": "Hardy"}),
    )
    return {
        "species": species,
        "items": items,
        "abilities": abilities,
        "moves": moves,
        "natures": natures,
    }


@pytest.fixture
def tables() -> Dict[str, Dict[str, Dict[str, Any]]]:
    return build_tables()


@pytest.fixture
def dex(tables) -> Dex:
    """Dex over the sample tables with a gen 7 ceiling."""
    return Dex(tables, gen=7)


@pytest.fixture
def data_dir(tables):
    """Sample tables written out the way Showdown exports them."""
    filenames = {
        "species": "pokedex.json",
        "items": "items.json",
        "abilities": "abilities.json",
        "moves": "moves.json",
        "natures": "natures.json",
    }
    with tempfile.TemporaryDirectory() as tmpdir:
        for category, filename in filenames.items():
            with open(Path(tmpdir) / filename, "w") as f:
                json.dump(tables[category], f)
        yield Path(tmpdir)


# ====================
# Random Source Fixture
# ====================

@pytest.fixture
def prng() -> PRNG:
    return PRNG(42)


# ====================
# Match Runner Fixtures
# ====================

class RecordingMatchRunner:
    """Match runner that records every call and fails on chosen games."""

    def __init__(self, fail_on=(), fail_always: bool = False, max_players: int = 2):
        self.fail_on = set(fail_on)
        self.fail_always = fail_always
        self.max_players = max_players
        self.calls: List[Dict[str, Any]] = []

    async def run(self, teams, format_id, prng, dual=False, pools=None) -> None:
        self.calls.append({
            "teams": list(teams),
            "format": format_id,
            "prng": prng,
            "dual": dual,
            "pools": pools,
        })
        if self.fail_always or len(self.calls) in self.fail_on:
            raise MatchFailure(f"simulated failure in game {len(self.calls)}")


@pytest.fixture
def match_runner() -> RecordingMatchRunner:
    return RecordingMatchRunner()


@pytest.fixture
def failing_match_runner() -> RecordingMatchRunner:
    return RecordingMatchRunner(fail_always=True)


@pytest.fixture
def make_match_runner():
    """Factory for match runners with custom failure patterns."""
    return RecordingMatchRunner
