"""Pokemon Showdown backend driven through poke-env."""

from .player import CoordinatedPlayer
from .match import ShowdownMatchRunner

__all__ = ["CoordinatedPlayer", "ShowdownMatchRunner"]
