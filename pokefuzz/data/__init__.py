"""Rules database and format definitions."""

from .dex import Dex, to_id
from .formats import FORMATS, FormatInfo, GameType, RulesetCapabilities

__all__ = ["Dex", "to_id", "FORMATS", "FormatInfo", "GameType", "RulesetCapabilities"]
