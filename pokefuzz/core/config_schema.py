"""Configuration schemas for exhaustive fuzz runs using Hydra and OmegaConf.

This module defines structured configs that provide type safety
and validation for all configuration options.
"""

from dataclasses import dataclass, field
from typing import Optional


# ====================
# Run Configuration
# ====================

@dataclass
class RunConfig:
    """Exhaustive run configuration.

    ``format`` left unset runs every format in ``FORMATS``.
    """
    format: Optional[str] = None
    cycles: int = 1
    seed: Optional[int] = None
    max_games: Optional[int] = None
    max_failures: int = 10
    log: bool = False
    dual: bool = False
    dual_debug: bool = False
    forever: bool = False
    data_dir: str = "data/showdown"


# ====================
# Generator Configuration
# ====================

@dataclass
class GeneratorConfig:
    """Team generator tuning values."""
    combo_chance: float = 0.5
    shiny_numerator: int = 1
    shiny_denominator: int = 1024


# ====================
# Showdown Configuration
# ====================

@dataclass
class ShowdownConfig:
    """Pokemon Showdown server used to execute matches."""
    server_url: Optional[str] = None  # None: poke-env localhost defaults
    authentication_url: str = "https://play.pokemonshowdown.com/action.php?"
    timeout_seconds: float = 120.0


# ====================
# Logging Configuration
# ====================

@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
    file: Optional[str] = None
    rotation: str = "100 MB"


# ====================
# Main Configuration
# ====================

@dataclass
class FuzzConfig:
    """Root configuration for exhaustive fuzz runs."""
    run: RunConfig = field(default_factory=RunConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    showdown: ShowdownConfig = field(default_factory=ShowdownConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
