"""Core infrastructure: configuration and logging."""

from .config_schema import (
    FuzzConfig,
    RunConfig,
    GeneratorConfig,
    ShowdownConfig,
    LoggingConfig,
)
from .hydra_utils import load_config, save_config, print_config
from .logging import configure_logging

__all__ = [
    "FuzzConfig",
    "RunConfig",
    "GeneratorConfig",
    "ShowdownConfig",
    "LoggingConfig",
    "load_config",
    "save_config",
    "print_config",
    "configure_logging",
]
