"""Loguru sink setup for command-line runs."""

import sys

from loguru import logger

from .config_schema import LoggingConfig


def configure_logging(cfg: LoggingConfig) -> None:
    """Replace loguru's default sink with the configured ones."""
    logger.remove()
    logger.add(sys.stderr, level=cfg.level, format=cfg.format)
    if cfg.file:
        logger.add(cfg.file, level=cfg.level, rotation=cfg.rotation)
