"""Hydra utilities for loading and managing configurations.

This module provides helpers for loading configs with Hydra
and converting them to typed dataclasses.
"""

from pathlib import Path
from typing import List, Optional, Union

from omegaconf import DictConfig, OmegaConf
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra
from loguru import logger

from .config_schema import FuzzConfig


def get_config_dir() -> Path:
    """Get the config directory path."""
    possible_paths = [
        Path(__file__).parent.parent / "conf",  # packaged defaults
        Path.cwd() / "conf",
    ]

    for path in possible_paths:
        if path.exists():
            return path.resolve()

    raise FileNotFoundError(
        f"Could not find config directory. Searched: {possible_paths}"
    )


def load_config(
    config_name: str = "default",
    overrides: Optional[List[str]] = None,
    config_dir: Optional[Path] = None,
    return_dict: bool = False,
) -> Union[FuzzConfig, DictConfig]:
    """Load configuration using Hydra.

    Args:
        config_name: Name of the config file (without .yaml)
        overrides: List of config overrides (e.g., ["run.cycles=2"])
        config_dir: Directory to search instead of the packaged one
        return_dict: If True, return DictConfig instead of dataclass

    Returns:
        Loaded configuration as FuzzConfig or DictConfig
    """
    config_dir = Path(config_dir) if config_dir else get_config_dir()

    # Clear any existing Hydra instance
    if GlobalHydra.instance().is_initialized():
        GlobalHydra.instance().clear()

    with initialize_config_dir(config_dir=str(config_dir.resolve()), version_base="1.3"):
        cfg = compose(config_name=config_name, overrides=overrides or [])

    # Validate against the schema
    cfg = OmegaConf.merge(OmegaConf.structured(FuzzConfig), cfg)

    if return_dict:
        return cfg
    return OmegaConf.to_object(cfg)


def save_config(cfg: Union[FuzzConfig, DictConfig], path: Path):
    """Save configuration to YAML file.

    Args:
        cfg: Configuration to save
        path: Output path
    """
    if isinstance(cfg, FuzzConfig):
        cfg = OmegaConf.structured(cfg)

    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(cfg, path)
    logger.info(f"Saved config to {path}")


def print_config(cfg: Union[FuzzConfig, DictConfig]):
    """Pretty-print configuration."""
    if isinstance(cfg, FuzzConfig):
        cfg = OmegaConf.structured(cfg)
    print(OmegaConf.to_yaml(cfg))
