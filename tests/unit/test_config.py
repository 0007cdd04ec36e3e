"""Unit tests for configuration management."""

import pytest
from pathlib import Path
import tempfile

from omegaconf import OmegaConf

from pokefuzz.core.config_schema import (
    FuzzConfig, RunConfig, GeneratorConfig, ShowdownConfig, LoggingConfig,
)
from pokefuzz.core.hydra_utils import load_config, save_config


class TestFuzzConfig:
    """Tests for FuzzConfig dataclass."""

    def test_default_config(self):
        config = FuzzConfig()

        assert config.run.cycles == 1
        assert config.run.max_failures == 10
        assert config.run.max_games is None
        assert config.run.format is None
        assert config.generator.combo_chance == 0.5
        assert (config.generator.shiny_numerator, config.generator.shiny_denominator) == (1, 1024)

    def test_showdown_config(self):
        config = ShowdownConfig()
        assert config.server_url is None
        assert config.timeout_seconds == 120.0

    def test_logging_config(self):
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.file is None

    def test_custom_values(self):
        config = FuzzConfig(run=RunConfig(format="gen3customgame", cycles=3))
        assert config.run.format == "gen3customgame"
        assert config.run.cycles == 3


class TestLoadConfig:
    """Tests for Hydra-based loading."""

    def test_packaged_defaults(self):
        config = load_config()
        assert isinstance(config, FuzzConfig)
        assert config == FuzzConfig()

    def test_overrides(self):
        config = load_config(overrides=["run.cycles=3", "run.format=gen4customgame", "run.seed=99"])
        assert config.run.cycles == 3
        assert config.run.format == "gen4customgame"
        assert config.run.seed == 99

    def test_invalid_override_type(self):
        with pytest.raises(Exception):
            load_config(overrides=["run.cycles=lots"])

    def test_return_dict(self):
        cfg = load_config(overrides=["logging.level=DEBUG"], return_dict=True)
        assert cfg.logging.level == "DEBUG"

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = FuzzConfig(run=RunConfig(cycles=5, max_games=20))
            save_config(config, Path(tmpdir) / "custom.yaml")
            reloaded = load_config("custom", config_dir=Path(tmpdir))
            assert reloaded.run.cycles == 5
            assert reloaded.run.max_games == 20
