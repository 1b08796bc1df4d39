"""Tests for configuration loading and saving."""

import json

import pytest

from thai_tts.config import Config
from thai_tts.exceptions import ConfigurationError


def test_defaults(tmp_path):
    config = Config(app_dir=tmp_path)

    assert config.training.epochs == 100
    assert config.training.validation_split == 0.2
    assert config.training.seed is None
    assert config.synthesis.sample_rate == 24000
    assert config.trained_models_dir == tmp_path / "trained_models"


def test_save_load_round_trip(tmp_path):
    config = Config(app_dir=tmp_path)
    config.training.epochs = 7
    config.training.seed = 3
    config.synthesis.model = "v2"
    config.save()

    loaded = Config.load(app_dir=tmp_path)

    assert loaded.training == config.training
    assert loaded.synthesis == config.synthesis


def test_load_without_settings_file(tmp_path):
    assert Config.load(app_dir=tmp_path).training.epochs == 100


def test_load_invalid_values(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"training": {"validation_split": 1.5}}))

    with pytest.raises(ConfigurationError):
        Config.load(settings_file=settings)


def test_load_corrupt_file(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text("{not json")

    with pytest.raises(ConfigurationError):
        Config.load(settings_file=settings)


def test_ensure_directories(tmp_path):
    config = Config(app_dir=tmp_path / "app")
    config.ensure_directories()

    assert config.trained_models_dir.is_dir()
    assert config.output_dir.is_dir()
