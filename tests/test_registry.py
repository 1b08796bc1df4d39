"""Tests for model ids and the model registry."""

import re
from dataclasses import replace
from datetime import datetime

from thai_tts.models.model import generate_model_id
from thai_tts.models.registry import ModelRegistry


def test_model_id_format():
    assert re.fullmatch(r"thai_voice_[0-9a-f]{8}", generate_model_id("thai_voice"))


def test_model_id_is_deterministic_for_timestamp():
    when = datetime(2024, 5, 1, 12, 30, 0)
    assert generate_model_id("v", when) == generate_model_id("v", when)
    assert generate_model_id("v", when) != generate_model_id("w", when)


def test_register_get_delete(trained_model):
    registry = ModelRegistry()
    registry.register(trained_model)

    assert trained_model.id in registry
    assert registry.get(trained_model.id) is trained_model
    assert registry.list_models() == [trained_model]
    assert len(registry) == 1

    assert registry.delete(trained_model.id) is True
    assert registry.get(trained_model.id) is None
    assert registry.delete(trained_model.id) is False


def test_get_unknown_returns_none():
    assert ModelRegistry().get("nope") is None


def test_register_replaces_same_id(trained_model):
    registry = ModelRegistry()
    registry.register(trained_model)
    renamed = replace(trained_model, name="renamed")

    registry.register(renamed)

    assert len(registry) == 1
    assert registry.get(trained_model.id).name == "renamed"


def test_get_info(trained_model):
    info = trained_model.get_info()

    assert info["id"] == trained_model.id
    assert info["type"] == "trained"
    assert info["characteristics"]["sampleCount"] == 4
    assert info["metadata"]["epochs"] == 3
