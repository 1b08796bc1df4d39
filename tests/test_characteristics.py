"""Tests for voice characteristic aggregation."""

import json
import math

import pytest

from thai_tts.training.characteristics import (
    VoiceCharacteristics,
    aggregate_characteristics,
    emotion_distribution,
)
from thai_tts.training.dataset import DatasetRecord
from thai_tts.training.features import FeatureExtractor


def test_emotion_distribution_sums_to_one(samples):
    for end in range(1, len(samples) + 1):
        distribution = emotion_distribution(samples[:end])
        assert math.isclose(sum(distribution.values()), 1.0, abs_tol=1e-9)


def test_aggregate_characteristics(samples):
    characteristics = aggregate_characteristics(samples)

    assert characteristics.avg_pitch == pytest.approx(196.0)
    assert characteristics.avg_energy == pytest.approx(0.66)
    assert characteristics.avg_duration == pytest.approx(1.84)
    assert characteristics.emotion_distribution == pytest.approx(
        {"neutral": 0.4, "positive": 0.4, "negative": 0.2}
    )
    assert characteristics.language == "th"
    assert characteristics.sample_count == 5


def test_aggregate_empty():
    characteristics = aggregate_characteristics([], language="en")

    assert characteristics.avg_pitch == 0.0
    assert characteristics.emotion_distribution == {}
    assert characteristics.language == "en"
    assert characteristics.sample_count == 0


def test_dict_round_trip(samples):
    characteristics = aggregate_characteristics(samples)
    data = characteristics.to_dict()

    assert set(data) == {
        "avgPitch", "avgEnergy", "avgDuration", "emotionDistribution", "language", "sampleCount",
    }
    assert VoiceCharacteristics.from_dict(data) == characteristics


def test_infinite_duration_label_stays_serializable(tmp_path):
    audio = tmp_path / "a.wav"
    audio.write_bytes(b"x")
    sample = FeatureExtractor().preprocess(audio, DatasetRecord("a.wav", "hi", "neutral", "low", "inf", "low"))

    data = aggregate_characteristics([sample]).to_dict()

    assert data["avgDuration"] == 2.0
    json.dumps(data, allow_nan=False)
